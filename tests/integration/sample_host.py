from aiohttp import web

from src.modules.host.aiohttp_host import AiohttpServiceHost
from src.modules.tester.config import ServiceArguments


async def greet(request: web.Request) -> web.Response:
    name = request.query.get("name", "world")
    return web.json_response({"greeting": f"hello {name}"})


def create_app(arguments: ServiceArguments) -> web.Application:
    app = web.Application()
    app.router.add_get("/greet", greet)
    return app


def create_host() -> AiohttpServiceHost:
    return AiohttpServiceHost(create_app)
