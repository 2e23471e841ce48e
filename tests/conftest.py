import socket
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add repository root to Python path so 'src' and 'tests' resolve without installing
root_path = str(Path(__file__).parent.parent)
if root_path not in sys.path:
    sys.path.append(root_path)

from src.modules.logging.base import BaseLogger
from tests.utils.fakes import FakeConnectionBuilder
from tests.utils.test_logger import create_test_logger


@pytest.fixture
def mock_logger():
    """Create a mock logger."""
    return Mock(spec=BaseLogger)


@pytest.fixture
def test_logger():
    return create_test_logger()


@pytest.fixture
def connection_builder():
    return FakeConnectionBuilder()


@pytest.fixture
def free_port() -> int:
    """Find a free port to use for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]
