from typing import List
from src.modules.logging.base import BaseLogger


class _TestLogger(BaseLogger):
    """Test logger that captures all logs."""
    def __init__(self):
        self.logs: List[str] = []
    
    def log_transition(self, old_state: str, new_state: str) -> None:
        self.logs.append(f"TRANSITION: {old_state} -> {new_state}")

    def log_outcome(self, phase: str, outcome: str) -> None:
        self.logs.append(f"OUTCOME: {phase} {outcome}")

    def log_info(self, message: str) -> None:
        self.logs.append(f"INFO: {message}")
    
    def log_error(self, message: str) -> None:
        self.logs.append(f"ERROR: {message}")

    def log_warning(self, message: str) -> None:
        self.logs.append(f"WARNING: {message}")

    def log_debug(self, message: str) -> None:
        self.logs.append(f"DEBUG: {message}")
    
    def get_logs(self) -> List[str]:
        """Get all captured logs."""
        return self.logs

    def transitions(self) -> List[str]:
        """Get the captured state transitions only."""
        return [log for log in self.logs if log.startswith("TRANSITION: ")]


def create_test_logger() -> _TestLogger:
    """Create a test logger instance."""
    return _TestLogger()
