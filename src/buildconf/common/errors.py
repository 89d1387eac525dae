"""Base error definitions for buildconf."""

from typing import Any, Dict


class BuildConfError(Exception):
    """Base exception for all buildconf errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context
