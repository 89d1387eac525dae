"""Build configuration errors."""

from typing import Any, Sequence

from buildconf.common import BuildConfError


class ConfigError(BuildConfError):
    """Declarative configuration is missing, malformed or inconsistent."""
    pass


class CycleError(BuildConfError):
    """Evaluation-order graph contains a cycle."""

    def __init__(self, message: str, cycle: Sequence[str] = (), **context: Any) -> None:
        super().__init__(message, **context)
        self.cycle: tuple[str, ...] = tuple(cycle)


class CleanError(BuildConfError):
    """Deleting the build output tree failed."""
    pass
