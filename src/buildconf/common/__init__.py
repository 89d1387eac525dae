"""Shared utilities for buildconf."""

from .config import LayeredConfigLoader
from .logging import setup_logging, LogContext
from .logging_config import LoggingConfig
from .errors import BuildConfError
from .path_utils import normalize_path, collapse_path
from .config_utils import expand_path_variables

__all__ = [
    'LayeredConfigLoader',
    'LoggingConfig',
    'setup_logging',
    'LogContext',
    'BuildConfError',
    'normalize_path',
    'collapse_path',
    'expand_path_variables',
]
