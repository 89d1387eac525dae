"""Configuration utilities."""

import tempfile
import platformdirs
from pathlib import Path


def expand_path_variables(path: str, app_name: str | None = None) -> str:
    """Expand ${VAR} variables in paths.

    Supported variables:
        ${USER_HOME}: User's home directory
        ${USER_DATA}: User data directory
        ${USER_CONFIG}: User config directory
        ${USER_CACHE}: User cache directory
        ${TEMP}: Temporary directory

    Args:
        path: Path string with variables
        app_name: Optional application name for the platform directories

    Returns:
        Expanded path string
    """
    if not isinstance(path, str):
        return path

    replacements = {
        "${USER_HOME}": str(Path.home()),
        "${USER_DATA}": platformdirs.user_data_dir(app_name, appauthor=False),
        "${USER_CONFIG}": platformdirs.user_config_dir(app_name, appauthor=False),
        "${USER_CACHE}": platformdirs.user_cache_dir(app_name, appauthor=False),
        "${TEMP}": tempfile.gettempdir(),
    }

    for var, value in replacements.items():
        path = path.replace(var, value)

    return path
