"""Build output directory layout."""

import logging
from pathlib import Path
from typing import Iterable, Dict

from buildconf.common import collapse_path, expand_path_variables
from buildconf.errors import ConfigError

logger = logging.getLogger(__name__)

_INVALID_NAMES = {"", ".", ".."}


def validate_subproject_name(name: str) -> str:
    """Return ``name`` if it is usable as a single path segment.

    Raises:
        ConfigError: If the name is empty, ``.``/``..``, or contains a
            separator or ``:``
    """
    if not isinstance(name, str) or name.strip() != name or name in _INVALID_NAMES:
        raise ConfigError(f"Invalid subproject name: {name!r}", subproject=name)
    if "/" in name or "\\" in name:
        raise ConfigError(
            f"Subproject name must not contain path separators: {name!r}",
            subproject=name,
        )
    if ":" in name:
        raise ConfigError(
            f"Subproject name must not contain ':' (reserved for project paths): {name!r}",
            subproject=name,
        )
    return name


def compute_build_dir(base: Path | str, subproject_name: str) -> Path:
    """Return the build directory of a subproject.

    Pure and deterministic: the result depends only on ``base`` and
    ``subproject_name``, and distinct names always map to distinct paths.

    Args:
        base: Root build directory
        subproject_name: Name of the subproject

    Returns:
        ``base / subproject_name``

    Raises:
        ConfigError: If ``subproject_name`` is not a single path segment
    """
    return Path(base) / validate_subproject_name(subproject_name)


def resolve_root_build_dir(project_dir: Path, base_dir: str, app_name: str | None = None) -> Path:
    """Resolve the redirected root build directory against the project directory."""
    expanded = Path(expand_path_variables(base_dir, app_name))
    if not expanded.is_absolute():
        expanded = project_dir / expanded
    root = collapse_path(expanded)
    logger.debug(f"Root build directory: {base_dir} -> {root}")
    return root


def compute_build_dirs(base: Path, subproject_names: Iterable[str]) -> Dict[str, Path]:
    """Compute build directories for all subprojects, in the given order."""
    build_dirs: Dict[str, Path] = {}
    for name in subproject_names:
        if name in build_dirs:
            raise ConfigError(f"Duplicate subproject: {name}", subproject=name)
        build_dirs[name] = compute_build_dir(base, name)
    return build_dirs
