"""Path utilities for consistent path handling."""

import os
import unicodedata
from pathlib import Path


def normalize_path(path: Path | str) -> str:
    """
    Normalize a path for output to the external build tool.

    Applies:
    - Unicode NFC normalization (canonical composition)
    - Forward slash conversion for cross-platform consistency

    Args:
        path: Path object or string to normalize

    Returns:
        Normalized path string with forward slashes and NFC Unicode normalization

    Examples:
        >>> normalize_path(Path("café/build"))
        'café/build'
        >>> normalize_path(r"C:\\Users\\dev\\build")
        'C:/Users/dev/build'
    """
    normalized = unicodedata.normalize('NFC', str(path))
    return normalized.replace('\\', '/')


def collapse_path(path: Path | str) -> Path:
    """Collapse ``..`` and ``.`` segments without touching the filesystem."""
    return Path(os.path.normpath(str(path)))
