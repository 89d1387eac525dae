"""Tests for path utilities."""

import unicodedata
from pathlib import Path

from buildconf.common import collapse_path, expand_path_variables, normalize_path


class TestNormalizePath:
    """Tests for normalize_path function."""

    def test_forward_slashes(self):
        """Test that backslashes are converted to forward slashes."""
        result = normalize_path(r"C:\Users\dev\build\app")
        assert result == "C:/Users/dev/build/app"

    def test_unicode_normalization(self):
        """Test Unicode NFC normalization."""
        decomposed = unicodedata.normalize("NFD", "café/build")
        assert normalize_path(decomposed) == unicodedata.normalize("NFC", "café/build")

    def test_relative_path(self):
        assert normalize_path(Path("build/app")) == "build/app"


class TestCollapsePath:
    """Tests for collapse_path function."""

    def test_collapses_parent_segments(self):
        assert collapse_path("/work/spendtrack/android/../build") == Path("/work/spendtrack/build")

    def test_does_not_require_existing_path(self, tmp_path):
        missing = tmp_path / "missing" / ".." / "build"
        assert collapse_path(missing) == tmp_path / "build"


class TestExpandPathVariables:
    """Tests for expand_path_variables function."""

    def test_expands_user_home(self):
        assert expand_path_variables("${USER_HOME}/build") == f"{Path.home()}/build"

    def test_leaves_plain_paths_alone(self):
        assert expand_path_variables("../build") == "../build"

    def test_non_string_passthrough(self):
        assert expand_path_variables(None) is None
