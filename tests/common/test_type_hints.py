"""Tests for type hint coverage."""

import ast
from pathlib import Path

import buildconf

PACKAGE_DIR = Path(buildconf.__file__).parent


class TestTypeHints:
    """Tests for type hint coverage."""

    def test_function_type_hints(self):
        """Test that all public functions have type hints."""
        missing_hints = []

        for py_file in PACKAGE_DIR.rglob("*.py"):
            tree = ast.parse(py_file.read_text(encoding="utf-8"))

            for node in ast.walk(tree):
                if not isinstance(node, ast.FunctionDef) or node.name.startswith('_'):
                    continue

                if node.returns is None:
                    missing_hints.append(f"{py_file}:{node.lineno}: {node.name}() missing return type")

                for arg in node.args.args:
                    if arg.annotation is None and arg.arg not in ('self', 'cls'):
                        missing_hints.append(f"{py_file}:{node.lineno}: {node.name}({arg.arg}) missing type hint")

        assert not missing_hints, "\n".join(missing_hints)
