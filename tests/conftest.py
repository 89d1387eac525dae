"""Shared fixtures."""

import logging
import os

import pytest

from buildconf.common import LayeredConfigLoader


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory, monkeypatch):
    """Keep system/user config files and BUILDCONF_* variables out of tests."""
    settings_dir = tmp_path_factory.mktemp("settings")
    monkeypatch.setattr(LayeredConfigLoader, "system_config_path", lambda self: settings_dir / "system.toml")
    monkeypatch.setattr(LayeredConfigLoader, "user_config_path", lambda self: settings_dir / "user.toml")
    for key in list(os.environ):
        if key.startswith("BUILDCONF_"):
            monkeypatch.delenv(key)
    return settings_dir


ANDROID_PROJECT = """
repositories = ["google", "mavenCentral"]

[build]
base_dir = "../build"

[[plugins]]
id = "com.google.gms.google-services"
version = "4.4.2"
apply = false

[[subprojects]]
name = "app"

[[subprojects]]
name = "camera"

[[subprojects]]
name = "billing"
evaluation_depends_on = [":camera"]

[evaluation]
common_dependency = ":app"
"""


@pytest.fixture
def project_dir(tmp_path):
    """An Android-style project directory with a buildconf.toml."""
    project = tmp_path / "spendtrack" / "android"
    project.mkdir(parents=True)
    (project / "buildconf.toml").write_text(ANDROID_PROJECT, encoding="utf-8")
    return project


@pytest.fixture
def restore_root_logger():
    """Undo handler changes made by setup_logging()."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
