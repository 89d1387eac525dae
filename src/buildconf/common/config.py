"""Layered settings loader with multi-source support."""

import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional, Type, TypeVar

import platformdirs
import toml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)

# Separates nesting levels in environment overrides: BUILDCONF_BUILD__BASE_DIR
ENV_NESTING_SEPARATOR = "__"


class LayeredConfigLoader:
    """Loads a TOML configuration from multiple sources with priority.

    Sources, lowest priority first:
        1. the primary file passed to :meth:`load`
        2. system config (``/etc/<app>/config.toml`` or ``%PROGRAMDATA%``)
        3. user config (``platformdirs.user_config_dir(<app>)/config.toml``)
        4. environment variables prefixed with ``<APP>_``
    """

    def __init__(self, app_name: str = "buildconf", config_class: Optional[Type[T]] = None) -> None:
        self.app_name = app_name
        self.config_class = config_class
        self.sources: list[Path] = []

    def load(self, primary_path: Path) -> T | Dict[str, Any]:
        """Load configuration from all sources.

        Args:
            primary_path: Path to the primary TOML file

        Returns:
            Validated configuration object, or the merged dict when no
            ``config_class`` was given

        Raises:
            FileNotFoundError: If the primary file does not exist
            toml.TomlDecodeError: If any source is not valid TOML
            pydantic.ValidationError: If the merged settings fail validation
        """
        self.sources = []

        if not primary_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {primary_path}")
        config_dict = self._read(primary_path)

        system_config = self._load_system_config()
        if system_config:
            config_dict = self._deep_merge(config_dict, system_config)

        user_config = self._load_user_config()
        if user_config:
            config_dict = self._deep_merge(config_dict, user_config)

        config_dict = self._apply_env_overrides(config_dict)

        if self.config_class:
            return self.config_class(**config_dict)
        return config_dict

    def _read(self, path: Path) -> Dict[str, Any]:
        logger.debug(f"Reading configuration source: {path}")
        data = toml.load(path)
        self.sources.append(path)
        return data

    def system_config_path(self) -> Path:
        if os.name == "nt":  # Windows
            return (
                Path(os.environ.get("PROGRAMDATA", "C:\\ProgramData"))
                / self.app_name
                / "config.toml"
            )
        return Path(f"/etc/{self.app_name}/config.toml")

    def user_config_path(self) -> Path:
        user_config_dir = platformdirs.user_config_dir(appname=self.app_name, appauthor=False)
        return Path(user_config_dir) / "config.toml"

    def _load_system_config(self) -> Optional[Dict[str, Any]]:
        """Load system-wide configuration."""
        system_path = self.system_config_path()
        if system_path.exists():
            return self._read(system_path)
        return None

    def _load_user_config(self) -> Optional[Dict[str, Any]]:
        """Load user-specific configuration."""
        user_config_path = self.user_config_path()

        logger.debug(f"Looking for user config: app_name={self.app_name}, path={user_config_path}, exists={user_config_path.exists()}")

        if user_config_path.exists():
            return self._read(user_config_path)
        return None

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Override config with environment variables."""
        prefix = f"{self.app_name.upper().replace('-', '_')}_"

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(prefix):
                continue

            # BUILDCONF_LOGGING__LEVEL -> logging.level
            key_path = env_key[len(prefix):].lower().split(ENV_NESTING_SEPARATOR)
            if not all(key_path):
                logger.warning(f"Ignoring malformed environment override: {env_key}")
                continue

            current = config
            for part in key_path[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

            final_key = key_path[-1]
            current[final_key] = self._convert_env_value(env_value)
            logger.debug(f"Applied environment override: {env_key}")

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert string environment variable to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        # List (comma-separated)
        if "," in value:
            return [v.strip() for v in value.split(",")]

        return value
