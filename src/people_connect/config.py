"""Configuration management for people-connect using YAML files."""

import os
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".people-connect"
STORE_FILE_NAME = "people.json"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_TIMEOUT = 30.0


class Config:
    """Configuration manager using YAML file storage.

    Supports both local (directory-level) and global (user-level) configuration.
    Local config is stored in .people-connect/config.yaml in the current directory.
    Global config is stored in ~/.people-connect/config.yaml.

    When reading, values are looked up in local config first, then global config.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            use_global: If True, use global config only. If False, use local config with global fallback.
            config_dir: Custom directory to store config file (overrides use_global)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
            self.is_global = use_global
        elif use_global:
            self.config_dir = Path.home() / CONFIG_DIR_NAME
            self.is_global = True
        else:
            self.config_dir = Path.cwd() / CONFIG_DIR_NAME
            self.is_global = False

        self.config_file = self.config_dir / "config.yaml"

        # Created lazily on first write
        self._config: dict[str, Any] = self._load()

        self._global_config: dict[str, Any] = {}
        if not self.is_global:
            global_config_file = Path.home() / CONFIG_DIR_NAME / "config.yaml"
            if global_config_file.exists() and global_config_file != self.config_file:
                try:
                    with open(global_config_file, "r") as f:
                        self._global_config = yaml.safe_load(f) or {}
                except Exception as e:
                    logger.warning("Failed to load global config", error=str(e))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    def _load(self) -> dict[str, Any]:
        """Load configuration from YAML file.

        Returns:
            Configuration dictionary
        """
        if not self.config_file.exists():
            logger.debug("Config file does not exist, initializing empty config")
            return {}

        try:
            with open(self.config_file, "r") as f:
                config = yaml.safe_load(f) or {}
                logger.debug("Config loaded successfully", keys=list(config.keys()))
                return config
        except Exception as e:
            logger.error("Failed to load config", error=str(e))
            raise ValueError(f"Failed to load config from {self.config_file}: {e}") from e

    def _save(self) -> None:
        """Save configuration to YAML file."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
            logger.debug("Config saved successfully")
        except Exception as e:
            logger.error("Failed to save config", error=str(e))
            raise ValueError(f"Failed to save config to {self.config_file}: {e}") from e

    def _scopes(self) -> list[tuple[str, dict[str, Any]]]:
        """Config scopes in lookup order, highest precedence first."""
        if self.is_global:
            return [("global", self._config)]
        return [("local", self._config), ("global", self._global_config)]

    def get(self, key: str, default: str | None = None) -> Any:
        """Get a configuration value from the first scope that defines it.

        YAML may hold non-string values (e.g. a numeric gemini.timeout), so the
        raw value is returned.
        """
        for scope, values in self._scopes():
            if key in values:
                logger.debug("Getting config value", key=key, scope=scope)
                return values[key]

        logger.debug("Config value not found", key=key)
        return default

    def set(self, key: str, value: str) -> None:
        """Set a configuration value."""
        logger.debug("Setting config value", key=key)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        """Remove a configuration value."""
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, Any]:
        """All settings visible from this scope, higher precedence winning."""
        merged: dict[str, Any] = {}
        for _scope, values in reversed(self._scopes()):
            merged.update(values)
        logger.debug("Listing config values", count=len(merged), is_global=self.is_global)
        return merged

    @property
    def store_path(self) -> Path:
        configured = self.get("store.path")
        if configured:
            return Path(configured).expanduser()
        return Path.home() / CONFIG_DIR_NAME / STORE_FILE_NAME

    @property
    def gemini_api_key(self) -> str | None:
        return self.get("gemini.api_key") or os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")

    @property
    def gemini_model(self) -> str:
        return self.get("gemini.model") or DEFAULT_GEMINI_MODEL

    @property
    def gemini_timeout(self) -> float:
        return float(self.get("gemini.timeout") or DEFAULT_GEMINI_TIMEOUT)


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance.

    Args:
        use_global: If True, return global config. If False, return local config with global fallback.

    Returns:
        Config instance
    """
    return Config(use_global=use_global)
