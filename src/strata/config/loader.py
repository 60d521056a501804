"""Configuration loader for Strata.

This module handles loading configuration from multiple sources:
1. Default values (lowest priority)
2. User config file (~/.config/strata/config.toml)
3. Project config file (./strata.toml)
4. Environment variables (STRATA_* prefix)
5. Programmatic overrides (highest priority)
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

import tomli_w

from .schema import StrataConfig
from .validation import ConfigValidationError, validate_config

logger = logging.getLogger(__name__)

# Default paths
USER_CONFIG_DIR = Path.home() / ".config" / "strata"
USER_CONFIG_PATH = USER_CONFIG_DIR / "config.toml"
PROJECT_CONFIG_NAME = "strata.toml"
ENV_PREFIX = "STRATA_"

SECTIONS = {"builder", "identifiers", "csv", "logging"}


def _parse_env_value(value: str) -> Any:
    """Parse an environment variable value to appropriate Python type."""
    # Handle booleans
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    # Handle None
    if value.lower() in ("none", "null"):
        return None

    # Try numeric types
    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        pass

    return value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigLoader:
    """Load configuration from multiple sources with priority handling."""

    def __init__(
        self,
        project_path: Optional[Path] = None,
        user_config_path: Optional[Path] = None,
        config_file: Optional[Path] = None,
    ):
        """Initialize the configuration loader.

        Args:
            project_path: Directory holding strata.toml (defaults to none)
            user_config_path: Optional override for user config path
            config_file: Explicit config file, replacing the project config
        """
        self.project_path = Path(project_path) if project_path else None
        self.user_config_path = Path(user_config_path) if user_config_path else USER_CONFIG_PATH
        self.config_file = Path(config_file) if config_file else None

    @property
    def project_config_path(self) -> Optional[Path]:
        if self.config_file is not None:
            return self.config_file
        if self.project_path is not None:
            return self.project_path / PROJECT_CONFIG_NAME
        return None

    def load(self) -> StrataConfig:
        """Load configuration from all sources with priority handling.

        Returns:
            Merged StrataConfig instance
        """
        config_dict: dict[str, Any] = {}

        if self.user_config_path.exists():
            user_data = self._load_toml(self.user_config_path)
            if user_data:
                config_dict = _deep_merge(config_dict, user_data)
                logger.debug(f"Loaded user config from {self.user_config_path}")

        project_config = self.project_config_path
        if project_config is not None:
            if project_config.exists():
                project_data = self._load_toml(project_config)
                if project_data:
                    config_dict = _deep_merge(config_dict, project_data)
                    logger.debug(f"Loaded project config from {project_config}")
            elif self.config_file is not None:
                raise FileNotFoundError(f"Config file not found: {project_config}")

        env_overrides = self._load_env_vars()
        if env_overrides:
            config_dict = _deep_merge(config_dict, env_overrides)
            logger.debug("Applied environment variable overrides")

        return StrataConfig.from_dict(config_dict)

    def _load_toml(self, path: Path) -> Optional[dict[str, Any]]:
        """Load a TOML configuration file.

        Args:
            path: Path to the TOML file

        Returns:
            Parsed configuration dict or None if the file is not valid TOML
        """
        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Failed to load TOML config from {path}: {e}")
            return None

    def _load_env_vars(self) -> dict[str, Any]:
        """Load configuration from environment variables.

        Environment variables are prefixed with STRATA_ and the first
        underscore separates the section from the key. For example:
        - STRATA_BUILDER_USE_SUBTREE -> builder.use_subtree
        - STRATA_LOGGING_LEVEL -> logging.level

        Returns:
            Configuration dictionary from environment variables
        """
        result: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX) :].lower().split("_")
            if len(parts) < 2 or parts[0] not in SECTIONS:
                logger.debug(f"Ignoring unknown environment setting {key}")
                continue

            # Separators and identifiers are literal strings
            parsed = value if parts[0] == "identifiers" else _parse_env_value(value)
            nested = {parts[0]: {"_".join(parts[1:]): parsed}}
            result = _deep_merge(result, nested)

        return result

    def save_project_config(self, config: StrataConfig) -> Path:
        """Save configuration to the project config file.

        Args:
            config: Configuration to save

        Returns:
            Path written
        """
        path = self.project_config_path
        if path is None:
            raise ValueError("No project path set")
        self._save_toml(path, config)
        logger.info(f"Saved project config to {path}")
        return path

    def save_user_config(self, config: StrataConfig) -> Path:
        """Save configuration to the user config file.

        Args:
            config: Configuration to save

        Returns:
            Path written
        """
        self._save_toml(self.user_config_path, config)
        logger.info(f"Saved user config to {self.user_config_path}")
        return self.user_config_path

    def _save_toml(self, path: Path, config: StrataConfig) -> None:
        """Validate and save configuration as TOML.

        Raises:
            ConfigValidationError: If the configuration is invalid
        """
        result = validate_config(config)
        if not result.valid:
            raise ConfigValidationError(
                "Refusing to save invalid configuration", result.errors, result.warnings
            )

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                tomli_w.dump(_filter_none_values(config.to_dict()), f)
        except OSError as e:
            logger.error(f"Failed to save config to {path}: {e}")
            raise


def _filter_none_values(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively filter out None values, which TOML cannot represent."""
    result = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            filtered = _filter_none_values(value)
            if filtered:
                result[key] = filtered
        else:
            result[key] = value
    return result


def load_config(
    project_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
    config_file: Optional[Path] = None,
) -> StrataConfig:
    """Load Strata configuration from all sources.

    This is the main entry point for loading configuration.

    Args:
        project_path: Optional directory holding strata.toml
        user_config_path: Optional override for user config path
        config_file: Optional explicit config file

    Returns:
        Merged StrataConfig instance
    """
    loader = ConfigLoader(project_path, user_config_path, config_file)
    return loader.load()


def get_default_config() -> StrataConfig:
    """Get a StrataConfig with all default values."""
    return StrataConfig()
