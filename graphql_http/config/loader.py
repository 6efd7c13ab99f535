"""
Configuration loader for graphql_http.

Configuration is merged from a JSON or YAML file and from environment
variables prefixed with ``GRAPHQL_HTTP_``, then validated into a
``GlobalConfig``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from ..exceptions import GraphQLHTTPException
from .models import GlobalConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "GRAPHQL_HTTP_"

# Environment variable suffix -> path in the configuration tree
ENV_MAPPINGS: Mapping[str, Tuple[str, ...]] = {
    # Server
    "HOST": ("server", "host"),
    "PORT": ("server", "port"),
    "PATH": ("server", "path"),
    # Logging
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "file_path"),
    "LOG_FORMAT": ("logging", "format"),
    "LOG_STRUCTURED": ("logging", "enable_structured"),
    # Playground
    "PLAYGROUND": ("playground", "enabled"),
    "PLAYGROUND_TITLE": ("playground", "title"),
    "PLAYGROUND_VERSION": ("playground", "version"),
}

# Keys whose values are never converted from strings
_STRING_KEYS = {"LOG_FORMAT", "LOG_FILE", "PATH", "HOST", "PLAYGROUND_TITLE", "PLAYGROUND_VERSION"}


class ConfigLoadError(GraphQLHTTPException):
    """Raised when configuration cannot be read or is invalid."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message, path=str(path) if path else None)
        self.path = path


class ConfigLoader:
    """Configuration loader with support for files and environment variables."""

    def __init__(
        self,
        env_prefix: str = ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Initialize configuration loader.

        Args:
            env_prefix: Prefix of the environment variables to read
            environ: Environment to read from, ``os.environ`` by default
        """
        self.env_prefix = env_prefix
        self.environ = environ if environ is not None else os.environ
        self.config_paths = [
            Path("graphql_http.yaml"),
            Path("graphql_http.yml"),
            Path("graphql_http.json"),
            Path("config/graphql_http.yaml"),
            Path("config/graphql_http.yml"),
            Path("config/graphql_http.json"),
        ]

    def load_config(self, config_file: Optional[Union[str, Path]] = None) -> GlobalConfig:
        """
        Load configuration from all available sources.

        Environment variables override values from the file.

        Args:
            config_file: Config file to load; well-known locations are
                searched when omitted

        Returns:
            Validated configuration

        Raises:
            ConfigLoadError: If the file is missing, unreadable or the merged
                configuration is invalid
        """
        config_data: Dict[str, Any] = self._load_from_file(config_file) or {}
        env_config = self._load_from_environment()
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        try:
            return GlobalConfig(**config_data)
        except ValidationError as e:
            raise ConfigLoadError(f"Invalid configuration: {e}") from e

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigLoadError(f"Config file not found: {config_path}", config_path)
            return self._parse_config_file(config_path)

        for config_path in self.config_paths:
            if config_path.exists():
                logger.debug("Using config file %s", config_path)
                return self._parse_config_file(config_path)
        return None

    def _parse_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Parse configuration file based on extension."""
        suffix = config_path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ConfigLoadError(
                f"Unsupported config file format: {config_path.suffix}", config_path
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) if suffix != ".json" else json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigLoadError(
                f"Failed to parse config file {config_path}: {e}", config_path
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigLoadError(
                f"Config file {config_path} must contain a mapping", config_path
            )
        return data

    def _load_from_environment(self) -> Dict[str, Any]:
        config: Dict[str, Any] = {}

        for suffix, config_path in ENV_MAPPINGS.items():
            value = self.environ.get(f"{self.env_prefix}{suffix}")
            if value is None:
                continue

            converted = value if suffix in _STRING_KEYS else self._convert_env_value(value)
            current = config
            for key in config_path[:-1]:
                current = current.setdefault(key, {})
            current[config_path[-1]] = converted

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type."""
        lower = value.lower()
        if lower in ("true", "yes", "on"):
            return True
        if lower in ("false", "no", "off"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            return value

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def save_config(self, config: GlobalConfig, config_file: Union[str, Path]) -> None:
        """Save configuration to a JSON or YAML file."""
        config_path = Path(config_file)
        suffix = config_path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ConfigLoadError(
                f"Unsupported config file format: {config_path.suffix}", config_path
            )

        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_data = config.model_dump(mode="json")

        with open(config_path, "w", encoding="utf-8") as f:
            if suffix == ".json":
                json.dump(config_data, f, indent=2)
            else:
                yaml.safe_dump(config_data, f, default_flow_style=False, indent=2)


def load_config(config_file: Optional[Union[str, Path]] = None) -> GlobalConfig:
    """Load configuration with the default loader."""
    return ConfigLoader().load_config(config_file)
