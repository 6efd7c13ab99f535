"""
Configuration models for graphql_http.

This module defines the configuration data models used by the command-line
server, with validation and defaults.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..playground import PlaygroundOptions


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Default logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    file_path: Optional[Path] = Field(default=None, description="Log file path")
    max_file_size: int = Field(
        default=10 * 1024 * 1024, ge=1024, description="Max log file size in bytes"
    )
    backup_count: int = Field(default=5, ge=0, description="Number of rotated log files")
    enable_console: bool = Field(default=True, description="Enable console logging")
    enable_file: bool = Field(default=False, description="Enable file logging")
    enable_structured: bool = Field(
        default=False, description="Emit JSON lines instead of text"
    )
    mask_sensitive_data: bool = Field(
        default=True, description="Mask tokens and passwords in log messages"
    )

    # Per-logger levels, e.g. {"graphql_http.http": "DEBUG"}
    component_levels: Dict[str, LogLevel] = Field(
        default_factory=dict, description="Per-component log levels"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class PlaygroundConfig(BaseModel):
    """GraphQL Playground settings for the served endpoint."""

    enabled: bool = Field(default=False, description="Serve the playground to browsers")
    title: str = Field(default="GraphQL Playground", description="Page title")
    version: Optional[str] = Field(
        default=None, description="graphql-playground-react version"
    )
    cdn_url: str = Field(
        default="https://cdn.jsdelivr.net/npm", description="Base URL of the asset CDN"
    )
    subscription_endpoint: Optional[str] = Field(
        default=None, description="WebSocket endpoint for subscriptions"
    )
    settings: Dict[str, Any] = Field(
        default_factory=dict, description="Playground editor settings"
    )

    def to_options(self, endpoint: str) -> PlaygroundOptions:
        """Build page options for a playground talking to ``endpoint``."""
        return PlaygroundOptions(
            endpoint=endpoint,
            subscription_endpoint=self.subscription_endpoint,
            title=self.title,
            version=self.version,
            cdn_url=self.cdn_url,
            settings=self.settings,
        )


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field(default="127.0.0.1", description="Interface to bind")
    port: int = Field(default=8080, ge=1, le=65535, description="Port to listen on")
    path: str = Field(default="/graphql", description="GraphQL endpoint path")

    @field_validator("path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        if not v.startswith("/"):
            return f"/{v}"
        return v


class GlobalConfig(BaseModel):
    """Global configuration container."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    playground: PlaygroundConfig = Field(default_factory=PlaygroundConfig)

    model_config = ConfigDict(validate_assignment=True, extra="forbid")
