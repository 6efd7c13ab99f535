"""
Configuration for the graphql_http server.
"""

from .loader import ConfigLoader, ConfigLoadError, load_config
from .models import GlobalConfig, LoggingConfig, LogLevel, PlaygroundConfig, ServerConfig

__all__ = [
    "ConfigLoader",
    "ConfigLoadError",
    "load_config",
    "GlobalConfig",
    "LoggingConfig",
    "LogLevel",
    "PlaygroundConfig",
    "ServerConfig",
]
