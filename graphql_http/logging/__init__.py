"""
Logging setup for applications using graphql_http.

Provides JSON and colored formatters, a filter masking credentials, and a
manager that installs them from a ``LoggingConfig``.
"""

from .filters import SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter
from .manager import LoggingManager, get_logger, setup_logging

__all__ = [
    "LoggingManager",
    "setup_logging",
    "get_logger",
    "StructuredFormatter",
    "ColoredFormatter",
    "SensitiveDataFilter",
]
