"""
Logging manager for graphql_http.

The library only creates module-level loggers; handlers are installed here,
by applications and the command-line server.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional

from ..config.models import LoggingConfig, LogLevel
from .filters import SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter


class LoggingManager:
    """Install and remove the handlers described by a ``LoggingConfig``."""

    def __init__(self) -> None:
        self._configured = False
        self._handlers: Dict[str, logging.Handler] = {}

    def setup_logging(self, config: LoggingConfig) -> None:
        """
        Configure the root logger from ``config``.

        Calling it again replaces the handlers installed previously.

        Args:
            config: Logging configuration
        """
        if self._configured:
            self.cleanup()

        level = getattr(logging, LogLevel(config.level).value)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        if config.enable_console:
            handler: logging.Handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                StructuredFormatter()
                if config.enable_structured
                else ColoredFormatter(config.format)
            )
            self.add_handler("console", handler, config)

        if config.enable_file and config.file_path:
            log_path = Path(config.file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=config.max_file_size,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
            handler.setFormatter(
                StructuredFormatter()
                if config.enable_structured
                else logging.Formatter(config.format)
            )
            self.add_handler("file", handler, config)

        for component, component_level in config.component_levels.items():
            logging.getLogger(component).setLevel(
                getattr(logging, LogLevel(component_level).value)
            )

        self._configured = True
        logging.getLogger(__name__).debug("Logging configured at %s", config.level)

    def add_handler(
        self,
        name: str,
        handler: logging.Handler,
        config: Optional[LoggingConfig] = None,
    ) -> None:
        """
        Attach ``handler`` to the root logger under ``name``.

        Args:
            name: Handler name
            handler: Logging handler
            config: Configuration supplying the level and masking setting
        """
        if config is not None:
            handler.setLevel(getattr(logging, LogLevel(config.level).value))
            if config.mask_sensitive_data:
                handler.addFilter(SensitiveDataFilter())

        self.remove_handler(name)
        logging.getLogger().addHandler(handler)
        self._handlers[name] = handler

    def remove_handler(self, name: str) -> None:
        """Detach and close the handler registered under ``name``."""
        handler = self._handlers.pop(name, None)
        if handler is not None:
            logging.getLogger().removeHandler(handler)
            handler.close()

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Set logging level.

        Args:
            level: New logging level
            component: Logger name, or None for the root logger and handlers
        """
        log_level = getattr(logging, LogLevel(level).value)

        if component:
            logging.getLogger(component).setLevel(log_level)
            return

        logging.getLogger().setLevel(log_level)
        for handler in self._handlers.values():
            handler.setLevel(log_level)

    def cleanup(self) -> None:
        """Remove every handler installed by this manager."""
        for name in list(self._handlers):
            self.remove_handler(name)
        self._configured = False

    def is_configured(self) -> bool:
        return self._configured


_logging_manager = LoggingManager()


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Configure logging with the shared manager.

    Args:
        config: Logging configuration, defaults when omitted

    Returns:
        The shared ``LoggingManager``
    """
    _logging_manager.setup_logging(config or LoggingConfig())
    return _logging_manager


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a component."""
    return logging.getLogger(name)
