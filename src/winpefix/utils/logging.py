"""Diagnostic logging: Rich console output and an optional rotating file.

This is separate from the session log shown to the operator; records here
describe what the tool did internally (patch details, contract violations).
"""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ..config.models import LoggingSettings

ROOT_LOGGER_NAME = "winpefix"
LOG_FILE_NAME = "winpefix.log"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"


class WinPEFixLogger:
    """Owns the handlers of the ``winpefix`` logger hierarchy."""

    _instance: Optional["WinPEFixLogger"] = None
    _initialized: bool = False

    def __new__(cls):
        """Singleton pattern to ensure only one logger instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            # Diagnostics go to stderr so they never interleave with the session log
            self.console = Console(stderr=True)
            self.logger = logging.getLogger(ROOT_LOGGER_NAME)
            self.settings: LoggingSettings | None = None
            self._initialized = True

    def setup(self, settings: LoggingSettings | None = None):
        """
        Replace the handlers according to ``settings``.

        Args:
            settings: Logging section of the configuration; defaults if None
        """
        settings = settings or LoggingSettings()
        self.settings = settings

        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers.clear()

        level = getattr(logging, settings.level)
        self.logger.setLevel(level)
        self.logger.propagate = False

        if settings.console_enabled:
            console_handler = RichHandler(
                console=self.console,
                rich_tracebacks=True,
                show_time=False,
                show_path=False,
                markup=False,
            )
            console_handler.setLevel(level)
            self.logger.addHandler(console_handler)

        if settings.file_enabled:
            settings.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                settings.log_dir / LOG_FILE_NAME,
                maxBytes=settings.max_bytes,
                backupCount=settings.backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """
        Get the package logger or one of its children.

        Module names (``winpefix.core.processor``) and short names
        (``core.processor``) map to the same child.
        """
        if not name or name == ROOT_LOGGER_NAME:
            return self.logger
        prefix = ROOT_LOGGER_NAME + "."
        if name.startswith(prefix):
            name = name[len(prefix):]
        return self.logger.getChild(name)


_logger_instance: Optional[WinPEFixLogger] = None


def _instance() -> WinPEFixLogger:
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = WinPEFixLogger()
        _logger_instance.setup()
    return _logger_instance


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger, configuring defaults on first use."""
    return _instance().get_logger(name)


def setup_logging(settings: LoggingSettings | None = None):
    """Apply the logging section of the configuration."""
    _instance().setup(settings)
