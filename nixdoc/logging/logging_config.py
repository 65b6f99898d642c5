"""Centralized logging configuration for nixdoc.

This module provides logging configuration management. It supports both
YAML-based configuration and programmatic setup with sensible defaults.

Log records always go to stderr: stdout carries the generated document
and must stay clean.

Usage:
    >>> from nixdoc.logging import get_nixdoc_logger
    >>> logger = get_nixdoc_logger(__name__)
    >>> logger.info("Processing started")

Environment variables:
    NIXDOC_LOGGING_CONFIG: Path to custom logging.yml
    NIXDOC_LOG_LEVEL: Default log level (WARNING, INFO, DEBUG, etc.)
"""

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Default log levels for different components
DEFAULT_LOG_LEVELS = {
    "nixdoc": "WARNING",
    "nixdoc.syntax": "WARNING",
    "nixdoc.render": "WARNING",
}


class LoggingConfig:
    """Manages logging configuration for nixdoc.

    Configuration precedence:
        1. Explicit config_path parameter
        2. NIXDOC_LOGGING_CONFIG environment variable
        3. Default configuration

    Example:
        >>> config = LoggingConfig()
        >>> config.apply()
        >>>
        >>> config = LoggingConfig(Path("custom_logging.yml"))
        >>> config.apply()

    Note:
        Configuration is lazy-loaded and cached after first access.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self._get_default_config_path()
        self._config: Optional[Dict[str, Any]] = None

    @staticmethod
    def _get_default_config_path() -> Optional[Path]:
        """Get config path from the NIXDOC_LOGGING_CONFIG environment variable."""
        if env_path := os.environ.get("NIXDOC_LOGGING_CONFIG"):
            return Path(env_path)
        return None

    def load_config(self) -> Dict[str, Any]:
        """Load logging configuration from file or defaults.

        Returns:
            Dictionary in logging.config.dictConfig format. A missing
            config file silently falls back to the defaults.
        """
        if self._config is None:
            if self.config_path and self.config_path.exists():
                with open(self.config_path, "r") as f:
                    self._config = yaml.safe_load(f)
            else:
                self._config = self._get_default_config()
        assert self._config is not None
        return self._config

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default logging configuration.

        Default format:
            "HH:MM:SS.mmm | LEVEL | logger.name - message"

        Environment variables:
            NIXDOC_LOG_LEVEL: Override default log level
        """
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "nixdoc": {
                    "level": os.environ.get("NIXDOC_LOG_LEVEL", "WARNING"),
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
            "root": {
                "level": "WARNING",
                "handlers": ["console"],
            },
        }

    def apply(self):
        """Apply the logging configuration to Python's logging system."""
        config = self.load_config()
        logging.config.dictConfig(config)


# Global configuration instance
_logging_config: Optional[LoggingConfig] = None


def setup_logging(config_path: Optional[Path] = None, level: Optional[str] = None):
    """Setup logging for nixdoc.

    Args:
        config_path: Optional path to YAML logging configuration file.
                    If None, uses environment variables or defaults.
        level: Optional log level override (INFO, DEBUG, WARNING, etc.).
              This overrides any level set in configuration or environment.

    Example:
        >>> setup_logging()
        >>> setup_logging(level="DEBUG")
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        for logger_name in DEFAULT_LOG_LEVELS:
            logging.getLogger(logger_name).setLevel(level)


def get_nixdoc_logger(name: str) -> logging.Logger:
    """Get a logger for nixdoc components.

    Automatically initializes logging if not already configured.

    Args:
        name: Logger name, typically __name__.
    """
    if _logging_config is None:
        setup_logging()

    return logging.getLogger(name)
