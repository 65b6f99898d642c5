"""Logging infrastructure for nixdoc.

Key components:
    get_nixdoc_logger: Factory function for creating nixdoc loggers
    setup_logging: Initialize logging configuration from YAML
    LoggingConfig: Configuration class for logging settings

Note:
    Library modules obtain loggers through get_nixdoc_logger() so that
    the stderr-only default configuration is always in place.
"""

from .logging_config import LoggingConfig, get_nixdoc_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "setup_logging",
    "get_nixdoc_logger",
]
