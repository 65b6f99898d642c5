"""Tests for logging configuration."""

import logging
import os
from pathlib import Path
from unittest.mock import Mock, patch

from nixdoc.logging import LoggingConfig, get_nixdoc_logger, setup_logging
from nixdoc.logging import logging_config


class TestLoggingConfig:
    """Test LoggingConfig class."""

    def test_default_config_path_from_env(self):
        """Test that the config path comes from NIXDOC_LOGGING_CONFIG."""
        with patch.dict(os.environ, {"NIXDOC_LOGGING_CONFIG": "/path/to/config.yml"}):
            config = LoggingConfig()
            assert config.config_path == Path("/path/to/config.yml")

    def test_no_config_path_returns_none(self):
        """Test that no config path is set without the environment variable."""
        with patch.dict(os.environ, clear=True):
            config = LoggingConfig()
            assert config.config_path is None

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        """Test loading a YAML logging configuration."""
        config_file = tmp_path / "logging.yml"
        config_file.write_text("""
version: 1
disable_existing_loggers: false
handlers:
  console:
    class: logging.StreamHandler
""")

        loaded = LoggingConfig(config_path=config_file).load_config()

        assert loaded["version"] == 1
        assert loaded["disable_existing_loggers"] is False
        assert "console" in loaded["handlers"]

    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path) -> None:
        """Test that a missing config file gives the default configuration."""
        loaded = LoggingConfig(config_path=tmp_path / "absent.yml").load_config()
        assert "nixdoc" in loaded["loggers"]

    def test_default_config_writes_to_stderr(self):
        """Test that the default handler writes to stderr at WARNING."""
        with patch.dict(os.environ, clear=True):
            loaded = LoggingConfig().load_config()
        assert loaded["handlers"]["console"]["stream"] == "ext://sys.stderr"
        assert loaded["loggers"]["nixdoc"]["level"] == "WARNING"
        assert loaded["loggers"]["nixdoc"]["propagate"] is False

    def test_log_level_from_env(self):
        """Test that NIXDOC_LOG_LEVEL sets the default level."""
        with patch.dict(os.environ, {"NIXDOC_LOG_LEVEL": "DEBUG"}, clear=True):
            loaded = LoggingConfig().load_config()
        assert loaded["loggers"]["nixdoc"]["level"] == "DEBUG"

    def test_config_is_cached(self):
        """Test that the loaded configuration is cached."""
        config = LoggingConfig()
        assert config.load_config() is config.load_config()

    @patch("logging.config.dictConfig")
    def test_apply(self, mock_dict_config: Mock):
        """Test that apply hands the configuration to dictConfig."""
        config = LoggingConfig()
        config.apply()
        mock_dict_config.assert_called_once_with(config.load_config())


class TestSetupLogging:
    def test_level_override(self):
        """Test that an explicit level overrides every nixdoc logger."""
        setup_logging(level="DEBUG")
        try:
            for name in logging_config.DEFAULT_LOG_LEVELS:
                assert logging.getLogger(name).level == logging.DEBUG
        finally:
            setup_logging(level="WARNING")

    def test_get_logger_initializes_once(self):
        """Test that the first logger request configures logging."""
        with patch.object(logging_config, "_logging_config", None), patch.object(logging_config, "setup_logging") as mock_setup:
            logger = get_nixdoc_logger("nixdoc.test")
        mock_setup.assert_called_once_with()
        assert logger.name == "nixdoc.test"

    def test_get_logger_reuses_configuration(self):
        """Test that later logger requests keep the configuration."""
        setup_logging()
        with patch.object(logging_config, "setup_logging") as mock_setup:
            get_nixdoc_logger("nixdoc.test")
        mock_setup.assert_not_called()
