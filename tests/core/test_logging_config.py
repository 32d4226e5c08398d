"""Tests for servicekit logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from servicekit.core.logging_config import (
    ALERT,
    EMERGENCY,
    NOTICE,
    build_logging_config,
    setup_logging,
    to_logging_level,
)
from servicekit.startup.config_schema import LoggerConfig, LogLevel


class TestLevels:
    """Test mapping of configured levels onto stdlib levels."""

    def test_levels_are_ordered(self) -> None:
        numeric = [to_logging_level(level) for level in LogLevel]

        assert numeric == sorted(numeric)
        assert len(set(numeric)) == len(numeric)

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("notice", NOTICE),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("alert", ALERT),
            ("critical", logging.CRITICAL),
            ("emergency", EMERGENCY),
        ],
    )
    def test_mapping(self, level: str, expected: int) -> None:
        assert to_logging_level(LogLevel(level)) == expected
        assert to_logging_level(level) == expected

    def test_level_names_registered(self) -> None:
        assert logging.getLevelName(NOTICE) == "NOTICE"
        assert logging.getLevelName(ALERT) == "ALERT"
        assert logging.getLevelName(EMERGENCY) == "EMERGENCY"

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            to_logging_level("verbose")


class TestBuildLoggingConfig:
    """Test the generated dictConfig dictionary."""

    def test_stdout_only(self) -> None:
        config = build_logging_config(LoggerConfig(log_level=LogLevel.INFO))

        assert list(config["handlers"]) == ["console"]
        assert config["handlers"]["console"]["level"] == logging.INFO
        assert config["handlers"]["console"]["formatter"] == "simple"
        assert config["root"] == {"level": logging.INFO, "handlers": ["console"]}
        assert config["disable_existing_loggers"] is False

    def test_debug_uses_detailed_format(self) -> None:
        config = build_logging_config(LoggerConfig(log_level=LogLevel.DEBUG))

        assert config["handlers"]["console"]["formatter"] == "detailed"

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = str(tmp_path / "service.log")
        config = build_logging_config(
            LoggerConfig(log_level=LogLevel.WARNING, log_file_path=log_file)
        )

        assert config["handlers"]["file"]["filename"] == log_file
        assert config["handlers"]["file"]["class"] == "logging.FileHandler"
        assert config["root"]["handlers"] == ["console", "file"]

    def test_service_name_in_format(self) -> None:
        config = build_logging_config(
            LoggerConfig(log_level=LogLevel.INFO), service_name="billing"
        )

        assert "billing | " in config["formatters"]["simple"]["format"]
        assert "billing | " in config["formatters"]["detailed"]["format"]

    @pytest.mark.parametrize("formatter", ["simple", "detailed"])
    def test_percent_in_service_name(self, formatter: str) -> None:
        """Test a service name containing % still formats records."""
        config = build_logging_config(
            LoggerConfig(log_level=LogLevel.INFO), service_name="50%off"
        )
        fmt = config["formatters"][formatter]
        record = logging.LogRecord(
            "servicekit", logging.WARNING, __file__, 1, "hello %s", ("world",), None
        )

        output = logging.Formatter(fmt["format"], fmt["datefmt"]).format(record)

        assert "50%off | " in output
        assert output.endswith("hello world")


class TestSetupLogging:
    """Test applying the logging configuration."""

    def test_applies_dict_config(self) -> None:
        logger_config = LoggerConfig(log_level=LogLevel.NOTICE)

        with patch("servicekit.core.logging_config.logging.config.dictConfig") as mock:
            setup_logging(logger_config, "billing")

        mock.assert_called_once_with(build_logging_config(logger_config, "billing"))
