"""Global pytest configuration for logging setup.

Keeps the servicekit loggers capturable by caplog regardless of what a test
did to the logging configuration before it.
"""

import logging

import pytest

SERVICEKIT_LOGGERS = [
    "servicekit",
    "servicekit.core.logging_config",
    "servicekit.startup.lifecycle",
    "servicekit.startup.orchestrator",
    "servicekit.startup.validation",
]


@pytest.fixture(autouse=True)
def setup_logging() -> None:
    """Ensure consistent logging configuration across all tests."""
    for logger_name in SERVICEKIT_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        # Ensure propagation is enabled so caplog can capture messages
        logger.propagate = True

    logging.getLogger().setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def configure_caplog(caplog: pytest.LogCaptureFixture) -> None:
    """Capture DEBUG level logs from all servicekit modules."""
    caplog.set_level(logging.DEBUG)
    for logger_name in SERVICEKIT_LOGGERS:
        caplog.set_level(logging.DEBUG, logger=logger_name)
