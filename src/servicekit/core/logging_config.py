"""servicekit - Logging Configuration.

Applies a validated ``LoggerConfig`` to the standard library logging system.
The configuration vocabulary uses syslog-style levels; the three Python lacks
(notice, alert, emergency) are registered as named levels here.
"""

from __future__ import annotations

import logging
import logging.config
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from servicekit.startup.config_schema import LoggerConfig, LogLevel

logger = logging.getLogger(__name__)

NOTICE = 25
ALERT = 55
EMERGENCY = 60

logging.addLevelName(NOTICE, "NOTICE")
logging.addLevelName(ALERT, "ALERT")
logging.addLevelName(EMERGENCY, "EMERGENCY")

LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": NOTICE,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "alert": ALERT,
    "critical": logging.CRITICAL,
    "emergency": EMERGENCY,
}


def to_logging_level(level: LogLevel | str) -> int:
    """Map a configured log level onto a numeric stdlib logging level."""
    try:
        return LEVELS[str(level)]
    except KeyError:
        msg = f"Unknown log level: {level!r}"
        raise ValueError(msg) from None


def build_logging_config(
    logger_config: LoggerConfig, service_name: str | None = None
) -> dict[str, Any]:
    """Build a ``dictConfig`` dictionary for the given logger configuration."""
    level = to_logging_level(logger_config.log_level)
    # service names are free-form; escape them for %-style format strings
    prefix = f"{service_name.replace('%', '%%')} | " if service_name else ""

    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "detailed" if level <= logging.DEBUG else "simple",
            "stream": sys.stdout,
        },
    }
    if logger_config.log_file_path:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": level,
            "formatter": "detailed",
            "filename": logger_config.log_file_path,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": (
                    f"%(asctime)s | {prefix}%(name)s | %(levelname)s | "
                    "%(filename)s:%(lineno)d | %(funcName)s | %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {
                "format": f"%(asctime)s | {prefix}%(levelname)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "root": {
            "level": level,
            "handlers": list(handlers),
        },
    }


def setup_logging(logger_config: LoggerConfig, service_name: str | None = None) -> None:
    """Configure logging for the service."""
    logging.config.dictConfig(build_logging_config(logger_config, service_name))

    destination = logger_config.log_file_path or "stdout"
    logger.info(
        "Logging configured at level %s (%s)",
        logger_config.log_level.value,
        destination,
    )
