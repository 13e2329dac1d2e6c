from logging import config, getLogger
from typing import Any

from ip_location.config import get_settings

LOGGER_NAME = "ip_location"


def build_log_config(log_level: str) -> dict[str, Any]:
    """dictConfig for the service and uvicorn loggers, all at `log_level`."""
    level = log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(levelprefix)s %(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s',
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "use_colors": True,
            },
            "service": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(asctime)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "use_colors": True,
            },
        },
        "handlers": {
            "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": "ext://sys.stdout"},
            "service": {"class": "logging.StreamHandler", "formatter": "service", "stream": "ext://sys.stderr"},
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["service"], "level": level, "propagate": True},
            "uvicorn": {"handlers": ["service"], "level": level, "propagate": False},
            "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
            "uvicorn.error": {"level": level, "propagate": True},
        },
    }


def configure_logging(log_level: str) -> None:
    """(Re)apply the logging configuration at the given level."""
    config.dictConfig(build_log_config(log_level))


configure_logging(get_settings().log_level)

logger = getLogger(LOGGER_NAME)
