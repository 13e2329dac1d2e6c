import logging
from collections.abc import Iterator

import pytest

from ip_location.logger import LOGGER_NAME, build_log_config, configure_logging


@pytest.fixture
def restore_logging() -> Iterator[None]:
    yield
    configure_logging("INFO")


def test_build_log_config_applies_level_to_every_logger() -> None:
    log_config = build_log_config("warning")

    levels = {name: logger_config["level"] for name, logger_config in log_config["loggers"].items()}
    assert levels == {
        LOGGER_NAME: "WARNING",
        "uvicorn": "WARNING",
        "uvicorn.access": "WARNING",
        "uvicorn.error": "WARNING",
    }


def test_configure_logging_changes_service_logger_level(restore_logging: None) -> None:
    configure_logging("DEBUG")

    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
    assert logging.getLogger("uvicorn.access").level == logging.DEBUG

    configure_logging("ERROR")

    assert logging.getLogger(LOGGER_NAME).level == logging.ERROR
