"""Unit tests for logging module."""

import logging

import pytest

from arianee_sdk.core.logging import LOGGER_NAME, configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_sets_level_and_handler(self) -> None:
        logger = configure_logging(level="WARNING")

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_reconfiguring_replaces_handler(self) -> None:
        configure_logging(level=logging.INFO)
        logger = configure_logging(level=logging.DEBUG)

        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.DEBUG

    def test_json_format(self) -> None:
        logger = configure_logging(json_format=True)
        record = logging.LogRecord(LOGGER_NAME, logging.INFO, __file__, 1, "hello", None, None)

        line = logger.handlers[0].format(record)

        assert line.startswith('{"timestamp": ')
        assert '"message": "hello"' in line


class TestGetLogger:
    """Tests for get_logger()."""

    def test_child_logger(self) -> None:
        assert get_logger("service_provider").name == "arianee_sdk.service_provider"

    def test_root_logger(self) -> None:
        assert get_logger().name == LOGGER_NAME
