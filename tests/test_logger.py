"""Tests for logging setup."""

import io
import logging

import pytest

from utils import logger as logger_module
from utils.logger import get_logger, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    level = root.level
    stream = logger_module._handler.stream if logger_module._handler else None
    yield
    setup_logging(stream=stream)
    root.setLevel(level)


class TestSetupLogging:

    def test_writes_formatted_records(self, restore_logging) -> None:
        stream = io.StringIO()
        setup_logging("DEBUG", stream)

        get_logger("services.account_service").debug("balance read")

        line = stream.getvalue().strip()
        assert line.endswith("| DEBUG    | services.account_service | balance read")

    def test_repeated_setup_replaces_handler(self, restore_logging) -> None:
        first, second = io.StringIO(), io.StringIO()
        setup_logging("INFO", first)
        setup_logging("INFO", second)

        get_logger("main").info("started")

        assert first.getvalue() == ""
        assert "started" in second.getvalue()

    def test_level_filters_records(self, restore_logging) -> None:
        stream = io.StringIO()
        setup_logging("warning", stream)

        get_logger("main").info("hidden")
        get_logger("main").warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_unknown_level_falls_back_to_info(self, restore_logging) -> None:
        setup_logging("LOUD", io.StringIO())
        assert logging.getLogger().level == logging.INFO
