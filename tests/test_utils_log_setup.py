"""
Tests for src/utils/log_setup.py

Each test configures its own named logger (not the root logger) so pytest's
log capture handlers are left alone.
"""

import io
import json
import logging
import sys

import pytest

from src.config.settings import build_configuration
from src.utils.log_setup import DATE_FORMAT, JsonLogFormatter, resolve_level, setup_logging


@pytest.fixture
def app_logger():
    logger = logging.getLogger("test_log_setup")
    logger.propagate = False
    yield logger
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_resolve_level():
    assert resolve_level("warn") == logging.WARNING
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("error") == logging.ERROR
    assert resolve_level("info") == logging.INFO


def test_setup_logging_text_in_development(app_logger):
    stream = io.StringIO()
    config = build_configuration({"LOG_LEVEL": "warn"})

    handler = setup_logging(config, stream=stream, logger=app_logger)
    app_logger.getChild("app").info("hidden")
    app_logger.getChild("app").warning("shown")

    assert app_logger.handlers == [handler]
    output = stream.getvalue()
    assert "hidden" not in output
    assert "WARNING" in output and "shown" in output


def test_setup_logging_json_in_production(app_logger):
    stream = io.StringIO()
    config = build_configuration({"NODE_ENV": "production"})

    handler = setup_logging(config, stream=stream, logger=app_logger)
    app_logger.getChild("json").info("hello %s", "world")

    assert isinstance(handler.formatter, JsonLogFormatter)
    record = json.loads(stream.getvalue().strip())
    assert record["message"] == "hello world"
    assert record["level"] == "INFO"
    assert record["module"] == "test_log_setup.json"


def test_setup_logging_disabled(app_logger):
    config = build_configuration({"ENABLE_LOGGING": "false"})

    handler = setup_logging(config, logger=app_logger)

    assert isinstance(handler, logging.NullHandler)
    assert app_logger.handlers == [handler]


def test_setup_logging_replaces_previous_handler(app_logger):
    config = build_configuration({})

    setup_logging(config, stream=io.StringIO(), logger=app_logger)
    setup_logging(config, stream=io.StringIO(), logger=app_logger)

    assert len(app_logger.handlers) == 1


def test_json_formatter_uses_date_format_and_includes_exception():
    formatter = JsonLogFormatter(datefmt=DATE_FORMAT)
    assert formatter.datefmt == DATE_FORMAT

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.getLogger("test_log_setup").makeRecord(
            "test_log_setup", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
        )

    payload = json.loads(formatter.format(record))
    assert payload["message"] == "failed"
    assert "RuntimeError: boom" in payload["exception"]
