"""Tests for logging configuration."""

import json
import logging

import pytest

from vba2js.core.config import Settings
from vba2js.core.logging import (
    StructuredFormatter,
    TextFormatter,
    get_context_logger,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(**extra_data):
    record = logging.LogRecord("vba2js.test", logging.WARNING, __file__, 10, "Hello %s", ("there",), None)
    if extra_data:
        record.extra_data = extra_data
    return record


def test_structured_formatter():
    """Test that JSON output carries the message and extra data"""
    data = json.loads(StructuredFormatter().format(make_record(line=3)))

    assert data["message"] == "Hello there"
    assert data["level"] == "WARNING"
    assert data["logger"] == "vba2js.test"
    assert data["line"] == 3


def test_text_formatter_appends_extra_data():
    text = TextFormatter().format(make_record(line=3, token="Dim"))
    assert text.endswith("Hello there line=3 token=Dim")


def test_context_logger_merges_context():
    adapter = get_context_logger("vba2js.test", component="translator")
    _, kwargs = adapter.process("msg", {"extra_data": {"line": 1}})
    assert kwargs["extra"]["extra_data"] == {"component": "translator", "line": 1}


def test_setup_logging_writes_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "vba2js.log"
    setup_logging(Settings(_env_file=None, LOG_FILE=str(log_file), LOG_FORMAT="json"))

    get_context_logger("vba2js.test", component="test").warning("Written", extra_data={"n": 1})
    for handler in logging.getLogger().handlers:
        handler.flush()

    entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert entry["message"] == "Written"
    assert entry["component"] == "test"
    assert entry["n"] == 1


def test_setup_logging_level(restore_root_logger):
    setup_logging(Settings(_env_file=None, LOG_LEVEL="debug"))
    assert logging.getLogger().level == logging.DEBUG
