# tests/test_logging.py
import logging
import pytest
from colorlog.escape_codes import escape_codes
from wish_merchant.utils.logging import SessionColorFilter, logger

def make_record(msg, level=logging.INFO):
    return logging.LogRecord("wish_merchant", level, __file__, 1, msg, None, None)

@pytest.fixture(autouse=True)
def color_env(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("FORCE_COLOR", "1")

def test_sandbox_messages_are_purple():
    record = make_record("[sandbox] GET product")
    SessionColorFilter().filter(record)
    output = logger.handlers[0].format(record)
    assert escape_codes["purple"] + "[sandbox] GET product" in output

def test_prod_messages_are_blue():
    record = make_record("[prod] GET product")
    SessionColorFilter().filter(record)
    assert record.session_color == escape_codes["blue"]

def test_errors_keep_level_color():
    record = make_record("[prod] product failed", logging.ERROR)
    SessionColorFilter().filter(record)
    output = logger.handlers[0].format(record)
    assert record.session_color == ""
    assert output.startswith(escape_codes["red"])

def test_no_color_disables_session_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    record = make_record("[sandbox] GET product")
    SessionColorFilter().filter(record)
    assert record.session_color == ""
