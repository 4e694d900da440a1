"""Structured Logging — sanitization, formatters and ContextLogger levels.

Tests:
    - sanitize_error keeps name/message, attaches stack only when asked, follows causes
    - non-exception values reduce to {type, value}
    - JSONFormatter surfaces context and error extras
    - TextFormatter renders "[ts] LEVEL: message | Context: {...}"
    - ContextLogger suppresses debug outside development and sanitizes per environment
"""

import json
import logging

from stockroom.core.domain_types import Environment
from stockroom.core.errors import DatabaseError
from stockroom.infrastructure.observability import (
    ContextLogger,
    JSONFormatter,
    TextFormatter,
    sanitize_error,
)


def _raised(exc: BaseException) -> BaseException:
    try:
        raise exc
    except BaseException as caught:
        return caught


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "stockroom", logging.INFO, __file__, 1, message, None, None,
    )
    record.__dict__.update(extra)
    return record


# ─── sanitize_error ──────────────────────────────────────────────

def test_sanitize_exception_without_stack():
    result = sanitize_error(_raised(ValueError("bad value")))
    assert result == {"name": "ValueError", "message": "bad value"}


def test_sanitize_exception_with_stack():
    result = sanitize_error(_raised(ValueError("bad value")), include_stack=True)
    assert "Traceback" in result["stack"]
    assert "ValueError: bad value" in result["stack"]


def test_sanitize_follows_wrapped_cause():
    cause = RuntimeError("connection reset")
    result = sanitize_error(DatabaseError("list", cause=cause))
    assert result["name"] == "DatabaseError"
    assert result["cause"] == {"name": "RuntimeError", "message": "connection reset"}


def test_sanitize_object_value():
    assert sanitize_error({"code": 1}) == {
        "type": "unknown_error", "value": "{'code': 1}",
    }


def test_sanitize_primitive_value():
    assert sanitize_error("boom") == {"type": "str", "value": "boom"}


# ─── Formatters ──────────────────────────────────────────────────

def test_json_formatter_includes_extras():
    record = _record(context={"product_id": 3}, error={"name": "X", "message": "y"})
    log = json.loads(JSONFormatter().format(record))
    assert log["level"] == "INFO"
    assert log["logger"] == "stockroom"
    assert log["message"] == "hello"
    assert log["context"] == {"product_id": 3}
    assert log["error"] == {"name": "X", "message": "y"}
    assert "timestamp" in log


def test_json_formatter_omits_absent_extras():
    log = json.loads(JSONFormatter().format(_record(context=None)))
    assert "context" not in log
    assert "error" not in log


def test_text_formatter_appends_context():
    line = TextFormatter().format(_record(context={"method": "GET"}))
    assert "INFO: hello | Context: {\"method\": \"GET\"}" in line
    assert line.startswith("[")


# ─── ContextLogger ───────────────────────────────────────────────

def test_debug_suppressed_outside_development(caplog):
    log = ContextLogger(logging.getLogger("stockroom.t1"), Environment.PRODUCTION)
    with caplog.at_level(logging.DEBUG, logger="stockroom.t1"):
        log.debug("quiet")
    assert caplog.records == []


def test_debug_emitted_in_development(caplog):
    log = ContextLogger(logging.getLogger("stockroom.t2"), Environment.DEVELOPMENT)
    with caplog.at_level(logging.DEBUG, logger="stockroom.t2"):
        log.database("list", count=0)
    [record] = caplog.records
    assert record.levelno == logging.DEBUG
    assert record.getMessage() == "Database operation: list"
    assert record.context == {"operation": "list", "count": 0}


def test_error_includes_stack_only_in_development(caplog):
    dev = ContextLogger(logging.getLogger("stockroom.t3"), Environment.DEVELOPMENT)
    prod = ContextLogger(logging.getLogger("stockroom.t3"), Environment.PRODUCTION)
    exc = _raised(RuntimeError("kaput"))
    with caplog.at_level(logging.ERROR, logger="stockroom.t3"):
        dev.error("failed", exc)
        prod.error("failed", exc)
    dev_record, prod_record = caplog.records
    assert "stack" in dev_record.error
    assert "stack" not in prod_record.error
    assert prod_record.error["message"] == "kaput"


def test_api_error_path_logs_at_error_level(caplog):
    log = ContextLogger(logging.getLogger("stockroom.t4"), Environment.TEST)
    with caplog.at_level(logging.INFO, logger="stockroom.t4"):
        log.api("POST", "/api/products", product_id=1)
        log.api("POST", "/api/products", ValueError("nope"))
    ok, failed = caplog.records
    assert ok.levelno == logging.INFO
    assert ok.context == {"method": "POST", "endpoint": "/api/products", "product_id": 1}
    assert failed.levelno == logging.ERROR
    assert failed.error == {"name": "ValueError", "message": "nope"}
