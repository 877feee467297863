"""Sink tests."""

from datetime import datetime, timezone

import pytest
import structlog
from starlette.requests import Request
from structlog.testing import capture_logs

from auditlog.params import RequestLoggerParams
from auditlog.sinks import CollectingSink, structlog_sink

START = datetime(2026, 1, 2, tzinfo=timezone.utc)


def make_request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": []})


def test_structlog_sink_emits_fields() -> None:
    """The structlog sink emits one event with the populated fields."""
    params = RequestLoggerParams(start_time=START, method="GET", status=204)
    with capture_logs() as logs:
        sink = structlog_sink(logger=structlog.get_logger())
        sink(make_request(), params)

    assert logs == [
        {
            "event": "http_request",
            "log_level": "info",
            "start_time": START.isoformat(),
            "method": "GET",
            "status": 204,
        }
    ]


def test_structlog_sink_custom_event_and_level() -> None:
    """Event name and level are configurable."""
    params = RequestLoggerParams(start_time=START, status=500)
    with capture_logs() as logs:
        structlog_sink(logger=structlog.get_logger(), event="access", level="warning")(
            make_request(), params
        )

    assert logs[0]["event"] == "access"
    assert logs[0]["log_level"] == "warning"


def test_structlog_sink_rejects_unknown_level() -> None:
    """Unknown levels fail at construction time."""
    with pytest.raises(ValueError, match="Unknown log level"):
        structlog_sink(level="verbose")


def test_collecting_sink_keeps_order() -> None:
    """Records are kept in arrival order and can be cleared."""
    sink = CollectingSink()
    first = RequestLoggerParams(start_time=START, method="GET")
    second = RequestLoggerParams(start_time=START, method="POST")
    sink(make_request(), first)
    sink(make_request(), second)
    assert sink.records == [first, second]

    sink.clear()
    assert sink.records == []
