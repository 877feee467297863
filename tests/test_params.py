"""Request record tests."""

from datetime import datetime, timedelta, timezone

from auditlog.params import RequestLoggerParams

START = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_zero_values() -> None:
    """Fields not set by the logger keep zero values."""
    params = RequestLoggerParams(start_time=START)
    assert params.latency == timedelta(0)
    assert params.status == 0
    assert params.response_size == 0
    assert params.method == ""
    assert params.headers == {}
    assert params.query_params == {}


def test_log_fields_drop_zero_values() -> None:
    """Only populated values appear in the log fields."""
    params = RequestLoggerParams(start_time=START, method="GET", status=200)
    assert params.to_log_fields() == {
        "start_time": "2026-01-02T03:04:05+00:00",
        "method": "GET",
        "status": 200,
    }


def test_log_fields_render_latency_and_mappings() -> None:
    """Latency is rendered in milliseconds, mappings are copied."""
    params = RequestLoggerParams(
        start_time=START,
        latency=timedelta(milliseconds=250),
        headers={"X-Trace-Id": []},
        query_params={"tag": ["a", "b"]},
    )
    fields = params.to_log_fields()
    assert fields["latency_ms"] == 250.0
    assert fields["headers"] == {"X-Trace-Id": []}
    assert fields["query_params"] == {"tag": ["a", "b"]}
