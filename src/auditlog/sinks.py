"""Ready-made sinks for extracted request values."""
from typing import Any

import structlog
from starlette.requests import Request

from auditlog.config import LogValuesFunc
from auditlog.logging import ACCESS_LOGGER
from auditlog.params import RequestLoggerParams

LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


def structlog_sink(
    logger: Any = None,
    event: str = "http_request",
    level: str = "info",
) -> LogValuesFunc:
    """Create a sink that emits each record as a structlog event.

    Args:
        logger: Bound logger to emit through. Uses the module logger if None.
        event: Event name for every emitted entry.
        level: Log method name on the logger.

    Returns:
        Sink suitable for ``LoggerConfig.log_values_func``.

    Raises:
        ValueError: If level is not a known log level.
    """
    if level not in LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    log = logger if logger is not None else structlog.get_logger(ACCESS_LOGGER)

    def sink(request: Request, params: RequestLoggerParams) -> None:
        getattr(log, level)(event, **params.to_log_fields())

    return sink


class CollectingSink:
    """Sink that keeps every record it receives, in arrival order.

    Attributes:
        records: Records received so far.
    """

    def __init__(self) -> None:
        self.records: list[RequestLoggerParams] = []

    def __call__(self, request: Request, params: RequestLoggerParams) -> None:
        self.records.append(params)

    def clear(self) -> None:
        """Forget all collected records."""
        self.records.clear()
