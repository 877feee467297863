"""Structured logging configuration using structlog."""

import logging
import sys

import structlog

ACCESS_LOGGER = "auditlog.access"


def configure_logging(
    debug: bool = False,
    access_level: str = "info",
    json_logs: bool = True,
) -> None:
    """Route structlog through stdlib logging with a separate access logger.

    Request records emitted by ``structlog_sink`` go to the
    ``auditlog.access`` logger, whose level is set independently of the
    application level so access entries can be silenced or kept on
    their own.

    Args:
        debug: Enable debug-level application logging when True.
        access_level: Level name for the access logger.
        json_logs: Render JSON lines, otherwise human-readable console output.
    """
    level = logging.DEBUG if debug else logging.INFO
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    logging.getLogger(ACCESS_LOGGER).setLevel(access_level.upper())
    # Request records replace uvicorn's own access log.
    logging.getLogger("uvicorn.access").disabled = True
