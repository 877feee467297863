"""Configurable request logging for ASGI applications."""

from auditlog.config import LoggerConfig
from auditlog.errors import add_error
from auditlog.middleware import RequestLoggerMiddleware, logger_with_config
from auditlog.params import RequestLoggerParams
from auditlog.sinks import CollectingSink, structlog_sink

__all__ = [
    "CollectingSink",
    "LoggerConfig",
    "RequestLoggerMiddleware",
    "RequestLoggerParams",
    "add_error",
    "logger_with_config",
    "structlog_sink",
]
