"""Request logger configuration."""
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from starlette.requests import Request

from auditlog.params import RequestLoggerParams

Skipper = Callable[[Request], bool]
LogValuesFunc = Callable[[Request, RequestLoggerParams], Any]


class LoggerConfig(BaseModel):
    """Selects which values the request logger extracts and where they go.

    Every toggle defaults to off. The configuration is frozen once built
    and is shared read-only by all requests.

    Attributes:
        skipper: Returns True for requests whose values should not be logged.
        skip_paths: Exact URL paths that are never logged.
        log_values_func: Sink called with the extracted values.
        log_latency: Record how long the downstream app took.
        log_protocol: Extract the request protocol (i.e. ``HTTP/1.1``, ``HTTP/2.0``).
        log_remote_ip: Extract the client IP, honouring proxy headers.
        log_host: Extract the ``Host`` header (i.e. ``example.com``).
        log_method: Extract the request method.
        log_uri: Extract the request URI (i.e. ``/api/v1/users?name=kai``).
        log_uri_path: Extract the URI path (i.e. ``/api/v1/users``).
        log_request_id: Extract the request ID header.
        log_referer: Extract the ``Referer`` header.
        log_user_agent: Extract the ``User-Agent`` header.
        log_status: Extract the response status code.
        log_error: Extract errors raised or attached by the handler chain.
        log_content_length: Extract the request ``Content-Length`` header.
        log_response_size: Count the response body bytes sent.
        log_headers: Request headers to copy, all values per name.
        log_query_params: Query parameters to copy, all values per name.
        request_id_header: Header read when ``log_request_id`` is set.
        remote_ip_headers: Proxy headers consulted for the client IP.
        forwarded_by_client_ip: Whether ``remote_ip_headers`` are trusted.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    skipper: Skipper | None = None
    skip_paths: frozenset[str] = Field(default_factory=frozenset)
    log_values_func: LogValuesFunc | None = None

    log_latency: bool = False
    log_protocol: bool = False
    log_remote_ip: bool = False
    log_host: bool = False
    log_method: bool = False
    log_uri: bool = False
    log_uri_path: bool = False
    log_request_id: bool = False
    log_referer: bool = False
    log_user_agent: bool = False
    log_status: bool = False
    log_error: bool = False
    log_content_length: bool = False
    log_response_size: bool = False
    log_headers: tuple[str, ...] = ()
    log_query_params: tuple[str, ...] = ()

    request_id_header: str = "X-Request-ID"
    remote_ip_headers: tuple[str, ...] = ("X-Forwarded-For", "X-Real-IP")
    forwarded_by_client_ip: bool = True

    def should_skip(self, request: Request) -> bool:
        """Check whether a finished request is excluded from logging.

        Args:
            request: Request whose downstream processing has completed.

        Returns:
            True if the path is a skip path or the skipper says so.
        """
        if request.scope["path"] in self.skip_paths:
            return True
        return self.skipper is not None and bool(self.skipper(request))
