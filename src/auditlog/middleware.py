"""Request logging middleware."""
import inspect
import time
from datetime import datetime, timedelta, timezone

import structlog
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from auditlog.config import LoggerConfig
from auditlog.errors import format_errors, get_errors
from auditlog.params import RequestLoggerParams

logger = structlog.get_logger()


class _ResponseObserver:
    """Wraps ``send`` to see the final status and body size.

    Messages are forwarded to the server unchanged.
    """

    def __init__(self, send: Send) -> None:
        self._send = send
        self.status: int | None = None
        self.size = 0

    async def send(self, message: Message) -> None:
        """Record status and body size, then forward the message.

        Args:
            message: ASGI message sent by the wrapped app.
        """
        if message["type"] == "http.response.start":
            self.status = message["status"]
        elif message["type"] == "http.response.body":
            self.size += len(message.get("body", b""))
        await self._send(message)


class RequestLoggerMiddleware:
    """ASGI middleware that extracts configured request values after each request.

    The wrapped app always runs exactly once. Skip rules, extraction and
    the sink call all happen after it returns, so the record reflects the
    final response. Exceptions from the wrapped app are recorded and
    re-raised unchanged. Cancellation also runs extraction and the sink
    against whatever response state was seen.

    The sink is not guarded. If it raises while a downstream exception is
    propagating, the sink error reaches the host and the downstream error
    is kept only as its ``__context__``.
    """

    def __init__(self, app: ASGIApp, config: LoggerConfig | None = None) -> None:
        """Initialize middleware with a logger configuration.

        Args:
            app: ASGI application.
            config: Values to extract and where to send them.
        """
        self.app = app
        self.config = config if config is not None else LoggerConfig()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Run the wrapped app once, then log the configured values.

        Args:
            scope: ASGI connection scope.
            receive: ASGI receive channel.
            send: ASGI send channel.
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = datetime.now(timezone.utc)
        start = time.perf_counter()
        observer = _ResponseObserver(send)
        error: Exception | None = None

        try:
            await self.app(scope, receive, observer.send)
        except Exception as exc:
            error = exc
            raise
        finally:
            await self._log_values(scope, receive, start_time, start, observer, error)

    async def _log_values(
        self,
        scope: Scope,
        receive: Receive,
        start_time: datetime,
        start: float,
        observer: _ResponseObserver,
        error: Exception | None,
    ) -> None:
        """Build the record for a finished request and pass it to the sink.

        Args:
            scope: ASGI connection scope.
            receive: ASGI receive channel.
            start_time: Wall-clock time the request arrived.
            start: Monotonic timestamp the request arrived.
            observer: Response state seen on the way out.
            error: Exception that escaped the wrapped app, if any.
        """
        cfg = self.config
        request = Request(scope, receive)

        if cfg.should_skip(request):
            logger.debug("request_log_skipped", path=scope["path"])
            return

        params = RequestLoggerParams(start_time=start_time)
        headers = request.headers

        if cfg.log_protocol:
            params.protocol = _protocol(scope)

        if cfg.log_remote_ip:
            params.remote_ip = self._client_ip(request)

        if cfg.log_host:
            params.host = headers.get("host") or request.url.hostname or ""

        if cfg.log_method:
            params.method = request.method

        if cfg.log_uri:
            params.uri = _request_uri(scope)

        if cfg.log_uri_path:
            params.uri_path = scope["path"]

        if cfg.log_request_id:
            params.request_id = headers.get(cfg.request_id_header, "")

        if cfg.log_referer:
            params.referer = headers.get("referer", "")

        if cfg.log_user_agent:
            params.user_agent = headers.get("user-agent", "")

        if cfg.log_status:
            params.status = _final_status(observer, error)

        if cfg.log_error:
            errors = get_errors(request)
            if error is not None:
                errors.append(error)
            params.error = format_errors(errors)

        if cfg.log_content_length:
            params.content_length = headers.get("content-length", "")

        if cfg.log_response_size:
            params.response_size = observer.size

        if cfg.log_headers:
            params.headers = {name: headers.getlist(name) for name in cfg.log_headers}

        if cfg.log_query_params:
            params.query_params = {
                name: request.query_params.getlist(name) for name in cfg.log_query_params
            }

        if cfg.log_latency:
            params.latency = timedelta(seconds=time.perf_counter() - start)

        if cfg.log_values_func is not None:
            result = cfg.log_values_func(request, params)
            if inspect.isawaitable(result):
                await result

    def _client_ip(self, request: Request) -> str:
        """Resolve the client IP, preferring proxy headers when trusted.

        Args:
            request: Current request.

        Returns:
            Client IP address, or an empty string if unknown.
        """
        if self.config.forwarded_by_client_ip:
            for name in self.config.remote_ip_headers:
                value = request.headers.get(name, "")
                candidate = value.split(",")[0].strip()
                if candidate:
                    return candidate
        return request.client.host if request.client else ""


def _request_uri(scope: Scope) -> str:
    """Reassemble the request target as the client sent it."""
    raw_path = scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = scope["path"]
    query = scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


def _protocol(scope: Scope) -> str:
    """Render the protocol as ``HTTP/major.minor``, e.g. ``HTTP/2.0``."""
    version = scope.get("http_version", "1.1")
    if "." not in version:
        version = f"{version}.0"
    return f"HTTP/{version}"


def _final_status(observer: _ResponseObserver, error: Exception | None) -> int:
    if observer.status is not None:
        return observer.status
    # Nothing sent yet: the server answers 500 for an escaped exception.
    return 500 if error is not None else 200


def logger_with_config(config: LoggerConfig) -> Middleware:
    """Wrap a configuration as middleware for ``Starlette(middleware=...)``.

    Args:
        config: Logger configuration.

    Returns:
        Middleware entry installing ``RequestLoggerMiddleware``.
    """
    return Middleware(RequestLoggerMiddleware, config=config)
