"""Values extracted from a single request/response exchange."""
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field

_SCALAR_FIELDS: tuple[str, ...] = (
    "protocol",
    "remote_ip",
    "host",
    "method",
    "uri",
    "uri_path",
    "request_id",
    "referer",
    "user_agent",
    "status",
    "error",
    "content_length",
    "response_size",
)


class RequestLoggerParams(BaseModel):
    """Per-request record handed to the configured sink.

    Fields whose toggle is off keep their zero value.

    Attributes:
        start_time: When the request entered the logger (UTC).
        latency: Time spent in downstream processing.
        protocol: Request protocol, e.g. ``HTTP/1.1``.
        remote_ip: Client IP address.
        host: Requested host.
        method: Request method.
        uri: Path plus query string as sent by the client.
        uri_path: Path component only.
        request_id: Value of the request ID header.
        referer: ``Referer`` header value.
        user_agent: ``User-Agent`` header value.
        status: Final response status code.
        error: Handler errors, one ``Error #NN: msg`` line each.
        content_length: Request ``Content-Length`` header value.
        response_size: Response body bytes sent.
        headers: Configured request headers to their values.
        query_params: Configured query parameters to their values.
    """

    start_time: datetime
    latency: timedelta = timedelta(0)
    protocol: str = ""
    remote_ip: str = ""
    host: str = ""
    method: str = ""
    uri: str = ""
    uri_path: str = ""
    request_id: str = ""
    referer: str = ""
    user_agent: str = ""
    status: int = 0
    error: str = ""
    content_length: str = ""
    response_size: int = 0
    headers: dict[str, list[str]] = Field(default_factory=dict)
    query_params: dict[str, list[str]] = Field(default_factory=dict)

    def to_log_fields(self) -> dict[str, Any]:
        """Flatten the record into structured log key/value pairs.

        Zero-valued fields are dropped, so only the values the logger
        was configured to extract end up in the output.

        Returns:
            Mapping suitable for passing as logger keyword arguments.
        """
        fields: dict[str, Any] = {"start_time": self.start_time.isoformat()}
        if self.latency:
            fields["latency_ms"] = round(self.latency.total_seconds() * 1000, 2)
        for name in _SCALAR_FIELDS:
            value = getattr(self, name)
            if value:
                fields[name] = value
        if self.headers:
            fields["headers"] = dict(self.headers)
        if self.query_params:
            fields["query_params"] = dict(self.query_params)
        return fields
