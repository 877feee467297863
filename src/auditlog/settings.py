"""Request logger settings loaded from environment variables."""
from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from auditlog.config import LoggerConfig, LogValuesFunc, Skipper


def _split(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseSettings):
    """Server and request logger configuration from the environment.

    List-valued options are read as comma-separated strings.

    Attributes:
        host: Bind address for the demo server.
        port: Port number for the demo server.
        debug: Enable debug logging and API documentation.
        skip_paths_raw: Comma-separated paths that are never logged.
        log_headers_raw: Comma-separated request headers to log.
        log_query_params_raw: Comma-separated query parameters to log.
        request_id_header: Header carrying the request ID.
        forwarded_by_client_ip: Trust proxy headers for the client IP.
        access_log_level: Level name for the request record logger.
        json_logs: Render log lines as JSON.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    skip_paths_raw: str = "/health/live,/health/ready"
    log_headers_raw: str = ""
    log_query_params_raw: str = ""
    request_id_header: str = "X-Request-ID"
    forwarded_by_client_ip: bool = True
    access_log_level: str = "info"
    json_logs: bool = True

    log_latency: bool = True
    log_protocol: bool = False
    log_remote_ip: bool = True
    log_host: bool = False
    log_method: bool = True
    log_uri: bool = False
    log_uri_path: bool = True
    log_request_id: bool = True
    log_referer: bool = False
    log_user_agent: bool = False
    log_status: bool = True
    log_error: bool = True
    log_content_length: bool = False
    log_response_size: bool = False

    @computed_field
    @property
    def skip_paths(self) -> list[str]:
        """Parse skip paths from comma-separated string.

        Returns:
            List of exact URL paths to skip.
        """
        return _split(self.skip_paths_raw)

    @computed_field
    @property
    def log_headers(self) -> list[str]:
        """Parse logged header names from comma-separated string."""
        return _split(self.log_headers_raw)

    @computed_field
    @property
    def log_query_params(self) -> list[str]:
        """Parse logged query parameter names from comma-separated string."""
        return _split(self.log_query_params_raw)

    def logger_config(
        self,
        skipper: Skipper | None = None,
        log_values_func: LogValuesFunc | None = None,
    ) -> LoggerConfig:
        """Build a request logger configuration from these settings.

        Args:
            skipper: Optional skip predicate.
            log_values_func: Sink receiving extracted values.

        Returns:
            Frozen logger configuration.
        """
        toggles = {
            name: getattr(self, name)
            for name in LoggerConfig.model_fields
            if name.startswith("log_") and isinstance(getattr(self, name, None), bool)
        }
        return LoggerConfig(
            skipper=skipper,
            skip_paths=self.skip_paths,
            log_values_func=log_values_func,
            log_headers=self.log_headers,
            log_query_params=self.log_query_params,
            request_id_header=self.request_id_header,
            forwarded_by_client_ip=self.forwarded_by_client_ip,
            **toggles,
        )
