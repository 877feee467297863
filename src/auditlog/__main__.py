"""Entry point for the demo server."""

import structlog
import uvicorn

from auditlog.app import create_app
from auditlog.logging import configure_logging
from auditlog.settings import Settings

logger = structlog.get_logger()


def main() -> None:
    """Entry point for python -m auditlog."""
    settings = Settings()
    configure_logging(
        debug=settings.debug,
        access_level=settings.access_log_level,
        json_logs=settings.json_logs,
    )

    app = create_app(settings)
    logger.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="warning",
        access_log=False,
    )


if __name__ == "__main__":
    main()
