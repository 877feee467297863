"""Pytest configuration and fixtures."""

import sys
import time
from collections.abc import Callable
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from auditlog.app import create_app
from auditlog.config import LoggerConfig
from auditlog.errors import add_error
from auditlog.middleware import RequestLoggerMiddleware
from auditlog.settings import Settings
from auditlog.sinks import CollectingSink


def build_app(config: LoggerConfig, hits: list[str]) -> FastAPI:
    """Create a small app whose handlers record each invocation in hits."""
    app = FastAPI()
    app.add_middleware(RequestLoggerMiddleware, config=config)

    @app.get("/ping")
    async def ping() -> PlainTextResponse:
        hits.append("/ping")
        return PlainTextResponse("pong")

    @app.get("/health")
    async def health() -> PlainTextResponse:
        hits.append("/health")
        return PlainTextResponse("ok")

    @app.get("/health2")
    async def health2() -> PlainTextResponse:
        hits.append("/health2")
        return PlainTextResponse("ok")

    @app.get("/items")
    async def items() -> PlainTextResponse:
        hits.append("/items")
        return PlainTextResponse("items")

    @app.post("/upload")
    async def upload(request: Request) -> PlainTextResponse:
        hits.append("/upload")
        body = await request.body()
        return PlainTextResponse(f"received {len(body)}", status_code=201)

    @app.get("/slow")
    def slow() -> PlainTextResponse:
        hits.append("/slow")
        time.sleep(0.02)
        return PlainTextResponse("done")

    @app.get("/missing")
    async def missing() -> PlainTextResponse:
        hits.append("/missing")
        raise HTTPException(status_code=404, detail="not here")

    @app.get("/attached")
    async def attached(request: Request) -> PlainTextResponse:
        hits.append("/attached")
        add_error(request, ValueError("bad input"))
        add_error(request, "upstream timeout")
        return PlainTextResponse("degraded", status_code=502)

    @app.get("/boom")
    async def boom() -> PlainTextResponse:
        hits.append("/boom")
        raise RuntimeError("boom")

    return app


@pytest.fixture
def sink() -> CollectingSink:
    """Create a sink collecting request records."""
    return CollectingSink()


@pytest.fixture
def hits() -> list[str]:
    """Track handler invocations."""
    return []


@pytest.fixture
def make_client(
    sink: CollectingSink, hits: list[str]
) -> Callable[..., TestClient]:
    """Build a test client around a logger configured with the given options."""

    def _make(**options: object) -> TestClient:
        options.setdefault("log_values_func", sink)
        config = LoggerConfig(**options)
        return TestClient(build_app(config, hits), raise_server_exceptions=False)

    return _make


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        _env_file=None,
        host="127.0.0.1",
        port=8000,
        debug=True,
    )


@pytest.fixture
def client(settings: Settings, sink: CollectingSink) -> TestClient:
    """Create test client with configured app."""
    app = create_app(settings, log_values_func=sink)
    return TestClient(app)
