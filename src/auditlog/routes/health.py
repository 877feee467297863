"""Health check endpoints for liveness and readiness probes."""
from typing import Literal

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    """Response model for liveness probe.

    Attributes:
        status: Always 'alive' when process is running.
    """

    status: Literal["alive"]


class ReadinessResponse(BaseModel):
    """Response model for readiness probe.

    Attributes:
        status: Always 'ready' once the request logger is installed.
        skip_paths: Paths the request logger ignores.
    """

    status: Literal["ready"]
    skip_paths: list[str]


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe endpoint.

    Returns:
        Liveness status response.
    """
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> ReadinessResponse:
    """Readiness probe endpoint reporting the active skip paths."""
    config = request.app.state.logger_config
    return ReadinessResponse(status="ready", skip_paths=sorted(config.skip_paths))
