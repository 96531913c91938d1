"""
Health check API endpoints.

Routes: GET /health

System role: Health check HTTP API
"""

from fastapi import APIRouter
from pydantic import BaseModel

from docchat import __version__


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(status="healthy", version=__version__)
