"""
FastAPI application with assembled routers.

Dependencies: fastapi, uvicorn, docchat.api.routers
System role: API entry point
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docchat.api.deps.dependencies import get_service_cache
from docchat.api.errors import status_code_for
from docchat.boundary.db.create_tables import create_all_tables
from docchat.configs import get_settings
from docchat.core.exceptions import DocChatException
from docchat.models.common import ErrorResponse
from docchat.observability import configure_logging, get_logger
from docchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import chat_router, documents_router, health_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup; drop cached clients on shutdown."""
    await create_all_tables()
    logger.info(f"{__name__}:lifespan - Startup complete")

    yield

    get_service_cache().clear()
    logger.info(f"{__name__}:lifespan - Service cache cleared")


async def docchat_exception_handler(request: Request, exc: DocChatException) -> JSONResponse:
    """Fallback for domain errors not translated by a route."""
    return JSONResponse(
        status_code=status_code_for(exc),
        content=ErrorResponse(error=exc.message, details=exc.details).model_dump(),
    )


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)

    app = FastAPI(
        title="DocChat API",
        description="Conversational question answering over uploaded documents",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.app.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_exception_handler(DocChatException, docchat_exception_handler)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "docchat.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
