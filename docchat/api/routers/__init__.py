"""API routers."""

from docchat.api.routers.chat import router as chat_router
from docchat.api.routers.documents import router as documents_router
from docchat.api.routers.health import router as health_router

__all__ = ["chat_router", "documents_router", "health_router"]
