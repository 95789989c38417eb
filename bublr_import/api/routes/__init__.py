"""API route modules."""

from bublr_import.api.routes.health import router as health_router
from bublr_import.api.routes.convert import router as convert_router
from bublr_import.api.routes.platforms import router as platforms_router

__all__ = [
    "health_router",
    "convert_router",
    "platforms_router",
]
