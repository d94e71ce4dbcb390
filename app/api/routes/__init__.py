from app.api.routes.health import router as health_router
from app.api.routes.normalize import router as normalize_router
from app.api.routes.offers import router as offers_router

__all__ = ["health_router", "normalize_router", "offers_router"]
