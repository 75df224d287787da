from .auth_routes import router as auth_router
from .pin_routes import router as pin_router

__all__ = ["auth_router", "pin_router"]
