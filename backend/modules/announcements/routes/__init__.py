from .announcement_routes import router

__all__ = ["router"]
