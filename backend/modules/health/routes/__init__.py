from .health_routes import router

__all__ = ["router"]
