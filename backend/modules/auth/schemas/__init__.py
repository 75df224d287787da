from .auth_schemas import RegisterRequest, LoginRequest, PinRequest

__all__ = ["RegisterRequest", "LoginRequest", "PinRequest"]
