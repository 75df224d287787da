from .auth_service import AuthService, PinService, admin_pin_service, clients_pin_service

__all__ = ["AuthService", "PinService", "admin_pin_service", "clients_pin_service"]
