from .user_models import User, LoyaltyIdMapping

__all__ = ["User", "LoyaltyIdMapping"]
