from .loyalty_service import LoyaltyService
from .rewards_engine import RewardsEngine

__all__ = ["LoyaltyService", "RewardsEngine"]
