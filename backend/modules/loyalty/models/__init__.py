# backend/modules/loyalty/models/__init__.py

from .loyalty_models import PointsLedger, PointsHistoryEntry
from .rewards_models import (
    CodeStatus,
    RewardRecordStatus,
    RedemptionCode,
    RewardRecord,
)

__all__ = [
    "PointsLedger",
    "PointsHistoryEntry",
    "CodeStatus",
    "RewardRecordStatus",
    "RedemptionCode",
    "RewardRecord",
]
