# backend/modules/loyalty/models/rewards_models.py

from sqlalchemy import Column, Integer, String, DateTime, Index
from core.database import Base
from core.mixins import CreatedAtMixin
from enum import Enum
from typing import Dict, Any


class CodeStatus(str, Enum):
    """Lifecycle of a redemption code"""
    ISSUED = "issued"
    USED = "used"


class RewardRecordStatus(str, Enum):
    """Status of the historical reward record"""
    ISSUED = "issued"
    REDEEMED = "redeemed"


def _iso(value):
    return value.isoformat() if value else None


class RedemptionCode(Base):
    """Single-use code handed to the customer for a claimed reward"""
    __tablename__ = "reward_codes"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(16), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    loyalty_id = Column(String(6), nullable=False, default="", index=True)

    # Catalog snapshot taken at issuance
    reward_id = Column(String(64), nullable=False)
    title = Column(String(200), nullable=False)
    cost = Column(Integer, nullable=False)

    status = Column(String(16), nullable=False, default=CodeStatus.ISSUED.value, index=True)
    issued_at = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)
    used_by = Column(String(255), nullable=False, default="")

    @property
    def is_used(self) -> bool:
        return self.status == CodeStatus.USED.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "status": self.status,
            "title": self.title,
            "rewardId": self.reward_id,
            "cost": self.cost,
            "email": self.email,
            "loyaltyId": self.loyalty_id,
            "issuedAt": _iso(self.issued_at),
            "usedAt": _iso(self.used_at),
            "usedBy": self.used_by,
        }

    def __repr__(self):
        return f"<RedemptionCode(code='{self.code}', status='{self.status}')>"


class RewardRecord(Base, CreatedAtMixin):
    """Historical record of a claimed reward, parallel to its code"""
    __tablename__ = "rewards"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    reward_id = Column(String(64), nullable=False, default="")
    title = Column(String(200), nullable=False, default="")
    cost = Column(Integer, nullable=False, default=0)
    code = Column(String(16), nullable=False, default="")
    status = Column(String(16), nullable=False, default=RewardRecordStatus.ISSUED.value)

    __table_args__ = (Index("idx_rewards_code", "code"),)
