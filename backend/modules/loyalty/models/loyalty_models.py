# backend/modules/loyalty/models/loyalty_models.py

"""
Points ledger models ("MilkPoints").
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    JSON,
    Text,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin, CreatedAtMixin


class PointsLedger(Base, TimestampMixin):
    """Current point balance of one account"""
    __tablename__ = "points_ledgers"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="check_balance_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    balance = Column(Integer, nullable=False, default=0)

    # Newest first: every write adds an entry with a larger id
    entries = relationship(
        "PointsHistoryEntry",
        back_populates="ledger",
        order_by=lambda: PointsHistoryEntry.id.desc(),
        cascade="all, delete-orphan",
    )

    def history(self) -> list:
        return [entry.to_dict() for entry in self.entries]

    def __repr__(self):
        return f"<PointsLedger(email='{self.email}', balance={self.balance})>"


class PointsHistoryEntry(Base, CreatedAtMixin):
    """One balance-affecting event"""
    __tablename__ = "points_history"

    id = Column(Integer, primary_key=True, index=True)
    ledger_id = Column(Integer, ForeignKey("points_ledgers.id"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    date = Column(String(32), nullable=False)  # display timestamp, pl-PL
    meta = Column(JSON, nullable=True)

    ledger = relationship("PointsLedger", back_populates="entries")

    def to_dict(self) -> dict:
        entry = {"text": self.text, "date": self.date}
        if self.meta is not None:
            entry["meta"] = self.meta
        return entry
