# backend/modules/auth/models/user_models.py

"""
Customer account models.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from core.database import Base
from core.mixins import CreatedAtMixin


class User(Base, CreatedAtMixin):
    """Customer account, keyed by lower-cased email"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    loyalty_id = Column(String(6), nullable=False, default="", index=True)
    last_login_at = Column(DateTime, default=func.now(), nullable=False)

    def summary(self) -> dict:
        return {"email": self.email, "loyaltyId": self.loyalty_id}

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"


class LoyaltyIdMapping(Base, CreatedAtMixin):
    """Short numeric loyalty ID -> account email, for staff lookups"""
    __tablename__ = "loyalty_ids"

    id = Column(Integer, primary_key=True, index=True)
    loyalty_id = Column(String(6), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, index=True)

    def __repr__(self):
        return f"<LoyaltyIdMapping(loyalty_id='{self.loyalty_id}', email='{self.email}')>"
