# backend/modules/announcements/models/announcement_models.py

"""
Happy-bar announcement: one current value plus an append-only audit log.
"""

from sqlalchemy import Column, Integer, Text, DateTime
from sqlalchemy.sql import func
from core.database import Base
from core.mixins import CreatedAtMixin

CURRENT_ANNOUNCEMENT_ID = 1


class Announcement(Base):
    """The single current announcement row (id is always 1)"""
    __tablename__ = "announcement_bar"

    id = Column(Integer, primary_key=True, default=CURRENT_ANNOUNCEMENT_ID)
    text = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, default=func.now(), nullable=False)


class AnnouncementLogEntry(Base, CreatedAtMixin):
    """Every text ever published on the bar"""
    __tablename__ = "announcement_log"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False, default="")
