# backend/modules/announcements/services/announcement_service.py

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Optional, Tuple
import logging

from ..models import Announcement, AnnouncementLogEntry, CURRENT_ANNOUNCEMENT_ID

logger = logging.getLogger(__name__)


class AnnouncementService:
    """Read and replace the happy-bar text"""

    def __init__(self, db: Session):
        self.db = db

    def get_current(self) -> Tuple[str, Optional[datetime]]:
        """Current text and its update time; empty text when never set"""
        current = self.db.get(Announcement, CURRENT_ANNOUNCEMENT_ID)
        if not current:
            return "", None
        return current.text, current.updated_at

    def set_text(self, text: str) -> Announcement:
        """Replace the current text and record it in the audit log"""
        now = datetime.utcnow()
        current = self.db.get(Announcement, CURRENT_ANNOUNCEMENT_ID)
        if current:
            current.text = text
            current.updated_at = now
        else:
            current = Announcement(id=CURRENT_ANNOUNCEMENT_ID, text=text, updated_at=now)
            self.db.add(current)

        self.db.add(AnnouncementLogEntry(text=text, created_at=now))
        self.db.commit()
        self.db.refresh(current)

        logger.info(f"Happy bar updated ({len(text)} chars)")
        return current
