from .announcement_models import Announcement, AnnouncementLogEntry, CURRENT_ANNOUNCEMENT_ID

__all__ = ["Announcement", "AnnouncementLogEntry", "CURRENT_ANNOUNCEMENT_ID"]
