from .announcement_service import AnnouncementService

__all__ = ["AnnouncementService"]
