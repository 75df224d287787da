from pydantic import BaseModel, ConfigDict
from typing import Optional


class AnnouncementUpdate(BaseModel):
    """New bar text; the admin panel sends ``happy``, older clients ``text``"""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    happy: Optional[str] = None
    text: Optional[str] = None

    def resolved_text(self) -> str:
        if self.happy is not None:
            return self.happy
        return self.text or ""


__all__ = ["AnnouncementUpdate"]
