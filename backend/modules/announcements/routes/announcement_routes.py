# backend/modules/announcements/routes/announcement_routes.py

"""
Happy-bar routes. Unlike reservations, the broadcast carries the new text
itself so clients do not need to re-fetch.
"""

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core.error_handling import handle_api_errors
from modules.realtime import event_broadcaster
from ..schemas import AnnouncementUpdate
from ..services import AnnouncementService

router = APIRouter(prefix="/api", tags=["Happy Bar"])


@router.get("/happy")
@handle_api_errors("Błąd pobierania paska")
async def get_happy(db: Session = Depends(get_db)):
    text, _ = AnnouncementService(db).get_current()
    return {"ok": True, "happy": text}


@router.get("/data")
@handle_api_errors("Błąd pobierania paska")
async def get_data(db: Session = Depends(get_db)):
    """Alias of /happy kept for the public page, with every field name it reads."""
    text, updated_at = AnnouncementService(db).get_current()
    return {
        "ok": True,
        "happy": text,
        "happyBarText": text,
        "text": text,
        "updatedAt": updated_at.isoformat() if updated_at else None,
    }


@router.post("/happy")
@handle_api_errors("Błąd zapisu paska")
async def set_happy(
    payload: AnnouncementUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    text = payload.resolved_text()
    AnnouncementService(db).set_text(text)

    background_tasks.add_task(event_broadcaster.publish, "happy-updated", text)
    return {"ok": True, "happy": text}
