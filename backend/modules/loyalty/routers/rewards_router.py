# backend/modules/loyalty/routers/rewards_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from core.database import get_db
from core.error_handling import handle_api_errors
from ..schemas.loyalty_schemas import (
    RewardRedeemRequest,
    CodeCheckRequest,
    CodeUseRequest,
    LegacyCodeUseRequest,
)
from ..services.rewards_engine import RewardsEngine


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Rewards"])


@router.get("/rewards/catalog")
@handle_api_errors("Błąd pobierania nagród")
async def list_rewards_catalog(db: Session = Depends(get_db)):
    """Rewards the customer app can offer, with their point cost."""
    return {"ok": True, "rewards": RewardsEngine(db).list_catalog()}


@router.post("/rewards/redeem")
@handle_api_errors("Błąd realizacji nagrody")
async def redeem_reward(payload: RewardRedeemRequest, db: Session = Depends(get_db)):
    """Exchange points for a reward; returns the single-use code."""
    result = RewardsEngine(db).redeem_reward(
        payload.email, payload.loyalty_id, payload.reward_id
    )
    return {"ok": True, **result}


@router.post("/codeid/check")
@handle_api_errors("Błąd sprawdzania kodu")
async def check_code(payload: CodeCheckRequest, db: Session = Depends(get_db)):
    """Show what a code grants and whether it was already used."""
    return {"ok": True, **RewardsEngine(db).check_code(payload.code)}


@router.post("/admin/rewards/use")
@handle_api_errors("Błąd wykorzystania kodu")
async def use_code(payload: CodeUseRequest, db: Session = Depends(get_db)):
    """Admin panel: mark a code as used, with the panel's note."""
    result = RewardsEngine(db).use_code(payload.code, payload.note)
    return {
        "ok": True,
        "code": result["code"],
        "name": result["name"],
        "used": True,
        "usedAt": result["usedAt"],
        "note": result["note"],
    }


@router.post("/codeid/use")
@handle_api_errors("Błąd wykorzystania kodu")
async def use_code_legacy(payload: LegacyCodeUseRequest, db: Session = Depends(get_db)):
    """Older staff screen: same operation, note sent as ``usedBy``."""
    result = RewardsEngine(db).use_code(payload.code, payload.used_by)
    return {
        "ok": True,
        **result,
        "message": "Kod wykorzystany i zablokowany ✅",
        "title": result["name"],
        "usedBy": result["note"],
    }
