# backend/modules/loyalty/services/rewards_engine.py

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Dict, Any, List, Optional
from datetime import datetime
import logging
import secrets

from ..models.rewards_models import (
    RedemptionCode,
    RewardRecord,
    CodeStatus,
    RewardRecordStatus,
)
from ..data.default_rewards import REWARDS_CATALOG, get_catalog_entry
from .loyalty_service import LoyaltyService
from core.config import settings
from core.exceptions import ValidationError, NotFoundError, ConflictError, InternalError
from core.password_security import normalize_email

logger = logging.getLogger(__name__)

CODE_PREFIX = "MSB-"
CODE_LENGTH = 6
# No 0/O/1/I: staff type codes in by hand
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def make_reward_code() -> str:
    return CODE_PREFIX + "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def normalize_code(value) -> str:
    return str(value or "").strip().upper()


class RewardsEngine:
    """Reward catalog, code issuance and code redemption"""

    def __init__(self, db: Session):
        self.db = db
        self.loyalty_service = LoyaltyService(db)
        self.max_code_attempts = settings.reward_code_max_attempts

    def list_catalog(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in REWARDS_CATALOG]

    def redeem_reward(
        self,
        raw_email: Optional[str],
        raw_loyalty_id: Optional[str],
        raw_reward_id: Optional[str],
    ) -> Dict[str, Any]:
        """
        Exchange points for a reward and issue its single-use code.

        The balance check up front gives a quick answer; the debit itself is a
        conditional decrement, so two concurrent redemptions cannot both spend
        the same points.
        """
        email = normalize_email(raw_email)
        loyalty_id = str(raw_loyalty_id or "").strip()
        reward_id = str(raw_reward_id or "").strip()

        if not email:
            raise ValidationError("Brak email.")
        if not reward_id:
            raise ValidationError("Brak rewardId.")

        reward = get_catalog_entry(reward_id)
        if not reward:
            raise ValidationError("Nieznana nagroda.")

        ledger = self.loyalty_service.get_or_create_ledger(email)
        if ledger.balance < reward.cost:
            raise ValidationError("Za mało punktów.")

        code = self._generate_unique_code()
        now = datetime.utcnow()

        try:
            ledger = self.loyalty_service.debit(
                email,
                reward.cost,
                f"Wymieniono: -{reward.cost} pkt ({reward.title}) • Kod: {code}",
            )

            code_row = RedemptionCode(
                code=code,
                email=email,
                loyalty_id=loyalty_id,
                reward_id=reward.id,
                title=reward.title,
                cost=reward.cost,
                status=CodeStatus.ISSUED.value,
                issued_at=now,
                used_by="",
            )
            self.db.add(code_row)
            self.db.add(
                RewardRecord(
                    email=email,
                    reward_id=reward.id,
                    title=reward.title,
                    cost=reward.cost,
                    code=code,
                    status=RewardRecordStatus.ISSUED.value,
                )
            )
            self.db.commit()
        except ValidationError:
            self.db.rollback()
            raise

        self.db.refresh(ledger)
        self.db.refresh(code_row)
        logger.info(f"Issued reward code {code} ({reward.id}) to {email}")

        return {
            "code": code,
            "codeDoc": code_row.to_dict(),
            "reward": reward.summary(),
            "points": ledger.balance,
            "history": ledger.history(),
        }

    def check_code(self, raw_code: Optional[str]) -> Dict[str, Any]:
        """Look a code up without changing it."""
        code_row = self._get_code(raw_code)
        return code_row.to_dict()

    def use_code(self, raw_code: Optional[str], raw_used_by: Optional[str]) -> Dict[str, Any]:
        """
        Mark a code as used, once.

        The switch to "used" is a single conditional update on the issued
        status, so of two concurrent uses exactly one wins and the usage
        fields of the winner are never overwritten.

        Raises:
            ValidationError: blank code
            NotFoundError: unknown code
            ConflictError: already used; payload carries the earlier usage
        """
        code_row = self._get_code(raw_code)
        used_by = str(raw_used_by or "").strip()

        if code_row.is_used:
            raise self._already_used(code_row)

        updated = (
            self.db.query(RedemptionCode)
            .filter(
                RedemptionCode.id == code_row.id,
                RedemptionCode.status == CodeStatus.ISSUED.value,
            )
            .update(
                {
                    RedemptionCode.status: CodeStatus.USED.value,
                    RedemptionCode.used_at: datetime.utcnow(),
                    RedemptionCode.used_by: used_by,
                },
                synchronize_session=False,
            )
        )
        if updated == 0:
            # Used by another request since we read it
            self.db.rollback()
            self.db.refresh(code_row)
            raise self._already_used(code_row)

        self.db.commit()
        self.db.refresh(code_row)

        self._mark_reward_records_redeemed(code_row.code)
        logger.info(f"Reward code {code_row.code} used ({used_by or 'no note'})")

        return {
            "code": code_row.code,
            "name": code_row.title,
            "used": True,
            "usedAt": code_row.to_dict()["usedAt"],
            "note": code_row.used_by,
            "email": code_row.email,
            "loyaltyId": code_row.loyalty_id,
        }

    # ========== Helper Methods ==========

    @staticmethod
    def _already_used(code_row: RedemptionCode) -> ConflictError:
        return ConflictError(
            "Kod został już wykorzystany.",
            payload={
                "ok": False,
                "message": "Kod został już wykorzystany.",
                "code": code_row.code,
                "name": code_row.title,
                "used": True,
                "usedAt": code_row.to_dict()["usedAt"],
                "note": code_row.used_by,
            },
        )

    def _get_code(self, raw_code: Optional[str]) -> RedemptionCode:
        code = normalize_code(raw_code)
        if not code:
            raise ValidationError("Podaj kod.")

        code_row = self.db.query(RedemptionCode).filter(RedemptionCode.code == code).first()
        if not code_row:
            raise NotFoundError("Nie znaleziono kodu.")
        return code_row

    def _generate_unique_code(self) -> str:
        """Generate unique reward code with bounded retries"""
        for _ in range(self.max_code_attempts):
            candidate = make_reward_code()
            existing = (
                self.db.query(RedemptionCode.id)
                .filter(RedemptionCode.code == candidate)
                .first()
            )
            if not existing:
                return candidate
        logger.error(f"Reward code generation exhausted after {self.max_code_attempts} attempts")
        raise InternalError("Nie udało się wygenerować kodu.")

    def _mark_reward_records_redeemed(self, code: str) -> None:
        """Best effort: the code itself is already marked used."""
        try:
            self.db.query(RewardRecord).filter(RewardRecord.code == code).update(
                {RewardRecord.status: RewardRecordStatus.REDEEMED.value},
                synchronize_session=False,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"Could not mark reward history for {code} as redeemed: {e}")
