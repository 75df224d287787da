# backend/modules/loyalty/services/loyalty_service.py

"""
Core service for the points ledger.
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import func
from typing import Optional, Dict, Any
from datetime import datetime
import logging
import math

from ..models.loyalty_models import PointsLedger, PointsHistoryEntry
from modules.auth.models import LoyaltyIdMapping
from core.config import settings
from core.exceptions import NotFoundError, ValidationError
from core.password_security import normalize_email

logger = logging.getLogger(__name__)

LOYALTY_ID_LENGTH = 6


def display_timestamp(moment: Optional[datetime] = None) -> str:
    """Timestamp as shown to Polish customers, e.g. ``19.10.2026, 14:03:22``."""
    return (moment or datetime.now()).strftime("%d.%m.%Y, %H:%M:%S")


class LoyaltyService:
    """Service for point balances and their history"""

    def __init__(self, db: Session):
        self.db = db
        self.currency_per_point = settings.points_currency_per_point

    # ========== Ledger Access ==========

    def get_or_create_ledger(self, email: str) -> PointsLedger:
        """Return the ledger for ``email``, creating an empty one on first touch."""
        ledger = self._find_ledger(email)
        if ledger:
            return ledger

        ledger = PointsLedger(email=email, balance=0)
        self.db.add(ledger)
        try:
            self.db.commit()
        except IntegrityError:
            # Created concurrently by another request
            self.db.rollback()
            ledger = self._find_ledger(email)
            if ledger is None:
                raise
            return ledger

        self.db.refresh(ledger)
        logger.info(f"Created points ledger for {email}")
        return ledger

    def snapshot(self, raw_email: Optional[str]) -> Dict[str, Any]:
        """Balance and history for the customer app."""
        email = normalize_email(raw_email)
        if not email:
            return {"email": "", "points": 0, "history": []}

        ledger = self.get_or_create_ledger(email)
        return {"email": email, "points": ledger.balance, "history": ledger.history()}

    # ========== Points Operations ==========

    def calculate_points(self, amount: Any) -> int:
        """Whole points earned for ``amount`` (10 PLN = 1 pt); 0 for unusable input."""
        try:
            value = float(amount)
        except (TypeError, ValueError):
            return 0
        if not math.isfinite(value) or value <= 0:
            return 0
        return math.floor(value / self.currency_per_point)

    def credit_by_loyalty_id(
        self, raw_loyalty_id: Optional[str], amount: Any, cashier: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Credit points for a purchase, located by the customer's loyalty ID.

        Args:
            raw_loyalty_id: 6-digit loyalty ID read from the customer's app
            amount: Purchase amount in PLN
            cashier: Optional free-text cashier note

        Returns:
            Dict with email, loyaltyId, addedPoints, points and history

        Raises:
            ValidationError: malformed loyalty ID or amount below 10 PLN
            NotFoundError: loyalty ID not mapped to any account
        """
        loyalty_id = str(raw_loyalty_id or "").strip()
        cashier = str(cashier or "").strip()

        if len(loyalty_id) != LOYALTY_ID_LENGTH:
            raise ValidationError("Podaj poprawny Milk ID (6 cyfr).")

        mapping = (
            self.db.query(LoyaltyIdMapping)
            .filter(LoyaltyIdMapping.loyalty_id == loyalty_id)
            .first()
        )
        if not mapping:
            raise NotFoundError("Nie znaleziono użytkownika dla tego Milk ID.")

        points = self.calculate_points(amount)
        if points <= 0:
            raise ValidationError("Kwota za mała (min 10 zł = 1 pkt).")

        ledger = self.get_or_create_ledger(mapping.email)

        text = (
            f"Naliczenie: +{points} pkt (kwota {float(amount):.2f} zł) • Milk ID {loyalty_id}"
        )
        if cashier:
            text += f" • {cashier}"

        self.db.query(PointsLedger).filter(PointsLedger.id == ledger.id).update(
            {
                PointsLedger.balance: PointsLedger.balance + points,
                PointsLedger.updated_at: func.now(),
            },
            synchronize_session=False,
        )
        self._add_history_entry(
            ledger,
            text,
            meta={"milkId": loyalty_id, "amountPln": amount, "cashier": cashier},
        )
        self.db.commit()
        self.db.refresh(ledger)

        logger.info(f"Credited {points} pts to {mapping.email} (loyalty ID {loyalty_id})")

        return {
            "email": mapping.email,
            "loyaltyId": loyalty_id,
            "addedPoints": points,
            "points": ledger.balance,
            "history": ledger.history(),
        }

    def debit(
        self,
        email: str,
        points: int,
        text: str,
        meta: Optional[Dict[str, Any]] = None,
    ) -> PointsLedger:
        """
        Take ``points`` off the balance in one conditional update.

        The decrement only applies while the balance covers it; when no row
        matches the debit fails as insufficient funds. The caller commits.
        """
        updated = (
            self.db.query(PointsLedger)
            .filter(PointsLedger.email == email, PointsLedger.balance >= points)
            .update(
                {
                    PointsLedger.balance: PointsLedger.balance - points,
                    PointsLedger.updated_at: func.now(),
                },
                synchronize_session=False,
            )
        )
        if updated == 0:
            raise ValidationError("Za mało punktów.")

        ledger = self._find_ledger(email)
        self._add_history_entry(ledger, text, meta=meta)
        return ledger

    # ========== Helper Methods ==========

    def _find_ledger(self, email: str) -> Optional[PointsLedger]:
        return self.db.query(PointsLedger).filter(PointsLedger.email == email).first()

    def _add_history_entry(
        self, ledger: PointsLedger, text: str, meta: Optional[Dict[str, Any]] = None
    ) -> PointsHistoryEntry:
        entry = PointsHistoryEntry(
            ledger_id=ledger.id,
            text=text,
            date=display_timestamp(),
            meta=meta,
        )
        self.db.add(entry)
        return entry
