# backend/modules/auth/services/auth_service.py

"""
Customer accounts, password credentials and loyalty-ID issuance.
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional, Dict, Any
from datetime import datetime
import hmac
import logging
import secrets

from ..models import User, LoyaltyIdMapping
from modules.loyalty.services.loyalty_service import LoyaltyService, LOYALTY_ID_LENGTH
from core.config import settings
from core.exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from core.password_security import (
    hash_password,
    verify_password,
    normalize_email,
    validate_email_address,
    password_security,
)

logger = logging.getLogger(__name__)


def make_loyalty_id() -> str:
    """Random 6-digit ID, never starting with 0."""
    return str(100000 + secrets.randbelow(900000))


class AuthService:
    """Registration, login and staff lookup by loyalty ID"""

    def __init__(self, db: Session):
        self.db = db
        self.loyalty_service = LoyaltyService(db)
        self.max_id_attempts = settings.loyalty_id_max_attempts

    def register(self, raw_email: Optional[str], raw_password: Optional[str]) -> Dict[str, Any]:
        """
        Create an account with a fresh loyalty ID and an empty ledger.

        Raises:
            ValidationError: malformed email or password under 6 characters
            ConflictError: email already registered
            InternalError: no free loyalty ID found
        """
        email = normalize_email(raw_email)
        password = str(raw_password or "")

        if not validate_email_address(email):
            raise ValidationError("Podaj poprawny email.")
        if not password_security.is_acceptable(password):
            raise ValidationError("Hasło min. 6 znaków.")

        if self._find_user(email):
            raise ConflictError("Konto z tym emailem już istnieje.")

        loyalty_id = self.generate_unique_loyalty_id()
        now = datetime.utcnow()

        user = User(
            email=email,
            password_hash=hash_password(password),
            loyalty_id=loyalty_id,
            created_at=now,
            last_login_at=now,
        )
        self.db.add(user)
        self.db.add(LoyaltyIdMapping(loyalty_id=loyalty_id, email=email, created_at=now))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            if self._find_user(email):
                raise ConflictError("Konto z tym emailem już istnieje.")
            raise

        self.loyalty_service.get_or_create_ledger(email)
        logger.info(f"Registered {email} with loyalty ID {loyalty_id}")

        return {"user": {"email": email, "loyaltyId": loyalty_id}, "loyaltyId": loyalty_id}

    def login(self, raw_email: Optional[str], raw_password: Optional[str]) -> Dict[str, Any]:
        """
        Verify credentials and return the account's loyalty snapshot.

        Accounts without a loyalty ID get one here; the ID mapping is
        re-written on every login so that it heals after drift.
        """
        email = normalize_email(raw_email)
        password = str(raw_password or "")

        if not validate_email_address(email):
            raise ValidationError("Podaj poprawny email.")
        if not password:
            raise ValidationError("Podaj hasło.")

        user = self._find_user(email)
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Błędny email lub hasło.")

        if not user.loyalty_id:
            user.loyalty_id = self.generate_unique_loyalty_id()
            logger.info(f"Assigned missing loyalty ID {user.loyalty_id} to {email}")

        self._upsert_mapping(user.loyalty_id, email)
        user.last_login_at = datetime.utcnow()
        self.db.commit()

        snapshot = self.loyalty_service.snapshot(email)
        return {
            "user": {"email": user.email, "loyaltyId": user.loyalty_id},
            "loyaltyId": user.loyalty_id,
            "points": snapshot["points"],
            "history": snapshot["history"],
        }

    def lookup_by_loyalty_id(self, raw_loyalty_id: Optional[str]) -> Dict[str, Any]:
        """Staff lookup: loyalty ID -> email."""
        loyalty_id = str(raw_loyalty_id or "").strip()
        if len(loyalty_id) != LOYALTY_ID_LENGTH:
            raise ValidationError("Zły Milk ID")

        mapping = (
            self.db.query(LoyaltyIdMapping)
            .filter(LoyaltyIdMapping.loyalty_id == loyalty_id)
            .first()
        )
        if not mapping:
            raise NotFoundError("Nie znaleziono Milk ID")

        return {"loyaltyId": mapping.loyalty_id, "email": mapping.email}

    def generate_unique_loyalty_id(self) -> str:
        """Sample the 6-digit space until a free ID turns up, with bounded retries."""
        for _ in range(self.max_id_attempts):
            candidate = make_loyalty_id()
            exists = (
                self.db.query(LoyaltyIdMapping.id)
                .filter(LoyaltyIdMapping.loyalty_id == candidate)
                .first()
            )
            if not exists:
                return candidate
        logger.error(f"Loyalty ID generation exhausted after {self.max_id_attempts} attempts")
        raise InternalError("Nie udało się wygenerować unikalnego Milk ID (spróbuj ponownie).")

    # ========== Helper Methods ==========

    def _find_user(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def _upsert_mapping(self, loyalty_id: str, email: str) -> LoyaltyIdMapping:
        mapping = (
            self.db.query(LoyaltyIdMapping)
            .filter(LoyaltyIdMapping.loyalty_id == loyalty_id)
            .first()
        )
        if mapping:
            mapping.email = email
        else:
            mapping = LoyaltyIdMapping(loyalty_id=loyalty_id, email=email)
            self.db.add(mapping)
        return mapping


class PinService:
    """Static PIN checks for the admin panel and the staff view"""

    def __init__(self, configured_pin: str, pin_name: str):
        self.configured_pin = configured_pin
        self.pin_name = pin_name

    def check(self, raw_pin: Optional[str]) -> None:
        if not self.configured_pin:
            logger.error(f"{self.pin_name} is not configured")
            raise InternalError(f"Brak {self.pin_name} w zmiennych środowiskowych.")

        pin = str(raw_pin or "")
        if not hmac.compare_digest(pin.encode(), self.configured_pin.encode()):
            raise AuthenticationError("Błędny PIN")


def admin_pin_service() -> PinService:
    return PinService(settings.admin_pin, "ADMIN_PIN")


def clients_pin_service() -> PinService:
    return PinService(settings.clients_pin, "CLIENTS_PIN")
