"""
Password and email handling for customer accounts.

Provides:
- Slow, salted password hashing (argon2 through passlib)
- Constant-time verification through the hashing library
- Email normalization and format validation
"""

import os
import logging
from typing import Optional

from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError

logger = logging.getLogger(__name__)

# Hashing cost, overridable for tests and small hosts
HASH_TIME_COST = int(os.getenv("ARGON2_TIME_COST", "3"))
HASH_MEMORY_COST_KIB = int(os.getenv("ARGON2_MEMORY_COST", "65536"))
HASH_PARALLELISM = int(os.getenv("ARGON2_PARALLELISM", "2"))

MIN_PASSWORD_LENGTH = int(os.getenv("MIN_PASSWORD_LENGTH", "6"))


class PasswordSecurity:
    """Hashes and checks customer passwords."""

    def __init__(self, min_length: int = MIN_PASSWORD_LENGTH):
        self.min_length = min_length
        self.pwd_context = CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__time_cost=HASH_TIME_COST,
            argon2__memory_cost=HASH_MEMORY_COST_KIB,
            argon2__parallelism=HASH_PARALLELISM,
        )

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, password: str, stored_hash: Optional[str]) -> bool:
        """
        Check ``password`` against ``stored_hash``.

        Accounts created before passwords were required have no hash and can
        never verify; a hash passlib cannot parse is treated the same way.
        """
        if not stored_hash:
            return False
        try:
            return self.pwd_context.verify(password, stored_hash)
        except (ValueError, TypeError) as e:
            logger.error(f"Unusable password hash: {e}")
            return False

    def is_acceptable(self, password: str) -> bool:
        return bool(password) and len(password) >= self.min_length


password_security = PasswordSecurity()


def hash_password(password: str) -> str:
    return password_security.hash_password(password)


def verify_password(password: str, stored_hash: Optional[str]) -> bool:
    return password_security.verify_password(password, stored_hash)


def normalize_email(value) -> str:
    """Trim and lower-case an email; ``None`` becomes an empty string."""
    return str(value or "").strip().lower()


def validate_email_address(email: str) -> bool:
    """Syntax check only; no DNS lookup."""
    if not email or "@" not in email:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
