# backend/modules/auth/schemas/auth_schemas.py

"""
Request schemas for account and PIN endpoints.

Fields are optional so that missing input reaches the service
and is rejected there with a user-facing message.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CredentialsBase(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(CredentialsBase):
    """Schema for creating a customer account"""


class LoginRequest(CredentialsBase):
    """Schema for customer login"""


class PinRequest(BaseModel):
    """Static PIN submitted by the admin panel or the staff view"""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    pin: Optional[str] = None
