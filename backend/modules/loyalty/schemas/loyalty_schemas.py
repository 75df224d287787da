# backend/modules/loyalty/schemas/loyalty_schemas.py

from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import Optional, Union


class LoyaltyRequest(BaseModel):
    """Base for loyalty requests; numbers are accepted where strings are expected"""

    model_config = ConfigDict(coerce_numbers_to_str=True, populate_by_name=True)


class PointsCreditRequest(LoyaltyRequest):
    """Staff crediting a purchase to a loyalty ID"""

    loyalty_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("loyaltyId", "milkId", "loyalty_id")
    )
    amount: Optional[Union[float, str]] = Field(
        None, validation_alias=AliasChoices("amount", "amountPln")
    )
    cashier: Optional[str] = None


class RewardRedeemRequest(LoyaltyRequest):
    """Customer exchanging points for a catalog reward"""

    email: Optional[str] = None
    loyalty_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("loyaltyId", "milkId", "loyalty_id")
    )
    reward_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("rewardId", "reward_id")
    )


class CodeCheckRequest(LoyaltyRequest):
    code: Optional[str] = None


class CodeUseRequest(LoyaltyRequest):
    """Admin panel form: the note is stored as the code's usage annotation"""

    code: Optional[str] = None
    note: Optional[str] = None


class LegacyCodeUseRequest(LoyaltyRequest):
    code: Optional[str] = None
    used_by: Optional[str] = Field(
        None, validation_alias=AliasChoices("usedBy", "used_by")
    )
