from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator

from .coupons import CouponType


class PizzaRequest(BaseModel):
    """Request body for a custom pizza or a new menu pizza."""
    name: str = Field(description="Pizza name")
    ingredients: List[str] = Field(default_factory=list, description="Ingredient names")


class DayOffset(str, Enum):
    TODAY = "today"
    TOMORROW = "tomorrow"


class TimeRequest(BaseModel):
    """Requested pickup slot."""
    day: DayOffset = Field(default=DayOffset.TODAY, description="Pickup today or tomorrow")
    hour: int = Field(ge=0, le=23, description="Pickup hour")
    minute: int = Field(ge=0, le=59, description="Pickup minute")


class IngredientRequest(BaseModel):
    """Request body for a new inventory ingredient."""
    name: str = Field(description="Ingredient name")
    price: Decimal = Field(description="Ingredient price")


class CouponRequest(BaseModel):
    """Request body for a new catalog coupon."""
    code: str = Field(description="Activation code")
    type: CouponType = Field(description="Coupon kind, or its storage code ('D', 'F', ...)")
    rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, description="Discount percentage")
    limited_time: bool = Field(default=False, description="Limited-time offer")

    @field_validator("type", mode="before")
    @classmethod
    def _accept_storage_code(cls, value):
        if isinstance(value, str) and len(value) == 1:
            return CouponType.from_code(value)
        return value
