from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CouponType(str, Enum):
    """Closed set of coupon kinds; every price formula dispatches on these."""
    PERCENTAGE_DISCOUNT = "PercentageDiscount"
    BUY_ONE_GET_ONE_FREE = "BuyOneGetOneFree"
    OTHER = "Other"

    @classmethod
    def from_code(cls, code: str) -> "CouponType":
        """Map the single-character storage code ('D', 'F', anything else) to a type."""
        code = (code or "").strip()
        if code == "D":
            return cls.PERCENTAGE_DISCOUNT
        if code == "F":
            return cls.BUY_ONE_GET_ONE_FREE
        return cls.OTHER

    @property
    def code(self) -> str:
        return {
            CouponType.PERCENTAGE_DISCOUNT: "D",
            CouponType.BUY_ONE_GET_ONE_FREE: "F",
            CouponType.OTHER: "O",
        }[self]


class Coupon(BaseModel):
    """A coupon from the catalog."""
    model_config = ConfigDict(frozen=True)

    code: str = Field(description="Activation code: 4 letters followed by 2 digits")
    type: CouponType = Field(description="Coupon kind")
    rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, description="Discount percentage, PercentageDiscount only")
    limited_time: bool = Field(default=False, description="Whether the coupon is a limited-time offer")

    def describe(self) -> str:
        """Short human description, as shown in basket messages."""
        if self.type is CouponType.PERCENTAGE_DISCOUNT:
            return f"{format_rate(self.rate)}% discount coupon"
        if self.type is CouponType.BUY_ONE_GET_ONE_FREE:
            return "Buy-one-get-one-free coupon"
        return f"Coupon code: {self.code}"


def format_rate(rate: Decimal) -> str:
    """Render a rate without trailing zeros (10 -> '10', 12.50 -> '12.5')."""
    return f"{rate.normalize():f}"
