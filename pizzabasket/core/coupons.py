"""
Coupon validation and application.

A coupon replaces the one already on a basket only when it makes the
basket strictly cheaper. Re-applying the code that is already attached
is refused before any price comparison.
"""

from __future__ import annotations

import re
from typing import Optional

from kungfu import Error, Ok, Result

from pizzabasket.data.interface import CatalogAccess
from pizzabasket.data.models import Basket, Coupon

from .errors import (
    BasketError,
    CouponAlreadyApplied,
    CouponNotCheaper,
    MalformedCouponCode,
    NoBasket,
    NoCouponApplied,
    UnknownCoupon,
)
from .pricing import calculate_price

COUPON_CODE_PATTERN = re.compile(r"[A-Za-z]{4}[0-9]{2}")


def validate_format(code: Optional[str]) -> bool:
    """True for exactly four letters followed by two digits."""
    if not isinstance(code, str):
        return False
    return COUPON_CODE_PATTERN.fullmatch(code) is not None


class CouponEngine:
    def __init__(self, catalog: CatalogAccess) -> None:
        self.catalog = catalog

    def resolve(self, code: str) -> Result[Coupon, BasketError]:
        """Look a code up in the catalog; malformed codes never reach the lookup."""
        if not validate_format(code):
            return Error(MalformedCouponCode(code))
        coupon = self.catalog.find_coupon_by_code(code)
        if coupon is None:
            return Error(UnknownCoupon(code))
        return Ok(coupon)

    def apply_code(self, basket: Optional[Basket], code: str) -> Result[Basket, BasketError]:
        if basket is None:
            return Error(NoBasket())
        match self.resolve(code):
            case Ok(coupon):
                return self.apply(basket, coupon)
            case Error(err):
                return Error(err)

    def apply(self, basket: Optional[Basket], coupon: Coupon) -> Result[Basket, BasketError]:
        """Return the basket with `coupon` attached, if the cheaper-replacement policy allows it."""
        if basket is None:
            return Error(NoBasket())

        current = basket.coupon
        if current is not None:
            if current.code.lower() == coupon.code.lower():
                return Error(CouponAlreadyApplied(coupon.code))
            candidate_total = calculate_price(basket.pizzas, coupon)
            current_total = calculate_price(basket.pizzas, current)
            if not candidate_total < current_total:
                return Error(CouponNotCheaper(coupon.code))

        return Ok(basket.model_copy(update={"coupon": coupon}))

    def remove(self, basket: Optional[Basket]) -> Result[Basket, BasketError]:
        if basket is None or basket.coupon is None:
            return Error(NoCouponApplied())
        return Ok(basket.model_copy(update={"coupon": None}))
