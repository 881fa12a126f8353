from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence, assert_never

from pizzabasket.data.models.coupons import Coupon, CouponType
from pizzabasket.data.models.pizzas import Pizza


def subtotal(pizzas: Sequence[Pizza]) -> Decimal:
    return sum((pizza.price for pizza in pizzas), Decimal("0"))


def calculate_price(pizzas: Sequence[Pizza], coupon: Optional[Coupon] = None) -> Decimal:
    """Total for a list of pizzas under an optional coupon.

    - PercentageDiscount: subtotal * (1 - rate / 100)
    - BuyOneGetOneFree: subtotal minus the cheapest pizza, from two pizzas up
    - Other: subtotal, the coupon does not change the amount
    """
    total = subtotal(pizzas)
    if coupon is None:
        return total

    coupon_type = coupon.type
    if coupon_type is CouponType.PERCENTAGE_DISCOUNT:
        return total * (1 - coupon.rate / 100)
    if coupon_type is CouponType.BUY_ONE_GET_ONE_FREE:
        if len(pizzas) < 2:
            return total
        return total - min(pizza.price for pizza in pizzas)
    if coupon_type is CouponType.OTHER:
        return total
    assert_never(coupon_type)
