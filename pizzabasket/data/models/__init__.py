from .ingredients import Ingredient
from .pizzas import Pizza
from .coupons import Coupon, CouponType, format_rate
from .baskets import Basket, format_pickup_time
from .orders import Order, OrderStatus
from .requests import (
    PizzaRequest,
    DayOffset,
    TimeRequest,
    IngredientRequest,
    CouponRequest,
)
from .context import Role, RequestContext

__all__ = [
    # Catalog models
    "Ingredient",
    "Pizza",
    "Coupon",
    "CouponType",
    "format_rate",
    # Basket and order models
    "Basket",
    "format_pickup_time",
    "Order",
    "OrderStatus",
    # Request models
    "PizzaRequest",
    "DayOffset",
    "TimeRequest",
    "IngredientRequest",
    "CouponRequest",
    # Caller identity
    "Role",
    "RequestContext",
]
