from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, computed_field

from .coupons import Coupon
from .pizzas import Pizza


class Basket(BaseModel):
    """A customer's in-progress order.

    `price` is recomputed from pizzas and coupon on every access.
    """
    basket_id: UUID = Field(default_factory=uuid4, description="Identity of this basket instance")
    customer_id: str = Field(description="Owner of the basket")
    pizzas: List[Pizza] = Field(default_factory=list, description="Pizzas in insertion order")
    coupon: Optional[Coupon] = Field(default=None, description="Currently attached coupon")
    pickup_time: Optional[datetime] = Field(default=None, description="Selected pickup time")
    store_id: Optional[int] = Field(default=None, description="Preferred store")

    @computed_field
    @property
    def price(self) -> Decimal:
        # pricing imports the coupon models, so resolve it lazily
        from pizzabasket.core.pricing import calculate_price

        return calculate_price(self.pizzas, self.coupon)

    def contains(self, pizza_name: str) -> bool:
        return any(pizza.name == pizza_name for pizza in self.pizzas)

    def time_to_string(self) -> str:
        if self.pickup_time is None:
            return "no time selected yet"
        return format_pickup_time(self.pickup_time)


def format_pickup_time(ts: datetime) -> str:
    """Render a pickup time as month/day hour:minute."""
    return f"{ts.month}/{ts.day} {ts.hour}:{ts.minute:02d}"
