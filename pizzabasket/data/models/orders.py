from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .pizzas import Pizza


class OrderStatus(str, Enum):
    PLACED = "Placed"
    CANCELLED = "Cancelled"


class Order(BaseModel):
    """An order placed from a checked-out basket."""
    order_id: int = Field(description="Sequential order identifier")
    status: OrderStatus = Field(default=OrderStatus.PLACED, description="Lifecycle state")
    customer_id: str = Field(description="Customer who placed the order")
    pizzas: List[Pizza] = Field(default_factory=list, description="Pizzas at checkout")
    coupon_code: Optional[str] = Field(default=None, description="Coupon applied at checkout")
    price: Decimal = Field(description="Basket total at checkout")
    pickup_time: Optional[datetime] = Field(default=None, description="Selected pickup time")
    store_id: Optional[int] = Field(default=None, description="Store the order is placed at")
    placed_at: datetime = Field(description="Order placement timestamp")
