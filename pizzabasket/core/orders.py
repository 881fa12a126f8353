from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Dict, List

from kungfu import Error, Ok, Result

from pizzabasket.data.models import Basket, Order, OrderStatus
from pizzabasket.logging import get_logger

from .errors import BasketError, IllegalOrderId


class OrderLifecycle:
    """Placed -> Cancelled; Cancelled is terminal."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self.clock = clock
        self.logger = get_logger(__name__)
        self._orders: Dict[int, Order] = {}
        self._next_order_id = 1
        self._lock = threading.Lock()

    def place_order(self, basket: Basket) -> Order:
        """Record a checked-out basket as a Placed order."""
        with self._lock:
            order = Order(
                order_id=self._next_order_id,
                customer_id=basket.customer_id,
                pizzas=list(basket.pizzas),
                coupon_code=basket.coupon.code if basket.coupon is not None else None,
                price=basket.price,
                pickup_time=basket.pickup_time,
                store_id=basket.store_id,
                placed_at=self.clock(),
            )
            self._orders[order.order_id] = order
            self._next_order_id += 1
        self.logger.info(f"Placed order {order.order_id} for {order.customer_id}")
        return order.model_copy(deep=True)

    def see_orders(self) -> List[Order]:
        with self._lock:
            return [order.model_copy(deep=True) for order in self._orders.values()]

    def cancel_order(self, order_id: int) -> Result[Order, BasketError]:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None or order.status is not OrderStatus.PLACED:
                self.logger.warning(f"Refused to cancel order {order_id}")
                return Error(IllegalOrderId(order_id))
            order.status = OrderStatus.CANCELLED
            self.logger.info(f"Cancelled order {order_id}")
            return Ok(order.model_copy(deep=True))
