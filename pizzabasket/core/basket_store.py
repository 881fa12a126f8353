"""
BasketStore: owns every customer's Basket, one per customerId.

Concurrency:
- One RLock per customerId, created on first use and never discarded, so
  two threads can never hold different locks for the same customer.
  The registry grows by one lock per customer id ever seen and assumes a
  bounded customer population; a lock dropped after checkout could still
  have a thread waiting on it.
- Every public method takes that customer's lock for its whole body;
  operations on different customers never contend beyond the short
  registry lock used to look the per-key lock up.
- `checkout` reads and removes under one acquisition, so a concurrent
  mutation lands either in the checked-out basket or in a fresh one.
- `locked(customer_id)` exposes the same lock for callers that need to
  compose several operations atomically.

Baskets handed out are deep copies; the stored instance changes only here.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Dict, Iterator, Optional

from kungfu import Error, Ok, Result

from pizzabasket.data.models import Basket, DayOffset, Pizza
from pizzabasket.logging import get_logger

from .coupons import CouponEngine
from .errors import BasketError, NoBasket, PizzaNotInBasket
from .pickup import validate_pickup_time


class BasketStore:
    def __init__(
        self,
        coupon_engine: CouponEngine,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.coupon_engine = coupon_engine
        self.clock = clock
        self.logger = get_logger(__name__)
        self._baskets: Dict[str, Basket] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    # -------------------- locking --------------------

    def _lock_for(self, customer_id: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(customer_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[customer_id] = lock
            return lock

    @contextmanager
    def locked(self, customer_id: str) -> Iterator[None]:
        """Hold the customer's lock across several store calls."""
        with self._lock_for(customer_id):
            yield

    # -------------------- lifecycle --------------------

    def get_basket(self, customer_id: str) -> Optional[Basket]:
        with self._lock_for(customer_id):
            basket = self._baskets.get(customer_id)
            return basket.model_copy(deep=True) if basket is not None else None

    def create_basket(self, customer_id: str) -> Basket:
        """Create the customer's basket unless one already exists."""
        with self._lock_for(customer_id):
            return self._ensure(customer_id).model_copy(deep=True)

    def remove_basket(self, customer_id: str) -> Result[Basket, BasketError]:
        with self._lock_for(customer_id):
            basket = self._baskets.pop(customer_id, None)
            if basket is None:
                self.logger.warning(f"No basket to remove for {customer_id}")
                return Error(NoBasket())
            self.logger.info(f"Removed basket {basket.basket_id} of {customer_id}")
            return Ok(basket)

    def checkout(self, customer_id: str) -> Result[Basket, BasketError]:
        """Read and destroy the customer's basket in one atomic step."""
        with self._lock_for(customer_id):
            if self._baskets.get(customer_id) is None:
                self.logger.warning(f"Checkout without a basket for {customer_id}")
                return Error(NoBasket())
            return self.remove_basket(customer_id)

    # -------------------- mutations --------------------

    def add_pizza(self, customer_id: str, pizza: Pizza) -> Basket:
        with self._lock_for(customer_id):
            basket = self._ensure(customer_id)
            basket.pizzas.append(pizza)
            self.logger.info(f"Added {pizza.name} to the basket of {customer_id}")
            return basket.model_copy(deep=True)

    def remove_pizza(self, customer_id: str, pizza_name: str) -> Result[Basket, BasketError]:
        """Remove the first pizza called `pizza_name`, keeping the others in order."""
        with self._lock_for(customer_id):
            basket = self._baskets.get(customer_id)
            if basket is None:
                return self._rejected("remove pizza", customer_id, NoBasket())
            for index, pizza in enumerate(basket.pizzas):
                if pizza.name == pizza_name:
                    del basket.pizzas[index]
                    self.logger.info(f"Removed {pizza_name} from the basket of {customer_id}")
                    return Ok(basket.model_copy(deep=True))
            return self._rejected("remove pizza", customer_id, PizzaNotInBasket(pizza_name))

    def apply_coupon(self, customer_id: str, code: str) -> Result[Basket, BasketError]:
        with self._lock_for(customer_id):
            match self.coupon_engine.apply_code(self._baskets.get(customer_id), code):
                case Ok(basket):
                    self._baskets[customer_id] = basket
                    self.logger.info(f"Applied coupon {code} to the basket of {customer_id}")
                    return Ok(basket.model_copy(deep=True))
                case Error(err):
                    return self._rejected("apply coupon", customer_id, err)

    def remove_coupon(self, customer_id: str) -> Result[Basket, BasketError]:
        with self._lock_for(customer_id):
            match self.coupon_engine.remove(self._baskets.get(customer_id)):
                case Ok(basket):
                    self._baskets[customer_id] = basket
                    self.logger.info(f"Removed the coupon from the basket of {customer_id}")
                    return Ok(basket.model_copy(deep=True))
                case Error(err):
                    return self._rejected("remove coupon", customer_id, err)

    def set_pickup_time(
        self,
        customer_id: str,
        day: DayOffset,
        hour: int,
        minute: int,
    ) -> Result[Basket, BasketError]:
        with self._lock_for(customer_id):
            basket = self._baskets.get(customer_id)
            if basket is None:
                return self._rejected("set pickup time", customer_id, NoBasket())
            match validate_pickup_time(basket, day, hour, minute, self.clock()):
                case Ok(pickup_time):
                    basket.pickup_time = pickup_time
                    self.logger.info(f"Pickup time of {customer_id} set to {pickup_time.isoformat()}")
                    return Ok(basket.model_copy(deep=True))
                case Error(err):
                    return self._rejected("set pickup time", customer_id, err)

    def set_store_preference(self, customer_id: str, store_id: int) -> Basket:
        """Attach a store id; the id must already be verified by the caller."""
        with self._lock_for(customer_id):
            basket = self._ensure(customer_id)
            basket.store_id = store_id
            self.logger.info(f"Store preference of {customer_id} set to {store_id}")
            return basket.model_copy(deep=True)

    # -------------------- helpers --------------------

    def _ensure(self, customer_id: str) -> Basket:
        # caller holds the customer's lock
        basket = self._baskets.get(customer_id)
        if basket is None:
            basket = Basket(customer_id=customer_id)
            self._baskets[customer_id] = basket
            self.logger.info(f"Created basket {basket.basket_id} for {customer_id}")
        return basket

    def _rejected(self, action: str, customer_id: str, err: BasketError) -> Result[Basket, BasketError]:
        self.logger.warning(f"Could not {action} for {customer_id}: [{err.kind}] {err.message}")
        return Error(err)
