"""
Basket operations as the API layer calls them, one method per endpoint.

Each method takes the caller's RequestContext and returns a kungfu Result:
the success value is the message (or basket) the endpoint responds with,
the failure is a BasketError whose `message` is the error body.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional

from kungfu import Error, Ok, Result

from pizzabasket.config import get_config
from pizzabasket.core.basket_store import BasketStore
from pizzabasket.core.composer import PizzaComposer
from pizzabasket.core.coupons import CouponEngine
from pizzabasket.core.errors import BasketError, InvalidStoreId
from pizzabasket.core.orders import OrderLifecycle
from pizzabasket.data.interface import CatalogAccess
from pizzabasket.data.models import (
    Basket,
    Coupon,
    CouponType,
    PizzaRequest,
    RequestContext,
    TimeRequest,
    format_pickup_time,
    format_rate,
)
from pizzabasket.external import ConfiguredStoreVerifier, StoreVerifier
from pizzabasket.logging import get_logger


def format_price(amount: Decimal) -> str:
    """Two decimals, e.g. 8.5 -> '8.50'."""
    return f"{amount.quantize(Decimal('0.01'))}"


class BasketService:
    def __init__(
        self,
        catalog: CatalogAccess,
        store_verifier: Optional[StoreVerifier] = None,
        orders: Optional[OrderLifecycle] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.catalog = catalog
        self.composer = PizzaComposer(catalog)
        self.baskets = BasketStore(CouponEngine(catalog), clock=clock)
        self.orders = orders if orders is not None else OrderLifecycle(clock=clock)
        self.store_verifier = store_verifier if store_verifier is not None else ConfiguredStoreVerifier()
        self.currency = get_config().currency_label
        self.logger = get_logger(__name__)

    # -------------------- checkout --------------------

    def checkout(self, ctx: RequestContext) -> Result[Basket, BasketError]:
        """Hand the basket over for ordering and destroy it."""
        match self.baskets.checkout(ctx.customer_id):
            case Ok(basket):
                self.orders.place_order(basket)
                return Ok(basket)
            case Error(err):
                return Error(err)

    # -------------------- pizzas --------------------

    def add_pizza(self, ctx: RequestContext, pizza_name: str) -> Result[str, BasketError]:
        """Add a menu pizza to the basket, creating the basket on first use."""
        match self.composer.from_menu(pizza_name):
            case Ok(pizza):
                basket = self.baskets.add_pizza(ctx.customer_id, pizza)
                return Ok(
                    f"Pizza {pizza.name} is added to the basket. Current basket is seen below\n"
                    + self.render(basket)
                )
            case Error(err):
                self.logger.warning(f"Could not add {pizza_name!r} for {ctx.customer_id}: {err.message}")
                return Error(err)

    def add_custom_pizza(self, ctx: RequestContext, request: PizzaRequest) -> Result[str, BasketError]:
        match self.composer.custom(request.name, request.ingredients):
            case Ok(pizza):
                basket = self.baskets.add_pizza(ctx.customer_id, pizza)
                return Ok(
                    f"Pizza {pizza.name} is added to the basket. Current basket is seen below: \n"
                    + self.render(basket)
                )
            case Error(err):
                self.logger.warning(f"Could not build custom pizza for {ctx.customer_id}: {err.message}")
                return Error(err)

    def remove_pizza(self, ctx: RequestContext, pizza_name: str) -> Result[str, BasketError]:
        match self.baskets.remove_pizza(ctx.customer_id, pizza_name):
            case Ok(_):
                return Ok(f"Pizza {pizza_name} is successfully removed from basket.")
            case Error(err):
                return Error(err)

    # -------------------- coupons --------------------

    def apply_coupon(self, ctx: RequestContext, code: str) -> Result[str, BasketError]:
        match self.baskets.apply_coupon(ctx.customer_id, code):
            case Ok(basket):
                coupon = basket.coupon
                if coupon.type is CouponType.PERCENTAGE_DISCOUNT:
                    headline = f"{format_rate(coupon.rate)}% discount coupon has been applied."
                elif coupon.type is CouponType.BUY_ONE_GET_ONE_FREE:
                    headline = "Buy-one-get-one-free coupon has been applied."
                else:
                    headline = f"Coupon code: {coupon.code} has been applied."
                return Ok(f"{headline}\nCurrent price: {self._money(basket.price)}")
            case Error(err):
                return Error(err)

    def remove_coupon(self, ctx: RequestContext) -> Result[str, BasketError]:
        with self.baskets.locked(ctx.customer_id):
            before = self.baskets.get_basket(ctx.customer_id)
            match self.baskets.remove_coupon(ctx.customer_id):
                case Ok(basket):
                    return Ok(
                        f"Coupon code : {before.coupon.code} has been removed from your basket.\n"
                        f"Current price: {self._money(basket.price)}"
                    )
                case Error(err):
                    return Error(err)

    # -------------------- pickup time --------------------

    def select_time(self, ctx: RequestContext, request: TimeRequest) -> Result[str, BasketError]:
        match self.baskets.set_pickup_time(ctx.customer_id, request.day, request.hour, request.minute):
            case Ok(basket):
                return Ok(f"Your selected time: {format_pickup_time(basket.pickup_time)}")
            case Error(err):
                return Error(err)

    # -------------------- overview --------------------

    def overview(self, ctx: RequestContext) -> Result[str, BasketError]:
        basket = self.baskets.get_basket(ctx.customer_id)
        if basket is None:
            return Ok("Your basket is empty!")
        return Ok(self.render(basket))

    def render(self, basket: Basket) -> str:
        lines: List[str] = ["Pizzas:"]
        if not basket.pizzas:
            lines.append("Nothing is in the basket yet!")
        for pizza in basket.pizzas:
            lines.append(f"{pizza.name} | {self._money(pizza.price)}")

        lines.append("")
        lines.append(f"Coupon applied: {self._coupon_summary(basket.coupon)}")
        lines.append("")
        lines.append(f"Total: {self._money(basket.price)}")
        lines.append("")
        lines.append(f"Your order will be ready at {basket.time_to_string()}.")
        return "\n".join(lines)

    # -------------------- store --------------------

    def set_store(self, ctx: RequestContext, store_id: int) -> Result[str, BasketError]:
        if not self.store_verifier.verify_store_id(store_id):
            self.logger.warning(f"Store {store_id} rejected for {ctx.customer_id}")
            return Error(InvalidStoreId(store_id))
        self.baskets.set_store_preference(ctx.customer_id, store_id)
        return Ok(f"Store {store_id} is set as your preferred store.")

    # -------------------- helpers --------------------

    def _money(self, amount: Decimal) -> str:
        return f"{self.currency} {format_price(amount)}"

    @staticmethod
    def _coupon_summary(coupon: Optional[Coupon]) -> str:
        if coupon is None:
            return "None"
        if coupon.type is CouponType.OTHER:
            summary = coupon.code
        else:
            summary = f"{coupon.code} ({coupon.describe()})"
        if coupon.limited_time:
            summary += " [limited time]"
        return summary
