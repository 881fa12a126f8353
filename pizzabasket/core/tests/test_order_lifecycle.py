from datetime import datetime
from decimal import Decimal

import pytest
from kungfu import Error, Ok

from pizzabasket.core.errors import IllegalOrderId
from pizzabasket.core.orders import OrderLifecycle
from pizzabasket.data.models import Basket, Coupon, CouponType, OrderStatus


def error_of(result):
    match result:
        case Error(err):
            return err
    raise AssertionError(f"expected an error, got {result!r}")


@pytest.fixture
def lifecycle(now):
    return OrderLifecycle(clock=lambda: now)


@pytest.fixture
def basket(priced_pizza):
    return Basket(
        customer_id="alice",
        pizzas=[priced_pizza("A", "5.00"), priced_pizza("B", "8.00")],
        coupon=Coupon(code="PIZZ10", type=CouponType.PERCENTAGE_DISCOUNT, rate=Decimal("10")),
        store_id=2,
    )


def test_place_order_snapshots_basket(lifecycle, basket, now):
    order = lifecycle.place_order(basket)
    assert order.order_id == 1
    assert order.status is OrderStatus.PLACED
    assert order.customer_id == "alice"
    assert order.coupon_code == "PIZZ10"
    assert order.price == Decimal("13.00") * Decimal("0.9")
    assert order.store_id == 2
    assert order.placed_at == now


def test_order_ids_are_sequential(lifecycle, basket):
    ids = [lifecycle.place_order(basket).order_id for _ in range(3)]
    assert ids == [1, 2, 3]
    assert [o.order_id for o in lifecycle.see_orders()] == [1, 2, 3]


def test_see_orders_is_empty_initially(lifecycle):
    assert lifecycle.see_orders() == []


def test_cancel_placed_order(lifecycle, basket):
    order = lifecycle.place_order(basket)
    result = lifecycle.cancel_order(order.order_id)
    assert isinstance(result, Ok)
    assert result.value.status is OrderStatus.CANCELLED
    assert lifecycle.see_orders()[0].status is OrderStatus.CANCELLED


def test_cancel_twice_fails(lifecycle, basket):
    order = lifecycle.place_order(basket)
    lifecycle.cancel_order(order.order_id)
    err = error_of(lifecycle.cancel_order(order.order_id))
    assert isinstance(err, IllegalOrderId)
    assert err.order_id == order.order_id


def test_cancel_unknown_order(lifecycle):
    assert isinstance(error_of(lifecycle.cancel_order(42)), IllegalOrderId)
