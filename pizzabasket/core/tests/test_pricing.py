from decimal import Decimal

import pytest

from pizzabasket.core.pricing import calculate_price
from pizzabasket.data.models import Coupon, CouponType, Ingredient, Pizza


def bogo() -> Coupon:
    return Coupon(code="BOGO01", type=CouponType.BUY_ONE_GET_ONE_FREE)


def percentage(rate: str) -> Coupon:
    return Coupon(code="PIZZ10", type=CouponType.PERCENTAGE_DISCOUNT, rate=Decimal(rate))


def test_pizza_price_is_sum_of_ingredients():
    pizza = Pizza(
        name="Custom",
        ingredients=[
            Ingredient(ingredient_id=1, name="Dough", price=Decimal("3.00")),
            Ingredient(ingredient_id=2, name="Cheese", price=Decimal("1.55")),
            Ingredient(ingredient_id=3, name="Olives", price=Decimal("0.80")),
        ],
    )
    assert pizza.price == Decimal("5.35")


def test_no_coupon_returns_subtotal(priced_pizza):
    pizzas = [priced_pizza("A", "5.00"), priced_pizza("B", "8.00")]
    assert calculate_price(pizzas, None) == Decimal("13.00")


def test_empty_basket_costs_nothing():
    assert calculate_price([], None) == Decimal("0")
    assert calculate_price([], bogo()) == Decimal("0")


@pytest.mark.parametrize("rate", ["0", "10", "12.5", "33", "100"])
def test_percentage_discount_is_exact(priced_pizza, rate):
    pizzas = [priced_pizza("A", "5.00"), priced_pizza("B", "8.00"), priced_pizza("C", "3.00")]
    total = Decimal("16.00")
    assert calculate_price(pizzas, percentage(rate)) == total * (1 - Decimal(rate) / 100)


def test_bogo_removes_cheapest_pizza(priced_pizza):
    pizzas = [priced_pizza("A", "5.00"), priced_pizza("B", "8.00"), priced_pizza("C", "3.00")]
    assert calculate_price(pizzas, bogo()) == Decimal("13.00")


def test_bogo_on_single_pizza_gives_no_reduction(priced_pizza):
    assert calculate_price([priced_pizza("A", "9.00")], bogo()) == Decimal("9.00")


def test_bogo_with_equal_prices_removes_only_one(priced_pizza):
    pizzas = [priced_pizza("A", "4.00"), priced_pizza("B", "4.00")]
    assert calculate_price(pizzas, bogo()) == Decimal("4.00")


def test_other_coupon_does_not_change_total(priced_pizza):
    pizzas = [priced_pizza("A", "5.00"), priced_pizza("B", "8.00")]
    coupon = Coupon(code="FREE00", type=CouponType.OTHER)
    assert calculate_price(pizzas, coupon) == Decimal("13.00")
