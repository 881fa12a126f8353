from decimal import Decimal

import pytest
from kungfu import Error, Ok

from pizzabasket.core.errors import (
    DuplicateCatalogEntry,
    EmptyIngredientList,
    InvalidIngredient,
    MalformedCouponCode,
    Unauthorized,
    UnknownCoupon,
    UnknownIngredient,
)
from pizzabasket.data.models import (
    CouponRequest,
    CouponType,
    IngredientRequest,
    PizzaRequest,
    RequestContext,
    Role,
)
from pizzabasket.external import StaticAllergyLookup
from pizzabasket.services.repo_service import RepoService, filter_out_pizzas


def error_of(result):
    match result:
        case Error(err):
            return err
    raise AssertionError(f"expected an error, got {result!r}")


@pytest.fixture
def service(catalog):
    # 4 is Basil, 6 is Ham
    return RepoService(catalog, StaticAllergyLookup({"tok-basil": [0, 4], "tok-none": [0]}))


@pytest.fixture
def customer():
    return RequestContext(customer_id="alice", role=Role.CUSTOMER)


@pytest.fixture
def manager():
    return RequestContext(customer_id="boss", role=Role.MANAGER)


def test_menu_unfiltered(service):
    assert len(service.get_pizzas(False, "tok-basil")) == 4


def test_menu_filters_allergens(service):
    names = [p.name for p in service.get_pizzas(True, "tok-basil")]
    assert names == ["Pepperoni", "Hawaii", "Marinara"]


def test_placeholder_allergy_filters_nothing(service):
    assert len(service.get_pizzas(True, "tok-none")) == 4
    assert len(service.get_pizzas(True, "unknown-token")) == 4


def test_filter_out_pizzas(catalog):
    ham = catalog.find_ingredient_by_name("Ham")
    remaining = filter_out_pizzas(catalog.list_pizzas(), [ham.ingredient_id])
    assert "Hawaii" not in [p.name for p in remaining]


def test_allergy_options(service):
    options = service.get_allergy_options()
    assert options[0] == "1 - Dough"
    assert "4 - Basil" in options


@pytest.mark.parametrize(
    "call",
    [
        lambda s, ctx: s.add_pizza_to_repo(ctx, PizzaRequest(name="X", ingredients=["Dough"])),
        lambda s, ctx: s.add_ingredient_to_repo(ctx, IngredientRequest(name="Egg", price=Decimal("1"))),
        lambda s, ctx: s.add_coupon_to_repo(ctx, CouponRequest(code="ABCD12", type="D", rate=Decimal("5"))),
        lambda s, ctx: s.delete_coupon(ctx, "PIZZ10"),
    ],
)
def test_customers_cannot_write(service, customer, call):
    err = error_of(call(service, customer))
    assert isinstance(err, Unauthorized)
    assert err.kind == "validation"
    assert err.message.startswith("Only stores and managers can")


def test_store_role_can_write(service):
    store = RequestContext(customer_id="store-1", role=Role.STORE)
    assert isinstance(service.add_ingredient_to_repo(store, IngredientRequest(name="Egg", price=Decimal("0.60"))), Ok)


def test_add_pizza_to_repo(service, manager, catalog):
    result = service.add_pizza_to_repo(manager, PizzaRequest(name="Prosciutto", ingredients=["Dough", "Ham"]))
    assert result.value == "Prosciutto is added to the repository."
    assert catalog.find_pizza_by_name("Prosciutto").price == Decimal("4.50")


def test_add_pizza_to_repo_failures(service, manager):
    assert isinstance(
        error_of(service.add_pizza_to_repo(manager, PizzaRequest(name="X", ingredients=["Dough", "Caviar"]))),
        UnknownIngredient,
    )
    assert isinstance(error_of(service.add_pizza_to_repo(manager, PizzaRequest(name="X"))), EmptyIngredientList)
    assert isinstance(
        error_of(service.add_pizza_to_repo(manager, PizzaRequest(name="Margherita", ingredients=["Dough"]))),
        DuplicateCatalogEntry,
    )


def test_add_ingredient(service, manager, catalog):
    assert service.add_ingredient_to_repo(manager, IngredientRequest(name="Egg", price=Decimal("0.60"))).value == (
        "Egg is added to the repository."
    )
    assert catalog.find_ingredient_by_name("Egg").ingredient_id == 8


@pytest.mark.parametrize("name,price", [("", "1.00"), ("Egg", "0"), ("Egg", "-1")])
def test_add_invalid_ingredient(service, manager, name, price):
    err = error_of(service.add_ingredient_to_repo(manager, IngredientRequest(name=name, price=Decimal(price))))
    assert isinstance(err, InvalidIngredient)


def test_separator_in_ingredient_name_keeps_menu_readable(service, manager):
    err = error_of(service.add_ingredient_to_repo(manager, IngredientRequest(name="Salt;Pepper", price=Decimal("0.10"))))
    assert isinstance(err, InvalidIngredient)

    err = error_of(service.add_pizza_to_repo(manager, PizzaRequest(name="Spicy", ingredients=["Dough", "Salt;Pepper"])))
    assert isinstance(err, UnknownIngredient)
    assert len(service.get_pizzas(False, "tok-none")) == 4


def test_add_duplicate_ingredient(service, manager):
    err = error_of(service.add_ingredient_to_repo(manager, IngredientRequest(name="Ham", price=Decimal("2"))))
    assert isinstance(err, DuplicateCatalogEntry)


def test_add_coupon(service, manager):
    result = service.add_coupon_to_repo(manager, CouponRequest(code="SAVE15", type="D", rate=Decimal("15")))
    assert result.value == "Coupon code: SAVE15 is added to the repository."
    coupon = service.get_coupon("SAVE15").value
    assert coupon.type is CouponType.PERCENTAGE_DISCOUNT
    assert coupon.rate == Decimal("15")


def test_add_coupon_failures(service, manager):
    err = error_of(service.add_coupon_to_repo(manager, CouponRequest(code="SAVE150", type="D")))
    assert isinstance(err, MalformedCouponCode)
    err = error_of(service.add_coupon_to_repo(manager, CouponRequest(code="PIZZ10", type=CouponType.OTHER)))
    assert isinstance(err, DuplicateCatalogEntry)


def test_delete_coupon(service, manager):
    assert service.delete_coupon(manager, "PIZZ10").value == "Coupon code: PIZZ10 has been deleted."
    assert isinstance(error_of(service.get_coupon("PIZZ10")), UnknownCoupon)
    assert isinstance(error_of(service.delete_coupon(manager, "PIZZ10")), UnknownCoupon)


def test_listings(service):
    assert len(service.get_ingredients()) == 7
    assert len(service.get_coupons()) == 4
