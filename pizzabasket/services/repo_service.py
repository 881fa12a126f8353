"""
Catalog (menu, inventory, coupons) operations as the API layer calls them.

Reads are open to every role. Writes require a store or manager role;
the check runs against the RequestContext handed in by the caller.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from kungfu import Error, Ok, Result

from pizzabasket.core.composer import make_pizza
from pizzabasket.core.coupons import validate_format
from pizzabasket.core.errors import (
    BasketError,
    DuplicateCatalogEntry,
    InvalidIngredient,
    MalformedCouponCode,
    Unauthorized,
    UnknownCoupon,
    UnknownIngredient,
)
from pizzabasket.data.interface import CatalogAccess, is_storable_name
from pizzabasket.data.models import (
    Coupon,
    CouponRequest,
    Ingredient,
    IngredientRequest,
    Pizza,
    PizzaRequest,
    RequestContext,
)
from pizzabasket.external import AllergyLookup, StaticAllergyLookup
from pizzabasket.logging import get_logger

# Allergy lists always carry this id when the customer declared none
NO_ALLERGY_PLACEHOLDER = 0


def filter_out_pizzas(pizzas: Iterable[Pizza], allergen_ids: Iterable[int]) -> List[Pizza]:
    """Drop every pizza that contains one of the allergens."""
    allergens = set(allergen_ids)
    return [pizza for pizza in pizzas if not pizza.contains_any(allergens)]


class RepoService:
    def __init__(self, catalog: CatalogAccess, allergy_lookup: Optional[AllergyLookup] = None) -> None:
        self.catalog = catalog
        self.allergy_lookup = allergy_lookup if allergy_lookup is not None else StaticAllergyLookup()
        self.logger = get_logger(__name__)

    # ---------- pizzas ----------

    def get_pizzas(self, filter_out: bool, token: str) -> List[Pizza]:
        """The menu, optionally without pizzas the customer is allergic to."""
        pizzas = self.catalog.list_pizzas()
        if not filter_out:
            return pizzas
        allergies = [
            ingredient_id
            for ingredient_id in self.allergy_lookup.get_allergies_for_customer(token)
            if ingredient_id != NO_ALLERGY_PLACEHOLDER
        ]
        return filter_out_pizzas(pizzas, allergies)

    def add_pizza_to_repo(self, ctx: RequestContext, request: PizzaRequest) -> Result[str, BasketError]:
        if not ctx.can_edit_catalog:
            return self._denied(ctx, "add new pizzas to the database")

        ingredients: List[Ingredient] = []
        for name in request.ingredients:
            ingredient = self.catalog.find_ingredient_by_name(name)
            if ingredient is None:
                return Error(UnknownIngredient(name))
            ingredients.append(ingredient)

        match make_pizza(request.name, ingredients):
            case Ok(pizza):
                if self.catalog.find_pizza_by_name(pizza.name) is not None:
                    return Error(DuplicateCatalogEntry("Pizza", pizza.name))
                self.catalog.save_pizza(pizza)
                return Ok(f"{pizza.name} is added to the repository.")
            case Error(err):
                return Error(err)

    # ---------- ingredients ----------

    def get_ingredients(self) -> List[Ingredient]:
        return self.catalog.list_ingredients()

    def get_allergy_options(self) -> List[str]:
        """Ingredients a customer can declare an allergy to, as '{id} - {name}'."""
        return [f"{i.ingredient_id} - {i.name}" for i in self.catalog.list_ingredients()]

    def add_ingredient_to_repo(self, ctx: RequestContext, request: IngredientRequest) -> Result[str, BasketError]:
        if not ctx.can_edit_catalog:
            return self._denied(ctx, "add ingredients to the database")
        name = request.name.strip()
        if not is_storable_name(name) or request.price <= 0:
            return Error(InvalidIngredient())
        if self.catalog.find_ingredient_by_name(name) is not None:
            return Error(DuplicateCatalogEntry("Ingredient", name))
        ingredient = self.catalog.save_ingredient(name, request.price)
        return Ok(f"{ingredient.name} is added to the repository.")

    # ---------- coupons ----------

    def get_coupons(self) -> List[Coupon]:
        return self.catalog.list_coupons()

    def get_coupon(self, code: str) -> Result[Coupon, BasketError]:
        coupon = self.catalog.find_coupon_by_code(code)
        if coupon is None:
            return Error(UnknownCoupon(code))
        return Ok(coupon)

    def add_coupon_to_repo(self, ctx: RequestContext, request: CouponRequest) -> Result[str, BasketError]:
        if not ctx.can_edit_catalog:
            return self._denied(ctx, "add new coupons to the database")
        if not validate_format(request.code):
            return Error(MalformedCouponCode(request.code))
        if self.catalog.find_coupon_by_code(request.code) is not None:
            return Error(DuplicateCatalogEntry("Coupon with the provided activation code", request.code))
        coupon = Coupon(
            code=request.code,
            type=request.type,
            rate=request.rate,
            limited_time=request.limited_time,
        )
        self.catalog.save_coupon(coupon)
        return Ok(f"Coupon code: {coupon.code} is added to the repository.")

    def delete_coupon(self, ctx: RequestContext, code: str) -> Result[str, BasketError]:
        if not ctx.can_edit_catalog:
            return self._denied(ctx, "delete coupons from the database")
        if not self.catalog.delete_coupon(code):
            return Error(UnknownCoupon(code))
        return Ok(f"Coupon code: {code} has been deleted.")

    # ---------- helpers ----------

    def _denied(self, ctx: RequestContext, action: str) -> Result[str, BasketError]:
        self.logger.warning(f"{ctx.customer_id} with role {ctx.role.value} may not {action}")
        return Error(Unauthorized(action))
