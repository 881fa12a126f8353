# pizzabasket/data/interface.py
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Protocol, Sequence

from .models import (
    Ingredient,
    Pizza,
    Coupon,
)

# Stored menus list a pizza's ingredient names joined with this separator
INGREDIENT_SEPARATOR = ";"


# ---- Catalog access protocol ----

class CatalogAccess(Protocol):
    """
    Backend-agnostic contract for the pizza, ingredient and coupon catalog.

    Lookups return None when nothing matches; callers turn that into a
    typed failure. Implementations MUST NOT cache lookups across writes:
    a saved or deleted entry is visible to the very next call.
    """

    # Lookups used while composing pizzas and applying coupons

    def find_pizza_by_name(self, name: str) -> Optional[Pizza]:
        """Get the menu pizza with this name."""
        ...

    def find_ingredient_by_name(self, name: str) -> Optional[Ingredient]:
        """Get the inventory ingredient with this name."""
        ...

    def find_ingredient_by_id(self, ingredient_id: int) -> Optional[Ingredient]:
        """Get the inventory ingredient with this id."""
        ...

    def find_coupon_by_code(self, code: str) -> Optional[Coupon]:
        """Get the coupon with this activation code."""
        ...

    # Listings

    def list_pizzas(self) -> List[Pizza]:
        """List the whole menu."""
        ...

    def list_ingredients(self) -> List[Ingredient]:
        """List the whole inventory."""
        ...

    def list_coupons(self) -> List[Coupon]:
        """List all coupons."""
        ...

    # Catalog writes (role checks happen before these are called)

    def save_pizza(self, pizza: Pizza) -> Pizza:
        """Add a pizza to the menu."""
        ...

    def save_ingredient(self, name: str, price: Decimal) -> Ingredient:
        """Add an ingredient to the inventory, assigning it a fresh id."""
        ...

    def save_coupon(self, coupon: Coupon) -> Coupon:
        """Add a coupon."""
        ...

    def delete_coupon(self, code: str) -> bool:
        """Delete a coupon; False when no coupon has this code."""
        ...


def ingredient_names(ingredients: Sequence[Ingredient]) -> List[str]:
    return [ingredient.name for ingredient in ingredients]


def is_storable_name(name: str) -> bool:
    """Ingredient names may not be blank or contain INGREDIENT_SEPARATOR."""
    return bool(name.strip()) and INGREDIENT_SEPARATOR not in name
