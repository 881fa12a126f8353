from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .ingredients import Ingredient


class Pizza(BaseModel):
    """A pizza as it appears on the menu or in a basket.

    The price is always derived from the ingredients; it is never stored.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Menu name, or the customer's name for a custom pizza")
    ingredients: List[Ingredient] = Field(min_length=1, description="Ingredients in composition order")

    @computed_field
    @property
    def price(self) -> Decimal:
        return sum((ingredient.price for ingredient in self.ingredients), Decimal("0"))

    def contains_any(self, ingredient_ids: Iterable[int]) -> bool:
        wanted = set(ingredient_ids)
        return any(ingredient.ingredient_id in wanted for ingredient in self.ingredients)
