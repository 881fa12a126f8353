from __future__ import annotations

from typing import List, Optional, Sequence

from kungfu import Error, Ok, Result

from pizzabasket.data.interface import CatalogAccess
from pizzabasket.data.models import Ingredient, Pizza

from .errors import BasketError, EmptyIngredientList, InvalidPizzaName, UnknownIngredient, UnknownPizza


def make_pizza(name: str, ingredients: Sequence[Ingredient]) -> Result[Pizza, BasketError]:
    """Build a Pizza from all of its parts at once, or report why it cannot exist."""
    if not name or not name.strip():
        return Error(InvalidPizzaName())
    if not ingredients:
        return Error(EmptyIngredientList())
    return Ok(Pizza(name=name.strip(), ingredients=list(ingredients)))


class PizzaComposer:
    """Turns a menu name or a custom ingredient list into a priced Pizza."""

    def __init__(self, catalog: CatalogAccess) -> None:
        self.catalog = catalog

    def compose(self, name: str, ingredient_names: Optional[Sequence[str]] = None) -> Result[Pizza, BasketError]:
        """Menu pizza when `ingredient_names` is None, custom pizza otherwise."""
        if ingredient_names is None:
            return self.from_menu(name)
        return self.custom(name, ingredient_names)

    def from_menu(self, name: str) -> Result[Pizza, BasketError]:
        definition = self.catalog.find_pizza_by_name(name)
        if definition is None:
            return Error(UnknownPizza(name))
        return make_pizza(definition.name, definition.ingredients)

    def custom(self, name: str, ingredient_names: Sequence[str]) -> Result[Pizza, BasketError]:
        if not ingredient_names:
            return Error(EmptyIngredientList())

        ingredients: List[Ingredient] = []
        for ingredient_name in ingredient_names:
            ingredient = self.catalog.find_ingredient_by_name(ingredient_name)
            if ingredient is None:
                return Error(UnknownIngredient(ingredient_name))
            ingredients.append(ingredient)
        return make_pizza(name, ingredients)
