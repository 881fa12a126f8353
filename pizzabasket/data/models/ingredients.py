from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Ingredient(BaseModel):
    """An ingredient on the inventory, priced per pizza."""
    model_config = ConfigDict(frozen=True)

    ingredient_id: int = Field(description="Catalog identifier, referenced by allergy lists")
    name: str = Field(description="Unique ingredient name")
    price: Decimal = Field(ge=0, description="Price added to a pizza containing this ingredient")
