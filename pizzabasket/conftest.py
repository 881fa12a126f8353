from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from pizzabasket.config import set_config_for_test
from pizzabasket.data.backends.csv_backend import CsvCatalog
from pizzabasket.data.models import Ingredient, Pizza

INGREDIENTS_CSV = """ingredient_id,name,price
1,Dough,3.00
2,Tomato Sauce,0.75
3,Mozzarella,1.50
4,Basil,0.25
5,Pepperoni,1.75
6,Ham,1.50
7,Pineapple,1.00
"""

# Margherita 5.50 | Pepperoni 7.00 | Hawaii 7.75 | Marinara 3.75
PIZZAS_CSV = """name,ingredients
Margherita,Dough;Tomato Sauce;Mozzarella;Basil
Pepperoni,Dough;Tomato Sauce;Mozzarella;Pepperoni
Hawaii,Dough;Tomato Sauce;Mozzarella;Ham;Pineapple
Marinara,Dough;Tomato Sauce
"""

COUPONS_CSV = """code,type,rate,limited_time
PIZZ10,D,10,false
HALF50,D,50,true
BOGO01,F,0,false
FREE00,O,0,false
"""


@pytest.fixture(autouse=True)
def app_config():
    set_config_for_test(log_level="WARNING", known_store_ids=[1, 2, 3], currency_label="EUR")
    yield


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    (tmp_path / "ingredients.csv").write_text(INGREDIENTS_CSV)
    (tmp_path / "pizzas.csv").write_text(PIZZAS_CSV)
    (tmp_path / "coupons.csv").write_text(COUPONS_CSV)
    return tmp_path


@pytest.fixture
def catalog(catalog_dir: Path) -> CsvCatalog:
    return CsvCatalog(data_dir=catalog_dir)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 1, 1, 20, 0)


@pytest.fixture
def priced_pizza():
    """Factory for a one-ingredient pizza with the given price."""
    def _make(name: str, price: str) -> Pizza:
        return Pizza(
            name=name,
            ingredients=[Ingredient(ingredient_id=100, name=f"{name} base", price=Decimal(price))],
        )
    return _make
