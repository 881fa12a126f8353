from __future__ import annotations

import threading
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional

import pandas as pd
from pydantic import ValidationError

from pizzabasket.config import get_config
from pizzabasket.logging import get_logger

from ..interface import INGREDIENT_SEPARATOR, CatalogAccess, ingredient_names, is_storable_name
from ..models import Coupon, CouponType, Ingredient, Pizza

INGREDIENT_COLUMNS = ["ingredient_id", "name", "price"]
PIZZA_COLUMNS = ["name", "ingredients"]
COUPON_COLUMNS = ["code", "type", "rate", "limited_time"]

_TRUE_VALUES = {"true", "1", "yes", "y"}


@dataclass
class _Tables:
    ingredients: pd.DataFrame
    pizzas: pd.DataFrame
    coupons: pd.DataFrame


class CsvCatalog(CatalogAccess):
    """
    CSV-backed catalog.
    - Loads ingredients.csv, pizzas.csv and (optionally) coupons.csv from `data_dir` once.
    - Every lookup filters the loaded frames afresh, so writes are visible immediately.
    - Writes only touch the in-memory frames; the CSV files are never rewritten.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            config = get_config()
            data_dir = config.data_dir

        self.data_dir = Path(data_dir)
        self.logger = get_logger(__name__)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            # Look up the directory tree for pyproject.toml
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            if repo_root:
                self.data_dir = repo_root / self.data_dir
            else:
                # Fallback to current directory
                self.data_dir = current / self.data_dir

        self._lock = threading.RLock()
        self._tables = self._load_tables(self.data_dir)
        self.logger.info(
            f"Loaded catalog from {self.data_dir}: {len(self._tables.ingredients)} ingredients, "
            f"{len(self._tables.pizzas)} pizzas, {len(self._tables.coupons)} coupons"
        )

    # ---------- loading helpers ----------

    @staticmethod
    def _load_tables(data_dir: Path) -> _Tables:
        # Check if data directory exists
        if not data_dir.exists():
            raise FileNotFoundError(
                f"Data directory not found: {data_dir}\n"
                f"Please either:\n"
                f"  1. Generate a sample catalog: python -m pizzabasket.data.seed_catalog\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )

        # Required CSV files
        required_files = ["ingredients.csv", "pizzas.csv"]
        missing_files = [f for f in required_files if not (data_dir / f).exists()]

        if missing_files:
            raise FileNotFoundError(
                f"Required CSV files missing in {data_dir}:\n"
                f"  Missing: {', '.join(missing_files)}\n"
                f"  Expected files: {', '.join(required_files)}"
            )

        try:
            # Everything is read as text: prices become Decimal, never float
            ingredients = pd.read_csv(data_dir / "ingredients.csv", dtype=str, keep_default_na=False)
            pizzas = pd.read_csv(data_dir / "pizzas.csv", dtype=str, keep_default_na=False)

            coupons = pd.DataFrame(columns=COUPON_COLUMNS)
            if (data_dir / "coupons.csv").exists():
                coupons = pd.read_csv(data_dir / "coupons.csv", dtype=str, keep_default_na=False)

            ingredients["ingredient_id"] = ingredients["ingredient_id"].astype(int)
        except Exception as e:
            raise RuntimeError(
                f"Error reading CSV files from {data_dir}: {e}\n"
                f"Please check that the CSV files are valid and readable."
            ) from e

        for frame, columns, filename in (
            (ingredients, INGREDIENT_COLUMNS, "ingredients.csv"),
            (pizzas, PIZZA_COLUMNS, "pizzas.csv"),
            (coupons, COUPON_COLUMNS, "coupons.csv"),
        ):
            missing_columns = [c for c in columns if c not in frame.columns]
            if missing_columns:
                raise RuntimeError(f"{filename} is missing columns: {', '.join(missing_columns)}")

        CsvCatalog._check_prices(ingredients)
        CsvCatalog._check_names(ingredients)
        CsvCatalog._check_menu(pizzas, ingredients)
        CsvCatalog._check_coupons(coupons)

        return _Tables(
            ingredients=ingredients[INGREDIENT_COLUMNS].copy(),
            pizzas=pizzas[PIZZA_COLUMNS].copy(),
            coupons=coupons[COUPON_COLUMNS].copy(),
        )

    @staticmethod
    def _check_prices(ingredients: pd.DataFrame) -> None:
        for _, row in ingredients.iterrows():
            try:
                price = Decimal(row["price"])
            except InvalidOperation as e:
                raise RuntimeError(f"Ingredient {row['name']} has an invalid price: {row['price']!r}") from e
            # NaN and Infinity parse but cannot be compared or summed into a total
            if not price.is_finite():
                raise RuntimeError(f"Ingredient {row['name']} has an invalid price: {row['price']!r}")
            if price < 0:
                raise RuntimeError(f"Ingredient {row['name']} has a negative price")

    @staticmethod
    def _check_names(ingredients: pd.DataFrame) -> None:
        for name in ingredients["name"]:
            if not is_storable_name(name):
                raise RuntimeError(f"Ingredient name {name!r} is empty or contains {INGREDIENT_SEPARATOR!r}")

    @staticmethod
    def _check_coupons(coupons: pd.DataFrame) -> None:
        for _, row in coupons.iterrows():
            try:
                CsvCatalog._coupon_from_row(row)
            except (InvalidOperation, ValidationError) as e:
                raise RuntimeError(f"Coupon {row['code']} is invalid: {e}") from e

    @staticmethod
    def _check_menu(pizzas: pd.DataFrame, ingredients: pd.DataFrame) -> None:
        known = set(ingredients["name"])
        for _, row in pizzas.iterrows():
            names = _split_ingredients(row["ingredients"])
            if not names:
                raise RuntimeError(f"Pizza {row['name']} has no ingredients")
            unknown = [n for n in names if n not in known]
            if unknown:
                raise RuntimeError(f"Pizza {row['name']} uses unknown ingredients: {', '.join(unknown)}")

    # ---------- row conversion ----------

    @staticmethod
    def _ingredient_from_row(row: pd.Series) -> Ingredient:
        return Ingredient(
            ingredient_id=int(row["ingredient_id"]),
            name=row["name"],
            price=Decimal(row["price"]),
        )

    def _pizza_from_row(self, row: pd.Series) -> Pizza:
        ingredients = [self._require_ingredient(name) for name in _split_ingredients(row["ingredients"])]
        return Pizza(name=row["name"], ingredients=ingredients)

    @staticmethod
    def _coupon_from_row(row: pd.Series) -> Coupon:
        return Coupon(
            code=row["code"],
            type=CouponType.from_code(row["type"]),
            rate=Decimal(row["rate"] or "0"),
            limited_time=str(row["limited_time"]).strip().lower() in _TRUE_VALUES,
        )

    def _require_ingredient(self, name: str) -> Ingredient:
        ingredient = self.find_ingredient_by_name(name)
        if ingredient is None:
            raise RuntimeError(f"Catalog is inconsistent: ingredient {name} is not on the inventory")
        return ingredient

    # ---------- interface implementation ----------

    def find_pizza_by_name(self, name: str) -> Optional[Pizza]:
        with self._lock:
            df = self._tables.pizzas
            hit = df[df["name"] == name]
            if hit.empty:
                return None
            return self._pizza_from_row(hit.iloc[0])

    def find_ingredient_by_name(self, name: str) -> Optional[Ingredient]:
        with self._lock:
            df = self._tables.ingredients
            hit = df[df["name"] == name]
            if hit.empty:
                return None
            return self._ingredient_from_row(hit.iloc[0])

    def find_ingredient_by_id(self, ingredient_id: int) -> Optional[Ingredient]:
        with self._lock:
            df = self._tables.ingredients
            hit = df[df["ingredient_id"] == ingredient_id]
            if hit.empty:
                return None
            return self._ingredient_from_row(hit.iloc[0])

    def find_coupon_by_code(self, code: str) -> Optional[Coupon]:
        with self._lock:
            df = self._tables.coupons
            hit = df[df["code"] == code]
            if hit.empty:
                return None
            return self._coupon_from_row(hit.iloc[0])

    def list_pizzas(self) -> List[Pizza]:
        with self._lock:
            return [self._pizza_from_row(row) for _, row in self._tables.pizzas.iterrows()]

    def list_ingredients(self) -> List[Ingredient]:
        with self._lock:
            return [self._ingredient_from_row(row) for _, row in self._tables.ingredients.iterrows()]

    def list_coupons(self) -> List[Coupon]:
        with self._lock:
            return [self._coupon_from_row(row) for _, row in self._tables.coupons.iterrows()]

    def save_pizza(self, pizza: Pizza) -> Pizza:
        row = pd.DataFrame(
            [{"name": pizza.name, "ingredients": INGREDIENT_SEPARATOR.join(ingredient_names(pizza.ingredients))}]
        )
        with self._lock:
            self._tables.pizzas = pd.concat([self._tables.pizzas, row], ignore_index=True)
        self.logger.info(f"Saved pizza {pizza.name} to the menu")
        return pizza

    def save_ingredient(self, name: str, price: Decimal) -> Ingredient:
        if not is_storable_name(name):
            raise ValueError(f"Ingredient name {name!r} cannot be stored in the menu")
        with self._lock:
            df = self._tables.ingredients
            next_id = int(df["ingredient_id"].max()) + 1 if not df.empty else 1
            ingredient = Ingredient(ingredient_id=next_id, name=name, price=price)
            row = pd.DataFrame([{"ingredient_id": next_id, "name": name, "price": str(price)}])
            self._tables.ingredients = pd.concat([df, row], ignore_index=True)
        self.logger.info(f"Saved ingredient {name} with id {next_id}")
        return ingredient

    def save_coupon(self, coupon: Coupon) -> Coupon:
        row = pd.DataFrame([{
            "code": coupon.code,
            "type": coupon.type.code,
            "rate": str(coupon.rate),
            "limited_time": "true" if coupon.limited_time else "false",
        }])
        with self._lock:
            self._tables.coupons = pd.concat([self._tables.coupons, row], ignore_index=True)
        self.logger.info(f"Saved coupon {coupon.code}")
        return coupon

    def delete_coupon(self, code: str) -> bool:
        with self._lock:
            df = self._tables.coupons
            mask = df["code"] == code
            if not mask.any():
                return False
            self._tables.coupons = df.loc[~mask].reset_index(drop=True)
        self.logger.info(f"Deleted coupon {code}")
        return True


def _split_ingredients(value: str) -> List[str]:
    return [name.strip() for name in str(value).split(INGREDIENT_SEPARATOR) if name.strip()]
