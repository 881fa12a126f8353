#!/usr/bin/env python3
"""
seed_catalog.py

Writes a sample pizza catalog to CSVs under a local folder (default: the configured data_dir).

Files:
- ingredients.csv, pizzas.csv, coupons.csv

Run:
  python -m pizzabasket.data.seed_catalog --output-dir sample_data --seed 42
"""

from __future__ import annotations

import argparse
import csv
import os
import random
import sys
from decimal import Decimal
from typing import Dict, List, Optional

from pizzabasket.config import get_config
from pizzabasket.data.backends.csv_backend import (
    COUPON_COLUMNS,
    INGREDIENT_COLUMNS,
    INGREDIENT_SEPARATOR,
    PIZZA_COLUMNS,
)

# -----------------------------
# Catalog content
# -----------------------------

# name -> base price in EUR
INGREDIENTS: Dict[str, str] = {
    "Dough": "3.00",
    "Tomato Sauce": "0.75",
    "Mozzarella": "1.50",
    "Basil": "0.25",
    "Pepperoni": "1.75",
    "Ham": "1.50",
    "Pineapple": "1.00",
    "Mushrooms": "0.90",
    "Onion": "0.40",
    "Olives": "0.80",
    "Gorgonzola": "1.80",
    "Parmesan": "1.60",
    "Spinach": "0.70",
}

PIZZAS: Dict[str, List[str]] = {
    "Margherita": ["Dough", "Tomato Sauce", "Mozzarella", "Basil"],
    "Pepperoni": ["Dough", "Tomato Sauce", "Mozzarella", "Pepperoni"],
    "Hawaii": ["Dough", "Tomato Sauce", "Mozzarella", "Ham", "Pineapple"],
    "Funghi": ["Dough", "Tomato Sauce", "Mozzarella", "Mushrooms"],
    "Quattro Formaggi": ["Dough", "Tomato Sauce", "Mozzarella", "Gorgonzola", "Parmesan"],
    "Vegetariana": ["Dough", "Tomato Sauce", "Mozzarella", "Mushrooms", "Onion", "Olives", "Spinach"],
}

# code -> (storage type code, rate, limited_time)
COUPONS: Dict[str, tuple] = {
    "PIZZ10": ("D", "10", False),
    "HALF50": ("D", "50", True),
    "BOGO01": ("F", "0", False),
    "FREE00": ("O", "0", False),
}


# -----------------------------
# Utility functions
# -----------------------------

def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)

def jitter_price(price: str, spread: float = 0.15) -> str:
    """Nudge a base price by up to +/- spread, rounded to 5 cents."""
    factor = 1 + random.uniform(-spread, spread)
    cents = round(float(Decimal(price)) * factor * 20) * 5
    return str(Decimal(max(cents, 5)) / 100)

def write_csv(path: str, rows: List[Dict], header: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=header)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Generators
# -----------------------------

def gen_ingredients(vary_prices: bool) -> List[Dict]:
    rows = []
    for ingredient_id, (name, price) in enumerate(INGREDIENTS.items(), start=1):
        rows.append({
            "ingredient_id": ingredient_id,
            "name": name,
            "price": jitter_price(price) if vary_prices else price,
        })
    return rows

def gen_pizzas() -> List[Dict]:
    return [
        {"name": name, "ingredients": INGREDIENT_SEPARATOR.join(ingredients)}
        for name, ingredients in PIZZAS.items()
    ]

def gen_coupons() -> List[Dict]:
    return [
        {"code": code, "type": type_code, "rate": rate, "limited_time": "true" if limited else "false"}
        for code, (type_code, rate, limited) in COUPONS.items()
    ]


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate a sample pizza catalog to CSVs.")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.seed_value)
    parser.add_argument("--vary-prices", action="store_true", help="Randomise ingredient prices around their base.")
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if CSVs already exist.")
    args = parser.parse_args(argv)

    random.seed(args.seed)

    outdir = args.output_dir
    ensure_dir(outdir)

    files = {
        "ingredients": os.path.join(outdir, "ingredients.csv"),
        "pizzas": os.path.join(outdir, "pizzas.csv"),
        "coupons": os.path.join(outdir, "coupons.csv"),
    }
    if args.no_overwrite:
        for p in files.values():
            if os.path.exists(p):
                print(f"Refusing to overwrite existing file: {p}", file=sys.stderr)
                return 2

    ingredients = gen_ingredients(args.vary_prices)
    pizzas = gen_pizzas()
    coupons = gen_coupons()

    write_csv(files["ingredients"], ingredients, INGREDIENT_COLUMNS)
    write_csv(files["pizzas"], pizzas, PIZZA_COLUMNS)
    write_csv(files["coupons"], coupons, COUPON_COLUMNS)

    print(f"Generated catalog in {outdir}")
    print(f" ingredients: {len(ingredients)} | pizzas: {len(pizzas)} | coupons: {len(coupons)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
