"""
Boundary collaborators the basket core consumes but does not implement.

The store directory and the allergy service live in other services; the
defaults here answer from configuration and from an in-process table so
the core can run on its own.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol

from pizzabasket.config import get_config


class StoreVerifier(Protocol):
    def verify_store_id(self, store_id: int) -> bool:
        """True when `store_id` names an existing store."""
        ...


class AllergyLookup(Protocol):
    def get_allergies_for_customer(self, token: str) -> List[int]:
        """Ingredient ids the customer behind `token` is allergic to."""
        ...


class ConfiguredStoreVerifier(StoreVerifier):
    """Accepts the store ids listed in `AppConfig.known_store_ids`."""

    def __init__(self, store_ids: Optional[Iterable[int]] = None) -> None:
        if store_ids is None:
            store_ids = get_config().known_store_ids
        self.store_ids = set(store_ids)

    def verify_store_id(self, store_id: int) -> bool:
        return store_id in self.store_ids


class StaticAllergyLookup(AllergyLookup):
    def __init__(self, allergies_by_token: Optional[Dict[str, List[int]]] = None) -> None:
        self.allergies_by_token = dict(allergies_by_token or {})

    def get_allergies_for_customer(self, token: str) -> List[int]:
        return list(self.allergies_by_token.get(token, []))
