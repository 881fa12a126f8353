"""
Domain failures for basket, coupon, pickup-time and order operations.

Every failure carries a `kind` from the fixed taxonomy (validation,
not_found, conflict, policy) and a message fit to show the customer.
Operations return these inside a kungfu `Error` instead of raising them.
"""

from __future__ import annotations


class BasketError(Exception):
    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r}, message={self.message!r})"


# ---- taxonomy ----

class ValidationError(BasketError):
    kind = "validation"


class NotFoundError(BasketError):
    kind = "not_found"


class ConflictError(BasketError):
    kind = "conflict"


class PolicyError(BasketError):
    kind = "policy"


# ---- validation ----

class EmptyIngredientList(ValidationError):
    def __init__(self) -> None:
        super().__init__("Please provide at least one ingredient.")


class InvalidPizzaName(ValidationError):
    def __init__(self) -> None:
        super().__init__("Please provide a name for the pizza.")


class MalformedCouponCode(ValidationError):
    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__("The coupon code must be formatted with 4 characters followed by 2 numbers.")


class InvalidIngredient(ValidationError):
    def __init__(self) -> None:
        super().__init__("This ingredient is invalid or already exists.")


class InvalidStoreId(ValidationError):
    def __init__(self, store_id: int) -> None:
        self.store_id = store_id
        super().__init__("Invalid storeID. Please try again.")


class Unauthorized(ValidationError):
    def __init__(self, action: str) -> None:
        super().__init__(f"Only stores and managers can {action}!")


# ---- not found ----

class UnknownPizza(NotFoundError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"There is no such pizza as {name} on the menu.")


class UnknownIngredient(NotFoundError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"We do not have {name} as an ingredient on our inventory")


class UnknownCoupon(NotFoundError):
    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Coupon code: {code} is invalid.")


class NoBasket(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Your basket is empty!")


class PizzaNotInBasket(NotFoundError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"There is no such pizza as {name} in your basket.")


class NoCouponApplied(NotFoundError):
    def __init__(self) -> None:
        super().__init__("You do not have any coupon applied in your basket!")


class IllegalOrderId(NotFoundError):
    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} does not exist or can no longer be cancelled.")


# ---- conflict ----

class CouponAlreadyApplied(ConflictError):
    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__("This coupon is already applied.")


class CouponNotCheaper(ConflictError):
    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(
            "Coupon has not been applied because there is a cheaper coupon that has been applied already."
        )


class DuplicateCatalogEntry(ConflictError):
    def __init__(self, what: str, name: str) -> None:
        self.name = name
        super().__init__(f"{what} {name} already exists.")


# ---- policy ----

class InvalidTime(PolicyError):
    def __init__(self) -> None:
        super().__init__("Please enter valid time!")


class EmptyBasket(PolicyError):
    def __init__(self) -> None:
        super().__init__("Your basket is empty; add items first!")
