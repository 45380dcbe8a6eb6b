"""Domain exceptions raised by the checkout simulator.

Every error the business layer raises derives from :class:`CheckoutError`
so the console front end can catch a single type, print the message and
return to the menu.
"""

from __future__ import annotations

from typing import Optional


class CheckoutError(Exception):
    """Base class for all recoverable checkout errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ProductNotFoundError(CheckoutError):
    """No catalogue product matches the requested identifier."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with ID '{product_id}' not found!")
        self.product_id = product_id


class InvalidInputError(CheckoutError, ValueError):
    """Malformed or out-of-range user input."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid input: {reason}")
        self.reason = reason


class CapacityExceededError(CheckoutError):
    """A bounded container (cart or ledger) is already full."""

    def __init__(self, container: str, capacity: int) -> None:
        super().__init__(f"{container} is full. Cannot add more items.")
        self.container = container
        self.capacity = capacity


class CheckoutFailedError(CheckoutError):
    """Checkout could not complete.

    The underlying exception is chained as ``__cause__`` and also kept on
    :attr:`cause` so callers can tell a full ledger apart from a declined
    payment.
    """

    def __init__(self, payment_method: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Payment failed with method: {payment_method}")
        self.payment_method = payment_method
        self.cause = cause
