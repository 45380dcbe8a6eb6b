# payment_service.py
"""
Payment method simulation used by the checkout simulator.

- Closed set of methods (cash / card / GCash) with the processing step
  attached to each member.
- No real gateway is called; every method confirms the amount and approves.
- Menu-number lookup for the console front end.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Callable

from .errors import InvalidInputError

CURRENCY_SYMBOL = "₱"


def format_amount(amount: Decimal, currency: str = CURRENCY_SYMBOL) -> str:
    return f"{currency}{amount:.2f}"


class PaymentMethod(Enum):
    """Supported payment methods.

    The value is the menu number shown to the user; ``display_name`` is what
    receipts and the order log record.
    """

    CASH = (1, "Cash", "cash")
    CARD = (2, "Credit / Debit Card", "credit/debit card")
    GCASH = (3, "GCash", "GCash")

    def __init__(self, choice: int, display_name: str, phrase: str) -> None:
        self.choice = choice
        self.display_name = display_name
        self._phrase = phrase

    def confirmation(self, amount: Decimal, currency: str = CURRENCY_SYMBOL) -> str:
        return f"Processing {self._phrase} payment of {format_amount(amount, currency)}"

    def process(
        self,
        amount: Decimal,
        echo: Callable[[str], None] = print,
        currency: str = CURRENCY_SYMBOL,
    ) -> bool:
        """Confirm the payment of ``amount`` and report whether it was approved.

        NOTE: This is *mock* code; all three methods always approve.
        """
        echo(self.confirmation(amount, currency))
        return True

    @classmethod
    def from_choice(cls, choice: int) -> "PaymentMethod":
        """Map a menu number (1-3) to a payment method."""
        for method in cls:
            if method.choice == choice:
                return method
        raise InvalidInputError(f"Please enter a number between 1 and {len(cls)}.")

    def __str__(self) -> str:
        return self.display_name
