"""In-memory shopping cart.

The cart keeps lines in the order they were added.  Adding the same product
twice produces two separate lines; lines are never merged.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator, List, Tuple

from .catalog import Product
from .errors import CapacityExceededError, InvalidInputError

DEFAULT_CART_CAPACITY = 10


@dataclass(frozen=True)
class CartLine:
    """A line in the shopping cart."""
    product: Product
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


class Cart:
    """Ordered, bounded collection of :class:`CartLine` entries."""

    def __init__(self, capacity: int = DEFAULT_CART_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("Cart capacity must be positive")
        self.capacity = capacity
        self._lines: List[CartLine] = []

    def add_item(self, product: Product, quantity: int) -> CartLine:
        """Append a new line for ``quantity`` units of ``product``.

        Raises:
            InvalidInputError: if ``quantity`` is not a positive integer.
            CapacityExceededError: if the cart already holds ``capacity`` lines.
                The cart is left unchanged.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidInputError("Quantity must be a positive whole integer.")
        if len(self._lines) >= self.capacity:
            raise CapacityExceededError("Shopping Cart", self.capacity)
        line = CartLine(product=product, quantity=quantity)
        self._lines.append(line)
        return line

    def total(self) -> Decimal:
        return sum((line.line_total for line in self._lines), Decimal("0"))

    def is_empty(self) -> bool:
        return not self._lines

    def is_full(self) -> bool:
        return len(self._lines) >= self.capacity

    def clear(self) -> None:
        self._lines.clear()

    @property
    def lines(self) -> Tuple[CartLine, ...]:
        """Snapshot of the current lines."""
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(tuple(self._lines))
