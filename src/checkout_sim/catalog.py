"""Read-only product catalogue.

The catalogue is fixed when it is constructed; nothing in the application
adds, removes or reprices products afterwards.  Identifiers are matched
case-insensitively by upper-casing both sides.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, Iterator, Tuple

from .errors import ProductNotFoundError


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: Decimal

    def __post_init__(self) -> None:
        # Normalise so lookups only ever need to upper-case the query.
        object.__setattr__(self, "id", self.id.upper())
        object.__setattr__(self, "price", Decimal(self.price))
        if self.price < 0:
            raise ValueError(f"Price of {self.id} must be non-negative")


DEFAULT_PRODUCTS: Tuple[Product, ...] = (
    Product("A1B2C3", "C2 Green Tea", Decimal("32.00")),
    Product("X9Y8Z7", "Zesto Juice Drink", Decimal("14.00")),
    Product("P4Q5R6", "Cobra Energy Drink", Decimal("29.00")),
    Product("M7N8O9", "1.5L Royal", Decimal("75.00")),
    Product("J1K2L3", "Milo", Decimal("12.50")),
)


class Catalog:
    """Fixed, ordered collection of :class:`Product` records."""

    def __init__(self, products: Iterable[Product] = DEFAULT_PRODUCTS) -> None:
        self._products: Tuple[Product, ...] = tuple(products)
        self._by_id: Dict[str, Product] = {}
        for p in self._products:
            if p.id in self._by_id:
                raise ValueError(f"Duplicate product id: {p.id}")
            self._by_id[p.id] = p

    def find_by_id(self, product_id: str) -> Product:
        """Return the product whose id matches ``product_id`` ignoring case.

        Raises:
            ProductNotFoundError: if no product matches.
        """
        product = self._by_id.get(product_id.upper())
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def list_all(self) -> Tuple[Product, ...]:
        return self._products

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)
