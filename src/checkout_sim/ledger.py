"""Order ledger: turns a cart into an immutable order.

The ledger keeps the in-memory order history, allocates order ids and hands
every completed order to an :class:`OrderSink`.  The default sink appends a
one-line record to a plain-text log file that the program never reads back.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, UTC
from decimal import Decimal
from typing import Callable, List, Tuple

from .cart import Cart, CartLine
from .errors import CapacityExceededError, CheckoutFailedError, InvalidInputError
from .payment_service import CURRENCY_SYMBOL, PaymentMethod

logger = logging.getLogger(__name__)

DEFAULT_ORDER_CAPACITY = 10


@dataclass(frozen=True)
class Order:
    order_id: int
    lines: Tuple[CartLine, ...]
    payment_method: PaymentMethod
    total_amount: Decimal
    placed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def item_count(self) -> int:
        return len(self.lines)


def format_log_line(order: Order) -> str:
    return (
        f"[LOG] -> Order ID: {order.order_id} has been successfully checked out "
        f"and paid using {order.payment_method.display_name}"
    )


class OrderSink:
    """Destination for completed orders."""

    def record(self, order: Order) -> bool:
        raise NotImplementedError


class NullOrderSink(OrderSink):
    """Discard orders; used when no log file is wanted."""

    def record(self, order: Order) -> bool:
        return True


class FileOrderSink(OrderSink):
    """Append one line per order to a text file.

    Write failures are logged and reported as ``False``; they never
    propagate, so a checkout that otherwise succeeded stays successful.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def record(self, order: Order) -> bool:
        try:
            parent = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(parent, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as fh:
                fh.write(format_log_line(order) + "\n")
        except OSError as e:
            logger.warning(
                f"Could not write order log: {e}",
                extra={"order_id": order.order_id, "extra": {"path": self.path}},
            )
            return False
        return True


class OrderLedger:
    """
    Bounded, append-only history of completed orders.

    Order ids start at 1 and are never reused.  The ledger does not clear the
    cart it checks out; that is the caller's job once an order is returned.
    """

    def __init__(self, capacity: int = DEFAULT_ORDER_CAPACITY, sink: OrderSink | None = None) -> None:
        if capacity <= 0:
            raise ValueError("Ledger capacity must be positive")
        self.capacity = capacity
        self.sink: OrderSink = sink if sink is not None else NullOrderSink()
        self._orders: List[Order] = []
        self._next_order_id = 1

    @property
    def next_order_id(self) -> int:
        return self._next_order_id

    @property
    def is_full(self) -> bool:
        return len(self._orders) >= self.capacity

    def checkout(
        self,
        cart: Cart,
        payment_method: PaymentMethod,
        echo: Callable[[str], None] = print,
        currency: str = CURRENCY_SYMBOL,
    ) -> Order:
        """Charge ``cart.total()`` with ``payment_method`` and record an order.

        Raises:
            CheckoutFailedError: on any failure (empty cart, declined payment,
                full ledger).  The original exception is chained as the cause.
        """
        amount = cart.total()
        try:
            if cart.is_empty():
                raise InvalidInputError("Cannot check out an empty cart.")
            approved = payment_method.process(amount, echo=echo, currency=currency)
            if not approved:
                raise RuntimeError(f"{payment_method.display_name} payment was declined")
            if self.is_full:
                raise CapacityExceededError("Orders database", self.capacity)

            order = Order(
                order_id=self._next_order_id,
                lines=cart.lines,
                payment_method=payment_method,
                total_amount=amount,
            )
            self._next_order_id += 1
            self._orders.append(order)
        except Exception as ex:
            raise CheckoutFailedError(payment_method.display_name, cause=ex) from ex

        # The order is already in the ledger; a failing sink must not undo the checkout
        try:
            self.sink.record(order)
        except Exception as e:
            logger.warning(
                f"Order sink failed: {e}",
                extra={"order_id": order.order_id, "extra": {"sink": type(self.sink).__name__}},
            )
        logger.info(
            "Order recorded",
            extra={
                "order_id": order.order_id,
                "payment_method": payment_method.display_name,
                "extra": {"total": str(order.total_amount), "lines": order.item_count},
            },
        )
        return order

    def history(self) -> Tuple[Order, ...]:
        return tuple(self._orders)

    def order_count(self) -> int:
        return len(self._orders)

    def __len__(self) -> int:
        return len(self._orders)
