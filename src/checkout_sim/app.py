# src/checkout_sim/app.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Optional, Tuple

from .cart import Cart, CartLine
from .catalog import Catalog, Product
from .errors import CapacityExceededError, CheckoutError, CheckoutFailedError
from .ledger import FileOrderSink, Order, OrderLedger
from .metrics import CART_ITEMS_ADDED_TOTAL, CHECKOUT_AMOUNT, CHECKOUT_ERROR_TOTAL, ORDERS_TOTAL
from .payment_service import CURRENCY_SYMBOL, PaymentMethod
from .settings import Settings

logger = logging.getLogger(__name__)


def _error_type(ex: CheckoutFailedError) -> str:
    cause = ex.cause
    if isinstance(cause, CapacityExceededError):
        return "ledger_full"
    if isinstance(cause, CheckoutError):
        return "invalid_cart"
    return "payment_failure"


class CheckoutApp:
    """
    Business logic for the checkout simulator. Exposes catalogue lookup, cart
    management, checkout and order history. Holds no console I/O other than
    the payment confirmation it passes through ``echo``.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        cart: Cart | None = None,
        ledger: OrderLedger | None = None,
        echo: Optional[Callable[[str], None]] = None,
        currency: str = CURRENCY_SYMBOL,
    ) -> None:
        self.catalog = catalog if catalog is not None else Catalog()
        self.cart = cart if cart is not None else Cart()
        self.ledger = ledger if ledger is not None else OrderLedger()
        self.echo = echo if echo is not None else print
        self.currency = currency

    @classmethod
    def from_settings(cls, settings: Settings, echo: Optional[Callable[[str], None]] = None) -> "CheckoutApp":
        """Wire an app with capacities, order log and currency from ``settings``."""
        ledger = OrderLedger(
            capacity=settings.order_capacity,
            sink=FileOrderSink(settings.order_log_path),
        )
        return cls(
            cart=Cart(capacity=settings.cart_capacity),
            ledger=ledger,
            echo=echo,
            currency=settings.currency,
        )

    # ---- Product catalogue ----

    def list_products(self) -> Tuple[Product, ...]:
        return self.catalog.list_all()

    def find_product(self, product_id: str) -> Product:
        return self.catalog.find_by_id(product_id)

    # ---- Cart operations ----

    def add_to_cart(self, product_id: str, quantity: int) -> CartLine:
        """Look up ``product_id`` and append ``quantity`` units to the cart.

        Raises:
            ProductNotFoundError: unknown product id.
            InvalidInputError: non-positive quantity.
            CapacityExceededError: the cart is full.
        """
        product = self.catalog.find_by_id(product_id)
        line = self.cart.add_item(product, quantity)
        CART_ITEMS_ADDED_TOTAL.inc()
        logger.info(
            f"Added {quantity} x {product.name} to cart",
            extra={"extra": {"product_id": product.id, "cart_lines": len(self.cart)}},
        )
        return line

    def view_cart(self) -> Tuple[CartLine, ...]:
        return self.cart.lines

    def cart_total(self) -> Decimal:
        return self.cart.total()

    def cart_is_empty(self) -> bool:
        return self.cart.is_empty()

    # ---- Checkout ----

    def checkout(self, payment_method: PaymentMethod) -> Order:
        """Pay for the cart and record the order.

        The cart is cleared only after the ledger has returned an order; on
        failure it keeps all of its lines so the user can retry.

        Raises:
            CheckoutFailedError: with the original failure as ``__cause__``.
        """
        try:
            order = self.ledger.checkout(
                self.cart, payment_method, echo=self.echo, currency=self.currency
            )
        except CheckoutFailedError as ex:
            CHECKOUT_ERROR_TOTAL.inc(type=_error_type(ex))
            logger.warning(
                f"Checkout failed: {ex.cause}",
                extra={"payment_method": payment_method.display_name},
            )
            raise

        self.cart.clear()
        ORDERS_TOTAL.inc(payment_method=payment_method.display_name)
        CHECKOUT_AMOUNT.observe(float(order.total_amount), payment_method=payment_method.display_name)
        return order

    # ---- Order history ----

    def order_history(self) -> Tuple[Order, ...]:
        return self.ledger.history()

    def order_count(self) -> int:
        return self.ledger.order_count()
