"""
Command‑line interface for the checkout simulator.

This module wires the ``CheckoutApp`` class into an interactive menu loop.
It prompts the user for input, invokes methods on the ``CheckoutApp``
instance and prints results.  Separating the CLI from the business logic
keeps the latter testable and free from I/O code.
"""

from __future__ import annotations

import enum
import logging
import sys
from typing import Callable, Iterable, List, Optional

from . import logging_config
from .app import CheckoutApp
from .cart import CartLine
from .catalog import Product
from .errors import CheckoutError
from .ledger import Order
from .metrics import generate_metrics_text
from .payment_service import PaymentMethod, format_amount
from .prompts import Prompter
from .settings import Settings

logger = logging.getLogger(__name__)

_COLUMNS = (("Product ID", 15), ("Name", 20), ("Price", 10), ("Quantity", 10))


class Screen(enum.Enum):
    MAIN_MENU = "main_menu"
    BROWSING = "browsing"
    CART_VIEW = "cart_view"
    HISTORY_VIEW = "history_view"
    SELECT_PAYMENT = "select_payment"
    CHECKOUT = "checkout"
    EXITED = "exited"


def _row(cells: Iterable[str], with_quantity: bool) -> str:
    columns = _COLUMNS if with_quantity else _COLUMNS[:3]
    return "".join(str(cell).ljust(width) for cell, (_, width) in zip(cells, columns)).rstrip()


def format_product_table(products: Iterable[Product]) -> List[str]:
    lines = [_row((name for name, _ in _COLUMNS[:3]), with_quantity=False)]
    for p in products:
        lines.append(_row((p.id, p.name, f"{p.price:.2f}"), with_quantity=False))
    return lines


def format_cart_lines(cart_lines: Iterable[CartLine]) -> List[str]:
    lines = [_row((name for name, _ in _COLUMNS), with_quantity=True)]
    for ln in cart_lines:
        p = ln.product
        lines.append(_row((p.id, p.name, f"{p.price:.2f}", str(ln.quantity)), with_quantity=True))
    return lines


def format_order(order: Order, currency: str) -> List[str]:
    lines = [
        "",
        f"Order ID: {order.order_id}",
        f"Total Amount: {format_amount(order.total_amount, currency)}",
        f"Payment Method: {order.payment_method.display_name}",
        "Order Details:",
    ]
    lines.extend(format_cart_lines(order.lines))
    return lines


class CheckoutShell:
    """Interactive menu loop over a :class:`CheckoutApp`.

    ``run`` walks the screens MAIN_MENU -> {BROWSING, CART_VIEW,
    HISTORY_VIEW} -> MAIN_MENU until the user picks Exit, and returns the
    process exit status.
    """

    def __init__(
        self,
        app: CheckoutApp,
        prompter: Optional[Prompter] = None,
        write: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.app = app
        self.write = write if write is not None else print
        self.prompter = prompter if prompter is not None else Prompter(write=write)
        self.screen = Screen.MAIN_MENU

    def _print_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line)

    def _money(self, amount) -> str:
        return format_amount(amount, self.app.currency)

    # ---- screens ----

    def print_menu(self) -> None:
        self.write("\n===== Main Menu =====")
        self.write("1. View Products")
        self.write("2. View Shopping Cart")
        self.write("3. View Orders")
        self.write("4. Exit")

    def browse(self) -> None:
        self.screen = Screen.BROWSING
        self.write("\n----- Available Products -----")
        self._print_lines(format_product_table(self.app.list_products()))
        while True:
            try:
                product_id = self.prompter.ask_text(
                    "\nEnter the ID of the product you want to add in the shopping cart: "
                )
                product = self.app.find_product(product_id)
                quantity = self.prompter.ask_int("Enter quantity: ")
                self.app.add_to_cart(product.id, quantity)
                self.write("Product added successfully!")
                if not self.prompter.confirm("Do you want to add another product? (Y/N): "):
                    break
            except CheckoutError as e:
                self.write(str(e))
                if not self.prompter.confirm("Do you want to try again? (Y/N): "):
                    break
        self.screen = Screen.MAIN_MENU

    def select_payment_method(self) -> PaymentMethod:
        self.screen = Screen.SELECT_PAYMENT
        while True:
            self.write("\nSelect payment method:")
            for method in PaymentMethod:
                self.write(f"{method.choice}. {method.display_name}")
            choice = self.prompter.ask_int(f"Enter your choice (1-{len(PaymentMethod)}): ")
            try:
                return PaymentMethod.from_choice(choice)
            except CheckoutError:
                self.write(f"Invalid choice. Please enter a number between 1 and {len(PaymentMethod)}.")

    def view_cart(self) -> None:
        self.screen = Screen.CART_VIEW
        try:
            if self.app.cart_is_empty():
                self.write("Your shopping cart is empty. Please add products before checking out.")
                return
            self.write("\n----- Shopping Cart -----")
            self._print_lines(format_cart_lines(self.app.view_cart()))
            self.write(f"\nTotal Amount: {self._money(self.app.cart_total())}")

            if not self.prompter.confirm("\nDo you want to check out all the products? (Y/N): "):
                return
            method = self.select_payment_method()
            self.screen = Screen.CHECKOUT
            try:
                order = self.app.checkout(method)
            except CheckoutError as e:
                self.write(f"Error: {e}")
                return
            self.write("\nYou have successfully checked out the products!")
            self.write(f"Order ID: {order.order_id} - Total paid: {self._money(order.total_amount)}")
        finally:
            self.screen = Screen.MAIN_MENU

    def view_orders(self) -> None:
        self.screen = Screen.HISTORY_VIEW
        orders = self.app.order_history()
        if not orders:
            self.write("No orders to display.")
        else:
            self.write("\n----- Order History -----")
            for order in orders:
                self._print_lines(format_order(order, self.app.currency))
        self.screen = Screen.MAIN_MENU

    # ---- main loop ----

    def run(self) -> int:
        self.write("===== Welcome to the E-commerce Checkout System =====")
        actions = {1: self.browse, 2: self.view_cart, 3: self.view_orders}
        self.screen = Screen.MAIN_MENU
        while self.screen is not Screen.EXITED:
            try:
                self.print_menu()
                choice = self.prompter.ask_int("Enter your choice (1-4): ")
                if choice == 4:
                    self.write("Thank you for using the E-commerce System. Goodbye!")
                    self.screen = Screen.EXITED
                    break
                action = actions.get(choice)
                if action is None:
                    self.write("Invalid choice. Please enter a number between 1 and 4.")
                    continue
                action()
            except (EOFError, KeyboardInterrupt):
                raise
            except Exception as e:
                # Keep the session alive on anything unexpected
                logger.exception("Unexpected error in menu loop")
                self.write(f"An error occurred: {e}")
                self.write("Please try again.")
                self.screen = Screen.MAIN_MENU
        return 0


def interactive_cli(settings: Optional[Settings] = None) -> int:
    """Run an interactive session and return its exit status."""
    settings = settings if settings is not None else Settings.from_env()
    app = CheckoutApp.from_settings(settings)
    shell = CheckoutShell(app)
    try:
        return shell.run()
    finally:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Session finished",
                extra={"extra": {"orders": app.order_count(), "metrics": generate_metrics_text()}},
            )


def main() -> None:
    """Console entry point: configure logging, run a session, exit with its status."""
    settings = Settings.from_env()
    logging_config.configure_logging(settings.log_dir, level=settings.log_level_value)
    try:
        status = interactive_cli(settings)
    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted by user. Exiting.")
        status = 0
    sys.exit(status)


if __name__ == "__main__":
    main()
