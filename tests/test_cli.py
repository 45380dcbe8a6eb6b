# --- path/bootstrap (keep this at the very top) ---
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if SRC.is_dir() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
# --- end path/bootstrap ---

import os
import tempfile
import unittest
from decimal import Decimal
from unittest import mock

from checkout_sim import cli
from checkout_sim.app import CheckoutApp
from checkout_sim.cli import CheckoutShell, Screen, format_order
from checkout_sim.errors import InvalidInputError
from checkout_sim.ledger import OrderLedger
from checkout_sim.payment_service import PaymentMethod
from checkout_sim.prompts import Prompter, parse_int, parse_text, parse_yes_no
from checkout_sim.settings import Settings


class ScriptedConsole:
    """Feeds canned answers to prompts and records everything written."""

    def __init__(self, *answers: str):
        self._answers = list(answers)
        self.prompts = []
        self.output = []

    def read(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError("script exhausted")
        return self._answers.pop(0)

    def write(self, text: str) -> None:
        self.output.append(text)

    @property
    def remaining(self):
        return list(self._answers)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


class TestParsers(unittest.TestCase):

    def test_parse_int_accepts_digits(self):
        self.assertEqual(parse_int("3"), 3)
        self.assertEqual(parse_int("042"), 42)

    def test_parse_int_rejections(self):
        cases = {
            "": "Input cannot be empty",
            "-5": "valid positive whole integer",
            "+5": "valid positive whole integer",
            "3.0": "valid positive whole integer",
            " 3": "valid positive whole integer",
            "abc": "valid positive whole integer",
            "٣": "valid positive whole integer",
            "0": "cannot be zero",
            "000": "cannot be zero",
            "9" * 5000: "valid positive whole integer",
        }
        for raw, expected in cases.items():
            with self.assertRaises(InvalidInputError, msg=repr(raw)) as ctx:
                parse_int(raw)
            self.assertIn(expected, str(ctx.exception))

    def test_parse_text(self):
        self.assertEqual(parse_text("  a1b2c3 "), "  a1b2c3 ")
        with self.assertRaises(InvalidInputError):
            parse_text("")

    def test_parse_yes_no(self):
        self.assertEqual(parse_yes_no("y"), "Y")
        self.assertEqual(parse_yes_no("N"), "N")
        for bad in ("", "yes", "x", "YY", " "):
            with self.assertRaises(InvalidInputError):
                parse_yes_no(bad)


class TestPrompter(unittest.TestCase):

    def test_int_prompt_loops_until_valid(self):
        console = ScriptedConsole("0", "-5", "3")
        prompter = Prompter(read=console.read, write=console.write)
        self.assertEqual(prompter.ask_int("Enter quantity: "), 3)
        self.assertEqual(console.prompts, ["Enter quantity: "] * 3)
        self.assertEqual(
            console.output,
            [
                "Input cannot be zero. Please try again.",
                "Input must be a valid positive whole integer.",
            ],
        )

    def test_text_prompt_rejects_empty(self):
        console = ScriptedConsole("", "hello")
        prompter = Prompter(read=console.read, write=console.write)
        self.assertEqual(prompter.ask_text("> "), "hello")
        self.assertEqual(console.output, ["Input cannot be empty. Please try again."])

    def test_confirm(self):
        console = ScriptedConsole("", "maybe", "y", "n")
        prompter = Prompter(read=console.read, write=console.write)
        self.assertTrue(prompter.confirm("? "))
        self.assertFalse(prompter.confirm("? "))
        self.assertEqual(
            console.output,
            ["Input cannot be empty. Please try again.", "Invalid input. Please enter 'Y' or 'N'."],
        )

    def test_oversized_number_reprompts(self):
        console = ScriptedConsole("9" * 5000, "3")
        prompter = Prompter(read=console.read, write=console.write)
        self.assertEqual(prompter.ask_int("Enter quantity: "), 3)
        self.assertEqual(console.output, ["Input must be a valid positive whole integer."])

    def test_empty_int_message_is_unprefixed(self):
        console = ScriptedConsole("", "1")
        prompter = Prompter(read=console.read, write=console.write)
        self.assertEqual(prompter.ask_int("q: "), 1)
        self.assertEqual(console.output, ["Input cannot be empty. Please try again."])


class TestCheckoutShell(unittest.TestCase):

    def make_shell(self, *answers, ledger=None):
        console = ScriptedConsole(*answers)
        app = CheckoutApp(ledger=ledger, echo=console.write)
        shell = CheckoutShell(app, Prompter(console.read, console.write), write=console.write)
        return shell, app, console

    def test_exit_returns_zero(self):
        shell, _, console = self.make_shell("4")
        self.assertEqual(shell.run(), 0)
        self.assertIs(shell.screen, Screen.EXITED)
        self.assertIn("Goodbye!", console.output[-1])

    def test_out_of_range_menu_choice(self):
        shell, _, console = self.make_shell("7", "4")
        self.assertEqual(shell.run(), 0)
        self.assertIn("Invalid choice. Please enter a number between 1 and 4.", console.output)

    def test_browse_add_and_checkout_with_cash(self):
        shell, app, console = self.make_shell(
            "1",                     # view products
            "A1B2C3", "1", "Y",      # tea x1, add another
            "x9y8z7", "3", "N",      # juice x3, done
            "2", "Y", "1",           # view cart, check out, cash
            "3",                     # order history
            "4",
        )
        self.assertEqual(shell.run(), 0)
        self.assertEqual(console.remaining, [])
        self.assertTrue(app.cart_is_empty())
        orders = app.order_history()
        self.assertEqual(len(orders), 1)
        self.assertEqual(orders[0].total_amount, Decimal("74.00"))
        self.assertIs(orders[0].payment_method, PaymentMethod.CASH)
        self.assertIn("Total Amount: ₱74.00", console.output)
        self.assertIn("Processing cash payment of ₱74.00", console.output)
        self.assertIn("\nYou have successfully checked out the products!", console.output)
        self.assertIn("Payment Method: Cash", console.output)

    def test_unknown_product_offers_retry(self):
        shell, app, console = self.make_shell(
            "1", "NOPE", "Y", "m7n8o9", "2", "N", "4",
        )
        shell.run()
        self.assertIn("Product with ID 'NOPE' not found!", console.output)
        self.assertEqual(len(app.view_cart()), 1)
        self.assertEqual(app.cart_total(), Decimal("150.00"))

    def test_unknown_product_without_retry_returns_to_menu(self):
        shell, app, console = self.make_shell("1", "NOPE", "N", "4")
        self.assertEqual(shell.run(), 0)
        self.assertTrue(app.cart_is_empty())

    def test_full_cart_reported(self):
        answers = ["1"]
        for _ in range(10):
            answers += ["J1K2L3", "1", "Y"]
        answers += ["J1K2L3", "1", "N", "4"]
        shell, app, console = self.make_shell(*answers)
        shell.run()
        self.assertIn("Shopping Cart is full. Cannot add more items.", console.output)
        self.assertEqual(len(app.view_cart()), 10)

    def test_empty_cart_view(self):
        shell, _, console = self.make_shell("2", "4")
        shell.run()
        self.assertIn(
            "Your shopping cart is empty. Please add products before checking out.", console.output
        )

    def test_declining_checkout_keeps_cart(self):
        shell, app, _ = self.make_shell("1", "J1K2L3", "2", "N", "2", "N", "4")
        shell.run()
        self.assertEqual(app.cart_total(), Decimal("25.00"))
        self.assertEqual(app.order_count(), 0)

    def test_invalid_payment_choice_reprompts(self):
        shell, app, console = self.make_shell("1", "P4Q5R6", "1", "N", "2", "Y", "9", "3", "4")
        shell.run()
        self.assertIn("Invalid choice. Please enter a number between 1 and 3.", console.output)
        self.assertIs(app.order_history()[0].payment_method, PaymentMethod.GCASH)

    def test_checkout_failure_reported_and_cart_kept(self):
        shell, app, console = self.make_shell(
            "1", "A1B2C3", "1", "N", "2", "Y", "1",    # first order, paid in cash
            "1", "X9Y8Z7", "2", "N", "2", "Y", "2",    # second order, ledger is full
            "4",
            ledger=OrderLedger(capacity=1),
        )
        self.assertEqual(shell.run(), 0)
        self.assertIn("Error: Payment failed with method: Credit / Debit Card", console.output)
        self.assertEqual(app.order_count(), 1)
        self.assertEqual(len(app.view_cart()), 1)
        self.assertEqual(app.cart_total(), Decimal("28.00"))

    def test_no_orders_message(self):
        shell, _, console = self.make_shell("3", "4")
        shell.run()
        self.assertIn("No orders to display.", console.output)

    def test_unexpected_error_keeps_session_alive(self):
        shell, app, console = self.make_shell("1", "4")
        with mock.patch.object(app, "list_products", side_effect=RuntimeError("boom")):
            with self.assertLogs("checkout_sim.cli", level="ERROR"):
                self.assertEqual(shell.run(), 0)
        self.assertIn("An error occurred: boom", console.output)
        self.assertIn("Please try again.", console.output)

    def test_end_of_input_propagates(self):
        shell, _, _ = self.make_shell("1")
        with self.assertRaises(EOFError):
            shell.run()

    def test_format_order(self):
        app = CheckoutApp(echo=lambda _m: None)
        app.add_to_cart("J1K2L3", 2)
        order = app.checkout(PaymentMethod.CARD)
        lines = format_order(order, "₱")
        self.assertIn("Order ID: 1", lines)
        self.assertIn("Total Amount: ₱25.00", lines)
        self.assertIn("Payment Method: Credit / Debit Card", lines)
        self.assertTrue(lines[-1].startswith("J1K2L3"))
        self.assertTrue(lines[-1].endswith("2"))


class TestEntryPoint(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.settings = Settings(
            order_log_path=os.path.join(self.tmpdir.name, "orders.log"),
            log_dir=os.path.join(self.tmpdir.name, "logs"),
        )

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_interactive_cli_writes_order_log(self):
        answers = iter(["1", "A1B2C3", "2", "N", "2", "Y", "3", "4"])
        with mock.patch("builtins.input", lambda _prompt="": next(answers)), \
                mock.patch("builtins.print"):
            status = cli.interactive_cli(self.settings)
        self.assertEqual(status, 0)
        with open(self.settings.order_log_path, encoding="utf-8") as fh:
            self.assertEqual(
                fh.read(),
                "[LOG] -> Order ID: 1 has been successfully checked out and paid using GCash\n",
            )

    def test_metrics_only_rendered_when_debug_enabled(self):
        with mock.patch("builtins.input", return_value="4"), \
                mock.patch("builtins.print"), \
                mock.patch.object(cli, "generate_metrics_text", return_value="") as render:
            with mock.patch.object(cli.logger, "isEnabledFor", return_value=False):
                cli.interactive_cli(self.settings)
            render.assert_not_called()
            with mock.patch.object(cli.logger, "isEnabledFor", return_value=True):
                cli.interactive_cli(self.settings)
            render.assert_called_once()

    def test_main_exits_cleanly(self):
        with mock.patch.object(cli.Settings, "from_env", return_value=self.settings), \
                mock.patch.object(cli.logging_config, "configure_logging") as configure, \
                mock.patch("builtins.input", return_value="4"), \
                mock.patch("builtins.print"):
            with self.assertRaises(SystemExit) as ctx:
                cli.main()
        self.assertEqual(ctx.exception.code, 0)
        configure.assert_called_once()

    def test_main_handles_interrupt(self):
        with mock.patch.object(cli.Settings, "from_env", return_value=self.settings), \
                mock.patch.object(cli.logging_config, "configure_logging"), \
                mock.patch("builtins.input", side_effect=KeyboardInterrupt), \
                mock.patch("builtins.print"):
            with self.assertRaises(SystemExit) as ctx:
                cli.main()
        self.assertEqual(ctx.exception.code, 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
