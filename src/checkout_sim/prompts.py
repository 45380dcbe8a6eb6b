"""Line-based console prompts with validation loops.

Parsing is split from prompting: the ``parse_*`` functions raise
:class:`InvalidInputError` for bad input, and :class:`Prompter` keeps
asking until a parse succeeds.  Reading and writing go through injectable
callables so tests can script a session.
"""

from __future__ import annotations

from typing import Callable, Optional

from .errors import InvalidInputError

_DIGITS = frozenset("0123456789")

EMPTY_MESSAGE = "Input cannot be empty. Please try again."


def parse_int(raw: str) -> int:
    """Parse a positive whole number.

    Only ASCII digits are accepted, so signs, spaces and decimal points are
    all rejected.  Zero is rejected as well.
    """
    if raw == "":
        raise InvalidInputError(EMPTY_MESSAGE)
    if not all(ch in _DIGITS for ch in raw):
        raise InvalidInputError("Input must be a valid positive whole integer.")
    try:
        value = int(raw)
    except ValueError:
        # Digit strings beyond the interpreter's int conversion limit
        raise InvalidInputError("Input must be a valid positive whole integer.") from None
    if value == 0:
        raise InvalidInputError("Input cannot be zero. Please try again.")
    return value


def parse_text(raw: str) -> str:
    if raw == "":
        raise InvalidInputError(EMPTY_MESSAGE)
    return raw


def parse_yes_no(raw: str) -> str:
    """Return ``"Y"`` or ``"N"`` for a single-letter answer in either case."""
    if raw == "":
        raise InvalidInputError(EMPTY_MESSAGE)
    if len(raw) > 1 or raw.upper() not in ("Y", "N"):
        raise InvalidInputError("Invalid input. Please enter 'Y' or 'N'.")
    return raw.upper()


class Prompter:
    """Ask for input until it validates, echoing the reason for each rejection."""

    def __init__(
        self,
        read: Optional[Callable[[str], str]] = None,
        write: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.read = read if read is not None else input
        self.write = write if write is not None else print

    def _ask(self, prompt: str, parse: Callable[[str], object]):
        while True:
            raw = self.read(prompt)
            try:
                return parse(raw)
            except InvalidInputError as e:
                self.write(e.reason)

    def ask_int(self, prompt: str) -> int:
        return self._ask(prompt, parse_int)

    def ask_text(self, prompt: str) -> str:
        return self._ask(prompt, parse_text)

    def ask_yes_no(self, prompt: str) -> str:
        return self._ask(prompt, parse_yes_no)

    def confirm(self, prompt: str) -> bool:
        return self.ask_yes_no(prompt) == "Y"
