"""Runtime configuration read from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .cart import DEFAULT_CART_CAPACITY
from .ledger import DEFAULT_ORDER_CAPACITY
from .payment_service import CURRENCY_SYMBOL

logger = logging.getLogger(__name__)


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer; using {default}")
        return default
    if value <= 0:
        logger.warning(f"{name}={raw!r} must be positive; using {default}")
        return default
    return value


@dataclass(frozen=True)
class Settings:
    order_log_path: str = "orders.log"
    log_dir: str = "logs"
    log_level: str = "INFO"
    cart_capacity: int = DEFAULT_CART_CAPACITY
    order_capacity: int = DEFAULT_ORDER_CAPACITY
    currency: str = CURRENCY_SYMBOL

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``CHECKOUT_*`` variables, falling back to defaults."""
        env = os.environ if env is None else env
        return cls(
            order_log_path=env.get("CHECKOUT_ORDER_LOG") or cls.order_log_path,
            log_dir=env.get("CHECKOUT_LOG_DIR") or cls.log_dir,
            log_level=env.get("CHECKOUT_LOG_LEVEL") or cls.log_level,
            cart_capacity=_positive_int(env, "CHECKOUT_CART_CAPACITY", DEFAULT_CART_CAPACITY),
            order_capacity=_positive_int(env, "CHECKOUT_ORDER_CAPACITY", DEFAULT_ORDER_CAPACITY),
            currency=env.get("CHECKOUT_CURRENCY") or cls.currency,
        )
