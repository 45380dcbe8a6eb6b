"""Simple in-process metrics using only the Python standard library.

Counters and histograms are collected in module-level objects and can be
exported in the Prometheus text exposition format.  The checkout simulator
has no HTTP endpoint; the console front end logs the exported text when a
session ends.
"""

from collections import defaultdict
from threading import Lock
from typing import Dict, Iterable, List, Tuple


class Metric:
    """Base class for all metrics."""

    def __init__(self, name: str, description: str, label_names: Iterable[str]):
        self.name = name
        self.description = description
        self.label_names = list(label_names)
        self._lock = Lock()
        _METRIC_REGISTRY.append(self)

    def _label_tuple(self, labels: Dict[str, str]) -> Tuple[str, ...]:
        return tuple(str(labels.get(k, "")) for k in self.label_names)

    def _format_labels(self, label_values: Tuple[str, ...], **more: str) -> str:
        pairs = [f'{name}="{value}"' for name, value in zip(self.label_names, label_values)]
        pairs.extend(f'{name}="{value}"' for name, value in more.items())
        if not pairs:
            return ""
        return "{" + ",".join(pairs) + "}"

    def to_prometheus(self) -> List[str]:
        raise NotImplementedError


class Counter(Metric):
    """Monotonic counter.  ``ORDERS_TOTAL.inc(payment_method="Cash")``."""

    def __init__(self, name: str, description: str, label_names: Iterable[str] = ()):
        super().__init__(name, description, label_names)
        self._values: Dict[Tuple[str, ...], int] = defaultdict(int)

    def inc(self, amount: int = 1, **labels: str) -> None:
        if amount < 0:
            raise ValueError("Counters can only be incremented")
        with self._lock:
            self._values[self._label_tuple(labels)] += amount

    def value(self, **labels: str) -> int:
        with self._lock:
            return self._values.get(self._label_tuple(labels), 0)

    def to_prometheus(self) -> List[str]:
        lines = [f"# HELP {self.name} {self.description}", f"# TYPE {self.name} counter"]
        with self._lock:
            for label_values, value in self._values.items():
                lines.append(f"{self.name}{self._format_labels(label_values)} {value}")
        return lines


class Histogram(Metric):
    """Histogram with fixed, ascending bucket upper bounds.

    Observations above the largest bucket only show up in the ``+Inf``
    bucket, which always equals the observation count.
    """

    def __init__(self, name: str, description: str, label_names: Iterable[str], buckets: Iterable[float]):
        super().__init__(name, description, label_names)
        self.buckets = sorted(float(b) for b in buckets)
        self._counts: Dict[Tuple[str, ...], List[int]] = defaultdict(lambda: [0] * len(self.buckets))
        self._sums: Dict[Tuple[str, ...], float] = defaultdict(float)
        self._totals: Dict[Tuple[str, ...], int] = defaultdict(int)

    def observe(self, value: float, **labels: str) -> None:
        key = self._label_tuple(labels)
        value = float(value)
        with self._lock:
            counts = self._counts[key]
            for idx, upper in enumerate(self.buckets):
                if value <= upper:
                    counts[idx] += 1
            self._totals[key] += 1
            self._sums[key] += value

    def count(self, **labels: str) -> int:
        with self._lock:
            return self._totals.get(self._label_tuple(labels), 0)

    def total(self, **labels: str) -> float:
        with self._lock:
            return self._sums.get(self._label_tuple(labels), 0.0)

    def to_prometheus(self) -> List[str]:
        lines = [f"# HELP {self.name} {self.description}", f"# TYPE {self.name} histogram"]
        with self._lock:
            for key, total in self._totals.items():
                # counts are per bucket already (value <= upper), so no accumulation
                for idx, upper in enumerate(self.buckets):
                    labels = self._format_labels(key, le=str(upper))
                    lines.append(f"{self.name}_bucket{labels} {self._counts[key][idx]}")
                lines.append(f"{self.name}_bucket{self._format_labels(key, le='+Inf')} {total}")
                lines.append(f"{self.name}_sum{self._format_labels(key)} {self._sums[key]}")
                lines.append(f"{self.name}_count{self._format_labels(key)} {total}")
        return lines


_METRIC_REGISTRY: List[Metric] = []


def generate_metrics_text() -> str:
    """Render every registered metric in the Prometheus text format."""
    lines: List[str] = []
    for metric in _METRIC_REGISTRY:
        lines.extend(metric.to_prometheus())
    return "\n".join(lines)


# -----------------------------------------------------------------------------
# Metrics recorded by the checkout simulator (see app.py).
# -----------------------------------------------------------------------------

ORDERS_TOTAL = Counter(
    name="orders_total",
    description="Total number of completed orders, labelled by payment method",
    label_names=["payment_method"],
)

CHECKOUT_ERROR_TOTAL = Counter(
    name="checkout_error_total",
    description="Total number of failed checkouts, labelled by type",
    label_names=["type"],
)

CART_ITEMS_ADDED_TOTAL = Counter(
    name="cart_items_added_total",
    description="Total number of lines added to the shopping cart",
)

CHECKOUT_AMOUNT = Histogram(
    name="checkout_amount",
    description="Amount paid per completed order",
    label_names=["payment_method"],
    buckets=[50, 100, 250, 500, 1000, 2500],
)
