"""Numeric helpers shared by every scoring component.

Composite scores are weighted sums over values that may come from
degenerate inputs (empty series, zero denominators). NaN silently absorbs
everything it touches, so each composite passes through ``sanitize``
before it is clamped.
"""

import math
from typing import Iterable, List, Sequence


def sanitize(value, default: float = 0.0) -> float:
    """Coerce a value to a finite float.

    Args:
        value: Any numeric-like value
        default: Replacement for NaN, infinities and non-numeric input

    Returns:
        A finite float
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default

    if math.isnan(number) or math.isinf(number):
        return default

    return number


def clamp(value, lower: float, upper: float) -> float:
    """Sanitize a value and clamp it into ``[lower, upper]``."""
    return max(lower, min(upper, sanitize(value)))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up.

    The built-in ``round`` uses banker's rounding, which would move
    integer-valued scores at exact .5 boundaries.
    """
    return int(math.floor(sanitize(value) + 0.5))


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation, 0 for fewer than two values."""
    if len(values) < 2:
        return 0.0

    average = mean(values)
    variance = sum((v - average) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def relative_changes(prices: Sequence[float], absolute: bool = False) -> List[float]:
    """Successive relative changes ``(p[i] - p[i-1]) / p[i-1]``.

    Args:
        prices: Ordered price samples
        absolute: Return absolute values of the changes

    Returns:
        List with ``len(prices) - 1`` entries (empty below two samples)
    """
    changes = []
    for previous, current in zip(prices, prices[1:]):
        change = (current - previous) / max(1e-12, previous)
        changes.append(abs(change) if absolute else change)
    return changes


def std_dev_relative_changes(prices: Sequence[float]) -> float:
    """Standard deviation of signed relative price changes."""
    return sanitize(std_dev(relative_changes(prices)))


def safe_ratio(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` when the denominator is ~0."""
    if abs(denominator) < 1e-12:
        return default
    return sanitize(numerator / denominator, default)


def count_where(items: Iterable, predicate) -> int:
    return sum(1 for item in items if predicate(item))
