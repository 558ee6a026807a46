"""Input validation for transactions, profit tables and mining thresholds."""

from __future__ import annotations

import math
from fractions import Fraction
from numbers import Real
from typing import Any

from .exceptions import InvalidProfit, InvalidQuantity, InvalidThreshold


def _is_real(value: Any) -> bool:
    # bool is a Real subclass but never a meaningful quantity
    return isinstance(value, Real) and not isinstance(value, bool)


def check_quantity(item: Any, quantity: Any) -> None:
    """Raise :class:`InvalidQuantity` unless *quantity* is a finite number > 0."""
    if not _is_real(quantity):
        raise InvalidQuantity(f"Quantity of item {item!r} must be a number, got {type(quantity).__name__}.")
    if math.isnan(quantity) or math.isinf(quantity) or quantity <= 0:
        raise InvalidQuantity(f"Quantity of item {item!r} must be a positive number. Got {quantity}.")


def check_profit(item: Any, profit: Any) -> None:
    """Raise :class:`InvalidProfit` unless *profit* is a finite number >= 0."""
    if not _is_real(profit):
        raise InvalidProfit(f"Profit of item {item!r} must be a number, got {type(profit).__name__}.")
    if math.isnan(profit) or math.isinf(profit) or profit < 0:
        raise InvalidProfit(f"Profit of item {item!r} must be a non-negative number. Got {profit}.")


def check_thresholds(min_util: Any, min_occ: Any, max_len: Any = None) -> None:
    """Validate mining thresholds before a search starts.

    Parameters
    ----------
    min_util:
        Minimum utility. Must be a positive number.
    min_occ:
        Minimum average occupancy. Must lie within ``[0, 1]``.
    max_len:
        Optional maximum itemset length. ``None`` or a positive int.
    """
    if not _is_real(min_util) or math.isnan(min_util) or min_util <= 0:
        raise InvalidThreshold(f"`min_util` must be a positive number. Got {min_util}.")
    if not _is_real(min_occ) or math.isnan(min_occ) or not 0 <= min_occ <= 1:
        raise InvalidThreshold(f"`min_occ` must be a number within the interval `[0, 1]`. Got {min_occ}.")
    if max_len is not None and (isinstance(max_len, bool) or not isinstance(max_len, int) or max_len < 1):
        raise InvalidThreshold(f"`max_len` must be None or a positive integer. Got {max_len}.")


def occupancy_threshold(min_occ: Any) -> Fraction:
    """Exact rational form of *min_occ* for comparisons against occupancies.

    Floats are read through their shortest decimal repr so that ``0.2`` means
    ``1/5`` rather than the binary value just above it.
    """
    if isinstance(min_occ, float):
        return Fraction(repr(float(min_occ)))
    return Fraction(min_occ)
