"""Validation utilities for taylorkit."""

from __future__ import annotations

import numbers
from typing import Any

__all__ = [
    "validate_order",
]


def validate_order(order: Any, *, where: str, name: str = "order") -> int:
    """Validates a derivative order or exponent and returns it as ``int``.

    Accepts Python and NumPy integers; rejects booleans, floats and negatives.

    Args:
        order: Candidate non-negative integer.
        where: Context string for error messages.
        name: Name of the argument, used in error messages.

    Returns:
        ``order`` as a Python ``int``.

    Raises:
        TypeError: If ``order`` is not an integer.
        ValueError: If ``order`` is negative.
    """
    if isinstance(order, bool) or not isinstance(order, numbers.Integral):
        raise TypeError(f"{where}: {name} must be an integer; got {type(order).__name__}.")
    order = int(order)
    if order < 0:
        raise ValueError(f"{where}: {name} must be >= 0; got {order}.")
    return order
