"""Scalar capability contract for the leaves of a Taylor tower.

Any number type used as the value of a :class:`~taylorkit.taylor_number.TaylorNumber`
must be closed under ``+``, ``-``, ``*``, ``/`` and unary ``-`` and must have
additive and multiplicative identities. Python ``float`` is the reference
scalar; ``numpy.floating`` values and ``fractions.Fraction`` work as well.

Identities are looked up on the scalar type: a type may provide ``zero()``
and ``one()`` classmethods, otherwise ``scalar_type(0)`` and
``scalar_type(1)`` are used.
"""

from __future__ import annotations

from typing import Any, Protocol

import numpy as np

__all__ = [
    "NotATaylorScalar",
    "TaylorScalar",
    "check_taylor_scalar",
    "is_scalar_one",
    "is_scalar_zero",
    "is_taylor_scalar",
    "one_of",
    "zero_of",
]

_REQUIRED_OPERATIONS = ("__add__", "__sub__", "__mul__", "__truediv__", "__neg__")


class NotATaylorScalar(TypeError):
    """Raises when a value cannot be used as the leaf of a Taylor tower."""


class TaylorScalar(Protocol):
    """Protocol each leaf scalar must satisfy.

    Purely structural: it lists the closed field operations and carries
    no runtime behavior.
    """

    def __add__(self, other: Any) -> Any:
        ...

    def __sub__(self, other: Any) -> Any:
        ...

    def __mul__(self, other: Any) -> Any:
        ...

    def __truediv__(self, other: Any) -> Any:
        ...

    def __neg__(self) -> Any:
        ...


def is_taylor_scalar(value: Any) -> bool:
    """Checks whether ``value`` satisfies the scalar capability contract.

    Booleans and numpy arrays are rejected even though they support the
    operations. Towers are rejected by the tower constructor itself.

    Args:
        value: Candidate leaf value.

    Returns:
        True if ``value`` can be stored as the real part of a tower.
    """
    if isinstance(value, (bool, np.bool_, np.ndarray)):
        return False
    return all(hasattr(value, op) for op in _REQUIRED_OPERATIONS)


def check_taylor_scalar(value: Any, *, where: str) -> None:
    """Raises if ``value`` is not a valid tower leaf.

    Args:
        value: Candidate leaf value.
        where: Context string for error messages.

    Raises:
        NotATaylorScalar: If ``value`` does not satisfy the contract.
    """
    if not is_taylor_scalar(value):
        raise NotATaylorScalar(
            f"{where}: expected a scalar supporting + - * / and unary -; "
            f"got {type(value).__name__}."
        )


def zero_of(scalar_type: type) -> Any:
    """Returns the additive identity of ``scalar_type``."""
    zero = getattr(scalar_type, "zero", None)
    if callable(zero):
        return zero()
    return scalar_type(0)


def one_of(scalar_type: type) -> Any:
    """Returns the multiplicative identity of ``scalar_type``."""
    one = getattr(scalar_type, "one", None)
    if callable(one):
        return one()
    return scalar_type(1)


def is_scalar_zero(value: Any) -> bool:
    """True if ``value`` equals the additive identity of its own type."""
    return bool(value == zero_of(type(value)))


def is_scalar_one(value: Any) -> bool:
    """True if ``value`` equals the multiplicative identity of its own type."""
    return bool(value == one_of(type(value)))
