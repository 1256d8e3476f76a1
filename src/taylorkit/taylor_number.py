r"""Provides the TaylorNumber class.

A :class:`TaylorNumber` is a "Taylor tower": a value together with a nested
tower holding its first derivative, which may itself carry a derivative, and
so on. The nesting depth is the order of the tower. A node without a nested
tower is *unperturbed* and stands for a value whose higher derivatives are all
exactly zero.

Arithmetic on towers propagates derivatives forward. Multiplication applies
the product rule recursively, so a function built from ``+``, ``-``, ``*``,
scalar ``/`` and integer ``**`` returns a tower holding every derivative of
the result at the seeded point.

Examples:
---------
The cube of a seeded variable at :math:`x = 3` carries
:math:`(x^3, 3x^2, 6x, 6) = (27, 27, 18, 6)`:

>>> from taylorkit.taylor_number import TaylorNumber
>>> a = TaylorNumber.new(3.0)
>>> a.perturb_by(1.0)
>>> c = a.copy() * a.copy() * a
>>> c.real()
27.0
>>> c.diff().real()
27.0
>>> c.derivative_values()
(27.0, 27.0, 18.0, 6.0)

Notes:
------
Tower-by-tower multiplication recurses once per nesting level, so a product
whose operand orders add up to roughly ``sys.getrecursionlimit()`` raises
``RecursionError``. Every other operation walks the nested chain iteratively.
"""

from __future__ import annotations

from typing import Any

from taylorkit.logger import taylorkit_logger
from taylorkit.scalar import (
    NotATaylorScalar,
    TaylorScalar,
    check_taylor_scalar,
    is_scalar_one,
    is_scalar_zero,
    is_taylor_scalar,
    one_of,
    zero_of,
)
from taylorkit.utils.validate import validate_order

__all__ = ["TaylorNumber"]


class TaylorNumber:
    """Forward-mode jet of a single-variable scalar function.

    ``TaylorNumber(re)`` is the unperturbed (order 0) variant.
    ``TaylorNumber(re, df)`` is the perturbed variant whose first derivative
    is the tower ``df``. Every node exclusively owns its nested tower:
    arithmetic results never share sub-towers with their operands, and the
    extraction methods hand back copies.

    Attributes:
        DEFAULT_SCALAR: Scalar type used by :meth:`zero` and :meth:`one`
            when no ``scalar_type`` is given. Plain ``int`` identities mix
            with float, Fraction and numpy leaves without changing their type.
    """

    __slots__ = ("_real", "_derivative")

    # Let numpy scalars defer to the reflected operators below.
    __array_ufunc__ = None

    DEFAULT_SCALAR: type = int

    def __init__(self, real: TaylorScalar, derivative: TaylorNumber | None = None):
        """Initialises a tower node.

        Args:
            real: The value at the expansion point.
            derivative: Tower of the first derivative, or ``None`` for an
                unperturbed value. The new node takes ownership of it.

        Raises:
            NotATaylorScalar: If ``real`` is a tower or not a valid scalar.
            TypeError: If ``derivative`` is neither ``None`` nor a tower.
        """
        if isinstance(real, TaylorNumber):
            raise NotATaylorScalar("TaylorNumber: a tower cannot be the value of another tower.")
        check_taylor_scalar(real, where="TaylorNumber")
        if derivative is not None and not isinstance(derivative, TaylorNumber):
            raise TypeError(
                "TaylorNumber: derivative must be a TaylorNumber or None; "
                f"got {type(derivative).__name__}."
            )
        self._real = real
        self._derivative = derivative

    @classmethod
    def new(cls, value: TaylorScalar) -> TaylorNumber:
        """Creates an order-0 tower holding ``value``."""
        return cls(value)

    @classmethod
    def zero(cls, scalar_type: type | None = None) -> TaylorNumber:
        """Returns the additive identity, an unperturbed scalar zero."""
        return cls(zero_of(scalar_type or cls.DEFAULT_SCALAR))

    @classmethod
    def one(cls, scalar_type: type | None = None) -> TaylorNumber:
        """Returns the multiplicative identity, an unperturbed scalar one."""
        return cls(one_of(scalar_type or cls.DEFAULT_SCALAR))

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def real(self) -> TaylorScalar:
        """Returns the top-level value."""
        return self._real

    @property
    def is_perturbed(self) -> bool:
        """True if the tower carries a derivative sub-tower."""
        return self._derivative is not None

    @property
    def order(self) -> int:
        """Nesting depth of perturbed nodes."""
        depth = 0
        node = self._derivative
        while node is not None:
            depth += 1
            node = node._derivative
        return depth

    def is_zero(self) -> bool:
        """True if the value and every nested derivative are zero."""
        return all(is_scalar_zero(value) for value in self.derivative_values())

    def copy(self) -> TaylorNumber:
        """Returns an independent copy of the whole nested chain."""
        return _build(self.derivative_values())

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> TaylorNumber:
        return self.copy()

    # ------------------------------------------------------------------
    # Perturbation
    # ------------------------------------------------------------------

    def perturb_by(self, delta: TaylorScalar) -> None:
        """Grows the tower in place by attaching a first derivative ``delta``.

        An unperturbed tower becomes ``TaylorNumber(re, TaylorNumber(delta))``.
        On an already perturbed tower the constant ``delta`` is *added* to the
        existing derivative sub-tower with tower addition, so repeated calls
        accumulate into the current first derivative rather than adding depth.

        Args:
            delta: Scalar first-derivative increment.

        Raises:
            NotATaylorScalar: If ``delta`` is not a valid scalar.
        """
        increment = TaylorNumber(delta)
        if self._derivative is None:
            self._derivative = increment
            return
        taylorkit_logger.debug(
            "perturb_by: accumulating %r into existing derivative %r.",
            delta,
            self._derivative,
        )
        self._derivative = self._derivative + increment

    # ------------------------------------------------------------------
    # Derivative extraction
    # ------------------------------------------------------------------

    def diff(self) -> TaylorNumber:
        """Returns the first-derivative tower.

        Unperturbed towers yield a typed zero so that further extraction
        never fabricates structure.
        """
        return self._diff_view().copy()

    def _diff_view(self) -> TaylorNumber:
        # Shares the sub-tower; only for callers that do not mutate it.
        if self._derivative is None:
            return TaylorNumber(zero_of(type(self._real)))
        return self._derivative

    def derivative(self, nth: int) -> TaylorNumber:
        """Returns ``derivative(nth - 1).diff()``, starting from the bare value.

        ``derivative(0)`` is ``TaylorNumber(self.real())``, which carries no
        derivative information, so every ``nth >= 1`` is the typed zero. Use
        :meth:`nth_diff` for the derivative tower of a given order.

        Args:
            nth: Non-negative derivative order.

        Returns:
            The unperturbed value for ``nth == 0``, a typed zero otherwise.

        Raises:
            TypeError: If ``nth`` is not an integer.
            ValueError: If ``nth`` is negative.
        """
        nth = validate_order(nth, where="TaylorNumber.derivative", name="nth")
        result = TaylorNumber(self._real)
        for _ in range(nth):
            result = result.diff()
        return result

    def nth_diff(self, nth: int) -> TaylorNumber:
        """Returns the ``nth`` derivative tower.

        Applies :meth:`diff` ``nth`` times to the full tower, so the result
        keeps every higher derivative the tower carries beyond ``nth``.
        ``nth_diff(0)`` is a copy of the tower itself.

        Args:
            nth: Non-negative derivative order.

        Returns:
            The derivative tower; a typed zero beyond the tower's order.

        Raises:
            TypeError: If ``nth`` is not an integer.
            ValueError: If ``nth`` is negative.
        """
        nth = validate_order(nth, where="TaylorNumber.nth_diff", name="nth")
        if nth > self.order:
            taylorkit_logger.debug(
                "nth_diff: order %d requested from a tower of order %d; result is zero.",
                nth,
                self.order,
            )
        node = self
        for _ in range(nth):
            node = node._diff_view()
        return node.copy()

    def derivative_values(self) -> tuple[Any, ...]:
        """Returns ``(f, f', f'', ...)`` for every depth the tower carries."""
        values = []
        node = self
        while node is not None:
            values.append(node._real)
            node = node._derivative
        return tuple(values)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Any) -> TaylorNumber:
        other = _as_taylor_number(other)
        if other is NotImplemented:
            return NotImplemented
        if other._derivative is None and is_scalar_zero(other._real):
            return self.copy()
        if self._derivative is None and is_scalar_zero(self._real):
            return other.copy()
        left = self.derivative_values()
        right = other.derivative_values()
        summed = [a + b for a, b in zip(left, right)]
        longer = left if len(left) > len(right) else right
        summed.extend(longer[len(summed):])
        return _build(summed)

    def __radd__(self, other: Any) -> TaylorNumber:
        other = _as_taylor_number(other)
        if other is NotImplemented:
            return NotImplemented
        return other + self

    def __neg__(self) -> TaylorNumber:
        return _build([-value for value in self.derivative_values()])

    def __pos__(self) -> TaylorNumber:
        return self.copy()

    def __sub__(self, other: Any) -> TaylorNumber:
        other = _as_taylor_number(other)
        if other is NotImplemented:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other: Any) -> TaylorNumber:
        other = _as_taylor_number(other)
        if other is NotImplemented:
            return NotImplemented
        return other + (-self)

    def __mul__(self, other: Any) -> TaylorNumber:
        if isinstance(other, TaylorNumber):
            return self._multiply(other)
        if not is_taylor_scalar(other):
            return NotImplemented
        return self._scale(other)

    def __rmul__(self, other: Any) -> TaylorNumber:
        if not is_taylor_scalar(other):
            return NotImplemented
        return self._scale(other)

    def __truediv__(self, other: Any) -> TaylorNumber:
        if isinstance(other, TaylorNumber):
            if other.is_perturbed:
                raise TypeError(
                    "TaylorNumber: division by a perturbed TaylorNumber is not supported; "
                    "only scalar divisors are."
                )
            other = other._real
        elif not is_taylor_scalar(other):
            return NotImplemented
        return self._divide(other)

    def __pow__(self, exponent: Any) -> TaylorNumber:
        exponent = validate_order(exponent, where="TaylorNumber.__pow__", name="exponent")
        if exponent == 0:
            return TaylorNumber.one(type(self._real))
        result = self.copy()
        for _ in range(exponent - 1):
            result = result * self
        return result

    def _scale(self, factor: Any) -> TaylorNumber:
        return _build([value * factor for value in self.derivative_values()])

    def _divide(self, divisor: Any) -> TaylorNumber:
        return _build([value / divisor for value in self.derivative_values()])

    def _multiply(self, other: TaylorNumber) -> TaylorNumber:
        """Tower product with the product rule applied at every depth."""
        if self._derivative is None:
            if is_scalar_one(self._real):
                return other.copy()
            return other._scale(self._real)
        if other._derivative is None:
            if is_scalar_one(other._real):
                return self.copy()
            return self._scale(other._real)
        real = self._real * other._real
        # (ab)' = a'b + b'a; each recursive call drops one level of depth.
        product_rule = self._diff_view()._multiply(other) + other._diff_view()._multiply(self)
        return TaylorNumber(real, product_rule)

    # ------------------------------------------------------------------
    # Comparison and rendering
    # ------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        other = _as_taylor_number(other)
        if other is NotImplemented:
            return NotImplemented
        left, right = self, other
        while left is not None and right is not None:
            if not bool(left._real == right._real):
                return False
            left, right = left._derivative, right._derivative
        return left is None and right is None

    __hash__ = None

    def __repr__(self) -> str:
        *outer, innermost = self.derivative_values()
        head = "".join(f"TaylorNumber({value!r}, " for value in outer)
        return f"{head}TaylorNumber({innermost!r})" + ")" * len(outer)


def _build(values: list[Any]) -> TaylorNumber:
    """Chains ``(f, f', f'', ...)`` into a freshly owned tower."""
    node = None
    for value in reversed(values):
        node = TaylorNumber(value, node)
    return node


def _as_taylor_number(value: Any) -> TaylorNumber:
    """Promotes a scalar to an order-0 tower; ``NotImplemented`` otherwise."""
    if isinstance(value, TaylorNumber):
        return value
    if is_taylor_scalar(value):
        return TaylorNumber(value)
    return NotImplemented
