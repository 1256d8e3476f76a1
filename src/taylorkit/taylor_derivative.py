"""Derivatives of scalar functions via Taylor towers.

The caller supplies a function built from :class:`TaylorNumber` operators and
the point ``x0``. The function is evaluated once on a seeded variable (the
identity function at ``x0``) and every derivative is read off the resulting
tower.

Example:
--------

    >>> from taylorkit.taylor_derivative import TaylorDerivative, taylor_derivative
    >>> def cube(x):
    ...     return x * x * x
    ...
    >>> taylor_derivative(cube, 3.0, order=1)
    27.0
    >>> TaylorDerivative(cube, 3.0).differentiate(order=2)
    18.0

Notes:
------

- Only operations defined on towers are allowed inside the function:
  ``+``, ``-``, ``*``, division by scalars, unary ``-`` and ``**`` with a
  non-negative integer exponent. Polynomials are therefore differentiated
  exactly to every order.
"""

from __future__ import annotations

from typing import Any, Callable

from taylorkit.logger import taylorkit_logger
from taylorkit.scalar import check_taylor_scalar, is_taylor_scalar, one_of, zero_of
from taylorkit.taylor_number import TaylorNumber
from taylorkit.utils.validate import validate_order

__all__ = [
    "TaylorDerivative",
    "seed_variable",
    "taylor_derivative",
    "taylor_derivatives",
]


def seed_variable(x0: Any, seed: Any = None) -> TaylorNumber:
    """Builds the independent variable at ``x0``.

    Args:
        x0: Expansion point.
        seed: First-derivative value of the variable. Defaults to the scalar
            one of ``type(x0)``.

    Returns:
        An order-1 tower ``TaylorNumber(x0, TaylorNumber(seed))``.
    """
    check_taylor_scalar(x0, where="seed_variable")
    x = TaylorNumber.new(x0)
    x.perturb_by(one_of(type(x0)) if seed is None else seed)
    return x


def _evaluate(function: Callable[[TaylorNumber], Any], x0: Any, where: str) -> TaylorNumber:
    """Evaluates ``function`` on the seeded variable and checks the output."""
    result = function(seed_variable(x0))
    if isinstance(result, TaylorNumber):
        taylorkit_logger.debug("%s: f(x0) evaluated to a tower of order %d.", where, result.order)
        return result
    if is_taylor_scalar(result):
        # Output does not depend on the variable.
        taylorkit_logger.debug("%s: function returned a constant %r.", where, result)
        return TaylorNumber(result)
    raise TypeError(
        f"{where}: expected the function to return a TaylorNumber or scalar; "
        f"got {type(result).__name__}."
    )


def taylor_derivative(function: Callable[[TaylorNumber], Any], x0: Any, order: int = 1) -> Any:
    """Calculates the k-th derivative of a function f: R -> R via Taylor towers.

    Args:
        function: Callable mapping a tower to a tower (or a constant scalar).
        x0: Point at which to evaluate the derivative.
        order: Derivative order (>= 0); ``0`` returns ``f(x0)``.

    Returns:
        The derivative value as a scalar of the function's output type.

    Raises:
        TypeError: If ``order`` is not an integer or the function output is
            not a tower or scalar.
        ValueError: If ``order`` < 0.
    """
    order = validate_order(order, where="taylor_derivative")
    tower = _evaluate(function, x0, "taylor_derivative")
    return tower.nth_diff(order).real()


def taylor_derivatives(
    function: Callable[[TaylorNumber], Any],
    x0: Any,
    max_order: int,
) -> tuple[Any, ...]:
    """Calculates derivatives 0 through ``max_order`` from one evaluation.

    Args:
        function: Callable mapping a tower to a tower (or a constant scalar).
        x0: Point at which to evaluate the derivatives.
        max_order: Highest derivative order (>= 0).

    Returns:
        Tuple ``(f(x0), f'(x0), ..., f^(max_order)(x0))``. Orders beyond what
        the result tower carries are zero.
    """
    max_order = validate_order(max_order, where="taylor_derivatives", name="max_order")
    tower = _evaluate(function, x0, "taylor_derivatives")
    values = tower.derivative_values()[: max_order + 1]
    padding = zero_of(type(tower.real()))
    return values + (padding,) * (max_order + 1 - len(values))


class TaylorDerivative:
    """Derivative engine for Taylor-tower forward-mode differentiation.

    Supports scalar functions f: R -> R whose bodies use tower arithmetic.
    """

    def __init__(self, function: Callable[[TaylorNumber], Any], x0: Any):
        """Initializes the engine with a target function and expansion point."""
        self.function = function
        self.x0 = x0

    def differentiate(self, *, order: int = 1, **_: Any) -> Any:
        """Computes the k-th derivative via Taylor towers.

        Args:
            order: Derivative order (>= 0).

        Returns:
            Derivative value as a scalar.
        """
        return taylor_derivative(self.function, self.x0, order=order)

    def derivatives(self, max_order: int) -> tuple[Any, ...]:
        """Computes every derivative up to ``max_order`` in one pass."""
        return taylor_derivatives(self.function, self.x0, max_order)
