"""Small demonstration of Taylor-tower arithmetic.

Run with:
    python demo_taylor_numbers.py
"""

from __future__ import annotations

from taylorkit.taylor_derivative import TaylorDerivative
from taylorkit.taylor_number import TaylorNumber


def cube(x: TaylorNumber) -> TaylorNumber:
    """Cubic function."""
    return x.copy() * x.copy() * x


def main() -> None:
    """Prints a few sample computations."""
    x = TaylorNumber.new(1.0)
    print(f"x is a Taylor number with no derivatives: {x!r}")

    y = TaylorNumber.new(1.0)
    y.perturb_by(1.0)
    print(f"y is a Taylor number with one derivative: {y!r}")

    z = y + x
    print(f"z demonstrates addition: {z!r}")

    a = TaylorNumber.new(3.0)
    a.perturb_by(1.0)
    s3 = cube(a)
    print(f"The cube at x = 3 as a tower: {s3!r}")
    print(f"Every derivative of the cube: {s3.derivative_values()}")

    engine = TaylorDerivative(lambda t: 2.0 * t**4 - 3.0 * t + 1.0, 0.5)
    for order, value in enumerate(engine.derivatives(5)):
        print(f"d^{order}/dx^{order} (2x^4 - 3x + 1) at x = 0.5: {value}")


if __name__ == "__main__":
    main()
