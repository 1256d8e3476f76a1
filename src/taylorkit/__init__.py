"""Provides all taylorkit methods."""

from importlib.metadata import PackageNotFoundError, version

from taylorkit.scalar import NotATaylorScalar, TaylorScalar
from taylorkit.taylor_derivative import (
    TaylorDerivative,
    seed_variable,
    taylor_derivative,
    taylor_derivatives,
)
from taylorkit.taylor_number import TaylorNumber

try:
    __version__ = version("taylorkit")
except PackageNotFoundError:
    pass

__all__ = [
    "NotATaylorScalar",
    "TaylorDerivative",
    "TaylorNumber",
    "TaylorScalar",
    "seed_variable",
    "taylor_derivative",
    "taylor_derivatives",
]
