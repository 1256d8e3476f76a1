"""Tests for construction, perturbation and extraction of TaylorNumber towers."""

from __future__ import annotations

import copy
import logging
from fractions import Fraction

import numpy as np
import pytest

from taylorkit.scalar import NotATaylorScalar
from taylorkit.taylor_number import TaylorNumber


def perturbed(re, df):
    """Builds an order-1 tower via perturbation."""
    t = TaylorNumber.new(re)
    t.perturb_by(df)
    return t


def cube(x):
    """Cubic function on towers."""
    return x.copy() * x.copy() * x


@pytest.mark.parametrize("value", [0.0, 1.5, -3.25, 1e300])
def test_new_is_order_zero(value):
    """Tests that a fresh tower holds its value and carries no derivative."""
    t = TaylorNumber.new(value)
    assert t.real() == value
    assert t.order == 0
    assert not t.is_perturbed
    assert t.derivative(0).real() == value


def test_new_matches_constructor():
    """Tests that TaylorNumber.new(v) equals TaylorNumber(v)."""
    assert TaylorNumber.new(2.0) == TaylorNumber(2.0)


def test_perturb_by_attaches_first_derivative():
    """Tests that perturbing an order-0 tower declares its first derivative."""
    t = perturbed(3.0, 1.0)
    assert t.is_perturbed
    assert t.order == 1
    assert t.real() == 3.0
    assert t.diff().real() == 1.0
    assert t == TaylorNumber(3.0, TaylorNumber(1.0))


def test_repeated_perturb_by_accumulates_into_derivative():
    """Tests that perturbing twice adds to the first derivative instead of nesting deeper."""
    t = perturbed(1.0, 2.0)
    t.perturb_by(3.0)
    assert t.order == 1
    assert t == TaylorNumber(1.0, TaylorNumber(5.0))


def test_perturb_by_on_deep_tower_only_touches_first_derivative():
    """Tests that perturbing an order-2 tower adds to the first derivative value only."""
    t = TaylorNumber(1.0, TaylorNumber(2.0, TaylorNumber(3.0)))
    t.perturb_by(4.0)
    assert t == TaylorNumber(1.0, TaylorNumber(6.0, TaylorNumber(3.0)))


def test_perturb_by_returns_none():
    """Tests that perturb_by mutates in place."""
    t = TaylorNumber(1.0)
    assert t.perturb_by(1.0) is None


def test_perturb_by_logs_accumulation(caplog):
    """Tests that accumulating into an existing derivative is logged at DEBUG."""
    caplog.set_level(logging.DEBUG, logger="taylorkit")
    t = perturbed(1.0, 1.0)
    t.perturb_by(1.0)
    assert "accumulating" in caplog.text


def test_diff_of_unperturbed_is_typed_zero():
    """Tests that differentiating an order-0 tower gives a zero of the same scalar type."""
    d = TaylorNumber(Fraction(3, 2)).diff()
    assert d.order == 0
    assert d.real() == 0
    assert isinstance(d.real(), Fraction)


def test_diff_returns_independent_copy():
    """Tests that mutating an extracted derivative leaves the source tower untouched."""
    t = TaylorNumber(1.0, TaylorNumber(2.0))
    d = t.diff()
    d.perturb_by(7.0)
    assert t == TaylorNumber(1.0, TaylorNumber(2.0))


def test_cube_example():
    """Tests the cube of a seeded variable at x=3."""
    a = perturbed(3.0, 1.0)
    c = cube(a)
    assert c.real() == 27.0
    assert c.diff().real() == 27.0
    assert c.order == 3
    assert c.derivative_values() == (27.0, 27.0, 18.0, 6.0)


def test_nth_diff_keeps_higher_orders():
    """Tests that nth_diff(n) returns the full tower of the n-th derivative."""
    c = cube(perturbed(3.0, 1.0))
    assert c.nth_diff(0) == c
    assert c.nth_diff(1) == TaylorNumber(27.0, TaylorNumber(18.0, TaylorNumber(6.0)))
    assert c.nth_diff(2) == TaylorNumber(18.0, TaylorNumber(6.0))
    assert c.nth_diff(3) == TaylorNumber(6.0)


@pytest.mark.parametrize("nth", [4, 5, 10])
def test_nth_diff_beyond_order_is_zero(nth):
    """Tests that nth_diff past the tower order is zero."""
    c = cube(perturbed(3.0, 1.0))
    d = c.nth_diff(nth)
    assert d.is_zero()
    assert d.order == 0


def test_nth_diff_accepts_numpy_integer():
    """Tests that numpy integers are valid derivative orders."""
    c = cube(perturbed(3.0, 1.0))
    assert c.nth_diff(np.int64(2)).real() == 18.0


def test_derivative_zero_is_bare_value():
    """Tests that derivative(0) drops every derivative the tower carries."""
    c = cube(perturbed(3.0, 1.0))
    assert c.derivative(0) == TaylorNumber(27.0)
    assert c.derivative(0).order == 0


@pytest.mark.parametrize("nth", [1, 2, 3, 4, np.int64(2)])
def test_derivative_recurses_from_bare_value(nth):
    """Tests that derivative(n) is derivative(n - 1).diff(), hence a typed zero for n >= 1."""
    c = cube(perturbed(3.0, 1.0))
    d = c.derivative(nth)
    assert d == TaylorNumber(0.0)
    assert d == c.derivative(nth - 1).diff()
    assert isinstance(d.real(), float)


def test_derivative_rejects_negative_order():
    """Tests that negative derivative orders raise ValueError."""
    with pytest.raises(ValueError):
        TaylorNumber(1.0).derivative(-1)


@pytest.mark.parametrize("bad", [1.5, "2", True, None])
def test_derivative_rejects_non_integer_order(bad):
    """Tests that non-integer derivative orders raise TypeError."""
    with pytest.raises(TypeError):
        TaylorNumber(1.0).derivative(bad)


def test_zero_and_one_identities():
    """Tests the additive and multiplicative identity towers."""
    assert TaylorNumber.zero().is_zero()
    assert TaylorNumber.zero().order == 0
    assert TaylorNumber.one().real() == 1.0
    assert not TaylorNumber.one().is_zero()
    assert isinstance(TaylorNumber.zero(Fraction).real(), Fraction)


def test_is_zero_checks_every_depth():
    """Tests that is_zero fails when any nested derivative is nonzero."""
    assert TaylorNumber(0.0, TaylorNumber(0.0, TaylorNumber(0.0))).is_zero()
    assert not TaylorNumber(0.0, TaylorNumber(0.0, TaylorNumber(1e-12))).is_zero()
    assert not TaylorNumber(1.0, TaylorNumber(0.0)).is_zero()


def test_equality_is_structural():
    """Tests that towers compare equal only with matching structure and values."""
    assert TaylorNumber(1.0, TaylorNumber(2.0)) == TaylorNumber(1.0, TaylorNumber(2.0))
    assert TaylorNumber(1.0, TaylorNumber(0.0)) != TaylorNumber(1.0)
    assert TaylorNumber(1.0, TaylorNumber(2.0)) != TaylorNumber(1.0, TaylorNumber(3.0))


def test_equality_with_scalars():
    """Tests that plain scalars compare as order-0 towers."""
    assert TaylorNumber(2.0) == 2.0
    assert TaylorNumber(2.0, TaylorNumber(1.0)) != 2.0
    assert TaylorNumber(2.0) != "2.0"


def test_towers_are_unhashable():
    """Tests that mutable towers cannot be hashed."""
    with pytest.raises(TypeError):
        hash(TaylorNumber(1.0))


def test_copy_is_deep():
    """Tests that copies do not share nested towers with the original."""
    t = TaylorNumber(1.0, TaylorNumber(2.0))
    for c in (t.copy(), copy.copy(t), copy.deepcopy(t)):
        assert c == t
        c.perturb_by(1.0)
        assert t == TaylorNumber(1.0, TaylorNumber(2.0))


def test_repr_shows_full_nesting():
    """Tests that repr renders the nested structure in constructor form."""
    t = TaylorNumber(3.0, TaylorNumber(1.0))
    assert repr(t) == "TaylorNumber(3.0, TaylorNumber(1.0))"
    assert repr(TaylorNumber(2.5)) == "TaylorNumber(2.5)"


@pytest.mark.parametrize("bad", ["1.0", True, [1.0], np.array([1.0, 2.0]), None])
def test_constructor_rejects_non_scalars(bad):
    """Tests that invalid leaf values raise NotATaylorScalar."""
    with pytest.raises(NotATaylorScalar):
        TaylorNumber(bad)


def test_constructor_rejects_tower_leaf():
    """Tests that a tower cannot be stored as the real part of another tower."""
    with pytest.raises(NotATaylorScalar):
        TaylorNumber(TaylorNumber(1.0))


def test_constructor_rejects_non_tower_derivative():
    """Tests that the derivative slot only accepts towers."""
    with pytest.raises(TypeError):
        TaylorNumber(1.0, 2.0)


def test_nth_diff_rejects_negative_order():
    """Tests that negative orders raise ValueError in nth_diff too."""
    with pytest.raises(ValueError):
        TaylorNumber(1.0).nth_diff(-1)


def test_deep_towers_do_not_hit_recursion_limit():
    """Tests that copying, adding, scaling, comparing and printing walk deep towers iteratively."""
    depth = 5000
    t = None
    for _ in range(depth):
        t = TaylorNumber(1.0, t)
    assert t.order == depth - 1
    assert t.copy() == t
    assert (t + t).derivative_values() == (2.0,) * depth
    assert (-t).derivative_values() == (-1.0,) * depth
    assert (t * 3.0).nth_diff(depth - 1) == TaylorNumber(3.0)
    assert (t / 2.0).real() == 0.5
    assert (t - t).is_zero()
    assert repr(t).count("TaylorNumber(") == depth
    assert copy.deepcopy(t) == t
