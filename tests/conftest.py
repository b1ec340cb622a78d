"""Shared test fixtures for pymultilinear tests."""

import itertools

import numpy as np
import pytest

from pymultilinear import InterpolationEngine, build_interpolator


# ---------------------------------------------------------------------------
# Test functions
# ---------------------------------------------------------------------------

def plane_2d(x, y):
    """d1 + d2"""
    return x + y


def affine_nd(point):
    """Affine function 1 + sum((d + 1) * x_d); reproduced exactly by multilinear blends."""
    return 1.0 + sum((d + 1) * x for d, x in enumerate(point))


def sample(breakpoints, func):
    """Sample ``func`` over the grid in C order (last dimension fastest)."""
    return [func(point) for point in itertools.product(*breakpoints)]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def engine():
    """Fresh engine, closed after the test."""
    with InterpolationEngine() as eng:
        yield eng


@pytest.fixture
def plane_interp():
    """2D interpolator of d1 + d2 on [0, 1, 2] x [0, 10]."""
    grid = [[0, 1, 2], [0, 10]]
    return build_interpolator(grid, [sample(grid, lambda p: plane_2d(*p))])


@pytest.fixture
def curve_interp():
    """1D non-uniform monotone curve with two functions."""
    grid = [[0.0, 1.0, 3.0, 4.0]]
    return build_interpolator(grid, [[0.0, 2.0, 3.0, 7.0], [5.0, 4.0, 4.0, 1.0]])


@pytest.fixture
def nonlinear_3d():
    """3D interpolator of sin(x) * y + z**2 on a non-uniform grid, plus its data."""
    grid = [
        np.array([0.0, 0.4, 1.1, 2.0]),
        np.array([-1.0, 0.0, 0.5, 2.0, 3.0]),
        np.array([0.0, 1.0, 1.5]),
    ]
    values = np.array(sample(grid, lambda p: np.sin(p[0]) * p[1] + p[2] ** 2))
    interp = build_interpolator(grid, [values, 2.0 * values - 1.0])
    return interp, grid, values.reshape(4, 5, 3)
