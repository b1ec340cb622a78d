"""Finite-difference slopes pre-computed at every grid node."""

from __future__ import annotations

from typing import List

import numpy as np


def node_slopes_1d(x: np.ndarray, values: np.ndarray) -> np.ndarray:
    """Finite-difference slopes along the last axis of ``values``.

    Interior nodes use the central difference over their two neighbours;
    the first and last nodes use the one-sided difference of the adjacent
    cell, which is the slope a boundary cell extrapolates with.

    Parameters
    ----------
    x : ndarray
        Strictly increasing breakpoints of shape (n,), n >= 2.
    values : ndarray
        Samples of shape (..., n).

    Returns
    -------
    ndarray
        Slopes with the same shape as ``values``.
    """
    slopes = np.empty_like(values)
    slopes[..., 0] = (values[..., 1] - values[..., 0]) / (x[1] - x[0])
    slopes[..., -1] = (values[..., -1] - values[..., -2]) / (x[-1] - x[-2])
    if len(x) > 2:
        slopes[..., 1:-1] = (values[..., 2:] - values[..., :-2]) / (x[2:] - x[:-2])
    return slopes


def compute_gradients(breakpoints: List[np.ndarray], values: np.ndarray) -> np.ndarray:
    """Slopes for every function, every dimension and every grid node.

    Parameters
    ----------
    breakpoints : list of ndarray
        One breakpoint array per dimension.
    values : ndarray
        Stacked function samples of shape ``(n_functions, *grid_shape)``.

    Returns
    -------
    ndarray
        Array of shape ``(n_functions, num_dimensions, *grid_shape)`` whose
        ``[k, d]`` entry is the slope of function ``k`` along dimension ``d``.
    """
    ndim = len(breakpoints)
    gradients = np.empty((values.shape[0], ndim) + values.shape[1:])
    for d, x in enumerate(breakpoints):
        axis = d + 1
        moved = np.moveaxis(values, axis, -1)
        gradients[:, d] = np.moveaxis(node_slopes_1d(x, moved), -1, axis)
    return gradients
