"""Validated, all-or-nothing construction of interpolators."""

from __future__ import annotations

import time
from typing import Sequence

from pymultilinear.errors import UnsupportedDimensionError
from pymultilinear.grid import MAX_DIMENSIONS, MIN_DIMENSIONS, GridSpec
from pymultilinear.interpolator import MultilinearInterpolator


def build_interpolator(
    breakpoints: Sequence[Sequence[float]],
    functions: Sequence,
    verbose: bool = False,
) -> MultilinearInterpolator:
    """Build a query-ready interpolator from breakpoints and sampled functions.

    Construction happens on a private object that is only returned once
    every step succeeded, so a failure never leaves a half-built
    interpolator behind.

    Parameters
    ----------
    breakpoints : sequence of sequence of float
        One strictly increasing breakpoint sequence per dimension (1 to 5).
    functions : sequence of array_like
        Sampled functions, each holding one value per grid node in C order
        (last dimension varies fastest) or shaped like the grid.
    verbose : bool, optional
        If True, print build progress. Default is False.

    Returns
    -------
    MultilinearInterpolator
        Interpolator in the ``GRADIENTS_READY`` state.

    Raises
    ------
    InvalidGridError
        If the breakpoints are malformed or the populated interpolator is
        inconsistent.
    UnsupportedDimensionError
        If the number of breakpoint groups is outside ``[1, 5]``.
    DimensionMismatchError
        If a function array does not hold one sample per grid node.
    """
    grid = GridSpec.from_breakpoints(breakpoints)
    grid.check_sequences()

    num_dimensions = grid.num_dimensions
    if not MIN_DIMENSIONS <= num_dimensions <= MAX_DIMENSIONS:
        raise UnsupportedDimensionError(
            f"Interpolation supports {MIN_DIMENSIONS} to {MAX_DIMENSIONS} "
            f"dimensions, got {num_dimensions} breakpoint groups"
        )

    if verbose:
        print(f"Building {num_dimensions}D multilinear interpolator "
              f"({grid.num_cells:,} nodes, {len(functions)} function(s))...")
    start = time.time()

    interpolator = MultilinearInterpolator(num_dimensions)
    interpolator.set_grid(grid)
    for values in functions:
        interpolator.add_function(values)

    interpolator.validate()
    interpolator.calculate_gradients()

    interpolator.build_time = time.time() - start
    if verbose:
        print(f"Build complete in {interpolator.build_time:.3f}s")
    return interpolator
