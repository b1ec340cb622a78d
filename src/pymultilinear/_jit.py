"""Numba JIT-compiled multilinear lookup kernels.

One kernel serves every dimension count: corners of the enclosing cell are
enumerated as the bits of an integer, so the cost is O(2^D) corner reads per
function regardless of grid resolution.
"""

import numpy as np
from numba import njit


@njit(cache=True)
def locate_interval(grid: np.ndarray, start: int, n: int, x: float) -> int:
    """Index ``i`` (relative to ``start``) with ``grid[i] <= x < grid[i + 1]``.

    The result is clamped to ``[0, n - 2]`` so it always names a valid cell.
    """
    lo = 0
    hi = n - 1
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if grid[start + mid] <= x:
            lo = mid
        else:
            hi = mid
    return lo


@njit(cache=True)
def multilinear_eval_jit(point: np.ndarray, grid: np.ndarray, offsets: np.ndarray,
                         sizes: np.ndarray, strides: np.ndarray, values: np.ndarray,
                         gradients: np.ndarray, closed_range: bool) -> np.ndarray:
    """Interpolate every function at one point.

    Parameters
    ----------
    point : ndarray
        Query coordinates of shape (D,).
    grid : ndarray
        Flattened breakpoints of all dimensions.
    offsets, sizes : ndarray
        Start index and breakpoint count of each dimension inside ``grid``.
    strides : ndarray
        C-order element strides of the grid shape.
    values : ndarray
        Function samples of shape (n_functions, n_cells).
    gradients : ndarray
        Node slopes of shape (n_functions, D, n_cells).
    closed_range : bool
        Clamp out-of-range coordinates to the boundary if True, otherwise
        extrapolate linearly with the boundary slopes.

    Returns
    -------
    ndarray
        Interpolated values of shape (n_functions,).
    """
    ndim = sizes.shape[0]
    nfunc = values.shape[0]
    lower = np.empty(ndim, dtype=np.int64)
    frac = np.empty(ndim)
    excess = np.zeros(ndim)
    extrapolate = False

    for d in range(ndim):
        start = offsets[d]
        n = sizes[d]
        x = point[d]
        first = grid[start]
        last = grid[start + n - 1]
        if x <= first:
            lower[d] = 0
            frac[d] = 0.0
            if not closed_range and x < first:
                excess[d] = x - first
                extrapolate = True
        elif x >= last:
            lower[d] = n - 2
            frac[d] = 1.0
            if not closed_range and x > last:
                excess[d] = x - last
                extrapolate = True
        else:
            i = locate_interval(grid, start, n, x)
            lower[d] = i
            left = grid[start + i]
            frac[d] = (x - left) / (grid[start + i + 1] - left)

    out = np.zeros(nfunc)
    for corner in range(1 << ndim):
        weight = 1.0
        flat = 0
        for d in range(ndim):
            if (corner >> d) & 1:
                weight *= frac[d]
                flat += (lower[d] + 1) * strides[d]
            else:
                weight *= 1.0 - frac[d]
                flat += lower[d] * strides[d]
        if weight == 0.0:
            continue
        for k in range(nfunc):
            v = values[k, flat]
            if extrapolate:
                for d in range(ndim):
                    slope = gradients[k, d, flat]
                    # flat edges stay constant out to infinity
                    if excess[d] != 0.0 and slope != 0.0:
                        v += slope * excess[d]
            out[k] += weight * v
    return out


@njit(cache=True)
def multilinear_eval_batch_jit(points: np.ndarray, grid: np.ndarray, offsets: np.ndarray,
                               sizes: np.ndarray, strides: np.ndarray, values: np.ndarray,
                               gradients: np.ndarray, closed_range: bool) -> np.ndarray:
    """Apply :func:`multilinear_eval_jit` to each row of ``points``."""
    n_points = points.shape[0]
    out = np.empty((n_points, values.shape[0]))
    for p in range(n_points):
        out[p, :] = multilinear_eval_jit(points[p], grid, offsets, sizes, strides,
                                         values, gradients, closed_range)
    return out
