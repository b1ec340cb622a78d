"""Engine object owning every interpolator of one host session.

The engine is the entry point for callers that refer to interpolators by
integer handle, such as a scripting bridge queried from a simulation loop.
It owns an :class:`~pymultilinear.registry.InterpolatorRegistry`, and its
lifetime bounds the lifetime of every interpolator created through it.

Example
-------
>>> with InterpolationEngine() as engine:
...     handle = engine.create_interpolator([[0, 1, 2], [0, 10]],
...                                         [[0, 10, 1, 11, 2, 12]])
...     engine.interpolate(handle, [1, 5]).tolist()
[6.0]
"""

from __future__ import annotations

from typing import List

import numpy as np

from pymultilinear.factory import build_interpolator
from pymultilinear.interpolator import MultilinearInterpolator
from pymultilinear.marshal import densify, densify_groups
from pymultilinear.registry import InterpolatorRegistry


class InterpolationEngine:
    """Create interpolators and query them by handle.

    Parameters
    ----------
    verbose : bool, optional
        Default build verbosity for :meth:`create_interpolator`.
        Default is False.

    Notes
    -----
    Breakpoint groups, function arrays and query points may be plain
    sequences, numpy arrays, or 1-based mappings as produced by host
    scripting tables (see :func:`pymultilinear.marshal.densify`).
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.registry = InterpolatorRegistry()
        self._closed = False

    def _require_open(self) -> None:
        if self._closed:
            raise RuntimeError("Engine is closed")

    def create_interpolator(self, breakpoints, functions, verbose: bool | None = None) -> int:
        """Build an interpolator and register it.

        Parameters
        ----------
        breakpoints : sequence of sequence of float
            One strictly increasing breakpoint sequence per dimension.
        functions : sequence of array_like
            Sampled functions in C order (last dimension varies fastest).
        verbose : bool or None, optional
            Overrides the engine's verbosity for this build.

        Returns
        -------
        int
            Handle of the new interpolator.

        Raises
        ------
        InvalidGridError, UnsupportedDimensionError, DimensionMismatchError
            See :func:`~pymultilinear.factory.build_interpolator`. No handle
            is issued when construction fails.
        """
        self._require_open()
        interpolator = build_interpolator(
            densify_groups(breakpoints),
            densify_groups(functions),
            verbose=self.verbose if verbose is None else verbose,
        )
        return self.registry.register(interpolator)

    def get(self, handle: int) -> MultilinearInterpolator:
        """Return the interpolator registered under ``handle``."""
        self._require_open()
        return self.registry.get(handle)

    def interpolate(self, handle: int, point, closed_range: bool = False) -> np.ndarray:
        """Evaluate every function of one interpolator at ``point``.

        Parameters
        ----------
        handle : int
            Handle returned by :meth:`create_interpolator`.
        point : array_like
            Query coordinates, one per dimension.
        closed_range : bool, optional
            Clamp out-of-range coordinates (True) or extrapolate them
            linearly (False, default).

        Returns
        -------
        ndarray
            One value per function, in registration order.

        Raises
        ------
        HandleNotFoundError
            If ``handle`` is unknown.
        """
        return self.get(handle).interpolate(densify(point), closed_range)

    def interpolate_batch(self, handle: int, points, closed_range: bool = False) -> np.ndarray:
        """Evaluate every function at each row of ``points``.

        ``points`` may be an ``(N, D)`` array, a sequence of points, or a
        1-based mapping of points; each point may itself be a 1-based
        mapping, as in :meth:`interpolate`.
        """
        interpolator = self.get(handle)
        return interpolator.interpolate_batch(np.asarray(densify_groups(points)), closed_range)

    @property
    def handles(self) -> List[int]:
        return self.registry.handles

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release every interpolator. Further use of the engine raises."""
        self.registry.clear()
        self._closed = True

    def __enter__(self) -> "InterpolationEngine":
        self._require_open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __contains__(self, handle) -> bool:
        return handle in self.registry

    def __len__(self) -> int:
        return len(self.registry)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"InterpolationEngine({len(self.registry)} interpolators, {state})"
