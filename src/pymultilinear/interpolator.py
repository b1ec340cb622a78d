"""Multilinear interpolation of sampled functions on a rectilinear grid.

An interpolator owns one :class:`~pymultilinear.grid.GridSpec`, one
:class:`~pymultilinear.table.FunctionTable` and the node slopes derived from
them. It moves through three states:

``CONSTRUCTING``
    Grid and functions are being supplied.
``VALIDATED``
    The populated structure passed :meth:`MultilinearInterpolator.validate`.
``GRADIENTS_READY``
    Slopes are computed; the object is read-only and can be queried.

Queries blend the 2^D corner samples of the enclosing cell. Out-of-range
coordinates are either clamped to the grid boundary (closed range) or
extrapolated linearly with the boundary cell's slope (open range); both
policies agree on the boundary itself.
"""

from __future__ import annotations

import enum
from typing import List, Tuple

import numpy as np

from pymultilinear._gradients import compute_gradients
from pymultilinear._jit import multilinear_eval_batch_jit, multilinear_eval_jit
from pymultilinear.errors import (
    DimensionMismatchError,
    InvalidGridError,
    NotReadyError,
)
from pymultilinear.grid import GridSpec
from pymultilinear.table import FunctionTable


class InterpolatorState(enum.Enum):
    CONSTRUCTING = "constructing"
    VALIDATED = "validated"
    GRADIENTS_READY = "gradients_ready"


def c_order_strides(shape: Tuple[int, ...]) -> np.ndarray:
    """Element strides of a C-ordered array of the given shape."""
    strides = np.ones(len(shape), dtype=np.int64)
    for d in range(len(shape) - 2, -1, -1):
        strides[d] = strides[d + 1] * shape[d + 1]
    return strides


class MultilinearInterpolator:
    """Multilinear interpolant of one or more functions over a shared grid.

    Parameters
    ----------
    num_dimensions : int
        Dimension count the grid must have.

    Examples
    --------
    >>> interp = MultilinearInterpolator(2)
    >>> interp.set_grid(GridSpec.from_breakpoints([[0, 1, 2], [0, 10]]))
    >>> interp.add_function([0, 10, 1, 11, 2, 12])
    0
    >>> interp.validate()
    >>> interp.calculate_gradients()
    >>> interp.interpolate([1, 5]).tolist()
    [6.0]
    """

    def __init__(self, num_dimensions: int):
        self.num_dimensions = int(num_dimensions)
        self.grid: GridSpec | None = None
        self.table: FunctionTable | None = None
        self.build_time: float = 0.0
        self._state = InterpolatorState.CONSTRUCTING
        self._handle: int | None = None
        self._breakpoints: List[np.ndarray] = []
        self._gradients: np.ndarray | None = None

        # Kernel inputs, filled by calculate_gradients()
        self._offsets: np.ndarray | None = None
        self._sizes: np.ndarray | None = None
        self._strides: np.ndarray | None = None
        self._flat_values: np.ndarray | None = None
        self._flat_gradients: np.ndarray | None = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _require_constructing(self, action: str) -> None:
        if self._state is not InterpolatorState.CONSTRUCTING:
            raise NotReadyError(
                f"Cannot {action}: interpolator is {self._state.value} and no "
                f"longer accepts changes"
            )

    def set_grid(self, grid: GridSpec) -> None:
        """Attach the grid and start an empty function table.

        Raises
        ------
        InvalidGridError
            If the grid fails validation.
        DimensionMismatchError
            If the grid dimension count differs from ``num_dimensions``.
        """
        self._require_constructing("set the grid")
        grid.validate()
        if grid.num_dimensions != self.num_dimensions:
            raise DimensionMismatchError(
                f"{self.num_dimensions}D interpolator cannot use a "
                f"{grid.num_dimensions}D grid"
            )
        self.grid = grid
        self.table = FunctionTable(grid.shape)

    def add_function(self, values) -> int:
        """Append one sampled function (see :meth:`FunctionTable.add_function`)."""
        self._require_constructing("add a function")
        if self.table is None:
            raise NotReadyError("Call set_grid() before add_function()")
        return self.table.add_function(values)

    def validate(self) -> None:
        """Check the fully populated structure and mark it validated.

        Raises
        ------
        InvalidGridError
            If the grid is missing or invalid, no function was added, or a
            function does not cover the grid.
        """
        if self.grid is None or self.table is None:
            raise InvalidGridError("No grid has been set")
        self.grid.validate()
        if self.grid.num_dimensions != self.num_dimensions:
            raise InvalidGridError(
                f"Grid has {self.grid.num_dimensions} dimensions, "
                f"expected {self.num_dimensions}"
            )
        if len(self.table) == 0:
            raise InvalidGridError("At least one function is required")
        for k, values in enumerate(self.table.functions):
            if values.shape != self.grid.shape:
                raise InvalidGridError(
                    f"Function {k} has shape {values.shape}, grid is {self.grid.shape}"
                )
        if self._state is InterpolatorState.CONSTRUCTING:
            self._state = InterpolatorState.VALIDATED

    def calculate_gradients(self) -> None:
        """Pre-compute node slopes and freeze the interpolator.

        Costs O(cells x D x functions) once; afterwards every query reads at
        most 2^D corners per function.

        Raises
        ------
        NotReadyError
            If :meth:`validate` has not succeeded yet.
        """
        if self._state is InterpolatorState.CONSTRUCTING:
            raise NotReadyError("Call validate() before calculate_gradients()")
        if self._state is InterpolatorState.GRADIENTS_READY:
            return

        self._breakpoints = self.grid.split()
        values = self.table.stacked()
        gradients = compute_gradients(self._breakpoints, values)
        n_functions = values.shape[0]

        self._offsets = self.grid.offsets
        self._sizes = np.asarray(self.grid.delimiters, dtype=np.int64)
        self._strides = c_order_strides(self.grid.shape)
        self._flat_values = np.ascontiguousarray(values.reshape(n_functions, -1))
        self._flat_gradients = np.ascontiguousarray(
            gradients.reshape(n_functions, self.num_dimensions, -1)
        )
        self._gradients = gradients

        for array in (self.grid.values, self._flat_values, self._flat_gradients,
                      self._gradients):
            array.flags.writeable = False
        self.table.freeze()
        self._state = InterpolatorState.GRADIENTS_READY

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _require_ready(self) -> None:
        if self._state is not InterpolatorState.GRADIENTS_READY:
            raise NotReadyError(
                f"Interpolator is {self._state.value}; call validate() and "
                f"calculate_gradients() before interpolating"
            )

    def _check_points(self, points: np.ndarray) -> None:
        if points.shape[-1] != self.num_dimensions:
            raise DimensionMismatchError(
                f"Query point has {points.shape[-1]} coordinates, "
                f"expected {self.num_dimensions}"
            )
        if np.isnan(points).any():
            raise ValueError("Query point contains NaN coordinates")

    def interpolate(self, point, closed_range: bool = False) -> np.ndarray:
        """Evaluate every function at one point.

        Parameters
        ----------
        point : array_like
            Query coordinates, one per dimension.
        closed_range : bool, optional
            If True, out-of-range coordinates are clamped to the grid
            boundary. If False (default), they are extrapolated linearly
            using the boundary cell's slope.

        Returns
        -------
        ndarray
            One value per function, in registration order.

        Raises
        ------
        NotReadyError
            If gradients have not been calculated.
        DimensionMismatchError
            If ``point`` does not have one coordinate per dimension.
        ValueError
            If ``point`` contains NaN.
        """
        self._require_ready()
        point = np.asarray(point, dtype=float).ravel()
        self._check_points(point)
        return multilinear_eval_jit(
            point, self.grid.values, self._offsets, self._sizes, self._strides,
            self._flat_values, self._flat_gradients, bool(closed_range),
        )

    def interpolate_batch(self, points, closed_range: bool = False) -> np.ndarray:
        """Evaluate every function at many points.

        Parameters
        ----------
        points : array_like of shape (N, num_dimensions)
            Query points.
        closed_range : bool, optional
            Boundary policy, as in :meth:`interpolate`.

        Returns
        -------
        ndarray of shape (N, num_functions)
            Row ``i`` holds the values at ``points[i]``.
        """
        self._require_ready()
        points = np.asarray(points, dtype=float)
        if points.ndim == 1:
            # 1D grids take a flat list of scalars; otherwise it is one point
            if self.num_dimensions == 1:
                points = points.reshape(-1, 1)
            else:
                points = points.reshape(1, -1)
        if points.ndim != 2:
            raise DimensionMismatchError(
                f"Expected a 2D array of points, got shape {points.shape}"
            )
        self._check_points(points)
        return multilinear_eval_batch_jit(
            np.ascontiguousarray(points), self.grid.values, self._offsets,
            self._sizes, self._strides, self._flat_values, self._flat_gradients,
            bool(closed_range),
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> InterpolatorState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is InterpolatorState.GRADIENTS_READY

    @property
    def handle(self) -> int | None:
        """Registry handle, or None while unregistered."""
        return self._handle

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.grid.shape if self.grid is not None else ()

    @property
    def num_cells(self) -> int:
        return self.grid.num_cells if self.grid is not None else 0

    @property
    def num_functions(self) -> int:
        return len(self.table) if self.table is not None else 0

    @property
    def breakpoints(self) -> List[np.ndarray]:
        return self.grid.split() if self.grid is not None else []

    @property
    def bounds(self) -> List[Tuple[float, float]]:
        return self.grid.bounds if self.grid is not None else []

    @property
    def gradients(self) -> np.ndarray:
        """Node slopes of shape ``(num_functions, num_dimensions, *shape)``."""
        self._require_ready()
        return self._gradients

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"MultilinearInterpolator("
            f"dims={self.num_dimensions}, "
            f"shape={self.shape}, "
            f"functions={self.num_functions}, "
            f"state={self._state.value}, "
            f"handle={self._handle})"
        )

    def __str__(self) -> str:
        lines = [
            f"MultilinearInterpolator ({self.num_dimensions}D, {self._state.value})",
            f"  Handle:    {self._handle}",
            f"  Nodes:     {list(self.shape)} ({self.num_cells:,} total)",
            f"  Functions: {self.num_functions}",
        ]
        if self.grid is not None:
            lines.append("  Bounds:    " + ", ".join(
                f"[{lo:g}, {hi:g}]" for lo, hi in self.bounds
            ))
        return "\n".join(lines)
