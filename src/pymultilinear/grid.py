"""Rectilinear grid description shared by every interpolator.

A grid is a list of per-dimension breakpoint sequences. It is stored in
the flattened form used at the host boundary: one concatenated array of
breakpoints plus a delimiter array holding each dimension's length, so
the per-dimension sequences can always be split back deterministically.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from pymultilinear.errors import InvalidGridError, UnsupportedDimensionError

MIN_DIMENSIONS = 1
MAX_DIMENSIONS = 5


class GridSpec:
    """Per-dimension breakpoints of a rectilinear grid.

    Parameters
    ----------
    values : array_like
        Concatenation of all breakpoint sequences.
    delimiters : sequence of int
        Number of breakpoints in each dimension, in dimension order.

    Notes
    -----
    The constructor only stores the data. Call :meth:`validate` before the
    grid is used for evaluation.

    Examples
    --------
    >>> grid = GridSpec.from_breakpoints([[0, 1, 2], [0, 10]])
    >>> grid.delimiters
    (3, 2)
    >>> grid.shape
    (3, 2)
    """

    def __init__(self, values, delimiters: Sequence[int]):
        self.values = np.array(values, dtype=float).ravel()
        self.delimiters: Tuple[int, ...] = tuple(int(n) for n in delimiters)

    @classmethod
    def from_breakpoints(cls, per_dimension: Sequence[Sequence[float]]) -> "GridSpec":
        """Flatten per-dimension breakpoint sequences into a grid.

        Parameters
        ----------
        per_dimension : sequence of sequence of float
            One breakpoint sequence per dimension.

        Returns
        -------
        GridSpec
            The flattened (not yet validated) grid.
        """
        parts = [np.asarray(part, dtype=float).ravel() for part in per_dimension]
        delimiters = [len(part) for part in parts]
        values = np.concatenate(parts) if parts else np.empty(0)
        return cls(values, delimiters)

    @classmethod
    def from_flat(cls, values, delimiters: Sequence[int]) -> "GridSpec":
        """Build a grid from its flattened form, checking the delimiters add up."""
        grid = cls(values, delimiters)
        grid._check_delimiters()
        return grid

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def num_dimensions(self) -> int:
        return len(self.delimiters)

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(self.delimiters)

    @property
    def num_cells(self) -> int:
        """Number of sample locations (product of all dimension sizes)."""
        return int(np.prod(self.delimiters)) if self.delimiters else 0

    @property
    def offsets(self) -> np.ndarray:
        """Start index of every dimension inside :attr:`values`."""
        return np.concatenate(([0], np.cumsum(self.delimiters)[:-1])).astype(np.int64)

    @property
    def bounds(self) -> List[Tuple[float, float]]:
        """``(min, max)`` breakpoint of every dimension."""
        return [(float(part[0]), float(part[-1])) for part in self.split()]

    # ------------------------------------------------------------------
    # Flattening
    # ------------------------------------------------------------------

    def split(self) -> List[np.ndarray]:
        """Split the flattened breakpoints back into per-dimension arrays."""
        self._check_delimiters()
        if not self.delimiters:
            return []
        return np.split(self.values, np.cumsum(self.delimiters)[:-1])

    def _check_delimiters(self) -> None:
        if any(n < 0 for n in self.delimiters):
            raise InvalidGridError(f"Negative delimiter in {self.delimiters}")
        total = sum(self.delimiters)
        if total != len(self.values):
            raise InvalidGridError(
                f"Delimiters {self.delimiters} sum to {total} but the grid "
                f"holds {len(self.values)} breakpoints"
            )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Check the grid invariants.

        Raises
        ------
        UnsupportedDimensionError
            If the dimension count is outside ``[1, 5]``.
        InvalidGridError
            If the delimiters disagree with the flattened length, or a
            dimension is empty, holds fewer than two breakpoints, holds a
            non-finite breakpoint, or is not strictly increasing.
        """
        self.check_sequences()
        if not MIN_DIMENSIONS <= self.num_dimensions <= MAX_DIMENSIONS:
            raise UnsupportedDimensionError(
                f"Grids must have between {MIN_DIMENSIONS} and {MAX_DIMENSIONS} "
                f"dimensions, got {self.num_dimensions}"
            )

    def check_sequences(self) -> None:
        """Check every breakpoint sequence, ignoring the dimension count."""
        for d, part in enumerate(self.split()):
            if len(part) == 0:
                raise InvalidGridError(f"Dimension {d} has no breakpoints")
            if len(part) < 2:
                raise InvalidGridError(
                    f"Dimension {d} needs at least 2 breakpoints, got {len(part)}"
                )
            if not np.isfinite(part).all():
                raise InvalidGridError(f"Dimension {d} contains NaN or Inf breakpoints")
            steps = np.diff(part)
            if not (steps > 0).all():
                bad = int(np.argmin(steps > 0))
                raise InvalidGridError(
                    f"Breakpoints for dimension {d} must be strictly increasing: "
                    f"{part[bad]} is followed by {part[bad + 1]}"
                )

    def __eq__(self, other) -> bool:
        if not isinstance(other, GridSpec):
            return NotImplemented
        return self.delimiters == other.delimiters and np.array_equal(self.values, other.values)

    def __repr__(self) -> str:
        return f"GridSpec(shape={self.shape})"
