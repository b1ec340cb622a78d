"""Sampled function arrays defined over a grid."""

from __future__ import annotations

import warnings
from typing import List, Sequence, Tuple

import numpy as np

from pymultilinear.errors import DimensionMismatchError, NotReadyError


class FunctionTable:
    """Ordered collection of function samples sharing one grid shape.

    Samples are flattened in C order: the last dimension varies fastest,
    exactly like ``numpy.reshape`` and ``np.ndindex``.

    Parameters
    ----------
    shape : tuple of int
        Number of breakpoints in each grid dimension.

    Examples
    --------
    >>> table = FunctionTable((3, 2))
    >>> table.add_function([0, 10, 1, 11, 2, 12])
    0
    >>> table.stacked().shape
    (1, 3, 2)
    """

    def __init__(self, shape: Sequence[int]):
        self.shape: Tuple[int, ...] = tuple(int(n) for n in shape)
        self.functions: List[np.ndarray] = []
        self.frozen = False

    @property
    def num_cells(self) -> int:
        return int(np.prod(self.shape))

    def __len__(self) -> int:
        return len(self.functions)

    def add_function(self, values) -> int:
        """Append one sampled function.

        Parameters
        ----------
        values : array_like
            Either a flat sequence of ``num_cells`` samples in C order, or an
            array whose shape equals the grid shape.

        Returns
        -------
        int
            Zero-based position of the function in evaluation results.

        Raises
        ------
        DimensionMismatchError
            If the number of samples differs from the number of grid cells.
            The table is left unchanged.
        NotReadyError
            If the table has been frozen.
        """
        if self.frozen:
            raise NotReadyError("Cannot add a function to a frozen table")
        values = np.asarray(values, dtype=float)
        if values.ndim > 1 and values.shape != self.shape:
            raise DimensionMismatchError(
                f"Function array has shape {values.shape}, expected {self.shape}"
            )
        flat = values.ravel()
        if flat.size != self.num_cells:
            raise DimensionMismatchError(
                f"Function array has {flat.size} samples but the grid "
                f"{self.shape} has {self.num_cells} cells"
            )
        if not np.isfinite(flat).all():
            warnings.warn(
                f"Function {len(self.functions)} contains NaN or Inf samples; "
                f"lookups touching them will not be finite.",
                RuntimeWarning,
                stacklevel=2,
            )
        self.functions.append(flat.reshape(self.shape).copy())
        return len(self.functions) - 1

    def freeze(self) -> None:
        """Make the table and every stored sample array read-only."""
        for values in self.functions:
            values.flags.writeable = False
        self.functions = tuple(self.functions)
        self.frozen = True

    def stacked(self) -> np.ndarray:
        """All functions as one array of shape ``(n_functions, *shape)``."""
        if not self.functions:
            return np.empty((0,) + self.shape)
        return np.stack(self.functions)
