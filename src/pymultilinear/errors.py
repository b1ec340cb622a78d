"""Exception taxonomy for grid construction and lookup failures.

Every exception derives from :class:`InterpolationError` and also from the
builtin it specializes, so callers can catch either the precise cause or
the familiar ``ValueError`` / ``KeyError`` / ``RuntimeError`` family.
"""

from __future__ import annotations


class InterpolationError(Exception):
    """Base class for all pymultilinear errors."""


class InvalidGridError(InterpolationError, ValueError):
    """Breakpoints are empty, too short, non-finite or not strictly increasing."""


class UnsupportedDimensionError(InvalidGridError):
    """The number of grid dimensions lies outside the supported range."""


class DimensionMismatchError(InterpolationError, ValueError):
    """An array length does not agree with the grid it is used with."""


class HandleNotFoundError(InterpolationError, KeyError):
    """No interpolator is registered under the requested handle."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class NotReadyError(InterpolationError, RuntimeError):
    """The interpolator is not in the state the operation requires."""
