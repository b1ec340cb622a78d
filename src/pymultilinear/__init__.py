"""pymultilinear: Multilinear lookup tables on rectilinear grids.

Provides the :class:`MultilinearInterpolator` class for evaluating one or
more functions sampled on a 1 to 5 dimensional rectilinear grid, with
clamped (closed range) or linearly extrapolated (open range) behaviour
outside the sampled domain, and the :class:`InterpolationEngine` class
that registers interpolators under integer handles for repeated lookups
from a host simulation loop.

Example
-------
>>> from pymultilinear import InterpolationEngine
>>> engine = InterpolationEngine()
>>> handle = engine.create_interpolator([[0, 1, 2], [0, 10]],
...                                     [[0, 10, 1, 11, 2, 12]])
>>> engine.interpolate(handle, [1, 5]).tolist()
[6.0]
>>> engine.interpolate(handle, [3, 5], closed_range=True).tolist()
[7.0]
"""

from pymultilinear._version import __version__
from pymultilinear.engine import InterpolationEngine
from pymultilinear.errors import (
    DimensionMismatchError,
    HandleNotFoundError,
    InterpolationError,
    InvalidGridError,
    NotReadyError,
    UnsupportedDimensionError,
)
from pymultilinear.factory import build_interpolator
from pymultilinear.grid import MAX_DIMENSIONS, MIN_DIMENSIONS, GridSpec
from pymultilinear.interpolator import InterpolatorState, MultilinearInterpolator
from pymultilinear.registry import InterpolatorRegistry
from pymultilinear.table import FunctionTable

__all__ = [
    "DimensionMismatchError",
    "FunctionTable",
    "GridSpec",
    "HandleNotFoundError",
    "InterpolationEngine",
    "InterpolationError",
    "InterpolatorRegistry",
    "InterpolatorState",
    "InvalidGridError",
    "MAX_DIMENSIONS",
    "MIN_DIMENSIONS",
    "MultilinearInterpolator",
    "NotReadyError",
    "UnsupportedDimensionError",
    "build_interpolator",
    "__version__",
]
