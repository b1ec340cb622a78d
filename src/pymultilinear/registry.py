"""Handle-addressed storage of live interpolators."""

from __future__ import annotations

import threading
from numbers import Integral
from typing import Dict, Iterator, List

from pymultilinear.errors import HandleNotFoundError, NotReadyError
from pymultilinear.interpolator import MultilinearInterpolator


class InterpolatorRegistry:
    """Map from integer handle to interpolator.

    Handles start at 1 and grow by one per registration; they are never
    reused, not even after :meth:`clear`. Issuing a handle and inserting
    the instance happen under one lock, so concurrent writers cannot
    collide. Lookups only read the dictionary and take no lock.
    """

    def __init__(self):
        self._instances: Dict[int, MultilinearInterpolator] = {}
        self._next_handle = 1
        self._write_lock = threading.Lock()

    def register(self, interpolator: MultilinearInterpolator) -> int:
        """Store a query-ready interpolator and return its new handle.

        Raises
        ------
        NotReadyError
            If the interpolator has not finished its gradient pass.
        ValueError
            If the interpolator is already registered.
        """
        if not interpolator.is_ready:
            raise NotReadyError(
                "Only interpolators with calculated gradients can be registered"
            )
        with self._write_lock:
            if interpolator.handle is not None:
                raise ValueError(
                    f"Interpolator is already registered under handle {interpolator.handle}"
                )
            handle = self._next_handle
            self._next_handle += 1
            interpolator._handle = handle
            self._instances[handle] = interpolator
        return handle

    def get(self, handle: int) -> MultilinearInterpolator:
        """Return the interpolator registered under ``handle``.

        Raises
        ------
        HandleNotFoundError
            If no interpolator is registered under ``handle``.
        """
        if isinstance(handle, bool) or not isinstance(handle, Integral):
            raise HandleNotFoundError(f"Handle must be an integer, got {handle!r}")
        try:
            return self._instances[handle]
        except KeyError:
            raise HandleNotFoundError(f"No interpolator registered under handle {handle!r}") from None

    def clear(self) -> None:
        """Drop every interpolator. Handles issued so far stay retired."""
        with self._write_lock:
            self._instances.clear()

    @property
    def handles(self) -> List[int]:
        return list(self._instances)

    def __contains__(self, handle) -> bool:
        if isinstance(handle, bool) or not isinstance(handle, Integral):
            return False
        return handle in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._instances))
