"""Tests for InterpolatorRegistry handle issuance and lookup."""

import threading

import numpy as np
import pytest

from pymultilinear import (
    GridSpec,
    HandleNotFoundError,
    InterpolatorRegistry,
    MultilinearInterpolator,
    NotReadyError,
    build_interpolator,
)


def _ready(value=1.0):
    return build_interpolator([[0, 1]], [[value, value]])


class TestHandles:
    def test_handles_start_at_one_and_increase(self):
        registry = InterpolatorRegistry()
        assert registry.register(_ready()) == 1
        assert registry.register(_ready()) == 2
        assert registry.handles == [1, 2]

    def test_handle_stored_on_instance(self):
        registry = InterpolatorRegistry()
        interp = _ready()
        handle = registry.register(interp)
        assert interp.handle == handle
        assert registry.get(handle) is interp

    def test_handles_not_reused_after_clear(self):
        registry = InterpolatorRegistry()
        registry.register(_ready())
        registry.clear()
        assert len(registry) == 0
        assert registry.register(_ready()) == 2

    def test_double_registration_raises(self):
        registry = InterpolatorRegistry()
        interp = _ready()
        registry.register(interp)
        with pytest.raises(ValueError, match="already registered"):
            registry.register(interp)
        assert len(registry) == 1

    def test_unready_interpolator_rejected(self):
        registry = InterpolatorRegistry()
        interp = MultilinearInterpolator(1)
        interp.set_grid(GridSpec.from_breakpoints([[0, 1]]))
        interp.add_function([0, 1])
        with pytest.raises(NotReadyError):
            registry.register(interp)
        assert len(registry) == 0

    def test_concurrent_registration_unique(self):
        registry = InterpolatorRegistry()
        interps = [_ready(i) for i in range(64)]
        handles = []
        lock = threading.Lock()

        def worker(chunk):
            for interp in chunk:
                handle = registry.register(interp)
                with lock:
                    handles.append(handle)

        threads = [threading.Thread(target=worker, args=(interps[i::4],)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(handles) == list(range(1, 65))
        for interp in interps:
            assert registry.get(interp.handle) is interp


class TestLookup:
    def test_unknown_handle(self):
        registry = InterpolatorRegistry()
        with pytest.raises(HandleNotFoundError, match="handle 7"):
            registry.get(7)

    def test_not_found_is_key_error(self):
        with pytest.raises(KeyError):
            InterpolatorRegistry().get(1)

    def test_unhashable_handle(self):
        registry = InterpolatorRegistry()
        with pytest.raises(HandleNotFoundError):
            registry.get([1])
        assert [1] not in registry

    def test_bool_handle_rejected(self):
        registry = InterpolatorRegistry()
        registry.register(_ready())
        with pytest.raises(HandleNotFoundError, match="integer"):
            registry.get(True)
        assert True not in registry
        assert 1 in registry

    def test_non_integral_handle_rejected(self):
        registry = InterpolatorRegistry()
        registry.register(_ready())
        with pytest.raises(HandleNotFoundError):
            registry.get(1.0)
        assert 1.0 not in registry

    def test_numpy_integer_handle(self):
        registry = InterpolatorRegistry()
        handle = registry.register(_ready())
        assert registry.get(np.int64(handle)).handle == handle

    def test_contains_and_iter(self):
        registry = InterpolatorRegistry()
        handle = registry.register(_ready())
        assert handle in registry
        assert 99 not in registry
        assert list(registry) == [handle]
