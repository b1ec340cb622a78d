"""Tests for node slope pre-computation."""

import numpy as np

from pymultilinear._gradients import compute_gradients, node_slopes_1d
from conftest import sample


class TestNodeSlopes:
    def test_one_sided_and_central(self):
        x = np.array([0.0, 1.0, 3.0])
        v = np.array([0.0, 2.0, 3.0])
        slopes = node_slopes_1d(x, v)
        assert slopes.tolist() == [2.0, 1.0, 0.5]

    def test_two_point_grid(self):
        slopes = node_slopes_1d(np.array([0.0, 4.0]), np.array([1.0, 3.0]))
        assert slopes.tolist() == [0.5, 0.5]

    def test_leading_axes_broadcast(self):
        x = np.array([0.0, 1.0, 2.0])
        v = np.array([[0.0, 1.0, 4.0], [0.0, -1.0, -2.0]])
        slopes = node_slopes_1d(x, v)
        np.testing.assert_allclose(slopes, [[1.0, 2.0, 3.0], [-1.0, -1.0, -1.0]])


class TestComputeGradients:
    def test_shape(self):
        grid = [np.array([0.0, 1.0, 2.0]), np.array([0.0, 10.0])]
        values = np.zeros((2, 3, 2))
        assert compute_gradients(grid, values).shape == (2, 2, 3, 2)

    def test_affine_slopes_everywhere(self):
        grid = [np.array([0.0, 1.0, 2.5]), np.array([0.0, 10.0]), np.array([-1.0, 0.0, 0.5, 1.0])]
        values = np.array(sample(grid, lambda p: 3.0 * p[0] - 2.0 * p[1] + 0.5 * p[2]))
        gradients = compute_gradients(grid, values.reshape(1, 3, 2, 4))
        np.testing.assert_allclose(gradients[0, 0], 3.0)
        np.testing.assert_allclose(gradients[0, 1], -2.0)
        np.testing.assert_allclose(gradients[0, 2], 0.5)

    def test_each_function_independent(self):
        grid = [np.array([0.0, 1.0])]
        values = np.array([[0.0, 1.0], [0.0, -4.0]])
        gradients = compute_gradients(grid, values)
        assert gradients[:, 0, 0].tolist() == [1.0, -4.0]
