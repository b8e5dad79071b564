"""Tests for density grid rasterization and normalization."""

import numpy as np

from py_convtree.core import Point, build_density_grid, normalize_grid


class TestBuildDensityGrid:
    """Test weight binning into grid cells."""

    def test_grid_shape(self):
        """Test the grid is grid_size by grid_size."""
        grid = build_density_grid([Point(1.0, 1.0)], 0.0, 0.0, 10.0, 10.0, 5)
        assert grid.shape == (5, 5)

    def test_weights_binned(self):
        """Test that weights accumulate in the containing cells."""
        points = [Point(0.5, 0.5, 2), Point(3.5, 1.5, 1), Point(0.2, 0.7, 3)]
        grid = build_density_grid(points, 0.0, 0.0, 4.0, 4.0, 4)

        assert grid[0, 0] == 5
        # First index runs along x
        assert grid[3, 1] == 1
        assert grid[1, 3] == 0
        assert grid.sum() == 6

    def test_offset_rectangle(self):
        """Test binning for a rectangle not anchored at the origin."""
        grid = build_density_grid([Point(16.0, 27.0)], 10.0, 20.0, 20.0, 30.0, 2)
        assert grid[1, 1] == 1
        assert grid.sum() == 1

    def test_edge_point_counted_in_both_cells(self):
        """Test that a point on a cell edge counts in both cells."""
        grid = build_density_grid([Point(1.0, 0.5)], 0.0, 0.0, 4.0, 4.0, 4)

        assert grid[0, 0] == 1
        assert grid[1, 0] == 1
        assert grid.sum() == 2

    def test_corner_point_counted_in_four_cells(self):
        """Test that a point on a cell corner counts in four cells."""
        grid = build_density_grid([Point(2.0, 2.0)], 0.0, 0.0, 4.0, 4.0, 4)

        assert grid[1, 1] == grid[1, 2] == grid[2, 1] == grid[2, 2] == 1
        assert grid.sum() == 4

    def test_no_points(self):
        """Test an empty point set gives a zero grid."""
        grid = build_density_grid([], 0.0, 0.0, 4.0, 4.0, 4)
        np.testing.assert_array_equal(grid, np.zeros((4, 4)))


class TestNormalizeGrid:
    """Test scaling to the unit interval."""

    def test_scaled_by_maximum(self):
        """Test that normalization divides by the maximum."""
        grid = np.array([[0.0, 2.0], [4.0, 1.0]])
        np.testing.assert_allclose(normalize_grid(grid), [[0.0, 0.5], [1.0, 0.25]])

    def test_all_zero_grid(self):
        """Test that an all-zero grid normalizes to zeros."""
        normalized = normalize_grid(np.zeros((3, 3)))

        np.testing.assert_array_equal(normalized, np.zeros((3, 3)))
        assert not np.isnan(normalized).any()

    def test_input_untouched(self):
        """Test that normalization returns a new array."""
        grid = np.array([[2.0, 4.0]])
        normalize_grid(grid)
        np.testing.assert_array_equal(grid, [[2.0, 4.0]])
