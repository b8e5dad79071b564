"""Tests for convolution smoothing and kernel validation."""

import numpy as np
import pytest

from py_convtree.core import (
    DEFAULT_KERNEL, ConvolutionConfigError, check_kernel, convolve, resolve_kernel, smooth_grid
)


def impulse(size, x, y):
    grid = np.zeros((size, size))
    grid[x, y] = 1.0
    return grid


class TestConvolve:
    """Test the sliding-window filter."""

    def test_preserves_shape_with_3x3_kernel(self):
        """Test that a 3x3 kernel with padding 1 keeps the grid shape."""
        grid = np.random.default_rng(0).random((8, 8))
        assert convolve(grid, DEFAULT_KERNEL).shape == (8, 8)

    def test_zero_grid_stays_zero(self):
        """Test that a zero grid convolves to zero."""
        result = convolve(np.zeros((6, 6)), DEFAULT_KERNEL)
        np.testing.assert_array_equal(result, np.zeros((6, 6)))

    def test_impulse_response(self):
        """Test that a single impulse reproduces the kernel."""
        result = convolve(impulse(5, 2, 2), DEFAULT_KERNEL)

        assert result[2, 2] == pytest.approx(1.0)
        np.testing.assert_allclose(result[1:4, 1:4], DEFAULT_KERNEL)
        assert result.sum() == pytest.approx(DEFAULT_KERNEL.sum())

    def test_kernel_not_flipped(self):
        """Test that the filter is a cross-correlation."""
        kernel = np.zeros((3, 3))
        kernel[1, 2] = 1.0
        result = convolve(impulse(5, 2, 2), kernel)

        assert result[2, 1] == 1.0
        assert result.sum() == 1.0

    def test_border_zero_padded(self):
        """Test that border cells see zero padding."""
        result = convolve(impulse(4, 0, 0), DEFAULT_KERNEL)

        assert result[0, 0] == pytest.approx(1.0)
        assert result[1, 0] == pytest.approx(0.5)
        assert result[1, 1] == pytest.approx(0.5)
        assert result.sum() == pytest.approx(2.5)

    @pytest.mark.parametrize("size,kernel_size,stride,padding,expected", [
        (8, 3, 1, 1, 8),
        (8, 5, 1, 1, 6),
        (8, 3, 2, 1, 4),
        (6, 1, 1, 2, 10),
        (9, 2, 1, 1, 10),
    ])
    def test_output_size(self, size, kernel_size, stride, padding, expected):
        """Test output size for stride and padding combinations."""
        grid = np.ones((size, size))
        kernel = np.ones((kernel_size, kernel_size))
        result = convolve(grid, kernel, stride=stride, padding=padding)

        assert result.shape == (expected, expected)
        assert expected == (size - kernel_size + 2 * padding) // stride + 1

    @pytest.mark.parametrize("stride,padding", [(0, 1), (-1, 1), (1, 0), (1, -2)])
    def test_invalid_stride_or_padding(self, stride, padding):
        """Test that stride or padding below one is rejected."""
        with pytest.raises(ConvolutionConfigError):
            convolve(np.ones((5, 5)), DEFAULT_KERNEL, stride=stride, padding=padding)

    def test_grid_smaller_than_kernel(self):
        """Test that a grid smaller than the kernel is rejected."""
        with pytest.raises(ConvolutionConfigError):
            convolve(np.ones((2, 2)), DEFAULT_KERNEL)
        with pytest.raises(ConvolutionConfigError):
            convolve(np.ones((5, 2)), DEFAULT_KERNEL)

    def test_config_error_is_value_error(self):
        """Test that ConvolutionConfigError can be caught as ValueError."""
        assert issubclass(ConvolutionConfigError, ValueError)


class TestKernelValidation:
    """Test kernel checks and default fallback."""

    @pytest.mark.parametrize("kernel", [
        None,
        [],
        [[1.0, 2.0], [3.0]],
        [[1.0, 2.0, 3.0]],
        [[1.0], [2.0]],
    ])
    def test_invalid_kernels(self, kernel):
        """Test kernels that fail validation."""
        assert not check_kernel(kernel)
        np.testing.assert_array_equal(resolve_kernel(kernel), DEFAULT_KERNEL)

    @pytest.mark.parametrize("kernel", [
        [[1.0]],
        [[1.0, 0.0], [0.0, 1.0]],
        np.ones((5, 5)).tolist(),
    ])
    def test_valid_kernels(self, kernel):
        """Test kernels that pass validation."""
        assert check_kernel(kernel)
        np.testing.assert_array_equal(resolve_kernel(kernel), np.asarray(kernel))

    def test_default_kernel_values(self):
        """Test the default smoothing kernel."""
        expected = [[0.5, 0.5, 0.5], [0.5, 1.0, 0.5], [0.5, 0.5, 0.5]]
        np.testing.assert_array_equal(DEFAULT_KERNEL, expected)

    def test_resolved_default_is_a_copy(self):
        """Test that callers cannot mutate the shared default kernel."""
        kernel = resolve_kernel(None)
        kernel[0, 0] = 9.0
        assert DEFAULT_KERNEL[0, 0] == 0.5


class TestSmoothGrid:
    """Test repeated convolution with renormalization."""

    def test_zero_iterations_only_normalizes(self):
        """Test that zero iterations only normalize the grid."""
        grid = np.array([[0.0, 2.0, 0.0], [0.0, 4.0, 0.0], [0.0, 0.0, 0.0]])
        np.testing.assert_allclose(smooth_grid(grid, DEFAULT_KERNEL, 0), grid / 4.0)

    def test_renormalized_after_each_pass(self):
        """Test that each pass leaves the maximum at one."""
        grid = impulse(6, 2, 3) * 7.0
        smoothed = smooth_grid(grid, DEFAULT_KERNEL, 3)

        assert smoothed.shape == (6, 6)
        assert smoothed.max() == pytest.approx(1.0)
        assert smoothed.min() >= 0.0

    def test_smoothing_spreads_mass(self):
        """Test that smoothing spreads a peak to its neighbours."""
        grid = impulse(7, 3, 3)
        once = smooth_grid(grid, DEFAULT_KERNEL, 1)
        twice = smooth_grid(grid, DEFAULT_KERNEL, 2)

        assert np.count_nonzero(once) == 9
        assert np.count_nonzero(twice) == 25

    def test_all_zero_grid(self):
        """Test smoothing an all-zero grid."""
        smoothed = smooth_grid(np.zeros((5, 5)), DEFAULT_KERNEL, 2)
        np.testing.assert_array_equal(smoothed, np.zeros((5, 5)))

    def test_failed_convolution_keeps_last_grid(self):
        """Test that an invalid pass stops smoothing with the last grid."""
        grid = np.array([[1.0, 3.0], [0.0, 2.0]])
        smoothed = smooth_grid(grid, DEFAULT_KERNEL, 4)

        np.testing.assert_allclose(smoothed, grid / 3.0)
