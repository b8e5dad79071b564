"""
Convolution smoothing of density grids.

The filter slides an unflipped square kernel over a zero-padded grid
(cross-correlation), which is what scipy's ``correlate2d`` computes in
``valid`` mode once the padding is applied.
"""

import numpy as np
from scipy.signal import correlate2d
from typing import Optional, Sequence
import structlog

from .density_grid import normalize_grid
from .exceptions import ConvolutionConfigError

logger = structlog.get_logger()

DEFAULT_KERNEL = np.array(
    [
        [0.5, 0.5, 0.5],
        [0.5, 1.0, 0.5],
        [0.5, 0.5, 0.5],
    ]
)


def check_kernel(kernel: Optional[Sequence[Sequence[float]]]) -> bool:
    """Return True if kernel is a non-empty square matrix with equal rows."""
    if kernel is None or len(kernel) == 0:
        return False
    first_row = kernel[0]
    if first_row is None:
        return False
    size = len(first_row)
    if size != len(kernel):
        return False
    return all(row is not None and len(row) == size for row in kernel)


def resolve_kernel(kernel: Optional[Sequence[Sequence[float]]]) -> np.ndarray:
    """Return the kernel as an array, or the default kernel if it is invalid."""
    if not check_kernel(kernel):
        logger.debug("Invalid convolution kernel, using default")
        return DEFAULT_KERNEL.copy()
    return np.asarray(kernel, dtype=np.float64)


def convolve(
    grid: np.ndarray, kernel: np.ndarray, stride: int = 1, padding: int = 1
) -> np.ndarray:
    """
    Apply a square kernel to a grid.

    Args:
        grid: 2D input grid
        kernel: Square kernel of side k
        stride: Step between kernel positions (>= 1)
        padding: Zero cells added on every side (>= 1)

    Returns:
        Grid of shape floor((n - k + 2*padding) / stride) + 1 per axis

    Raises:
        ConvolutionConfigError: On invalid stride, padding or a grid smaller
            than the kernel
    """
    if stride < 1:
        raise ConvolutionConfigError("convolutional stride must be larger than 0")
    if padding < 1:
        raise ConvolutionConfigError("convolutional padding must be larger than 0")

    kernel = np.asarray(kernel, dtype=np.float64)
    kernel_size = kernel.shape[0]
    if grid.shape[0] < kernel_size:
        raise ConvolutionConfigError("grid width is less than convolutional kernel size")
    if grid.shape[1] < kernel_size:
        raise ConvolutionConfigError("grid height is less than convolutional kernel size")

    padded = np.pad(grid, padding, mode="constant", constant_values=0.0)
    result = correlate2d(padded, kernel, mode="valid")
    return result[::stride, ::stride]


def smooth_grid(grid: np.ndarray, kernel: np.ndarray, iterations: int) -> np.ndarray:
    """
    Normalize a grid, then convolve and renormalize it repeatedly.

    A failing convolution stops the remaining iterations; the last grid
    that was produced successfully is returned.
    """
    smoothed = normalize_grid(grid)
    for iteration in range(iterations):
        try:
            convolved = convolve(smoothed, kernel, stride=1, padding=1)
        except ConvolutionConfigError as e:
            logger.warning(
                "Convolution aborted", iteration=iteration, error=str(e)
            )
            break
        smoothed = normalize_grid(convolved)
    return smoothed
