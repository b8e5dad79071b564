"""
Density grid rasterization.

A cell's points are binned into a square weight grid which the adaptive
tree smooths and searches for a cut line. The grid is indexed
``grid[i, j]`` with ``i`` running along x and ``j`` along y.
"""

import numpy as np
from typing import Sequence

from .point import Point


def build_density_grid(
    points: Sequence[Point],
    min_x: float,
    min_y: float,
    max_x: float,
    max_y: float,
    grid_size: int,
) -> np.ndarray:
    """
    Rasterize point weights into a grid_size x grid_size grid.

    Every grid cell uses inclusive bounds on all four sides, so a point
    lying exactly on a shared cell edge is counted in both cells.

    Args:
        points: Points to rasterize
        min_x, min_y: Lower corner of the rectangle
        max_x, max_y: Upper corner of the rectangle
        grid_size: Number of cells per axis

    Returns:
        Un-normalized weight grid
    """
    grid = np.zeros((grid_size, grid_size), dtype=np.float64)
    if not points:
        return grid

    x_step = (max_x - min_x) / grid_size
    y_step = (max_y - min_y) / grid_size
    cells = np.arange(grid_size)
    x_left = min_x + cells * x_step
    x_right = min_x + (cells + 1) * x_step
    y_low = min_y + cells * y_step
    y_high = min_y + (cells + 1) * y_step

    xs = np.array([p.x for p in points], dtype=np.float64)
    ys = np.array([p.y for p in points], dtype=np.float64)
    weights = np.array([p.weight for p in points], dtype=np.float64)

    # (n_points, grid_size) membership masks per axis
    in_x = (xs[:, None] >= x_left[None, :]) & (xs[:, None] <= x_right[None, :])
    in_y = (ys[:, None] >= y_low[None, :]) & (ys[:, None] <= y_high[None, :])

    grid += (in_x * weights[:, None]).T @ in_y.astype(np.float64)
    return grid


def normalize_grid(grid: np.ndarray) -> np.ndarray:
    """Scale a grid by its maximum value; an all-zero grid stays all zero."""
    max_value = grid.max() if grid.size else 0.0
    if max_value == 0:
        return np.zeros_like(grid, dtype=np.float64)
    return grid / max_value
