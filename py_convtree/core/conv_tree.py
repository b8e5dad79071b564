"""
Adaptive quadrant tree.

Instead of bisecting a cell at its midpoint, the ConvTree rasterizes the
cell's weighted points into a density grid, smooths it with repeated
convolution and cuts along the low-density ring found around the densest
spot.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .base_tree import Corner, QuadrantNode, TreeConfig, as_corner, validate_bounds
from .convolution import DEFAULT_KERNEL, resolve_kernel, smooth_grid
from .density_grid import build_density_grid
from .point import Point
from .split_search import find_split_point
from ..config import settings


@dataclass
class ConvTreeConfig(TreeConfig):
    """Split limits plus the adaptive splitting parameters."""

    grid_size: int = 8
    convolution_iterations: int = 1
    kernel: np.ndarray = field(default_factory=DEFAULT_KERNEL.copy)

    def __post_init__(self):
        super().__post_init__()
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be at least 1, got {self.grid_size}")
        if self.convolution_iterations < 0:
            raise ValueError(
                f"convolution_iterations must be non-negative, got {self.convolution_iterations}"
            )


class ConvTree(QuadrantNode):
    """
    Quadrant tree that places cuts along density valleys.

    Args:
        bottom_left: Lower corner of the covered rectangle
        top_right: Upper corner of the covered rectangle
        min_x_length: Minimum width of any cell produced by a split
        min_y_length: Minimum height of any cell produced by a split
        max_points: Total weight above which a leaf splits
        max_depth: Depth at which leaves stop splitting
        convolution_iterations: Smoothing passes, defaults to settings
        grid_size: Density grid cells per axis, defaults to settings
        kernel: Square smoothing kernel; invalid kernels fall back to the
            default 3x3 kernel
        points: Initial points

    Raises:
        GeometryError: If bottom_left is not strictly below top_right
    """

    def __init__(
        self,
        bottom_left: Corner,
        top_right: Corner,
        min_x_length: float,
        min_y_length: float,
        max_points: int,
        max_depth: int,
        convolution_iterations: Optional[int] = None,
        grid_size: Optional[int] = None,
        kernel: Optional[Sequence[Sequence[float]]] = None,
        points: Optional[Sequence[Point]] = None,
    ):
        low, high = as_corner(bottom_left), as_corner(top_right)
        validate_bounds(low, high, "bottom left", "top right")

        if convolution_iterations is None:
            convolution_iterations = settings.default_convolution_iterations
        if grid_size is None:
            grid_size = settings.default_grid_size

        config = ConvTreeConfig(
            min_x_length=min_x_length,
            min_y_length=min_y_length,
            max_points=max_points,
            max_depth=max_depth,
            grid_size=grid_size,
            convolution_iterations=convolution_iterations,
            kernel=resolve_kernel(kernel),
        )
        self._init_node(low, high, config, 0, ())
        self._build_root(points)

    @property
    def bottom_left(self) -> Point:
        return self._low

    @property
    def top_right(self) -> Point:
        return self._high

    def density_grid(self) -> np.ndarray:
        """Smoothed, normalized density grid of this node's points."""
        config = self.config
        grid = build_density_grid(
            self._points,
            self._low.x,
            self._low.y,
            self._high.x,
            self._high.y,
            config.grid_size,
        )
        return smooth_grid(grid, config.kernel, config.convolution_iterations)

    def _find_cut(self) -> Tuple[float, float]:
        grid_size = self.config.grid_size
        smoothed = self.density_grid()
        split_x, split_y = find_split_point(smoothed)

        if split_x < 1 or split_x >= smoothed.shape[0] - 1:
            split_x = smoothed.shape[0] // 2
        if split_y < 1 or split_y >= smoothed.shape[1] - 1:
            split_y = smoothed.shape[1] // 2

        x_step = self.width / grid_size
        y_step = self.height / grid_size
        return self._low.x + split_x * x_step, self._low.y + split_y * y_step
