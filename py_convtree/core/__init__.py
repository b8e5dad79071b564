"""
Core spatial partitioning functionality.
"""

from .exceptions import GeometryError, ConvolutionConfigError
from .point import Point, CellStats, compute_cell_stats, compute_baseline_tags, mean_manhattan_distance
from .density_grid import build_density_grid, normalize_grid
from .convolution import DEFAULT_KERNEL, check_kernel, resolve_kernel, convolve, smooth_grid
from .split_search import find_split_point
from .base_tree import QuadrantNode, TreeConfig
from .conv_tree import ConvTree, ConvTreeConfig
from .quad_tree import QuadTree

__all__ = ['GeometryError', 'ConvolutionConfigError',
           'Point', 'CellStats', 'compute_cell_stats', 'compute_baseline_tags', 'mean_manhattan_distance',
           'build_density_grid', 'normalize_grid',
           'DEFAULT_KERNEL', 'check_kernel', 'resolve_kernel', 'convolve', 'smooth_grid',
           'find_split_point', 'QuadrantNode', 'TreeConfig',
           'ConvTree', 'ConvTreeConfig', 'QuadTree']
