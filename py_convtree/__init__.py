"""
py-convtree: density-aware adaptive quadrant trees.
"""

from .core import (
    ConvTree, QuadTree, Point, CellStats,
    GeometryError, ConvolutionConfigError, DEFAULT_KERNEL,
)

__version__ = "0.1.0"

__all__ = ['ConvTree', 'QuadTree', 'Point', 'CellStats',
           'GeometryError', 'ConvolutionConfigError', 'DEFAULT_KERNEL']
