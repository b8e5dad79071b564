"""
Rendering of trees and density grids.

These helpers only read a tree's public geometry and leaf points; they
never mutate it.
"""

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from pathlib import Path
from typing import Optional, Union
import structlog

from .config import settings
from .core.base_tree import QuadrantNode

logger = structlog.get_logger()

PathLike = Union[str, Path]


def plot_tree(tree: QuadrantNode, filepath: PathLike, size_inches: float = 40.0) -> Path:
    """
    Draw every node rectangle and every leaf's points to an image file.

    Args:
        tree: Root node (ConvTree or QuadTree)
        filepath: Output image path; the format follows the suffix
        size_inches: Width and height of the figure

    Returns:
        Path of the written image
    """
    fig, ax = plt.subplots(figsize=(size_inches, size_inches))
    low, high = tree.bounds
    ax.set_xlim(low.x, high.x)
    ax.set_ylim(low.y, high.y)
    ax.set_title("Plot")

    xs, ys = [], []
    for node in tree.walk():
        corner = node.bounds[0]
        ax.add_patch(
            Rectangle(
                (corner.x, corner.y),
                node.width,
                node.height,
                fill=False,
                edgecolor="black",
                linewidth=0.8,
            )
        )
        if node.is_leaf:
            xs.extend(p.x for p in node.points)
            ys.extend(p.y for p in node.points)

    if xs:
        ax.scatter(xs, ys, color=(1.0, 0.0, 0.5), s=12)

    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(filepath)
    plt.close(fig)
    logger.info("Tree plot saved", path=str(filepath), points=len(xs))
    return filepath


def plot_grid(
    grid: np.ndarray, depth: int, node_id: str, output_dir: Optional[PathLike] = None
) -> Path:
    """
    Render a weight or convolution grid as a grayscale image.

    The file is written to ``<output_dir>/<node_id>-conv-<depth>.png``.
    Cell opacity follows the grid value, so the grid should be normalized.
    """
    output_dir = Path(output_dir or settings.grid_plot_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(20, 20))
    # grid is indexed [x, y]; imshow expects [row, column]
    ax.imshow(np.clip(grid, 0.0, 1.0).T, origin="lower", cmap="Greys", vmin=0.0, vmax=1.0)
    ax.set_xlim(-0.5, grid.shape[0] - 0.5)
    ax.set_ylim(-0.5, grid.shape[1] - 0.5)

    filepath = output_dir / f"{node_id}-conv-{depth}.png"
    fig.savefig(filepath)
    plt.close(fig)
    logger.debug("Grid plot saved", path=str(filepath))
    return filepath


def format_grid(grid: np.ndarray) -> str:
    """Tab-separated text rendering of a grid, one x index per line."""
    lines = ["\t".join(str(value) for value in row) for row in np.asarray(grid)]
    lines.append("-----")
    return "\n".join(lines)
