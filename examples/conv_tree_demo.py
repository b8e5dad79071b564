"""
Example comparing adaptive and midpoint partitioning on clustered points.
"""

import numpy as np
from py_convtree import ConvTree, QuadTree, Point
from py_convtree.utils import configure_logging
from py_convtree.visualization import plot_tree, plot_grid


def make_points(seed: int = 7):
    """Three Gaussian clusters of different density plus uniform noise."""
    rng = np.random.default_rng(seed)
    clusters = [
        ((20, 25), 4.0, 300, ["cafe", "park"]),
        ((70, 70), 8.0, 150, ["shop"]),
        ((80, 20), 2.5, 60, ["cafe"]),
    ]
    points = []
    for (cx, cy), spread, count, tags in clusters:
        for x, y in rng.normal((cx, cy), spread, size=(count, 2)):
            points.append(Point(float(np.clip(x, 0, 100)), float(np.clip(y, 0, 100)), tags=tags))
    for x, y in rng.uniform(0, 100, size=(80, 2)):
        points.append(Point(float(x), float(y)))
    return points


def main():
    configure_logging("INFO")
    points = make_points()

    conv_tree = ConvTree(
        (0, 0), (100, 100),
        min_x_length=4, min_y_length=4,
        max_points=40, max_depth=5,
        convolution_iterations=2, grid_size=16,
        points=points,
    )
    quad_tree = QuadTree((0, 0), (100, 100), 4, 4, 40, 5, points)

    for name, tree in (("ConvTree", conv_tree), ("QuadTree", quad_tree)):
        leaves = [leaf for leaf in tree.leaves() if leaf.points]
        weights = [leaf.stats.points_number for leaf in leaves]
        print(f"{name}: {sum(1 for _ in tree.leaves())} leaves, "
              f"{len(leaves)} non-empty, max leaf weight {max(weights)}")

    print(f"Baseline tags: {sorted(next(conv_tree.leaves()).stats.baseline_tags)}")

    plot_tree(conv_tree, "conv_tree.png", size_inches=10)
    plot_tree(quad_tree, "quad_tree.png", size_inches=10)
    heaviest = max(conv_tree.leaves(), key=lambda leaf: leaf.total_weight)
    plot_grid(heaviest.density_grid(), heaviest.depth, heaviest.id, output_dir="grid-plots")
    print("Saved conv_tree.png, quad_tree.png and grid-plots/")


if __name__ == "__main__":
    main()
