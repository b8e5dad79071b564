"""Naive quadrant tree that always cuts at the geometric midpoint."""

from typing import Optional, Sequence, Tuple

from .base_tree import Corner, QuadrantNode, TreeConfig, as_corner, validate_bounds
from .point import Point


class QuadTree(QuadrantNode):
    """
    Reference quadrant tree splitting every cell into four equal quadrants.

    Args:
        top_left: Lower corner of the covered rectangle
        bottom_right: Upper corner of the covered rectangle
        min_x_length: Minimum width of any cell produced by a split
        min_y_length: Minimum height of any cell produced by a split
        max_points: Total weight above which a leaf splits
        max_depth: Depth at which leaves stop splitting
        points: Initial points

    Raises:
        GeometryError: If top_left is not strictly below bottom_right
    """

    def __init__(
        self,
        top_left: Corner,
        bottom_right: Corner,
        min_x_length: float,
        min_y_length: float,
        max_points: int,
        max_depth: int,
        points: Optional[Sequence[Point]] = None,
    ):
        low, high = as_corner(top_left), as_corner(bottom_right)
        validate_bounds(low, high, "top left", "bottom right")
        config = TreeConfig(
            min_x_length=min_x_length,
            min_y_length=min_y_length,
            max_points=max_points,
            max_depth=max_depth,
        )
        self._init_node(low, high, config, 0, ())
        self._build_root(points)

    @property
    def top_left(self) -> Point:
        return self._low

    @property
    def bottom_right(self) -> Point:
        return self._high

    def insert(self, point: Point, allow_split: bool = True) -> bool:
        return super().insert(point, allow_split)

    def _find_cut(self) -> Tuple[float, float]:
        return self._low.x + self.width / 2.0, self._low.y + self.height / 2.0

    def describe(self, prefix: str = "") -> str:
        """Indented outline of the tree's rectangles and leaf point counts."""
        lines = [
            f"{prefix} top left X - {self._low.x:f}, top left Y - {self._low.y:f}",
            f"{prefix} bottom right X - {self._high.x:f}, bottom right Y - {self._high.y:f}",
        ]
        if self.is_leaf:
            lines.append(f"{prefix} number of points - {len(self._points)}")
        for child in self.children:
            lines.append(child.describe(prefix + "\t"))
        return "\n".join(lines)
