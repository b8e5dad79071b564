"""
Shared machinery of the quadrant trees.

A node covers an axis-aligned rectangle given by its lower and upper
corners. A leaf holds points and their statistics; an internal node holds
exactly four children that tile its rectangle. Subclasses only decide
where the cut point goes.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, Union
import structlog

from .exceptions import GeometryError
from .point import CellStats, Point, compute_baseline_tags, compute_cell_stats, total_weight
from ..utils.ids import new_node_id

logger = structlog.get_logger()

Corner = Union[Point, Tuple[float, float]]


@dataclass
class TreeConfig:
    """Split limits shared by every node of a tree."""

    min_x_length: float
    min_y_length: float
    max_points: int
    max_depth: int

    def __post_init__(self):
        if self.min_x_length < 0 or self.min_y_length < 0:
            raise ValueError("Minimum cell lengths must be non-negative")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")


def as_corner(corner: Corner) -> Point:
    """Convert an (x, y) pair to a zero-weight Point."""
    if isinstance(corner, Point):
        return corner
    x, y = corner
    return Point(float(x), float(y), weight=0)


def validate_bounds(low: Point, high: Point, low_name: str, high_name: str) -> None:
    """Raise GeometryError unless low is strictly below high on both axes."""
    if low.x >= high.x:
        raise GeometryError(
            f"X of {low_name} point is larger or equal to X of {high_name} point"
        )
    if low.y >= high.y:
        raise GeometryError(
            f"Y of {low_name} point is larger or equal to Y of {high_name} point"
        )


class QuadrantNode:
    """Base node of the adaptive and naive quadrant trees."""

    def _init_node(
        self,
        low: Point,
        high: Point,
        config: TreeConfig,
        depth: int,
        points: Sequence[Point],
        baseline_tags=None,
    ) -> None:
        self.id = new_node_id()
        self.config = config
        self.depth = depth
        self.is_leaf = True
        self._low = low
        self._high = high
        self._points: List[Point] = list(points)
        self.stats = CellStats(baseline_tags=baseline_tags)

        self.child_top_left: Optional["QuadrantNode"] = None
        self.child_top_right: Optional["QuadrantNode"] = None
        self.child_bottom_left: Optional["QuadrantNode"] = None
        self.child_bottom_right: Optional["QuadrantNode"] = None

    def _build_root(self, points: Optional[Sequence[Point]]) -> None:
        """Keep in-bounds initial points and run the first split decision."""
        for point in points or ():
            if self.contains(point.x, point.y):
                self._points.append(point)
            else:
                logger.warning("Initial point outside tree bounds", x=point.x, y=point.y)

        if self.check_split():
            self.split()
        else:
            self._update_stats()
            self._update_baseline()

        logger.info(
            "Tree built",
            kind=type(self).__name__,
            points=sum(len(leaf.points) for leaf in self.leaves()),
            leaves=sum(1 for _ in self.leaves()),
        )

    def _spawn(self, low: Point, high: Point, points: List[Point], baseline_tags) -> "QuadrantNode":
        child = type(self).__new__(type(self))
        child._init_node(low, high, self.config, self.depth + 1, points, baseline_tags)
        return child

    # Geometry

    @property
    def bounds(self) -> Tuple[Point, Point]:
        """Lower and upper corners of the node rectangle."""
        return self._low, self._high

    @property
    def width(self) -> float:
        return self._high.x - self._low.x

    @property
    def height(self) -> float:
        return self._high.y - self._low.y

    def contains(self, x: float, y: float) -> bool:
        """Inclusive bounding-box test on all four sides."""
        return self._low.x <= x <= self._high.x and self._low.y <= y <= self._high.y

    # Read accessors

    @property
    def points(self) -> Tuple[Point, ...]:
        return tuple(self._points)

    @property
    def total_weight(self) -> int:
        return total_weight(self._points)

    @property
    def children(self) -> Tuple["QuadrantNode", ...]:
        """Children in routing order: top left, top right, bottom left, bottom right."""
        if self.is_leaf:
            return ()
        return (
            self.child_top_left,
            self.child_top_right,
            self.child_bottom_left,
            self.child_bottom_right,
        )

    def walk(self) -> Iterator["QuadrantNode"]:
        """Yield this node and all its descendants, parents first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def leaves(self) -> Iterator["QuadrantNode"]:
        """Yield every leaf of the subtree."""
        for node in self.walk():
            if node.is_leaf:
                yield node

    # Split decision

    def check_split(self) -> bool:
        """True if the node is large enough and holds too much weight."""
        config = self.config
        large_enough = (
            self.width > 2 * config.min_x_length
            and self.height > 2 * config.min_y_length
        )
        overloaded = self.total_weight > config.max_points and self.depth < config.max_depth
        return large_enough and overloaded

    def _find_cut(self) -> Tuple[float, float]:
        raise NotImplementedError

    def _clamp_cut(self, cut_x: float, cut_y: float) -> Tuple[float, float]:
        """Pull the cut so both sides keep the minimum length."""
        low, high = self._low, self._high
        min_x, min_y = self.config.min_x_length, self.config.min_y_length
        if cut_x - low.x < min_x:
            cut_x = low.x + min_x
        if high.x - cut_x < min_x:
            cut_x = high.x - min_x
        if cut_y - low.y < min_y:
            cut_y = low.y + min_y
        if high.y - cut_y < min_y:
            cut_y = high.y - min_y
        return cut_x, cut_y

    def split(self) -> None:
        """
        Turn this leaf into an internal node with four children.

        Children inherit this node's pre-split baseline tags instead of
        computing their own, and split further when they need to.
        """
        if not self.is_leaf:
            return

        baseline = self.stats.baseline_tags
        if baseline is None:
            baseline = compute_baseline_tags(self._points)

        cut_x, cut_y = self._clamp_cut(*self._find_cut())
        low, high = self._low, self._high
        cut = Point(cut_x, cut_y, weight=0)
        rects = [
            (low, cut),
            (Point(cut_x, low.y, weight=0), Point(high.x, cut_y, weight=0)),
            (Point(low.x, cut_y, weight=0), Point(cut_x, high.y, weight=0)),
            (cut, high),
        ]

        buckets: List[List[Point]] = [[] for _ in rects]
        for point in self._points:
            for bucket, (r_low, r_high) in zip(buckets, rects):
                if r_low.x <= point.x <= r_high.x and r_low.y <= point.y <= r_high.y:
                    bucket.append(point)
                    break

        logger.debug(
            "Splitting node",
            node_id=self.id,
            depth=self.depth,
            cut_x=cut_x,
            cut_y=cut_y,
            weights=[total_weight(b) for b in buckets],
        )

        children = [
            self._spawn(r_low, r_high, bucket, baseline)
            for (r_low, r_high), bucket in zip(rects, buckets)
        ]
        (
            self.child_top_left,
            self.child_top_right,
            self.child_bottom_left,
            self.child_bottom_right,
        ) = children
        self.is_leaf = False
        self._points = []
        self.stats = CellStats()

        for child in children:
            if child.check_split():
                child.split()
            else:
                child._update_stats()

    # Statistics

    def _update_stats(self) -> None:
        if not self._points:
            return
        self.stats = compute_cell_stats(self._points, self.stats.baseline_tags)

    def _update_baseline(self) -> None:
        baseline = compute_baseline_tags(self._points)
        if baseline is not None:
            self.stats.baseline_tags = baseline

    # Mutation

    def insert(self, point: Point, allow_split: bool = False) -> bool:
        """
        Add a point to the leaf whose rectangle contains it.

        Args:
            point: Point to store
            allow_split: Re-run the split decision on the receiving leaf

        Returns:
            False if the point lies outside this node and was not stored
        """
        if not self.contains(point.x, point.y):
            logger.warning(
                "Point outside node bounds", node_id=self.id, x=point.x, y=point.y
            )
            return False

        node = self
        while not node.is_leaf:
            node = next(c for c in node.children if c.contains(point.x, point.y))

        node._points.append(point)
        if allow_split:
            if node.check_split():
                node.split()
            else:
                node._update_stats()
                node._update_baseline()
        return True

    def check(self) -> None:
        """Re-evaluate the split decision of every leaf in the subtree."""
        if not self.is_leaf:
            for child in self.children:
                child.check()
            return
        if self.check_split():
            self.split()
        else:
            self._update_stats()

    def clear(self) -> None:
        """Empty every point collection; geometry, stats and baselines stay."""
        self._points = []
        for child in self.children:
            child.clear()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id!r}, depth={self.depth}, "
            f"leaf={self.is_leaf}, low=({self._low.x}, {self._low.y}), "
            f"high=({self._high.x}, {self._high.y}))"
        )
