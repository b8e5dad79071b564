"""Point model and per-leaf aggregate statistics."""

import numpy as np
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Point:
    """Weighted 2D point with optional tags.

    Points are immutable once stored in a tree. Tags are kept as a tuple in
    the order they were given.
    """

    x: float
    y: float
    weight: int = 1
    tags: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        if self.weight < 0:
            raise ValueError(f"Point weight must be non-negative, got {self.weight}")
        if self.tags is not None and not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))


@dataclass
class CellStats:
    """Aggregate statistics of a leaf's point collection."""

    points_number: int = 0
    center_point: Optional[Point] = None
    avg_distance: float = 0.0
    baseline_tags: Optional[FrozenSet[str]] = None


def total_weight(points: Iterable[Point]) -> int:
    """Sum of point weights."""
    return sum(p.weight for p in points)


def compute_baseline_tags(points: Sequence[Point]) -> Optional[FrozenSet[str]]:
    """
    Select the tags that occur more often than the average tag.

    A tag's occurrence count is the number of points carrying it; repeated
    tags inside one point are counted once.

    Args:
        points: Points to summarize

    Returns:
        Frozenset of baseline tags, or None when no point carries tags
    """
    counts = {}
    for point in points:
        if not point.tags:
            continue
        for tag in set(point.tags):
            counts[tag] = counts.get(tag, 0) + 1

    if not counts:
        return None

    mean_count = np.mean(list(counts.values()))
    return frozenset(tag for tag, count in counts.items() if count > mean_count)


def mean_manhattan_distance(coords: np.ndarray) -> float:
    """
    Mean Manhattan distance over all distinct pairs of coordinates.

    Each axis is summed separately from its sorted values: the i-th smallest
    value appears with a plus sign in i pairs and a minus sign in n-1-i
    pairs. Runs in O(n log n) time and O(n) memory.

    Args:
        coords: Array of shape (n, 2) with n >= 2

    Returns:
        Mean pairwise distance
    """
    n = len(coords)
    signs = 2 * np.arange(n, dtype=np.float64) - n + 1
    total = float((signs @ np.sort(coords, axis=0)).sum())
    return total / (n * (n - 1) / 2)


def compute_cell_stats(
    points: Sequence[Point], baseline_tags: Optional[FrozenSet[str]] = None
) -> CellStats:
    """
    Compute weighted centroid and mean pairwise Manhattan distance.

    Args:
        points: Leaf points (must not be empty)
        baseline_tags: Baseline carried over into the new stats

    Returns:
        CellStats for the points
    """
    coords = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    weights = np.array([p.weight for p in points], dtype=np.float64)
    weight_sum = weights.sum()

    if weight_sum > 0:
        cx, cy = (coords * weights[:, None]).sum(axis=0) / weight_sum
    else:
        cx, cy = coords.mean(axis=0)

    avg_distance = 0.0
    if len(points) > 1:
        avg_distance = mean_manhattan_distance(coords)

    return CellStats(
        points_number=int(weight_sum),
        center_point=Point(float(cx), float(cy), weight=int(weight_sum)),
        avg_distance=avg_distance,
        baseline_tags=baseline_tags,
    )
