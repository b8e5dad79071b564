"""
Split-point search on a smoothed density grid.

Starting at the densest cell, square rings of growing radius are scanned
for cells above a decaying threshold. The last ring that still holds such
cells marks the edge of the dense region, and the cut line is placed just
beyond it. This is a local valley finder: it does not look for a global
minimum.
"""

import numpy as np
from typing import Tuple

THRESHOLD = 0.8


def _farther_index(current: int, candidate: int, center: int) -> int:
    """Keep whichever index lies farther from center; 0 means unset."""
    if current == 0 or abs(candidate - center) > abs(current - center):
        return candidate
    return current


def find_peak(grid: np.ndarray) -> Tuple[int, int, float]:
    """Return (x, y, value) of the first maximal cell, or (0, 0, 0.0) if none is positive."""
    flat_index = int(np.argmax(grid))
    max_x, max_y = divmod(flat_index, grid.shape[1])
    max_value = float(grid[max_x, max_y])
    if max_value <= 0:
        return 0, 0, 0.0
    return max_x, max_y, max_value


def find_split_point(grid: np.ndarray) -> Tuple[int, int]:
    """
    Find the grid indices of the cut line around the density peak.

    Args:
        grid: Smoothed grid normalized to [0, 1], indexed grid[x, y]

    Returns:
        Tuple of (split_x, split_y) grid indices. Either index may fall
        outside the grid's interior; callers treat that as "use the
        midpoint".
    """
    width, height = grid.shape
    center_x, center_y = width // 2, height // 2
    max_x, max_y, max_value = find_peak(grid)

    split_value = max_value * THRESHOLD
    split_x, split_y = 0, 0
    counter = 1

    while True:
        ring_x, ring_y = 0, 0
        values = []
        found = False

        x_lo, x_hi = max_x - counter, max_x + counter
        y_lo, y_hi = max_y - counter, max_y + counter
        y_start, y_stop = max(y_lo, 0), min(y_hi, height - 1) + 1
        x_start, x_stop = max(x_lo, 0), min(x_hi, width - 1) + 1

        # Left and right columns
        for i in (x_lo, x_hi):
            if not 0 <= i < width:
                continue
            column = grid[i, y_start:y_stop]
            hits = column[column > split_value]
            if hits.size:
                found = True
                ring_x = _farther_index(ring_x, i, center_x)
                values.extend(hits.tolist())

        # Top and bottom rows; corners were already counted by the columns
        row_xs = np.arange(x_start, x_stop)
        interior = (row_xs != x_lo) & (row_xs != x_hi)
        for j in (y_lo, y_hi):
            if not 0 <= j < height:
                continue
            row = grid[x_start:x_stop, j]
            above = row > split_value
            if above.any():
                found = True
                ring_y = _farther_index(ring_y, j, center_y)
                values.extend(row[above & interior].tolist())

        if not found:
            break

        if ring_x != 0:
            split_x = ring_x
        if ring_y != 0:
            split_y = ring_y
        if values:
            split_value = float(np.mean(values)) * THRESHOLD
        counter += 1

    split_x = split_x + 1 if split_x > max_x else split_x - 1
    split_y = split_y + 1 if split_y > max_y else split_y - 1
    return split_x, split_y
