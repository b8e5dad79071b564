"""Shared fixtures for tree tests."""

import numpy as np
import pytest

from py_convtree.core import Point


@pytest.fixture
def random_points():
    """200 unit-weight points spread over (0, 100) x (0, 100)."""
    rng = np.random.default_rng(42)
    coords = rng.uniform(0.5, 99.5, size=(200, 2))
    return [Point(float(x), float(y)) for x, y in coords]


@pytest.fixture
def two_clusters():
    """20 points around (10, 10) and 5 points around (90, 90)."""
    dense = [Point(8.0 + (i % 5), 8.0 + (i // 5)) for i in range(20)]
    sparse = [Point(88.0 + i, 90.0) for i in range(5)]
    return dense, sparse
