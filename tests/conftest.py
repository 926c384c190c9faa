# pylint: disable=redefined-outer-name
import numpy as np
import pytest

from jarvis_hull.config import CFG
from jarvis_hull.geometry import Point


@pytest.fixture
def square_points():
    return [(0, 0), (4, 0), (4, 4), (0, 4), (2, 2)]


@pytest.fixture
def square_with_edge_points():
    return [(0, 0), (2, 0), (4, 0), (4, 4), (0, 4), (0, 2), (2, 2)]


@pytest.fixture
def grid_points():
    """Seeded integer-grid cloud; exact determinants, some duplicates."""
    rng = np.random.default_rng(7)
    coords = rng.integers(0, 50, size=(200, 2)).astype(np.float64)
    return [Point(float(x), float(y), i) for i, (x, y) in enumerate(coords)]


@pytest.fixture
def restore_config():
    yield CFG
    CFG.reload()
