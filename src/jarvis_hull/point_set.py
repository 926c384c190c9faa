"""
Working set of candidate points for the hull walk.

Points live in a fixed ``(N, 2)`` arena with a parallel ``active`` flag
array. Removing a point from the working set flips its flag, so removal
and re-insertion are O(1) and indices stay stable for the whole walk.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np
from numba import njit

from jarvis_hull.geometry import Point
from jarvis_hull.geometry import _relation

logger = logging.getLogger(__name__)


@njit(cache=True)
def _approx_equal(a: float, b: float, tolerance: float) -> bool:
    """Tolerance relative to the larger magnitude; zero only ties exactly."""
    return abs(a - b) <= tolerance * max(abs(a), abs(b))


@njit(cache=True)
def _lexicographic_min(points: np.ndarray) -> int:
    """Exact minimum x, then exact minimum y."""
    best = 0
    for i in range(1, points.shape[0]):
        x, y = points[i, 0], points[i, 1]
        bx, by = points[best, 0], points[best, 1]
        if x < bx or (x == bx and y < by):
            best = i
    return best


@njit(cache=True)
def _is_supporting(points: np.ndarray, s: int, m: int) -> bool:
    """
    True when the line through s and m has every point on one side and
    no point lies on it beyond s, which makes s a hull vertex.
    """
    sx, sy = points[s, 0], points[s, 1]
    mx, my = points[m, 0], points[m, 1]
    left = False
    right = False
    for i in range(points.shape[0]):
        px, py = points[i, 0], points[i, 1]
        value = _relation(sx, sy, mx, my, px, py)
        if value > 0.0:
            left = True
        elif value < 0.0:
            right = True
        elif (px - sx) * (mx - sx) + (py - sy) * (my - sy) < 0.0:
            return False
    return not (left and right)


@njit(cache=True)
def _leftmost_lowest(points: np.ndarray, tolerance: float) -> int:
    """
    Index of the point with minimum x, ties broken by minimum y.

    Points within tolerance of the exact minimum x form the tie band; the
    lowest y in the band wins, and the earliest point within tolerance of
    that y is taken. If the tolerant choice is not provably a hull vertex
    the exact lexicographic minimum is used instead.
    """
    n = points.shape[0]
    lexmin = _lexicographic_min(points)
    min_x = points[lexmin, 0]

    min_y = points[lexmin, 1]
    for i in range(n):
        if _approx_equal(points[i, 0], min_x, tolerance) and points[i, 1] < min_y:
            min_y = points[i, 1]

    best = lexmin
    for i in range(n):
        if (_approx_equal(points[i, 0], min_x, tolerance)
                and _approx_equal(points[i, 1], min_y, tolerance)):
            best = i
            break

    if best != lexmin and not _is_supporting(points, best, lexmin):
        return lexmin
    return best


@njit(cache=True)
def _scan_candidates(
    points: np.ndarray,
    active: np.ndarray,
    current: int,
    candidate: int,
    epsilon: float,
) -> tuple[int, np.ndarray]:
    """
    Test every active point against the segment current -> candidate.

    A point strictly to the right replaces the candidate and discards the
    colinear points gathered so far; points within ``epsilon`` of the
    segment's line are gathered.

    Returns:
        Final candidate index and the indices colinear with it.
    """
    n = points.shape[0]
    colinear = np.empty(n, dtype=np.int64)
    count = 0
    ax, ay = points[current, 0], points[current, 1]
    for i in range(n):
        if not active[i] or i == candidate:
            continue
        value = _relation(
            ax, ay,
            points[candidate, 0], points[candidate, 1],
            points[i, 0], points[i, 1],
        )
        if value < -epsilon:
            candidate = i
            count = 0
        elif value <= epsilon:
            colinear[count] = i
            count += 1
    return candidate, colinear[:count]


class PointSet:
    """
    Arena-backed collection of distinct points with removable members.

    Exact coordinate duplicates are collapsed on construction; the first
    occurrence is kept and remembers its original input index.

    Attributes:
        points: (N, 2) contiguous float64 array of distinct coordinates.
        active: (N,) boolean array, True while a point is still a candidate.
        source_index: (N,) original input position of each arena entry.
    """

    __slots__ = ("points", "active", "source_index")

    def __init__(self, points: np.ndarray, source_index: np.ndarray | None = None) -> None:
        self.points = np.ascontiguousarray(points, dtype=np.float64)
        if self.points.ndim != 2 or self.points.shape[1] != 2:
            raise ValueError(
                f"Expected an (N, 2) array of points, got shape {self.points.shape}"
            )
        if not np.all(np.isfinite(self.points)):
            raise ValueError("Point coordinates must be finite")
        self.active = np.ones(len(self.points), dtype=np.bool_)
        if source_index is None:
            source_index = np.arange(len(self.points))
        self.source_index = np.asarray(source_index, dtype=np.int64)

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> PointSet:
        """Build the arena from points, dropping exact duplicates."""
        seen: dict[tuple[float, float], int] = {}
        total = 0
        for total, point in enumerate(points, start=1):
            index = point.index if point.index >= 0 else total - 1
            seen.setdefault((point.x, point.y), index)
        duplicates = total - len(seen)
        if duplicates:
            logger.debug("Collapsed %d duplicate points", duplicates)
        coords = np.array(list(seen.keys()), dtype=np.float64).reshape(-1, 2)
        return cls(coords, np.fromiter(seen.values(), dtype=np.int64, count=len(seen)))

    def __len__(self) -> int:
        """Number of arena entries, active or not."""
        return len(self.points)

    def __getitem__(self, idx: int) -> Point:
        return Point(float(self.points[idx, 0]), float(self.points[idx, 1]),
                     int(self.source_index[idx]))

    @property
    def active_count(self) -> int:
        return int(np.count_nonzero(self.active))

    def remove(self, idx: int) -> None:
        self.active[idx] = False

    def restore(self, idx: int) -> None:
        self.active[idx] = True

    def first_active(self) -> int | None:
        """Lowest active index, or None once the set is exhausted."""
        remaining = np.flatnonzero(self.active)
        return int(remaining[0]) if len(remaining) else None

    def start_index(self, tolerance: float) -> int:
        """Index of the leftmost (then lowest) point; always a hull vertex."""
        return int(_leftmost_lowest(self.points, tolerance))

    def scan(self, current: int, candidate: int, epsilon: float) -> tuple[int, np.ndarray]:
        """Run one gift-wrapping sweep; see ``_scan_candidates``."""
        best, colinear = _scan_candidates(
            self.points, self.active, current, candidate, epsilon
        )
        return int(best), colinear

    def distance_sq(self, a: int, b: int) -> float:
        dx = self.points[a, 0] - self.points[b, 0]
        dy = self.points[a, 1] - self.points[b, 1]
        return float(dx * dx + dy * dy)

    def extent(self) -> float:
        """Largest coordinate span along either axis."""
        if not len(self.points):
            return 0.0
        return float(np.max(np.ptp(self.points, axis=0)))
