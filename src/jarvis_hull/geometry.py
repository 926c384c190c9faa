"""
Planar primitives shared by the hull walk.

Holds the immutable ``Point`` type, the orientation predicate used to
decide whether a candidate lies left of, right of, or on a directed
segment, and a few polygon helpers for callers that post-process a hull.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import IntEnum
from typing import Sequence

import numpy as np
from numba import njit


class Orientation(IntEnum):
    """
    Position of a point relative to a directed segment a -> b.

    Integer values follow the sign of the underlying determinant so an
    ``Orientation`` can be compared against raw relation values.
    """

    RIGHT = -1
    COLINEAR = 0
    LEFT = 1


@njit(cache=True)
def _relation(
    ax: float,
    ay: float,
    bx: float,
    by: float,
    cx: float,
    cy: float,
) -> float:
    """
    Determinant of the edge vectors (a - c) and (b - c).

    Negative when c lies to the right of a -> b, positive when it lies to
    the left, zero when the three points are colinear.
    """
    return (ax - cx) * (by - cy) - (bx - cx) * (ay - cy)


@dataclass(slots=True, frozen=True)
class Point:
    """
    Immutable 2D point with optional original index tracking.

    Equality and hashing use the coordinates only, so two points built
    from different input positions but equal coordinates compare equal.

    Attributes:
        x: X-coordinate.
        y: Y-coordinate.
        index: Position in the caller's input, -1 if untracked.
    """

    x: float
    y: float
    index: int = field(default=-1, compare=False)

    def __iter__(self):
        """Enable tuple unpacking: x, y = point."""
        return iter((self.x, self.y))

    def __getitem__(self, idx: int) -> float:
        """Enable indexing: point[0] returns x, point[1] returns y."""
        return (self.x, self.y)[idx]

    def __sub__(self, other: Point) -> tuple[float, float]:
        """Vector subtraction returning (dx, dy) tuple."""
        return (self.x - other.x, self.y - other.y)

    def distance_sq(self, other: Point) -> float:
        """Compute squared Euclidean distance to another point."""
        dx, dy = self - other
        return dx * dx + dy * dy

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_array(cls, arr, index: int = -1) -> Point:
        """Construct Point from numpy array or sequence."""
        return cls(float(arr[0]), float(arr[1]), index)


def relation(a: Point, b: Point, c: Point) -> float:
    """Raw orientation determinant of ``c`` against the segment a -> b."""
    return float(_relation(a.x, a.y, b.x, b.y, c.x, c.y))


def orientation(a: Point, b: Point, c: Point, epsilon: float = 1e-5) -> Orientation:
    """
    Classify ``c`` against the directed segment a -> b.

    Relations within ``epsilon`` of zero count as colinear.
    """
    value = relation(a, b, c)
    if value < -epsilon:
        return Orientation.RIGHT
    if value > epsilon:
        return Orientation.LEFT
    return Orientation.COLINEAR


def signed_area(polygon: Sequence[Point]) -> float:
    """Shoelace area, positive for counter-clockwise vertex order."""
    if len(polygon) < 3:
        return 0.0
    coords = np.array([(p.x, p.y) for p in polygon], dtype=np.float64)
    x, y = coords[:, 0], coords[:, 1]
    return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def orient_polygon(polygon: Sequence[Point], ccw: bool = True) -> list[Point]:
    """
    Return ``polygon`` wound in the requested direction.

    The first vertex stays first; only the traversal direction changes.
    """
    vertices = list(polygon)
    area = signed_area(vertices)
    if area == 0.0 or (area > 0.0) == ccw:
        return vertices
    return vertices[:1] + vertices[:0:-1]


def contains_point(polygon: Sequence[Point], point: Point, epsilon: float = 1e-5) -> bool:
    """
    Test if ``point`` lies inside or on the boundary of a convex polygon.

    Works for either winding direction.
    """
    if len(polygon) < 3:
        return False
    sign = 1.0 if signed_area(polygon) >= 0.0 else -1.0
    n = len(polygon)
    for i in range(n):
        a, b = polygon[i], polygon[(i + 1) % n]
        # relation(a, b, p) > 0 means p is left of a -> b
        if sign * relation(a, b, point) < -epsilon:
            return False
    return True
