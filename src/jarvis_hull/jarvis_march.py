"""
Jarvis March (gift wrapping) convex hull with colinear grouping.

Starting from the leftmost-lowest point, the walk repeatedly sweeps the
remaining candidates for the point that keeps every other point to the
left of the current edge. Points lying on that edge are committed
together, nearest first, so boundary points between two corners are
kept in order. The walk ends when it arrives back at the start point.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from sortedcontainers import SortedList

from jarvis_hull.config import CFG
from jarvis_hull.config import Config
from jarvis_hull.errors import DegenerateInputError
from jarvis_hull.geometry import Orientation
from jarvis_hull.geometry import Point
from jarvis_hull.geometry import orient_polygon
from jarvis_hull.geometry import orientation
from jarvis_hull.point_set import PointSet

logger = logging.getLogger(__name__)

WINDINGS = ("ccw", "cw")

# The start point rejoins the candidates after this many walk iterations
# so that it can be chosen as the closing vertex.
RESTORE_START_AT = 2


@dataclass
class JarvisMarchConfig:
    """
    Configuration options for the Jarvis March walk.

    Attributes:
        epsilon: Relation magnitude at or below which points count as colinear.
        coordinate_tolerance: Relative tolerance for start-point coordinate ties.
        scale_aware_epsilon: Multiply epsilon by the squared coordinate extent.
        iteration_cap_factor: Walk gives up after factor * N + 1 iterations.
        validate_triangle: Send colinear 3-point input through the full walk.
        winding: "ccw", "cw", or None to keep the walk's own order.
    """

    epsilon: float = 1e-5
    coordinate_tolerance: float = 1e-6
    scale_aware_epsilon: bool = False
    iteration_cap_factor: int = 2
    validate_triangle: bool = False
    winding: str | None = None

    def __post_init__(self) -> None:
        if self.epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if self.coordinate_tolerance < 0:
            raise ValueError(
                f"coordinate_tolerance must be non-negative, got {self.coordinate_tolerance}"
            )
        if self.iteration_cap_factor < 1:
            raise ValueError(
                f"iteration_cap_factor must be at least 1, got {self.iteration_cap_factor}"
            )
        if self.winding is not None and self.winding not in WINDINGS:
            raise ValueError(f"winding must be one of {WINDINGS} or None, got {self.winding!r}")

    @classmethod
    def from_config(cls, cfg: Config = CFG, **overrides) -> JarvisMarchConfig:
        """Build options from the YAML configuration, then apply overrides."""
        options = {
            'epsilon': cfg.get_nested('numerical', 'epsilon', default=cls.epsilon),
            'coordinate_tolerance': cfg.get_nested(
                'numerical', 'coordinate_tolerance', default=cls.coordinate_tolerance
            ),
            'scale_aware_epsilon': cfg.get_nested(
                'numerical', 'scale_aware_epsilon', default=cls.scale_aware_epsilon
            ),
            'iteration_cap_factor': cfg.get_nested(
                'walk', 'iteration_cap_factor', default=cls.iteration_cap_factor
            ),
            'validate_triangle': cfg.get_nested(
                'walk', 'validate_triangle', default=cls.validate_triangle
            ),
            'winding': cfg.get_nested('output', 'winding', default=cls.winding),
        }
        options.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**options)


def _as_points(points) -> list[Point]:
    """Copy caller input into a list of Points, keeping Point instances as-is."""
    if isinstance(points, np.ndarray):
        arr = np.asarray(points, dtype=np.float64)
        if arr.size == 0:
            return []
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"Expected an (N, 2) array of points, got shape {arr.shape}")
        return [Point.from_array(row, i) for i, row in enumerate(arr)]
    return [
        p if isinstance(p, Point) else Point(float(p[0]), float(p[1]), i)
        for i, p in enumerate(points)
    ]


class JarvisMarch:
    """
    Gift-wrapping convex hull engine.

    Every call builds its own ``PointSet`` over a copy of the input, so an
    engine instance can be shared between threads.

    Example:
        >>> march = JarvisMarch(JarvisMarchConfig(winding="ccw"))
        >>> hull = march([(0, 0), (4, 0), (4, 4), (0, 4), (2, 2)])

    Attributes:
        config: Walk configuration options.
    """

    __slots__ = ("config",)

    def __init__(self, config: JarvisMarchConfig | None = None) -> None:
        self.config = config or JarvisMarchConfig.from_config()

    def __call__(self, points) -> list[Point] | None:
        """Enable callable syntax: march(points)."""
        return self.compute(points)

    def __repr__(self) -> str:
        return f"JarvisMarch(epsilon={self.config.epsilon}, winding={self.config.winding!r})"

    def compute(self, points) -> list[Point] | None:
        """
        Compute the convex hull of a set of 2D points.

        Args:
            points: Sequence of Points or (x, y) pairs, or an (N, 2) array.

        Returns:
            Hull vertices in walk order without a closing repeat, or None
            when fewer than three points were given.

        Raises:
            DegenerateInputError: The walk could not close (colinear input,
                fewer than three distinct points, or iteration cap hit).
        """
        vertices = _as_points(points)
        if len(vertices) < 3:
            return None
        if len(vertices) == 3 and not self._is_degenerate_triangle(vertices):
            return self._postprocess(vertices)

        point_set = PointSet.from_points(vertices)
        hull = self._walk(point_set)
        return self._postprocess(hull)

    def _is_degenerate_triangle(self, vertices: Sequence[Point]) -> bool:
        if not self.config.validate_triangle:
            return False
        a, b, c = vertices
        return orientation(a, b, c, self.config.epsilon) == Orientation.COLINEAR

    def _epsilon(self, point_set: PointSet) -> float:
        if not self.config.scale_aware_epsilon:
            return self.config.epsilon
        extent = point_set.extent()
        if extent == 0.0:
            return self.config.epsilon
        return self.config.epsilon * extent ** 2

    def _walk(self, point_set: PointSet) -> list[Point]:
        epsilon = self._epsilon(point_set)
        start = point_set.start_index(self.config.coordinate_tolerance)
        point_set.remove(start)
        logger.debug("Hull walk starts at %s", point_set[start])

        hull = [start]
        current = start
        max_iterations = self.config.iteration_cap_factor * len(point_set) + 1
        counter = 0

        while True:
            if counter == RESTORE_START_AT:
                point_set.restore(start)
            if counter >= max_iterations:
                raise self._degenerate(
                    f"Hull walk exceeded {max_iterations} iterations", counter, point_set, hull
                )

            candidate = point_set.first_active()
            if candidate is None:
                raise self._degenerate(
                    "Ran out of candidates before the hull closed", counter, point_set, hull
                )

            candidate, colinear = point_set.scan(current, candidate, epsilon)
            committed = self._commit_order(point_set, current, candidate, colinear)
            for idx in committed:
                hull.append(idx)
                point_set.remove(idx)
            logger.debug("Iteration %d committed %d vertices", counter, len(committed))
            current = committed[-1]

            if start in committed[:-1]:
                raise self._degenerate(
                    "Hull walk passed its start point mid-edge", counter, point_set, hull
                )
            if current == start:
                hull.pop()
                break

            counter += 1

        logger.debug("Hull closed with %d vertices after %d iterations", len(hull), counter + 1)
        return [point_set[idx] for idx in hull]

    def _commit_order(
        self,
        point_set: PointSet,
        current: int,
        candidate: int,
        colinear: np.ndarray,
    ) -> list[int]:
        """Candidate alone, or the colinear group ordered nearest-first."""
        if not len(colinear):
            return [candidate]
        group: SortedList[tuple[float, int]] = SortedList(
            (point_set.distance_sq(current, int(idx)), int(idx)) for idx in colinear
        )
        group.add((point_set.distance_sq(current, candidate), candidate))
        return [idx for _, idx in group]

    def _degenerate(
        self,
        message: str,
        iterations: int,
        point_set: PointSet,
        hull: list[int],
    ) -> DegenerateInputError:
        logger.warning(
            "%s (%d distinct points, %d committed, %d left)",
            message, len(point_set), len(hull), point_set.active_count,
        )
        return DegenerateInputError(
            message, iterations=iterations, partial_hull=[point_set[idx] for idx in hull]
        )

    def _postprocess(self, hull: list[Point]) -> list[Point]:
        """Apply the requested winding, if any."""
        if self.config.winding is None:
            return hull
        return orient_polygon(hull, ccw=self.config.winding == "ccw")


def convex_hull(
    points,
    epsilon: float | None = None,
    winding: str | None = None,
    validate_triangle: bool | None = None,
    scale_aware_epsilon: bool | None = None,
) -> list[Point] | None:
    """
    Compute a convex hull using the Jarvis March.

    Functional interface around ``JarvisMarch``; unset options fall back
    to the package configuration.

    Args:
        points: Sequence of Points or (x, y) pairs, or an (N, 2) array.
        epsilon: Colinearity tolerance for the orientation predicate.
        winding: "ccw" or "cw" to force an orientation.
        validate_triangle: Check 3-point input for colinearity.
        scale_aware_epsilon: Scale epsilon by the squared input extent.

    Returns:
        Hull vertices, or None for fewer than three points.

    Example:
        >>> convex_hull([(0, 0), (2, 0), (1, 1)])
        [Point(x=0.0, y=0.0, index=0), Point(x=2.0, y=0.0, index=1), Point(x=1.0, y=1.0, index=2)]
    """
    config = JarvisMarchConfig.from_config(
        epsilon=epsilon,
        winding=winding,
        validate_triangle=validate_triangle,
        scale_aware_epsilon=scale_aware_epsilon,
    )
    return JarvisMarch(config)(points)
