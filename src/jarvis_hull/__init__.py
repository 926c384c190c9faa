"""Gift-wrapping (Jarvis March) convex hull for 2D point sets."""

from jarvis_hull.errors import DegenerateInputError
from jarvis_hull.errors import HullError
from jarvis_hull.geometry import Orientation
from jarvis_hull.geometry import Point
from jarvis_hull.geometry import contains_point
from jarvis_hull.geometry import orient_polygon
from jarvis_hull.geometry import orientation
from jarvis_hull.geometry import signed_area
from jarvis_hull.jarvis_march import JarvisMarch
from jarvis_hull.jarvis_march import JarvisMarchConfig
from jarvis_hull.jarvis_march import convex_hull
from jarvis_hull.point_set import PointSet

__all__ = [
    "DegenerateInputError",
    "HullError",
    "JarvisMarch",
    "JarvisMarchConfig",
    "Orientation",
    "Point",
    "PointSet",
    "contains_point",
    "convex_hull",
    "orient_polygon",
    "orientation",
    "signed_area",
]
