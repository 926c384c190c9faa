from __future__ import annotations


class HullError(Exception):
    """Base class for errors raised while computing a hull."""


class DegenerateInputError(HullError):
    """
    The hull walk could not close back onto its start point.

    Raised for all-colinear input, input with fewer than three distinct
    points, or when the walk exceeds its iteration cap.

    Attributes:
        iterations: Number of walk iterations performed before giving up.
        partial_hull: Vertices committed so far, in walk order.
    """

    def __init__(self, message: str, iterations: int = 0, partial_hull=None) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.partial_hull = list(partial_hull or [])
