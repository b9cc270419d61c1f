import math

from .GraphPrimitives import Point


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def within_radius(p1: Point, p2: Point, radius: float) -> bool:
    """True iff p1 and p2 are strictly closer than `radius`."""
    return distance(p1, p2) < radius


def offset(p: Point, dx: float = 0.0, dy: float = 0.0) -> Point:
    return Point(p[0] + dx, p[1] + dy)
