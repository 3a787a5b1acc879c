"""Planar geometry helpers used for line-of-sight obstruction tests."""

import math

from rfcoverage.schemas.floorplan import Point


def ccw(a: Point, b: Point, c: Point) -> bool:
    """True when a -> b -> c turns counter-clockwise (strictly)."""
    return (c.y - a.y) * (b.x - a.x) > (b.y - a.y) * (c.x - a.x)


def intersects(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    """
    Check whether segment p1-p2 crosses segment q1-q2.

    Each segment's endpoints must lie on opposite sides of the other.
    Collinear overlaps and segments that only touch at an endpoint are
    not handled specially: the strict orientation comparison decides them,
    so the answer there depends on floating point signs. Callers treat
    this as an approximation of the exact topological test.
    """
    return ccw(p1, q1, q2) != ccw(p2, q1, q2) and ccw(p1, p2, q1) != ccw(p1, p2, q2)


def pixel_distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points in pixels."""
    dx = b.x - a.x
    dy = b.y - a.y
    return math.sqrt(dx * dx + dy * dy)
