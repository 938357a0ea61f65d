"""
Geometric utility functions for sampling-based path planning.

This module provides the planar operations shared by every planner variant:
distances, steering toward a target, segment discretization for collision
checking, and path length.
"""

import math
from typing import Iterator, List, Sequence, Tuple

Point = Tuple[float, float]

# Sampling resolution used when discretizing segments for collision checks
COLLISION_RESOLUTION = 0.1


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def squared_distance(a: Point, b: Point) -> float:
    """Squared Euclidean distance (cheaper when only ordering matters)."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return dx * dx + dy * dy


def steer(from_point: Point, to_point: Point, step_size: float) -> Point:
    """
    Move from from_point toward to_point by at most step_size.

    Args:
        from_point: Starting point (x, y)
        to_point: Target point (x, y)
        step_size: Maximum distance to travel

    Returns:
        to_point itself if it is closer than step_size, otherwise the point
        exactly step_size along the ray from from_point toward to_point

    Example:
        >>> steer((0.0, 0.0), (10.0, 0.0), 1.0)
        (1.0, 0.0)
        >>> steer((0.0, 0.0), (0.5, 0.0), 1.0)
        (0.5, 0.0)
    """
    dist = distance(from_point, to_point)
    if dist < step_size:
        return (float(to_point[0]), float(to_point[1]))

    ratio = step_size / dist
    return (from_point[0] + (to_point[0] - from_point[0]) * ratio,
            from_point[1] + (to_point[1] - from_point[1]) * ratio)


def discretize_segment(point1: Point,
                       point2: Point,
                       resolution: float = COLLISION_RESOLUTION) -> Iterator[Point]:
    """
    Yield evenly spaced samples along the segment point1 -> point2.

    The segment is split into max(floor(length / resolution), 1) equal
    sub-intervals and both endpoints are included, so at least two points
    are always produced.

    Note:
        A fixed linear resolution can step over obstacles thinner than
        `resolution`. Collision checks built on top of this accept that
        approximation.

    Example:
        >>> list(discretize_segment((0.0, 0.0), (0.2, 0.0)))
        [(0.0, 0.0), (0.1, 0.0), (0.2, 0.0)]
    """
    x1, y1 = point1
    x2, y2 = point2
    steps = max(int(distance(point1, point2) / resolution), 1)

    for i in range(steps + 1):
        t = i / steps
        yield (x1 + t * (x2 - x1), y1 + t * (y2 - y1))


def path_length(path: Sequence[Point]) -> float:
    """
    Total Euclidean length of a waypoint sequence.

    Returns:
        Sum of segment lengths, 0.0 for paths with fewer than two points
    """
    if path is None or len(path) < 2:
        return 0.0

    return sum(distance(path[i], path[i + 1]) for i in range(len(path) - 1))


def as_point(values: Sequence[float]) -> Point:
    """Convert any two-element sequence (list, tuple, ndarray row) to a Point."""
    return (float(values[0]), float(values[1]))


def as_path(points: Sequence[Sequence[float]]) -> List[Point]:
    """Convert a sequence of coordinate pairs to a list of Points."""
    return [as_point(p) for p in points]
