"""Internal Bezier curve flattening algorithms.

This is an internal module containing helper functions for flatten_path.
Not intended for public use.
"""

import math

from shapetap.domain import Point

# Subdivision depth at which a curve is accepted regardless of flatness
MAX_DEPTH = 16


def flatten_cubic(points: list[Point], tolerance: float, _depth: int = 0) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, including both end points
    """
    p0, p1, p2, p3 = points

    # The curve never strays from its chord by more than 3/4 of the
    # farthest control point distance
    control_spread = max(
        _distance_to_chord(p1, p0, p3),
        _distance_to_chord(p2, p0, p3),
    )

    if 0.75 * control_spread <= tolerance or _depth >= MAX_DEPTH:
        return [p0, p3]

    # First level
    q1 = Point((p0.x + p1.x) / 2, (p0.y + p1.y) / 2)
    q2 = Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)
    q3 = Point((p2.x + p3.x) / 2, (p2.y + p3.y) / 2)

    # Second level
    r1 = Point((q1.x + q2.x) / 2, (q1.y + q2.y) / 2)
    r2 = Point((q2.x + q3.x) / 2, (q2.y + q3.y) / 2)

    # Third level (midpoint)
    mid = Point((r1.x + r2.x) / 2, (r1.y + r2.y) / 2)

    left = flatten_cubic([p0, q1, r1, mid], tolerance, _depth + 1)
    right = flatten_cubic([mid, r2, q3, p3], tolerance, _depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def _distance_to_chord(point: Point, start: Point, end: Point) -> float:
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy)
    if length < 1e-12:
        return math.hypot(point.x - start.x, point.y - start.y)
    return abs((point.x - start.x) * dy - (point.y - start.y) * dx) / length
