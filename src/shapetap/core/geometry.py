"""Geometric operations for paths and regions.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Path flattening into polylines
- Point-in-region testing for closed paths (non-zero winding)
- Nearest point and distance to polylines

All functions are pure and stateless.
"""

import math
from dataclasses import dataclass

from fontTools.pens.pointInsidePen import PointInsidePen

from shapetap.core._bezier import flatten_cubic as _flatten_cubic
from shapetap.domain import ArcTo, Path, Point


@dataclass
class Polyline:
    """A flattened subpath.

    Attributes:
        points: Vertices in drawing order
        closed: Whether the last vertex connects back to the first
        curved: Whether any vertex came from flattening a curve or arc
    """

    points: list[Point]
    closed: bool = False
    curved: bool = False


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding (Y-up)
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])  # CCW square
        1.0
        >>> signed_area([p1, p4, p3, p2])  # CW square
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def flatten_arc(arc: ArcTo, tolerance: float) -> list[Point]:
    """Convert an arc to points whose chords stay within ``tolerance`` of it.

    Args:
        arc: The arc to flatten
        tolerance: Maximum sagitta of each chord

    Returns:
        Points from the arc's start to its end, both included
    """
    sweep = arc.sweep
    if sweep == 0.0 or arc.radius == 0.0:
        return [arc.start_point, arc.end_point]

    # Largest step whose chord sagitta r * (1 - cos(step / 2)) is within tolerance
    if tolerance >= arc.radius:
        max_step = math.pi / 4.0
    else:
        max_step = min(math.pi / 4.0, 2.0 * math.acos(1.0 - tolerance / arc.radius))

    count = max(1, math.ceil(abs(sweep) / max_step))
    step = sweep / count
    return [arc.point_at(arc.start_angle + i * step) for i in range(count + 1)]


def flatten_path(path: Path, tolerance: float = 0.1) -> list[Polyline]:
    """Flatten a path into polylines, one per subpath.

    Subpaths made of a lone move are dropped; zero-length drawing subpaths
    are kept so caps can still mark them.

    Args:
        path: Path to flatten
        tolerance: Maximum distance between curves and their polylines

    Returns:
        List of polylines in drawing order
    """
    polylines: list[Polyline] = []
    current: Polyline | None = None
    has_segments = False

    def finish() -> None:
        if current is not None and has_segments:
            polylines.append(current)

    for segment in path.segments():
        kind = segment[0]
        if kind == "move":
            finish()
            current = Polyline(points=[segment[1]])
            has_segments = False
        elif current is None:
            continue
        elif kind == "line":
            current.points.append(segment[2])
            has_segments = True
        elif kind == "curve":
            _, p0, c1, c2, p3 = segment
            current.points.extend(_flatten_cubic([p0, c1, c2, p3], tolerance)[1:])
            current.curved = True
            has_segments = True
        elif kind == "arc":
            current.points.extend(flatten_arc(segment[1], tolerance)[1:])
            current.curved = True
            has_segments = True
        elif kind == "close":
            current.closed = True
            has_segments = True

    finish()
    return polylines


def contains(region: Path, point: Point, even_odd: bool = False) -> bool:
    """Check if a point lies inside a closed region.

    Open subpaths are implicitly closed. The default policy is non-zero
    winding, which treats overlapping same-direction contours as one area.

    Args:
        region: Path describing the region
        point: The point to test
        even_odd: Use the even-odd rule instead of non-zero winding

    Returns:
        True if the point is inside the region
    """
    if region.is_empty() or not region.fill_bounds().contains_point(point):
        return False

    pen = PointInsidePen(None, point.to_tuple(), evenOdd=even_odd)
    region.draw(pen, close_open_subpaths=True)
    return bool(pen.getResult())


def nearest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Point, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance) where nearest_point is the closest
        point on the segment and distance is the Euclidean distance to it

    Examples:
        >>> nearest, dist = nearest_point_on_segment(
        ...     Point(1.0, 1.0), Point(0.0, 0.0), Point(2.0, 0.0)
        ... )
        >>> nearest, dist
        (Point(x=1.0, y=0.0), 1.0)
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    # Handle zero-length segment
    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq < 1e-10:
        distance = math.hypot(point.x - seg_start.x, point.y - seg_start.y)
        return seg_start, distance

    # t = dot(point - start, end - start) / ||end - start||^2
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest_x = seg_start.x + t * dx
    nearest_y = seg_start.y + t * dy
    nearest = Point(nearest_x, nearest_y)

    distance = math.hypot(point.x - nearest_x, point.y - nearest_y)

    return nearest, distance


def distance_to_path(point: Point, path: Path, tolerance: float = 0.1) -> float:
    """Distance from a point to the centerline of a path.

    Args:
        point: The point to measure from
        path: Path whose flattened centerline is measured
        tolerance: Flattening tolerance

    Returns:
        Smallest distance to any segment; infinity for an empty path
    """
    best = math.inf
    for polyline in flatten_path(path, tolerance):
        points = polyline.points
        if polyline.closed:
            points = [*points, points[0]]
        if len(points) == 1:
            best = min(best, math.hypot(point.x - points[0].x, point.y - points[0].y))
        for start, end in zip(points, points[1:]):
            _, distance = nearest_point_on_segment(point, start, end)
            best = min(best, distance)
    return best
