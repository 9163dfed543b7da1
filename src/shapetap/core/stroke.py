"""Stroke outline expansion.

Turns a path and a line width into a closed region covering everything a
stroke of that width paints. The region is a union of convex,
counter-clockwise polygons:

- one quad per polyline segment
- a join polygon at every corner (round, bevel or miter)
- caps at open subpath ends, or a dot for zero-length subpaths
- the enclosed area of every closed subpath

Overlapping pieces all wind the same way, so the region must be tested with
the non-zero winding rule (see ``shapetap.core.geometry.contains``). Closed
subpaths include their interior because a stroked closed outline's outer
and inner boundaries wind the same way, which non-zero containment fills.
"""

import logging
import math

from shapetap.core.geometry import Polyline, flatten_path, signed_area
from shapetap.domain import (
    ClosePath,
    LineCap,
    LineJoin,
    LineTo,
    MoveTo,
    Path,
    PathCommand,
    Point,
    StrokeStyle,
)
from shapetap.exceptions import DegenerateGeometryError

logger = logging.getLogger(__name__)

# Segments shorter than this are treated as zero length
EPSILON = 1e-9


def _unit(dx: float, dy: float) -> tuple[float, float]:
    length = math.hypot(dx, dy)
    return dx / length, dy / length


def _dedupe(points: list[Point], closed: bool) -> list[Point]:
    """Drop zero-length segments, including a closing duplicate."""
    result: list[Point] = []
    for point in points:
        if not result or math.hypot(point.x - result[-1].x, point.y - result[-1].y) > EPSILON:
            result.append(point)
    if closed and len(result) > 1:
        first, last = result[0], result[-1]
        if math.hypot(first.x - last.x, first.y - last.y) <= EPSILON:
            result.pop()
    return result


def _circle(center: Point, radius: float, segments: int) -> list[Point]:
    """Polygon circumscribing a circle, so it never cuts into the disc."""
    outer = radius / math.cos(math.pi / segments)
    return [
        Point(
            center.x + outer * math.cos(2.0 * math.pi * i / segments),
            center.y + outer * math.sin(2.0 * math.pi * i / segments),
        )
        for i in range(segments)
    ]


def _segment_quad(start: Point, end: Point, half: float) -> list[Point]:
    ux, uy = _unit(end.x - start.x, end.y - start.y)
    nx, ny = -uy * half, ux * half
    return [
        Point(start.x - nx, start.y - ny),
        Point(end.x - nx, end.y - ny),
        Point(end.x + nx, end.y + ny),
        Point(start.x + nx, start.y + ny),
    ]


def _cap(end: Point, direction: tuple[float, float], half: float, cap: LineCap, segments: int) -> list[Point] | None:
    """Cap polygon at ``end``; ``direction`` points away from the stroke."""
    if cap == LineCap.ROUND:
        return _circle(end, half, segments)
    if cap == LineCap.SQUARE:
        dx, dy = direction[0] * half, direction[1] * half
        nx, ny = -direction[1] * half, direction[0] * half
        return [
            Point(end.x - nx, end.y - ny),
            Point(end.x + dx - nx, end.y + dy - ny),
            Point(end.x + dx + nx, end.y + dy + ny),
            Point(end.x + nx, end.y + ny),
        ]
    return None


def _join(
    vertex: Point,
    incoming: tuple[float, float],
    outgoing: tuple[float, float],
    half: float,
    join: LineJoin,
    miter_limit: float,
    segments: int,
) -> list[Point] | None:
    """Polygon filling the gap on the outside of a corner."""
    cross = incoming[0] * outgoing[1] - incoming[1] * outgoing[0]
    dot = incoming[0] * outgoing[0] + incoming[1] * outgoing[1]

    if join == LineJoin.ROUND:
        # Straight continuations need nothing; anything else gets a disc
        if abs(cross) <= EPSILON and dot > 0:
            return None
        return _circle(vertex, half, segments)

    if abs(cross) <= EPSILON:
        # Straight on needs nothing; a full reversal has no outer side
        return None

    # Outer side is to the right of a left turn and to the left of a right turn
    side = -1.0 if cross > 0 else 1.0
    n_in = (-incoming[1] * side, incoming[0] * side)
    n_out = (-outgoing[1] * side, outgoing[0] * side)
    a = Point(vertex.x + n_in[0] * half, vertex.y + n_in[1] * half)
    b = Point(vertex.x + n_out[0] * half, vertex.y + n_out[1] * half)

    if join == LineJoin.MITER:
        # Miter length over line width is 1 / sin(theta / 2) for interior angle theta
        ratio = math.sqrt(2.0 / (1.0 + dot)) if dot > -1.0 else math.inf
        if ratio <= miter_limit:
            bx, by = _unit(n_in[0] + n_out[0], n_in[1] + n_out[1])
            tip = Point(vertex.x + bx * half * ratio, vertex.y + by * half * ratio)
            return [vertex, a, tip, b]

    return [vertex, a, b]


def _polyline_pieces(
    polyline: Polyline,
    half: float,
    style: StrokeStyle,
    segments: int,
) -> list[list[Point]]:
    points = _dedupe(polyline.points, polyline.closed)
    pieces: list[list[Point]] = []

    if len(points) == 1:
        center = points[0]
        if style.line_cap == LineCap.ROUND:
            pieces.append(_circle(center, half, segments))
        elif style.line_cap == LineCap.SQUARE:
            pieces.append([
                Point(center.x - half, center.y - half),
                Point(center.x + half, center.y - half),
                Point(center.x + half, center.y + half),
                Point(center.x - half, center.y + half),
            ])
        return pieces

    closed = polyline.closed and len(points) > 1
    edges = list(zip(points, points[1:]))
    if closed:
        edges.append((points[-1], points[0]))

    directions = [_unit(end.x - start.x, end.y - start.y) for start, end in edges]

    for start, end in edges:
        pieces.append(_segment_quad(start, end, half))

    if closed:
        corners = [(edges[i][0], directions[i - 1], directions[i]) for i in range(len(edges))]
    else:
        corners = [(edges[i][0], directions[i - 1], directions[i]) for i in range(1, len(edges))]

    for vertex, incoming, outgoing in corners:
        piece = _join(vertex, incoming, outgoing, half, style.line_join, style.miter_limit, segments)
        if piece is not None:
            pieces.append(piece)

    if closed:
        if len(points) >= 3:
            pieces.append(list(points))
    else:
        first_dir = directions[0]
        last_dir = directions[-1]
        for cap_piece in (
            _cap(points[0], (-first_dir[0], -first_dir[1]), half, style.line_cap, segments),
            _cap(points[-1], last_dir, half, style.line_cap, segments),
        ):
            if cap_piece is not None:
                pieces.append(cap_piece)

    return pieces


def stroke_outline(
    path: Path,
    width: float | None = None,
    cap: LineCap | None = None,
    join: LineJoin | None = None,
    miter_limit: float | None = None,
    tolerance: float = 0.1,
    circle_segments: int = 16,
) -> Path:
    """Compute the region swept by stroking ``path``.

    Stroke parameters default to the path's own style. Curves and arcs are
    flattened first; for those subpaths the half width is padded by the
    flattening tolerance so the region never falls short of the true curve.

    Args:
        path: Path to stroke
        width: Stroke width
        cap: Line cap at open ends
        join: Line join at corners
        miter_limit: Miter limit for miter joins
        tolerance: Flattening tolerance for curves and arcs
        circle_segments: Polygon sides for round joins and caps

    Returns:
        Path of closed counter-clockwise polygons with a default stroke style

    Raises:
        DegenerateGeometryError: If the width is not a positive number
    """
    style = path.style
    width = style.line_width if width is None else width
    if not math.isfinite(width) or width <= 0:
        raise DegenerateGeometryError(f"Stroke width must be positive, got {width}")

    stroke_style = StrokeStyle(
        line_width=width,
        line_cap=style.line_cap if cap is None else cap,
        line_join=style.line_join if join is None else join,
        miter_limit=style.miter_limit if miter_limit is None else miter_limit,
    )

    commands: list[PathCommand] = []
    piece_count = 0
    for polyline in flatten_path(path, tolerance):
        half = width / 2.0 + (tolerance if polyline.curved else 0.0)
        for piece in _polyline_pieces(polyline, half, stroke_style, circle_segments):
            area = signed_area(piece)
            if abs(area) <= EPSILON:
                continue
            if area < 0:
                piece.reverse()
            commands.append(MoveTo(piece[0]))
            commands.extend(LineTo(point) for point in piece[1:])
            commands.append(ClosePath())
            piece_count += 1

    logger.debug("Stroke outline built: width=%s pieces=%d", width, piece_count)
    return Path(commands=commands)
