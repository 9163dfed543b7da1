"""Vector paths and stroke styles.

This module defines the path model shared by shapes, tap targets and renderers:
- StrokeStyle: Line width, cap, join, miter limit and dash pattern
- MoveTo, LineTo, CurveTo, ArcTo, ClosePath: Drawing commands
- Path: An ordered command list with a stroke style

Arcs follow the UIKit convention: angles are measured in the path's own
coordinate space and ``clockwise=True`` sweeps towards increasing angles.
A path replays into any fontTools segment pen through ``Path.draw``.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from fontTools.misc.bezierTools import calcCubicBounds
from fontTools.misc.transform import Transform

from shapetap.domain.geometry import Point, Rect
from shapetap.exceptions import DegenerateGeometryError, UnsupportedTransformError

TAU = 2.0 * math.pi

# Control point distance for a quarter-circle cubic, as a fraction of the radius
KAPPA = 0.5522847498


class LineCap(str, Enum):
    """Shape drawn at the open ends of a stroked subpath."""

    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


class LineJoin(str, Enum):
    """Shape drawn where two stroked segments meet."""

    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


@dataclass(frozen=True)
class StrokeStyle:
    """How a path is stroked.

    Attributes:
        line_width: Stroke width in canvas units
        line_cap: Cap style at open subpath ends
        line_join: Join style at corners
        miter_limit: Maximum miter length as a multiple of the line width
        dash_pattern: Alternating on/off lengths; empty for a solid line
        dash_phase: Offset into the dash pattern
    """

    line_width: float = 1.0
    line_cap: LineCap = LineCap.BUTT
    line_join: LineJoin = LineJoin.MITER
    miter_limit: float = 10.0
    dash_pattern: tuple[float, ...] = ()
    dash_phase: float = 0.0

    def with_width(self, line_width: float) -> "StrokeStyle":
        """Copy of this style with another line width."""
        return replace(self, line_width=line_width)


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class CurveTo:
    """Cubic Bézier segment from the current point."""

    control1: Point
    control2: Point
    end: Point


@dataclass(frozen=True)
class ArcTo:
    """Circular arc around ``center``.

    If the path has a current point a straight line joins it to the arc's
    start point; otherwise the arc starts a new subpath.
    """

    center: Point
    radius: float
    start_angle: float
    end_angle: float
    clockwise: bool = True

    @property
    def sweep(self) -> float:
        """Signed angle swept by the arc, within [-2π, 2π]."""
        delta = self.end_angle - self.start_angle
        if self.clockwise:
            sweep = delta % TAU
            if sweep == 0.0 and delta != 0.0:
                sweep = TAU
            return sweep
        sweep = -((-delta) % TAU)
        if sweep == 0.0 and delta != 0.0:
            sweep = -TAU
        return sweep

    def point_at(self, angle: float) -> Point:
        return Point(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle),
        )

    @property
    def start_point(self) -> Point:
        return self.point_at(self.start_angle)

    @property
    def end_point(self) -> Point:
        return self.point_at(self.start_angle + self.sweep)


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand = MoveTo | LineTo | CurveTo | ArcTo | ClosePath

# Resolved segments yielded by Path.segments():
#   ("move", point)
#   ("line", start, end)
#   ("curve", start, control1, control2, end)
#   ("arc", arc)                   always preceded by a move or line to its start
#   ("close", current, start)
Segment = tuple[Any, ...]


def arc_to_cubics(arc: ArcTo) -> list[tuple[Point, Point, Point]]:
    """Approximate an arc with cubic Béziers of at most 90° each.

    Args:
        arc: The arc to convert

    Returns:
        List of (control1, control2, end) triples starting at the arc's start
        point
    """
    sweep = arc.sweep
    if sweep == 0.0:
        return []

    count = max(1, math.ceil(abs(sweep) / (math.pi / 2.0) - 1e-9))
    step = sweep / count
    k = 4.0 / 3.0 * math.tan(step / 4.0) * arc.radius

    cubics = []
    angle = arc.start_angle
    for _ in range(count):
        next_angle = angle + step
        p0 = arc.point_at(angle)
        p3 = arc.point_at(next_angle)
        c1 = Point(p0.x - k * math.sin(angle), p0.y + k * math.cos(angle))
        c2 = Point(p3.x + k * math.sin(next_angle), p3.y - k * math.cos(next_angle))
        cubics.append((c1, c2, p3))
        angle = next_angle
    return cubics


def _arc_extent_points(arc: ArcTo) -> list[Point]:
    """End points of an arc plus the axis extremes inside its sweep."""
    start = arc.start_angle
    end = start + arc.sweep
    lo, hi = min(start, end), max(start, end)
    points = [arc.point_at(start), arc.point_at(end)]

    quarter = math.pi / 2.0
    axis_offsets = ((1.0, 0.0), (0.0, 1.0), (-1.0, 0.0), (0.0, -1.0))
    for k in range(math.ceil(lo / quarter), math.floor(hi / quarter) + 1):
        ux, uy = axis_offsets[k % 4]
        points.append(Point(arc.center.x + ux * arc.radius, arc.center.y + uy * arc.radius))
    return points


def _is_similarity(transform: Transform, rel_tol: float = 1e-9) -> bool:
    """Check if a transform preserves circles (uniform scale, rotation, reflection)."""
    xx, xy, yx, yy = transform.xx, transform.xy, transform.yx, transform.yy
    len1 = xx * xx + xy * xy
    len2 = yx * yx + yy * yy
    scale = max(len1, len2, 1e-300)
    return abs(len1 - len2) <= rel_tol * scale and abs(xx * yx + xy * yy) <= rel_tol * scale


def _transform_point(transform: Transform, point: Point) -> Point:
    x, y = transform.transformPoint((point.x, point.y))
    return Point(x, y)


def _transform_arc(transform: Transform, arc: ArcTo) -> ArcTo:
    if not _is_similarity(transform):
        raise UnsupportedTransformError(
            "arcs can only be mapped through uniform scales, rotations, "
            "reflections and translations"
        )

    det = transform.xx * transform.yy - transform.xy * transform.yx
    scale = math.sqrt(abs(det))
    # Direction the arc's zero angle points to after the transform
    rotation = math.atan2(transform.xy, transform.xx)

    if det >= 0:
        start = rotation + arc.start_angle
        end = rotation + arc.end_angle
        clockwise = arc.clockwise
    else:
        start = rotation - arc.start_angle
        end = rotation - arc.end_angle
        clockwise = not arc.clockwise

    return ArcTo(
        center=_transform_point(transform, arc.center),
        radius=arc.radius * scale,
        start_angle=start,
        end_angle=end,
        clockwise=clockwise,
    )


@dataclass
class Path:
    """An ordered list of drawing commands with a stroke style.

    Built incrementally with ``move_to``/``line_to``/``curve_to``/``add_arc``/
    ``close_path``. Transforms return new paths.

    Attributes:
        commands: Drawing commands in order
        style: Stroke style used when the path is stroked
    """

    commands: list[PathCommand] = field(default_factory=list)
    style: StrokeStyle = field(default_factory=StrokeStyle)
    _cached_bounds: Rect | None = field(default=None, repr=False, init=False, compare=False)

    @classmethod
    def rectangle(cls, rect: Rect, style: StrokeStyle | None = None) -> "Path":
        """Closed axis-aligned rectangle path."""
        r = rect.normalized()
        path = cls(style=style or StrokeStyle())
        path.move_to(Point(r.min_x, r.min_y))
        path.line_to(Point(r.max_x, r.min_y))
        path.line_to(Point(r.max_x, r.max_y))
        path.line_to(Point(r.min_x, r.max_y))
        path.close_path()
        return path

    @classmethod
    def oval(cls, rect: Rect, style: StrokeStyle | None = None) -> "Path":
        """Closed ellipse inscribed in ``rect`` made of four cubic Béziers."""
        r = rect.normalized()
        cx, cy = r.mid_x, r.mid_y
        rx, ry = r.width / 2.0, r.height / 2.0
        ox, oy = rx * KAPPA, ry * KAPPA

        path = cls(style=style or StrokeStyle())
        path.move_to(Point(r.max_x, cy))
        path.curve_to(Point(r.max_x, cy + oy), Point(cx + ox, r.max_y), Point(cx, r.max_y))
        path.curve_to(Point(cx - ox, r.max_y), Point(r.min_x, cy + oy), Point(r.min_x, cy))
        path.curve_to(Point(r.min_x, cy - oy), Point(cx - ox, r.min_y), Point(cx, r.min_y))
        path.curve_to(Point(cx + ox, r.min_y), Point(r.max_x, cy - oy), Point(r.max_x, cy))
        path.close_path()
        return path

    @property
    def line_width(self) -> float:
        return self.style.line_width

    def is_empty(self) -> bool:
        """Check if the path has no commands."""
        return len(self.commands) == 0

    @property
    def current_point(self) -> Point | None:
        """Point the next segment would start from, or None."""
        current: Point | None = None
        for segment in self.segments():
            kind = segment[0]
            if kind == "move":
                current = segment[1]
            elif kind in ("line", "curve"):
                current = segment[-1]
            elif kind == "arc":
                current = segment[1].end_point
            elif kind == "close":
                current = segment[2]
        return current

    def _has_current_point(self) -> bool:
        return any(not isinstance(command, ClosePath) for command in self.commands)

    def _append(self, command: PathCommand) -> None:
        self.commands.append(command)
        self._cached_bounds = None

    def move_to(self, point: Point) -> None:
        """Start a new subpath at ``point``."""
        self._append(MoveTo(point))

    def line_to(self, point: Point) -> None:
        """Add a straight line from the current point.

        Raises:
            DegenerateGeometryError: If the path has no current point
        """
        if not self._has_current_point():
            raise DegenerateGeometryError("line_to requires a current point")
        self._append(LineTo(point))

    def curve_to(self, control1: Point, control2: Point, end: Point) -> None:
        """Add a cubic Bézier from the current point.

        Raises:
            DegenerateGeometryError: If the path has no current point
        """
        if not self._has_current_point():
            raise DegenerateGeometryError("curve_to requires a current point")
        self._append(CurveTo(control1, control2, end))

    def add_arc(
        self,
        center: Point,
        radius: float,
        start_angle: float,
        end_angle: float,
        clockwise: bool = True,
    ) -> None:
        """Add a circular arc, joined to the current point by a line.

        Raises:
            DegenerateGeometryError: If the radius is negative or not finite
        """
        if not math.isfinite(radius) or radius < 0:
            raise DegenerateGeometryError(f"Invalid arc radius: {radius}")
        self._append(ArcTo(center, radius, start_angle, end_angle, clockwise))

    def close_path(self) -> None:
        """Close the current subpath with a line back to its start."""
        self._append(ClosePath())

    def segments(self) -> Iterator[Segment]:
        """Walk the commands with implicit moves and lines made explicit.

        Yields:
            Resolved segment tuples (see ``Segment``)
        """
        current: Point | None = None
        start: Point | None = None
        closed = False

        for command in self.commands:
            if isinstance(command, MoveTo):
                current = start = command.point
                closed = False
                yield ("move", command.point)
                continue

            if isinstance(command, ClosePath):
                if current is not None and not closed:
                    yield ("close", current, start)
                    current = start
                    closed = True
                continue

            if closed and current is not None:
                # Drawing after a close starts a new subpath at the old start
                start = current
                closed = False
                yield ("move", current)

            if isinstance(command, LineTo):
                yield ("line", current, command.point)
                current = command.point
            elif isinstance(command, CurveTo):
                yield ("curve", current, command.control1, command.control2, command.end)
                current = command.end
            elif isinstance(command, ArcTo):
                arc_start = command.start_point
                if current is None:
                    start = arc_start
                    yield ("move", arc_start)
                elif arc_start != current:
                    yield ("line", current, arc_start)
                yield ("arc", command)
                current = command.end_point

    def fill_bounds(self) -> Rect:
        """Minimal rectangle enclosing the path geometry, ignoring stroke width.

        Arcs contribute their true extent and cubics their tight bounds,
        not their control points. Result is cached.

        Returns:
            Bounding rectangle; the zero rect for an empty path
        """
        if self._cached_bounds is not None:
            return self._cached_bounds

        xs: list[float] = []
        ys: list[float] = []

        def include(point: Point) -> None:
            xs.append(point.x)
            ys.append(point.y)

        for segment in self.segments():
            kind = segment[0]
            if kind == "move":
                include(segment[1])
            elif kind == "line":
                include(segment[2])
            elif kind == "curve":
                _, p0, c1, c2, p3 = segment
                min_x, min_y, max_x, max_y = calcCubicBounds(
                    p0.to_tuple(), c1.to_tuple(), c2.to_tuple(), p3.to_tuple()
                )
                include(Point(min_x, min_y))
                include(Point(max_x, max_y))
            elif kind == "arc":
                for point in _arc_extent_points(segment[1]):
                    include(point)

        if not xs:
            self._cached_bounds = Rect.zero()
        else:
            self._cached_bounds = Rect.from_edges(min(xs), min(ys), max(xs), max(ys))
        return self._cached_bounds

    def stroke_bounds(self, margin: float = 1.0) -> Rect:
        """Fill bounds inflated by half the line width plus ``margin``.

        Args:
            margin: Extra distance added on every side

        Returns:
            Rectangle covering everything a stroke of this path can paint
        """
        grow = self.style.line_width / 2.0 + margin
        return self.fill_bounds().inset(-grow, -grow)

    def apply_transform(self, transform: Transform) -> "Path":
        """Map every point, control point and arc through ``transform``.

        The stroke style is left untouched.

        Args:
            transform: Affine transform to apply

        Returns:
            New transformed path

        Raises:
            UnsupportedTransformError: If the path has arcs and the transform
                is not a similarity
        """
        commands: list[PathCommand] = []
        for command in self.commands:
            if isinstance(command, MoveTo):
                commands.append(MoveTo(_transform_point(transform, command.point)))
            elif isinstance(command, LineTo):
                commands.append(LineTo(_transform_point(transform, command.point)))
            elif isinstance(command, CurveTo):
                commands.append(
                    CurveTo(
                        _transform_point(transform, command.control1),
                        _transform_point(transform, command.control2),
                        _transform_point(transform, command.end),
                    )
                )
            elif isinstance(command, ArcTo):
                commands.append(_transform_arc(transform, command))
            else:
                commands.append(command)
        return Path(commands=commands, style=self.style)

    def draw(self, pen: Any, close_open_subpaths: bool = False) -> None:
        """Replay the path into a fontTools segment pen.

        Arcs are emitted as cubic Béziers.

        Args:
            pen: Any object implementing the fontTools pen protocol
            close_open_subpaths: Close open subpaths instead of ending them,
                as filling and containment tests require
        """
        is_open = False

        def finish() -> None:
            if close_open_subpaths:
                pen.closePath()
            else:
                pen.endPath()

        for segment in self.segments():
            kind = segment[0]
            if kind == "move":
                if is_open:
                    finish()
                pen.moveTo(segment[1].to_tuple())
                is_open = True
            elif kind == "line":
                pen.lineTo(segment[2].to_tuple())
            elif kind == "curve":
                _, _, c1, c2, end = segment
                pen.curveTo(c1.to_tuple(), c2.to_tuple(), end.to_tuple())
            elif kind == "arc":
                for c1, c2, end in arc_to_cubics(segment[1]):
                    pen.curveTo(c1.to_tuple(), c2.to_tuple(), end.to_tuple())
            elif kind == "close":
                pen.closePath()
                is_open = False

        if is_open:
            finish()
