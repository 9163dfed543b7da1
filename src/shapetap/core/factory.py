"""Random shape generation.

Shapes are generated inside a bounding rectangle from an injected random
source, so a seeded ``random.Random`` reproduces the same geometry every
time. Draw order is fixed: frame origin, frame size, kind, line width,
colour.

House and arc outlines are designed in a Y-up frame and flipped into the
target rectangle with a translate, flip, translate-back transform.
"""

import logging
import math
import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

from fontTools.misc.transform import Identity, Transform

from shapetap.config import GeneratorConfig, GeometryConfig
from shapetap.core.shape import Shape
from shapetap.domain import Color, LineJoin, Path, Point, Rect, ShapeKind, StrokeStyle
from shapetap.exceptions import InvalidBoundsError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """The slice of ``random.Random`` the factory uses."""

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def flip_transform(bounds: Rect) -> Transform:
    """Transform mirroring Y inside ``bounds``.

    Points at the bottom edge of the rectangle land on its top edge and
    vice versa; X is unchanged.
    """
    r = bounds.normalized()
    return (
        Identity.translate(r.x, r.y)
        .translate(0.0, r.height)
        .scale(1.0, -1.0)
        .translate(-r.x, -r.y)
    )


def rect_path(bounds: Rect) -> Path:
    """Axis-aligned rectangle filling ``bounds``."""
    return Path.rectangle(bounds).apply_transform(flip_transform(bounds))


def ellipse_path(bounds: Rect) -> Path:
    """Ellipse inscribed in ``bounds``."""
    return Path.oval(bounds).apply_transform(flip_transform(bounds))


def house_path(bounds: Rect) -> Path:
    """House outline: walls two thirds high under a triangular roof.

    The outline retraces its edges in a zig-zag (each wall and the roof line
    twice) so round joins render cleanly at every corner.
    """
    r = bounds.normalized()
    bottom_left = Point(r.min_x, r.min_y)
    top_left = Point(r.min_x, r.min_y + r.height * 2.0 / 3.0)
    bottom_right = Point(r.max_x, r.min_y)
    top_right = Point(r.max_x, r.min_y + r.height * 2.0 / 3.0)
    roof_tip = Point(r.mid_x, r.max_y)

    path = Path(style=StrokeStyle(line_join=LineJoin.ROUND))
    path.move_to(bottom_left)
    for point in (
        top_left,
        roof_tip,
        top_right,
        top_left,
        bottom_right,
        top_right,
        bottom_left,
        bottom_right,
    ):
        path.line_to(point)

    return path.apply_transform(flip_transform(r))


def arc_path(bounds: Rect) -> Path:
    """Spiral: a 270° arc followed by a half-radius 270° arc.

    The first arc has radius ``width / 2`` around the centre of ``bounds``
    and starts at its right edge, so it can reach past a frame that is
    wider than tall.
    """
    r = bounds.normalized()
    center = Point(r.mid_x, r.mid_y)
    center_right = Point(r.max_x, r.mid_y)
    radius = r.width / 2.0
    inner_center = Point(center.x, center.y - radius / 2.0)

    path = Path(style=StrokeStyle(line_join=LineJoin.ROUND))
    path.move_to(center_right)
    path.add_arc(center, radius, 0.0, math.pi * 1.5, clockwise=True)
    path.add_arc(inner_center, radius / 2.0, math.pi * 1.5, math.pi, clockwise=True)

    return path.apply_transform(flip_transform(r))


_BUILDERS = {
    ShapeKind.RECTANGLE: rect_path,
    ShapeKind.ELLIPSE: ellipse_path,
    ShapeKind.HOUSE: house_path,
    ShapeKind.ARC: arc_path,
}


class ShapeFactory:
    """Generates random shapes inside given bounds.

    Example:
        factory = ShapeFactory(rng=random.Random(42))
        shape = factory.random_shape(Rect(0, 0, 320, 480))
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        rng: RandomSource | None = None,
        geometry: GeometryConfig | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            config: Generation settings (minimum size, line widths, palette)
            rng: Random source; a fresh ``random.Random`` when omitted
            geometry: Geometry settings handed to generated shapes
        """
        self.config = config or GeneratorConfig()
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.geometry = geometry or GeometryConfig()

    def random_rect(self, max_bounds: Rect) -> Rect:
        """Pick a random frame inside ``max_bounds``.

        Origin offsets and extra size are whole units drawn uniformly from
        the feasible range; the frame is never smaller than the minimum size.

        Raises:
            InvalidBoundsError: If ``max_bounds`` cannot fit the minimum size
        """
        bounds = max_bounds.normalized()
        min_size = self.config.min_size
        if bounds.width < min_size or bounds.height < min_size:
            raise InvalidBoundsError(bounds.width, bounds.height, min_size)

        origin_x = bounds.x + self.rng.randint(0, math.floor(bounds.width - min_size))
        origin_y = bounds.y + self.rng.randint(0, math.floor(bounds.height - min_size))

        width = min_size + self.rng.randint(0, max(0, math.floor(bounds.max_x - origin_x - min_size)))
        height = min_size + self.rng.randint(0, max(0, math.floor(bounds.max_y - origin_y - min_size)))

        return Rect(origin_x, origin_y, width, height)

    def random_kind(self) -> ShapeKind:
        return self.rng.choice(list(ShapeKind))

    def random_line_width(self) -> float:
        return float(self.rng.randint(self.config.min_line_width, self.config.max_line_width))

    def random_color(self) -> Color:
        return self.rng.choice(self.config.palette)

    def shape_of_kind(self, kind: ShapeKind, frame: Rect, line_width: float, color: Color) -> Shape:
        """Build a shape of a given kind filling ``frame``.

        Args:
            kind: Shape kind
            frame: Rectangle the shape is laid out in
            line_width: Stroke width
            color: Stroke colour

        Returns:
            New shape with its tap target computed
        """
        path = _BUILDERS[kind](frame)
        path.style = path.style.with_width(line_width)
        return Shape(path, color, kind=kind, config=self.geometry)

    def random_shape(self, max_bounds: Rect) -> Shape:
        """Generate a random shape inside ``max_bounds``.

        Args:
            max_bounds: Rectangle the shape's frame must fit in

        Returns:
            New shape

        Raises:
            InvalidBoundsError: If ``max_bounds`` is smaller than the minimum size
        """
        frame = self.random_rect(max_bounds)
        kind = self.random_kind()
        line_width = self.random_line_width()
        color = self.random_color()

        logger.debug(
            "Generating %s in (%g, %g, %g, %g) width=%g color=%s",
            kind.value,
            frame.x,
            frame.y,
            frame.width,
            frame.height,
            line_width,
            color.value,
        )
        return self.shape_of_kind(kind, frame, line_width, color)

    def random_shape_of_kind(self, kind: ShapeKind, max_bounds: Rect) -> Shape:
        """Generate a random shape of a fixed kind inside ``max_bounds``."""
        frame = self.random_rect(max_bounds)
        return self.shape_of_kind(kind, frame, self.random_line_width(), self.random_color())
