"""Shape entity with a precomputed tap target.

A shape owns its path and colour plus a tap target: the path's stroke
outline widened to at least the minimum tap width, so thin strokes stay easy
to hit. The tap target is computed once and then moved in lockstep with the
path.
"""

import math

from fontTools.misc.transform import Identity

from shapetap.config import GeometryConfig
from shapetap.core.geometry import contains
from shapetap.core.stroke import stroke_outline
from shapetap.domain import Color, Path, Point, Rect, ShapeKind
from shapetap.exceptions import DegenerateGeometryError


def tap_target_for_path(path: Path, config: GeometryConfig | None = None) -> Path:
    """Build the hit-testable region of a path.

    Args:
        path: Path being tapped
        config: Geometry settings (minimum tap width, tolerances)

    Returns:
        Stroke outline of ``path`` at ``max(min_tap_width, line_width)``
    """
    config = config or GeometryConfig()
    return stroke_outline(
        path,
        width=max(config.min_tap_width, path.line_width),
        cap=path.style.line_cap,
        join=path.style.line_join,
        miter_limit=path.style.miter_limit,
        tolerance=config.flatten_tolerance,
        circle_segments=config.circle_segments,
    )


class Shape:
    """A stroked path on the canvas.

    Example:
        shape = Shape(Path.rectangle(Rect(0, 0, 100, 100)), Color.RED)
        shape.contains_point(Point(0, 50))  # True, on the outline
        shape.move_by(Point(10, 10))

    Attributes:
        path: Path as drawn, in canvas coordinates
        line_color: Stroke colour
        kind: Generated shape kind, or None for shapes built directly
    """

    def __init__(
        self,
        path: Path,
        line_color: Color,
        kind: ShapeKind | None = None,
        config: GeometryConfig | None = None,
    ) -> None:
        """Initialize the shape and precompute its tap target.

        Args:
            path: Path to draw
            line_color: Stroke colour
            kind: Generated shape kind, if any
            config: Geometry settings

        Raises:
            DegenerateGeometryError: If the path's line width is not positive
        """
        line_width = path.line_width
        if not math.isfinite(line_width) or line_width <= 0:
            raise DegenerateGeometryError(f"Line width must be positive, got {line_width}")

        self.path = path
        self.line_color = line_color
        self.kind = kind
        self._config = config or GeometryConfig()
        self._tap_target = tap_target_for_path(path, self._config)

    def __repr__(self) -> str:
        kind = self.kind.value if self.kind else "custom"
        return f"Shape(kind={kind}, color={self.line_color.value}, line_width={self.line_width:g})"

    @property
    def line_width(self) -> float:
        return self.path.line_width

    @property
    def tap_target(self) -> Path:
        """Region that counts as a hit on this shape."""
        return self._tap_target

    def total_bounds(self) -> Rect:
        """Stroke bounds of the path, including the redraw margin."""
        return self.path.stroke_bounds(margin=self._config.bounds_margin)

    def move_by(self, delta: Point) -> None:
        """Translate the path and the tap target by ``delta``."""
        transform = Identity.translate(delta.x, delta.y)
        self.path = self.path.apply_transform(transform)
        self._tap_target = self._tap_target.apply_transform(transform)

    def contains_point(self, point: Point) -> bool:
        """Check if a tap at ``point`` hits this shape."""
        return contains(self._tap_target, point)
