"""Domain models for shapetap.

This module contains the plain data models shared by every layer: points,
rectangles, paths with stroke styles, colours and shape kinds. All models
are designed to be:

- Immutable where possible (using frozen dataclasses)
- Independent of any UI toolkit
- Replayable into fontTools pens for containment tests and export

Key classes:
- Point: A 2D point or displacement
- Rect: An origin/size rectangle, possibly unnormalized
- Path: Drawing commands plus a StrokeStyle
- Color: Named stroke colour
- ShapeKind: Kind of generated shape
"""

from shapetap.domain.color import PALETTE, Color, ShapeKind
from shapetap.domain.geometry import Point, Rect, union_rects
from shapetap.domain.path import (
    ArcTo,
    ClosePath,
    CurveTo,
    LineCap,
    LineJoin,
    LineTo,
    MoveTo,
    Path,
    PathCommand,
    StrokeStyle,
    arc_to_cubics,
)

__all__: list[str] = [
    # Enums
    "Color",
    "LineCap",
    "LineJoin",
    "ShapeKind",
    # Core types
    "Point",
    "Rect",
    "Path",
    "PathCommand",
    "StrokeStyle",
    # Commands
    "ArcTo",
    "ClosePath",
    "CurveTo",
    "LineTo",
    "MoveTo",
    # Helpers
    "PALETTE",
    "arc_to_cubics",
    "union_rects",
]
