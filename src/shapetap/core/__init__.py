"""Core algorithms for shapetap.

This module contains the core algorithms for:

- Geometry operations (flattening, winding containment, distances)
- Stroke outline expansion (segment quads, joins, caps)
- Shapes with precomputed tap targets
- Random shape generation
- The shape collection and its canvas controller

Key functions:
- flatten_path: Convert a path to polylines
- contains: Non-zero winding point-in-region test
- stroke_outline: Region covered by stroking a path
- tap_target_for_path: Stroke outline widened to the minimum tap width

Key classes:
- Shape: A stroked path with its tap target
- ShapeFactory: Generates random shapes inside given bounds
- ShapeCollection: Ordered shapes plus explicit selection state
- CanvasController: Turns input events into dirty rectangles
"""

from shapetap.core.collection import NoSelection, SelectedAt, SelectionState, ShapeCollection
from shapetap.core.controller import CanvasController, DrawingDataSource
from shapetap.core.factory import (
    ShapeFactory,
    arc_path,
    ellipse_path,
    flip_transform,
    house_path,
    rect_path,
)
from shapetap.core.geometry import (
    Polyline,
    contains,
    distance_to_path,
    flatten_path,
    nearest_point_on_segment,
    signed_area,
)
from shapetap.core.shape import Shape, tap_target_for_path
from shapetap.core.stroke import stroke_outline

__all__ = [
    "CanvasController",
    "DrawingDataSource",
    "NoSelection",
    "Polyline",
    "SelectedAt",
    "SelectionState",
    "Shape",
    "ShapeCollection",
    "ShapeFactory",
    "arc_path",
    "contains",
    "distance_to_path",
    "ellipse_path",
    "flatten_path",
    "flip_transform",
    "house_path",
    "nearest_point_on_segment",
    "rect_path",
    "signed_area",
    "stroke_outline",
    "tap_target_for_path",
]
