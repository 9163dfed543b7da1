"""Integration tests for end-to-end editing sessions.

Drives the canvas controller the way an interactive view would and checks
the dirty rectangles, selection and exported scene along the way.
"""

import math
import random

import pytest

from shapetap.config import ShapetapSettings
from shapetap.core import CanvasController, ShapeCollection, ShapeFactory
from shapetap.core.geometry import flatten_path
from shapetap.core.shape import Shape
from shapetap.domain import Color, Path, Point, Rect, ShapeKind, StrokeStyle, union_rects
from shapetap.io import SvgSceneWriter

CANVAS = Rect(0.0, 0.0, 320.0, 480.0)


def _segment_midpoint(shape: Shape) -> Point:
    """Midpoint of the longest centerline segment of the shape's first subpath."""
    points = flatten_path(shape.path)[0].points
    a, b = max(zip(points, points[1:]), key=lambda ab: math.hypot(ab[1].x - ab[0].x, ab[1].y - ab[0].y))
    return Point((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


class TestEditingSession:
    """Tests for the add, select, move, delete flow."""

    def test_add_select_move_delete(self):
        redraws: list[Rect] = []
        collection = ShapeCollection()
        controller = CanvasController(CANVAS, collection=collection, on_redraw=redraws.append)

        shape = Shape(Path.rectangle(Rect(0.0, 0.0, 100.0, 100.0), StrokeStyle(line_width=2.0)), Color.RED)
        assert collection.add(shape) == Rect(-2.0, -2.0, 104.0, 104.0)

        # Select by tapping the interior
        assert controller.on_tap(Point(50.0, 50.0)) == Rect(-2.0, -2.0, 104.0, 104.0)
        assert collection.selected_index() == 0

        # Move by (10, 10): dirty covers old and new position
        assert controller.on_drag_move(Point(10.0, 10.0)) == Rect(-2.0, -2.0, 114.0, 114.0)

        # Delete: dirty is the current bounds
        assert controller.on_delete_requested() == Rect(8.0, 8.0, 104.0, 104.0)
        assert collection.selected_index() is None
        assert len(collection) == 0
        assert len(redraws) == 3

    def test_tap_misses_far_from_shape(self):
        controller = CanvasController(CANVAS)
        controller.collection.add(
            Shape(Path.rectangle(Rect(0.0, 0.0, 100.0, 100.0), StrokeStyle(line_width=2.0)), Color.RED)
        )
        assert controller.collection.hit_test(Point(200.0, 200.0)) is None
        assert controller.on_tap(Point(200.0, 200.0)) is None

    def test_overlap_picks_bottom_most(self):
        collection = ShapeCollection()
        a = Shape(Path.rectangle(Rect(0.0, 0.0, 100.0, 100.0)), Color.RED)
        b = Shape(Path.rectangle(Rect(40.0, 40.0, 100.0, 100.0)), Color.BLUE)
        collection.add(a)
        collection.add(b)

        controller = CanvasController(CANVAS, collection=collection)
        controller.on_tap(Point(70.0, 70.0))
        assert collection.selected_shape() is a


class TestRandomSession:
    """Tests for sessions built from random shapes."""

    def test_generated_shapes_are_tappable(self):
        """Every generated shape is hit on its own centerline."""
        factory = ShapeFactory(rng=random.Random(11))
        controller = CanvasController(CANVAS, factory=factory)
        for _ in range(10):
            controller.on_add_requested()

        collection = controller.collection
        assert len(collection) == 10
        for shape in collection:
            assert shape.contains_point(_segment_midpoint(shape))

    def test_every_kind_is_tappable(self):
        factory = ShapeFactory(rng=random.Random(5))
        for kind in ShapeKind:
            shape = factory.random_shape_of_kind(kind, CANVAS)
            assert shape.kind == kind
            assert shape.contains_point(_segment_midpoint(shape))

    def test_drag_round_trip_restores_scene(self):
        factory = ShapeFactory(rng=random.Random(2))
        controller = CanvasController(CANVAS, factory=factory)
        controller.on_add_requested()
        shape = controller.collection[0]
        before = shape.total_bounds()

        controller.on_drag_start(_segment_midpoint(shape))
        assert controller.collection.selected_index() == 0
        for delta in (Point(3.0, 4.0), Point(-1.5, 2.0), Point(-1.5, -6.0)):
            controller.on_drag_move(delta)

        after = shape.total_bounds()
        assert after.to_tuple() == pytest.approx(before.to_tuple())

        # The accumulated dirty rect covers every intermediate position
        dirty = controller.take_dirty_rect()
        assert dirty is not None
        covered = union_rects(dirty, before.offset(3.0, 4.0), before.offset(1.5, 6.0))
        assert covered.to_tuple() == pytest.approx(dirty.to_tuple())

    def test_export_selected_scene(self, tmp_path):
        settings = ShapetapSettings()
        factory = ShapeFactory(config=settings.generator, rng=random.Random(9), geometry=settings.geometry)
        controller = CanvasController(CANVAS, factory=factory, settings=settings)
        for _ in range(4):
            controller.on_add_requested()
        controller.on_tap(_segment_midpoint(controller.collection[2]))
        selected = controller.collection.selected_index()
        assert selected is not None

        output = SvgSceneWriter(controller.collection, CANVAS, settings.geometry).save(tmp_path / "scene.svg")
        document = output.read_text(encoding="utf-8")
        assert document.count("<path") == 5
        assert document.count('stroke-dasharray="5 5"') == 1
