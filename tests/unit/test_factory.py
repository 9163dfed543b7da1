"""Unit tests for random shape generation.

Tests cover:
- Random frames within bounds and at least the minimum size
- Draw order of the injected random source
- Geometry of the four shape kinds, including the Y flip
- Rejection of bounds that are too small
"""

import math
import random

import pytest

from shapetap.config import GeneratorConfig
from shapetap.core.factory import (
    ShapeFactory,
    arc_path,
    ellipse_path,
    flip_transform,
    house_path,
    rect_path,
)
from shapetap.domain import PALETTE, ArcTo, Color, LineJoin, LineTo, MoveTo, Point, Rect, ShapeKind
from shapetap.exceptions import InvalidBoundsError


class ScriptedRandom:
    """Random source returning preset values and recording calls."""

    def __init__(self, ints: list[int], choices: list[int]) -> None:
        self.ints = list(ints)
        self.choices = list(choices)
        self.randint_calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.randint_calls.append((a, b))
        return self.ints.pop(0)

    def choice(self, seq):
        return seq[self.choices.pop(0)]


class TestRandomRect:
    """Tests for random frame selection."""

    @pytest.mark.parametrize("seed", range(20))
    def test_frame_within_bounds(self, seed):
        factory = ShapeFactory(rng=random.Random(seed))
        bounds = Rect(10.0, 10.0, 300.0, 460.0)
        frame = factory.random_rect(bounds)

        assert frame.width >= 44.0
        assert frame.height >= 44.0
        assert frame.min_x >= bounds.min_x
        assert frame.min_y >= bounds.min_y
        assert frame.max_x <= bounds.max_x
        assert frame.max_y <= bounds.max_y

    def test_exact_minimum_bounds(self):
        """Bounds of exactly the minimum size leave no freedom."""
        factory = ShapeFactory(rng=random.Random(1))
        assert factory.random_rect(Rect(5.0, 5.0, 44.0, 44.0)) == Rect(5.0, 5.0, 44.0, 44.0)

    def test_unnormalized_bounds(self):
        factory = ShapeFactory(rng=random.Random(3))
        frame = factory.random_rect(Rect(100.0, 100.0, -100.0, -100.0))
        assert frame.min_x >= 0.0
        assert frame.max_x <= 100.0

    @pytest.mark.parametrize("bounds", [Rect(0.0, 0.0, 43.0, 100.0), Rect(0.0, 0.0, 100.0, 20.0)])
    def test_too_small_bounds(self, bounds):
        factory = ShapeFactory(rng=random.Random(0))
        with pytest.raises(InvalidBoundsError) as exc_info:
            factory.random_shape(bounds)
        assert exc_info.value.min_size == 44.0

    def test_custom_minimum_size(self):
        factory = ShapeFactory(config=GeneratorConfig(min_size=10.0), rng=random.Random(0))
        frame = factory.random_rect(Rect(0.0, 0.0, 20.0, 20.0))
        assert frame.width >= 10.0
        assert frame.max_x <= 20.0


class TestDrawOrder:
    """Tests for the order values are drawn from the random source."""

    def test_rect_kind_width_color(self):
        rng = ScriptedRandom(ints=[3, 4, 5, 6, 7], choices=[2, 1])
        shape = ShapeFactory(rng=rng).random_shape(Rect(0.0, 0.0, 200.0, 200.0))

        assert rng.randint_calls == [(0, 156), (0, 156), (0, 153), (0, 152), (1, 16)]
        assert shape.kind == list(ShapeKind)[2]
        assert shape.line_width == 7.0
        assert shape.line_color == PALETTE[1]
        assert shape.path.fill_bounds() == Rect(3.0, 4.0, 49.0, 50.0)

    def test_random_shape_of_kind(self):
        rng = ScriptedRandom(ints=[0, 0, 0, 0, 16], choices=[0])
        shape = ShapeFactory(rng=rng).random_shape_of_kind(ShapeKind.RECTANGLE, Rect(0.0, 0.0, 100.0, 100.0))
        assert shape.kind == ShapeKind.RECTANGLE
        assert shape.line_width == 16.0
        assert shape.path.fill_bounds() == Rect(0.0, 0.0, 44.0, 44.0)


class TestRandomShapes:
    """Tests for properties of seeded random shapes."""

    @pytest.mark.parametrize("seed", range(25))
    def test_shape_properties(self, seed):
        factory = ShapeFactory(rng=random.Random(seed))
        bounds = Rect(0.0, 0.0, 320.0, 480.0)
        shape = factory.random_shape(bounds)

        assert shape.kind in ShapeKind
        assert shape.line_color in PALETTE
        assert shape.line_width == int(shape.line_width)
        assert 1 <= shape.line_width <= 16

        fill = shape.path.fill_bounds()
        if shape.kind != ShapeKind.ARC:
            assert fill.min_x >= bounds.min_x - 1e-9
            assert fill.min_y >= bounds.min_y - 1e-9
            assert fill.max_x <= bounds.max_x + 1e-9
            assert fill.max_y <= bounds.max_y + 1e-9
            assert fill.width >= 44.0 - 1e-9
            assert fill.height >= 44.0 - 1e-9

    def test_same_seed_same_shape(self):
        bounds = Rect(0.0, 0.0, 320.0, 480.0)
        a = ShapeFactory(rng=random.Random(7)).random_shape(bounds)
        b = ShapeFactory(rng=random.Random(7)).random_shape(bounds)
        assert a.path.commands == b.path.commands
        assert a.line_color == b.line_color

    def test_palette_restricts_colors(self):
        config = GeneratorConfig(palette=[Color.GREEN])
        factory = ShapeFactory(config=config, rng=random.Random(0))
        assert all(factory.random_color() == Color.GREEN for _ in range(10))


class TestBuilders:
    """Tests for the path builders of each kind."""

    def test_flip_transform(self):
        """The flip swaps the top and bottom edges of the frame."""
        t = flip_transform(Rect(10.0, 20.0, 30.0, 40.0))
        assert t.transformPoint((10.0, 20.0)) == pytest.approx((10.0, 60.0))
        assert t.transformPoint((40.0, 60.0)) == pytest.approx((40.0, 20.0))
        assert t.transformPoint((25.0, 40.0)) == pytest.approx((25.0, 40.0))

    def test_rect_path(self):
        path = rect_path(Rect(10.0, 10.0, 50.0, 60.0))
        assert path.fill_bounds() == Rect(10.0, 10.0, 50.0, 60.0)
        assert len(path.commands) == 5

    def test_ellipse_path(self):
        path = ellipse_path(Rect(0.0, 0.0, 100.0, 60.0))
        assert path.fill_bounds().to_tuple() == pytest.approx((0.0, 0.0, 100.0, 60.0))

    def test_house_roof_points_up(self):
        """After the flip the roof tip sits on the top edge (smallest Y)."""
        path = house_path(Rect(0.0, 0.0, 90.0, 90.0))
        points = [command.point for command in path.commands]

        assert isinstance(path.commands[0], MoveTo)
        assert all(isinstance(command, LineTo) for command in path.commands[1:])
        assert len(points) == 9
        assert points[0].to_tuple() == pytest.approx((0.0, 90.0))
        assert points[2].to_tuple() == pytest.approx((45.0, 0.0))
        assert points[1].to_tuple() == pytest.approx((0.0, 30.0))
        assert path.style.line_join == LineJoin.ROUND

    def test_house_fills_frame(self):
        path = house_path(Rect(20.0, 30.0, 60.0, 90.0))
        assert path.fill_bounds().to_tuple() == pytest.approx((20.0, 30.0, 60.0, 90.0))

    def test_arc_path_geometry(self):
        path = arc_path(Rect(0.0, 0.0, 100.0, 100.0))
        arcs = [command for command in path.commands if isinstance(command, ArcTo)]

        assert isinstance(path.commands[0], MoveTo)
        assert path.commands[0].point.to_tuple() == pytest.approx((100.0, 50.0))
        assert [arc.radius for arc in arcs] == pytest.approx([50.0, 25.0])
        assert path.style.line_join == LineJoin.ROUND
        assert path.fill_bounds().to_tuple() == pytest.approx((0.0, 0.0, 100.0, 100.0), abs=1e-9)

    def test_arc_path_is_continuous(self):
        """The inner arc starts where the outer one ends."""
        path = arc_path(Rect(0.0, 0.0, 100.0, 100.0))
        outer, inner = [command for command in path.commands if isinstance(command, ArcTo)]
        assert inner.start_point.x == pytest.approx(outer.end_point.x)
        assert inner.start_point.y == pytest.approx(outer.end_point.y)

    def test_arc_path_overflows_wide_frames(self):
        """The radius follows the frame width, so a wide frame spills vertically."""
        bounds = Rect(0.0, 0.0, 200.0, 60.0)
        fill = arc_path(bounds).fill_bounds()
        assert fill.height > bounds.height
        assert fill.width == pytest.approx(200.0)

    def test_shape_of_kind_sets_width(self):
        factory = ShapeFactory(rng=random.Random(0))
        shape = factory.shape_of_kind(ShapeKind.HOUSE, Rect(0.0, 0.0, 90.0, 90.0), 5.0, Color.RED)
        assert shape.line_width == 5.0
        assert shape.path.style.line_join == LineJoin.ROUND
        assert math.isclose(shape.total_bounds().width, 90.0 + 2 * 3.5)
