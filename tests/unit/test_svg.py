"""Unit tests for SVG scene export.

Tests cover:
- Path data serialization through fontTools pens
- Stroke attributes of rendered shapes
- Selection outlines
- Paint region culling
- Write errors
"""

import math
import xml.etree.ElementTree as ET

import pytest

from shapetap.core.collection import ShapeCollection
from shapetap.core.shape import Shape
from shapetap.core.stroke import stroke_outline
from shapetap.domain import Color, LineCap, LineJoin, MoveTo, Path, Point, Rect, StrokeStyle
from shapetap.exceptions import ExportError
from shapetap.io.svg import SvgSceneWriter, path_to_svg_d

SVG = "{http://www.w3.org/2000/svg}"
CANVAS = Rect(0.0, 0.0, 320.0, 480.0)


@pytest.fixture
def collection() -> ShapeCollection:
    shapes = ShapeCollection()
    shapes.add(
        Shape(
            Path.rectangle(Rect(10.0, 10.0, 50.0, 50.0), StrokeStyle(line_width=3.0)),
            Color.RED,
        )
    )
    shapes.add(
        Shape(
            Path.oval(
                Rect(200.0, 300.0, 80.0, 60.0),
                StrokeStyle(line_width=5.0, line_cap=LineCap.ROUND, line_join=LineJoin.ROUND),
            ),
            Color.BLUE,
        )
    )
    return shapes


def _paths(document: str) -> list[ET.Element]:
    root = ET.fromstring(document.split("?>", 1)[1])
    return root.findall(f"{SVG}path")


class TestPathData:
    """Tests for path data serialization."""

    def test_rectangle(self):
        d = path_to_svg_d(Path.rectangle(Rect(0.0, 0.0, 10.0, 20.0)))
        assert d.startswith("M0 0")
        assert d.endswith("Z")
        assert "10" in d
        assert "20" in d

    def test_numbers_are_compact(self):
        path = Path()
        path.move_to(Point(1.0 / 3.0, 2.5))
        path.line_to(Point(10.0, 10.0))
        d = path_to_svg_d(path)
        assert d.startswith("M0.333 2.5")

    def test_arcs_become_cubics(self):
        path = Path()
        path.add_arc(Point(0.0, 0.0), 10.0, 0.0, math.pi)
        d = path_to_svg_d(path)
        assert "C" in d
        assert "Z" not in d

    def test_empty_path(self):
        assert path_to_svg_d(Path()) == ""


class TestSceneWriter:
    """Tests for rendering scenes."""

    def test_document_attributes(self, collection):
        root = SvgSceneWriter(collection, CANVAS).build()
        assert root.get("width") == "320"
        assert root.get("height") == "480"
        assert root.get("viewBox") == "0 0 320 480"

    def test_one_path_per_shape(self, collection):
        paths = _paths(SvgSceneWriter(collection, CANVAS).render())
        assert len(paths) == 2

        rect, oval = paths
        assert rect.get("stroke") == Color.RED.hex
        assert rect.get("stroke-width") == "3"
        assert rect.get("fill") == "none"
        assert rect.get("stroke-linejoin") == "miter"
        assert oval.get("stroke") == Color.BLUE.hex
        assert oval.get("stroke-linecap") == "round"
        assert oval.get("stroke-linejoin") == "round"

    def test_selected_shape_gets_dashed_outline(self, collection):
        collection.select(1)
        paths = _paths(SvgSceneWriter(collection, CANVAS).render())

        assert len(paths) == 3
        outline = paths[2]
        assert outline.get("stroke") == Color.BLACK.hex
        assert outline.get("stroke-dasharray") == "5 5"
        assert outline.get("class") == "selection"
        assert paths[1].get("stroke-dasharray") is None

    def test_selection_traces_every_outline_piece(self, collection):
        """Each convex piece of the stroke outline is its own subpath."""
        collection.select(0)
        outline = stroke_outline(collection.path_at(0))
        pieces = sum(isinstance(command, MoveTo) for command in outline.commands)

        trace = _paths(SvgSceneWriter(collection, CANVAS).render())[1]
        d = trace.get("d")
        assert pieces > 1
        assert d.count("M") == pieces
        assert d.count("Z") == pieces

    def test_region_culls_shapes(self, collection):
        """Only shapes whose stroke bounds meet the region are painted."""
        paths = _paths(SvgSceneWriter(collection, CANVAS).render(Rect(0.0, 0.0, 100.0, 100.0)))
        assert len(paths) == 1
        assert paths[0].get("stroke") == Color.RED.hex

    def test_empty_scene(self):
        paths = _paths(SvgSceneWriter(ShapeCollection(), CANVAS).render())
        assert paths == []


class TestSave:
    """Tests for writing SVG files."""

    def test_save(self, collection, tmp_path):
        output = tmp_path / "scene.svg"
        written = SvgSceneWriter(collection, CANVAS).save(output)

        assert written == output
        assert output.exists()
        assert "<svg" in output.read_text(encoding="utf-8")

    def test_save_to_missing_directory(self, collection, tmp_path):
        output = tmp_path / "missing" / "scene.svg"
        with pytest.raises(ExportError) as exc_info:
            SvgSceneWriter(collection, CANVAS).save(output)
        assert exc_info.value.path == str(output)
