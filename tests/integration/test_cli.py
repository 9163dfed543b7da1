"""Integration tests for the command-line interface.

Runs the Typer app in-process and checks exit codes, console output and
exported files.
"""

import logging
import math

import pytest
import structlog
import typer
from typer.testing import CliRunner

from shapetap import __version__
from shapetap.cli.app import app, build_scene, parse_point
from shapetap.config import ShapetapSettings
from shapetap.core.geometry import flatten_path
from shapetap.domain import Point

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the logging configuration each CLI invocation installs."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()


def _tap_point(seed: int, index: int) -> tuple[float, float]:
    """Centerline point of a shape in the default seeded scene."""
    controller = build_scene(ShapetapSettings(), 5, seed, 320.0, 480.0)
    points = flatten_path(controller.collection[index].path)[0].points
    a, b = max(zip(points, points[1:]), key=lambda ab: math.hypot(ab[1].x - ab[0].x, ab[1].y - ab[0].y))
    x, y = (a.x + b.x) / 2.0, (a.y + b.y) / 2.0
    return x, y


class TestGlobalOptions:
    """Tests for options shared by every command."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_invalid_log_level(self):
        result = runner.invoke(app, ["--log-level", "LOUD", "generate"])
        assert result.exit_code == 1
        assert "Invalid log level" in result.output

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "shapetap.log"
        result = runner.invoke(app, ["--log-file", str(log_file), "generate", "-n", "2"])
        assert result.exit_code == 0
        assert log_file.exists()


class TestGenerate:
    """Tests for the generate command."""

    def test_lists_shapes(self):
        result = runner.invoke(app, ["generate", "--count", "3", "--seed", "4"])
        assert result.exit_code == 0
        assert "Kind" in result.output
        assert "3 shapes" in result.output

    def test_same_seed_same_output(self):
        first = runner.invoke(app, ["--quiet", "generate", "--seed", "8"])
        second = runner.invoke(app, ["--quiet", "generate", "--seed", "8"])
        assert first.exit_code == 0
        assert first.output == second.output

    def test_quiet_skips_header(self):
        result = runner.invoke(app, ["--quiet", "generate", "-n", "1"])
        assert result.exit_code == 0
        assert "Shapetap" not in result.output

    def test_canvas_too_small(self):
        result = runner.invoke(app, ["generate", "--width", "40", "--height", "40"])
        assert result.exit_code == 1
        assert "Canvas too small" in result.output

    def test_zero_shapes_on_small_canvas(self):
        result = runner.invoke(app, ["generate", "--count", "0", "--width", "40"])
        assert result.exit_code == 0


class TestHitTest:
    """Tests for the hit-test command."""

    def test_hit(self):
        x, y = _tap_point(seed=3, index=0)
        controller = build_scene(ShapetapSettings(), 5, 3, 320.0, 480.0)
        expected = controller.collection.hit_test(Point(x, y))

        result = runner.invoke(app, ["hit-test", str(x), str(y), "--seed", "3"])
        assert result.exit_code == 0
        assert f"shape {expected}" in result.output

    def test_miss(self):
        result = runner.invoke(app, ["hit-test", "10", "10", "--count", "0"])
        assert result.exit_code == 0
        assert "No shape" in result.output


class TestExport:
    """Tests for the export command."""

    def test_export(self, tmp_path):
        output = tmp_path / "scene.svg"
        result = runner.invoke(app, ["export", str(output), "--seed", "1"])
        assert result.exit_code == 0
        assert output.exists()

        document = output.read_text(encoding="utf-8")
        assert document.count("<path") == 5
        assert "stroke-dasharray" not in document

    def test_export_with_selection(self, tmp_path):
        x, y = _tap_point(seed=1, index=2)
        output = tmp_path / "selected.svg"
        result = runner.invoke(app, ["export", str(output), "--seed", "1", "--select-at", f"{x},{y}"])
        assert result.exit_code == 0
        assert "selected" in result.output

        document = output.read_text(encoding="utf-8")
        assert document.count('stroke-dasharray="5 5"') == 1

    def test_export_to_missing_directory(self, tmp_path):
        output = tmp_path / "missing" / "scene.svg"
        result = runner.invoke(app, ["export", str(output)])
        assert result.exit_code == 1
        assert "Could not write SVG" in result.output

    def test_bad_select_at(self, tmp_path):
        result = runner.invoke(app, ["export", str(tmp_path / "x.svg"), "--select-at", "nope"])
        assert result.exit_code != 0


class TestParsePoint:
    """Tests for X,Y parsing."""

    def test_valid(self):
        point = parse_point("1.5,-2")
        assert point.x == 1.5
        assert point.y == -2.0

    @pytest.mark.parametrize("value", ["1", "1,2,3", "a,b"])
    def test_invalid(self, value):
        with pytest.raises(typer.BadParameter):
            parse_point(value)
