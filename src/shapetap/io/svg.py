"""Headless SVG renderer for shape scenes.

Paints a scene the way an interactive canvas would: every shape whose
stroke bounds meet the paint region is stroked in its colour, and the
selected shape additionally gets its stroke outline traced in black with
a 5/5 dash.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path as FilePath

from fontTools.pens.svgPathPen import SVGPathPen

from shapetap.config import GeometryConfig
from shapetap.core.controller import DrawingDataSource
from shapetap.core.stroke import stroke_outline
from shapetap.domain import Color, Path, Rect
from shapetap.exceptions import ExportError

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
SELECTION_COLOR = Color.BLACK
SELECTION_DASH = "5 5"
SELECTION_WIDTH = 1.0
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _format_number(value: float) -> str:
    """Format a coordinate with at most three decimals and no trailing zeros."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def path_to_svg_d(path: Path) -> str:
    """Serialize a path as SVG path data.

    Arcs are written as cubic Béziers.

    Args:
        path: Path to serialize

    Returns:
        Contents of an SVG ``d`` attribute
    """
    pen = SVGPathPen(None, ntos=_format_number)
    path.draw(pen)
    return pen.getCommands()


class SvgSceneWriter:
    """Renders a drawing data source to SVG.

    Example:
        writer = SvgSceneWriter(collection, Rect(0, 0, 320, 480))
        writer.save("scene.svg")
    """

    def __init__(
        self,
        source: DrawingDataSource,
        canvas: Rect,
        geometry: GeometryConfig | None = None,
    ) -> None:
        self.source = source
        self.canvas = canvas.normalized()
        self.geometry = geometry or GeometryConfig()

    def _stroke_element(self, path: Path, color: Color, width: float) -> ET.Element:
        style = path.style
        element = ET.Element("path")
        element.set("d", path_to_svg_d(path))
        element.set("fill", "none")
        element.set("stroke", color.hex)
        element.set("stroke-width", _format_number(width))
        element.set("stroke-linecap", style.line_cap.value)
        element.set("stroke-linejoin", style.line_join.value)
        element.set("stroke-miterlimit", _format_number(style.miter_limit))
        return element

    def _selection_element(self, path: Path) -> ET.Element:
        """Dashed trace of the selected path's stroke outline.

        The outline is a union of convex pieces (segment quads, join and cap
        polygons, the interior of closed subpaths) that is never merged, so
        every piece is traced as its own subpath. Internal piece edges show
        up inside the band rather than only its outer boundary.
        """
        outline = stroke_outline(
            path,
            tolerance=self.geometry.flatten_tolerance,
            circle_segments=self.geometry.circle_segments,
        )
        element = self._stroke_element(outline, SELECTION_COLOR, SELECTION_WIDTH)
        element.set("stroke-dasharray", SELECTION_DASH)
        element.set("class", "selection")
        return element

    def build(self, region: Rect | None = None) -> ET.Element:
        """Build the SVG document tree.

        Args:
            region: Paint region; the whole canvas when omitted

        Returns:
            Root ``svg`` element
        """
        region = (region or self.canvas).normalized()
        c = self.canvas

        svg = ET.Element("svg")
        svg.set("xmlns", SVG_NAMESPACE)
        svg.set("width", _format_number(c.width))
        svg.set("height", _format_number(c.height))
        svg.set(
            "viewBox",
            " ".join(_format_number(v) for v in (c.x, c.y, c.width, c.height)),
        )

        selected = self.source.selected_index()
        painted = 0
        for index in range(self.source.shape_count()):
            path = self.source.path_at(index)
            if not path.stroke_bounds(margin=self.geometry.bounds_margin).intersects(region):
                continue

            svg.append(self._stroke_element(path, self.source.color_at(index), path.line_width))
            if index == selected:
                svg.append(self._selection_element(path))
            painted += 1

        logger.debug("Rendered %d of %d shapes", painted, self.source.shape_count())
        return svg

    def render(self, region: Rect | None = None) -> str:
        """Render the scene as an SVG document string."""
        svg = self.build(region)
        ET.indent(svg)
        return XML_DECLARATION + ET.tostring(svg, encoding="unicode")

    def save(self, output_path: str | FilePath, region: Rect | None = None) -> FilePath:
        """Write the scene to ``output_path``.

        Returns:
            Path the file was written to

        Raises:
            ExportError: If the file cannot be written
        """
        output_path = FilePath(output_path)
        document = self.render(region)
        try:
            output_path.write_text(document, encoding="utf-8")
        except OSError as e:
            raise ExportError(str(output_path), str(e)) from e

        logger.info("Scene exported to %s", output_path)
        return output_path
