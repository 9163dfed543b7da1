"""Scene export layer for shapetap.

This module renders shape scenes to SVG using fonttools pens for path
serialization. Exports are write-only; nothing is read back.

Key classes:
- SvgSceneWriter: Paint a drawing data source to an SVG document
"""

from shapetap.io.svg import SvgSceneWriter, path_to_svg_d

__all__ = [
    "SvgSceneWriter",
    "path_to_svg_d",
]
