"""Stroke colours and shape kinds."""

from enum import Enum


class Color(str, Enum):
    """Named stroke colour.

    Values are lowercase names; ``hex`` gives the RGB value of the system
    colour of the same name.
    """

    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    MAGENTA = "magenta"
    BROWN = "brown"
    PURPLE = "purple"
    ORANGE = "orange"
    BLACK = "black"

    @property
    def hex(self) -> str:
        """RGB value as ``#rrggbb``."""
        return _HEX_VALUES[self]


_HEX_VALUES: dict[Color, str] = {
    Color.BLUE: "#0000ff",
    Color.RED: "#ff0000",
    Color.GREEN: "#00ff00",
    Color.YELLOW: "#ffff00",
    Color.MAGENTA: "#ff00ff",
    Color.BROWN: "#996633",
    Color.PURPLE: "#800080",
    Color.ORANGE: "#ff8000",
    Color.BLACK: "#000000",
}

# Colours a generated shape can be drawn with; black is reserved for
# selection outlines.
PALETTE: tuple[Color, ...] = (
    Color.BLUE,
    Color.RED,
    Color.GREEN,
    Color.YELLOW,
    Color.MAGENTA,
    Color.BROWN,
    Color.PURPLE,
    Color.ORANGE,
)


class ShapeKind(str, Enum):
    """Kind of generated shape."""

    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    HOUSE = "house"
    ARC = "arc"
