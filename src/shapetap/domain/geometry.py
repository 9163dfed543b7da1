"""Point and rectangle primitives.

This module defines the plane primitives every other layer builds on:
- Point: An immutable 2D point (also used as a translation vector)
- Rect: An origin/size rectangle that may be unnormalized
- union_rects: Union of optional rectangles, used for dirty regions
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable. Doubles as a displacement vector for moves.

    Attributes:
        x: X coordinate in canvas units
        y: Y coordinate in canvas units
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Rect:
    """An axis-aligned rectangle given by origin and size.

    Width and height may be negative ("unnormalized"); every operation
    that does geometry works on the normalized form.

    Attributes:
        x: Origin X coordinate
        y: Origin Y coordinate
        width: Extent along X (may be negative)
        height: Extent along Y (may be negative)
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def zero(cls) -> "Rect":
        """The zero rectangle at the origin."""
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_edges(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> "Rect":
        """Build a rectangle from its edge coordinates."""
        return cls(min_x, min_y, max_x - min_x, max_y - min_y)

    def normalized(self) -> "Rect":
        """Return an equivalent rectangle with non-negative width and height.

        Returns:
            Rectangle enclosing the same area
        """
        x, width = (self.x + self.width, -self.width) if self.width < 0 else (self.x, self.width)
        y, height = (self.y + self.height, -self.height) if self.height < 0 else (self.y, self.height)
        return Rect(x, y, width, height)

    @property
    def min_x(self) -> float:
        return min(self.x, self.x + self.width)

    @property
    def max_x(self) -> float:
        return max(self.x, self.x + self.width)

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2.0

    @property
    def min_y(self) -> float:
        return min(self.y, self.y + self.height)

    @property
    def max_y(self) -> float:
        return max(self.y, self.y + self.height)

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2.0

    @property
    def center(self) -> Point:
        return Point(self.mid_x, self.mid_y)

    def is_empty(self) -> bool:
        """Check if the rectangle encloses no area."""
        return self.width == 0 or self.height == 0

    def inset(self, dx: float, dy: float) -> "Rect":
        """Shrink (positive) or grow (negative) the rectangle on each side.

        A rectangle shrunk past zero collapses to a zero-size rectangle at
        its centre.

        Args:
            dx: Amount removed from the left and from the right edge
            dy: Amount removed from the top and from the bottom edge

        Returns:
            Normalized, inset rectangle
        """
        r = self.normalized()
        width = r.width - 2.0 * dx
        height = r.height - 2.0 * dy
        if width < 0 or height < 0:
            return Rect(r.mid_x, r.mid_y, 0.0, 0.0)
        return Rect(r.x + dx, r.y + dy, width, height)

    def offset(self, dx: float, dy: float) -> "Rect":
        """Return the normalized rectangle translated by (dx, dy)."""
        r = self.normalized()
        return Rect(r.x + dx, r.y + dy, r.width, r.height)

    def union(self, other: "Rect") -> "Rect":
        """Smallest rectangle containing both rectangles."""
        return Rect.from_edges(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def intersects(self, other: "Rect") -> bool:
        """Check if the rectangles overlap with positive area.

        Rectangles that only touch along an edge do not intersect.
        """
        if self.is_empty() or other.is_empty():
            return False
        return (
            self.min_x < other.max_x
            and other.min_x < self.max_x
            and self.min_y < other.max_y
            and other.min_y < self.max_y
        )

    def contains_point(self, point: Point) -> bool:
        """Check if a point lies inside or on the edge of the rectangle."""
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)


def union_rects(*rects: Rect | None) -> Rect | None:
    """Union of rectangles, skipping empty (``None``) entries.

    Args:
        *rects: Rectangles to combine; ``None`` stands for "nothing"

    Returns:
        Smallest rectangle containing every given rectangle, or None if
        there was nothing to combine
    """
    result: Rect | None = None
    for rect in rects:
        if rect is None:
            continue
        result = rect.normalized() if result is None else result.union(rect)
    return result
