"""Exception hierarchy for Shapetap."""


class ShapetapError(Exception):
    """Base exception for all Shapetap errors."""

    pass


class GeometryError(ShapetapError):
    """Errors in geometric calculations."""

    pass


class DegenerateGeometryError(GeometryError):
    """Geometry that cannot be stroked or hit tested."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UnsupportedTransformError(GeometryError):
    """Transform that cannot be applied to a path without distorting it."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Unsupported transform: {reason}")


class InvalidBoundsError(ShapetapError):
    """Bounds too small to generate a shape in."""

    def __init__(self, width: float, height: float, min_size: float) -> None:
        self.width = width
        self.height = height
        self.min_size = min_size
        super().__init__(
            f"Bounds {width:g}x{height:g} are smaller than the minimum "
            f"shape size {min_size:g}x{min_size:g}"
        )


class CollectionError(ShapetapError):
    """Errors related to the shape collection."""

    pass


class ShapeIndexError(CollectionError, IndexError):
    """Shape index outside the collection."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(f"Shape index {index} out of range for {count} shapes")


class SelectionError(CollectionError):
    """Mutation that would leave the selection pointing at the wrong shape."""

    def __init__(self, index: int, selected: int) -> None:
        self.index = index
        self.selected = selected
        super().__init__(
            f"Cannot remove shape {index} while shape {selected} is selected; "
            "deselect first or remove the selected shape"
        )


class ExportError(ShapetapError):
    """Error writing a scene to disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to export scene to '{path}': {reason}")
