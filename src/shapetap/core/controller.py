"""Canvas input handling.

Translates taps, drags and button presses into collection mutations and
forwards the resulting dirty rectangles to a redraw callback.
"""

from collections.abc import Callable
from typing import Protocol

from shapetap.config import ShapetapSettings
from shapetap.core.collection import ShapeCollection
from shapetap.core.factory import ShapeFactory
from shapetap.domain import Color, Path, Point, Rect, union_rects
from shapetap.exceptions import ShapetapError


class DrawingDataSource(Protocol):
    """Queries a renderer makes while painting."""

    def shape_count(self) -> int: ...

    def path_at(self, index: int) -> Path: ...

    def color_at(self, index: int) -> Color: ...

    def selected_index(self) -> int | None: ...


RedrawCallback = Callable[[Rect], None]


class CanvasController:
    """Input side of an interactive canvas.

    Example:
        controller = CanvasController(Rect(0, 0, 320, 480), on_redraw=view.invalidate)
        controller.on_add_requested()
        controller.on_tap(Point(100, 100))
        controller.on_drag_move(Point(5, 0))

    Attributes:
        canvas_bounds: Full canvas rectangle
        collection: Shapes being edited
        factory: Generator used by add requests
    """

    def __init__(
        self,
        canvas_bounds: Rect,
        collection: ShapeCollection | None = None,
        factory: ShapeFactory | None = None,
        on_redraw: RedrawCallback | None = None,
        settings: ShapetapSettings | None = None,
    ) -> None:
        self.settings = settings or ShapetapSettings()
        self.canvas_bounds = canvas_bounds.normalized()
        self.collection = collection if collection is not None else ShapeCollection()
        self.factory = factory or ShapeFactory(
            config=self.settings.generator,
            geometry=self.settings.geometry,
        )
        self._on_redraw = on_redraw
        self._pending: Rect | None = None

    @property
    def data_source(self) -> DrawingDataSource:
        return self.collection

    @property
    def can_delete(self) -> bool:
        """Whether a delete request would remove anything."""
        return self.collection.selected_index() is not None

    def _redraw(self, dirty: Rect | None) -> Rect | None:
        if dirty is None:
            return None
        self._pending = union_rects(self._pending, dirty)
        if self._on_redraw is not None:
            self._on_redraw(dirty)
        return dirty

    def take_dirty_rect(self) -> Rect | None:
        """Return and clear the union of every redraw since the last call."""
        pending, self._pending = self._pending, None
        return pending

    def on_tap(self, point: Point) -> Rect | None:
        """Select the shape under ``point``, or clear the selection on a miss."""
        return self._redraw(self.collection.select(self.collection.hit_test(point)))

    def on_drag_start(self, point: Point) -> Rect | None:
        """Pick up the shape under ``point``."""
        return self.on_tap(point)

    def on_drag_move(self, delta: Point) -> Rect | None:
        """Move the picked-up shape by the drag increment ``delta``."""
        return self._redraw(self.collection.move_selected(delta))

    def on_add_requested(self, canvas_bounds: Rect | None = None) -> Rect:
        """Add a random shape inside the canvas, kept clear of its edges.

        Args:
            canvas_bounds: Canvas rectangle; the controller's own when omitted

        Raises:
            InvalidBoundsError: If the inset canvas is too small for a shape
        """
        inset = self.settings.generator.add_inset
        max_bounds = (canvas_bounds or self.canvas_bounds).inset(inset, inset)
        try:
            shape = self.factory.random_shape(max_bounds)
        except ShapetapError as e:
            self.collection.session.log_error("add", e)
            raise
        dirty = self.collection.add(shape)
        self._redraw(dirty)
        return dirty

    def on_delete_requested(self) -> Rect | None:
        """Delete the selected shape; does nothing without a selection."""
        return self._redraw(self.collection.delete_selected())

    def reload_data(self) -> Rect:
        """Request a redraw of the whole canvas."""
        self._redraw(self.canvas_bounds)
        return self.canvas_bounds
