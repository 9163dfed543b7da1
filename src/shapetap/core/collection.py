"""Shape collection with explicit selection state.

Shapes are kept in draw order: index 0 is painted first and sits at the
bottom. Every mutation returns the rectangle a renderer must repaint, or
None when nothing changed on screen.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from shapetap.core.shape import Shape
from shapetap.domain import Color, Path, Point, Rect, union_rects
from shapetap.exceptions import SelectionError, ShapeIndexError
from shapetap.utils.logging import SessionLogger


@dataclass(frozen=True, slots=True)
class NoSelection:
    """No shape is selected."""


@dataclass(frozen=True, slots=True)
class SelectedAt:
    """The shape at ``index`` is selected."""

    index: int


SelectionState = NoSelection | SelectedAt


class ShapeCollection:
    """Ordered shapes plus the current selection.

    Example:
        collection = ShapeCollection()
        dirty = collection.add(shape)
        collection.select(collection.hit_test(Point(10, 10)))
        dirty = collection.move_selected(Point(5, 0))
    """

    def __init__(self, session_logger: SessionLogger | None = None) -> None:
        self._shapes: list[Shape] = []
        self._state: SelectionState = NoSelection()
        self._session = session_logger or SessionLogger()

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self._shapes)

    def __getitem__(self, index: int) -> Shape:
        self._check_index(index)
        return self._shapes[index]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._shapes):
            raise ShapeIndexError(index, len(self._shapes))

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def session(self) -> SessionLogger:
        return self._session

    # Renderer queries

    def shape_count(self) -> int:
        return len(self._shapes)

    def path_at(self, index: int) -> Path:
        self._check_index(index)
        return self._shapes[index].path

    def color_at(self, index: int) -> Color:
        self._check_index(index)
        return self._shapes[index].line_color

    def selected_index(self) -> int | None:
        if isinstance(self._state, SelectedAt):
            return self._state.index
        return None

    def selected_shape(self) -> Shape | None:
        index = self.selected_index()
        return None if index is None else self._shapes[index]

    def _bounds_of(self, index: int | None) -> Rect | None:
        if index is None:
            return None
        return self._shapes[index].total_bounds()

    # Mutations

    def select(self, index: int | None) -> Rect | None:
        """Select the shape at ``index``.

        Indices outside the collection (and None) clear the selection.

        Returns:
            Union of the previous and new selection bounds, or None if
            neither exists
        """
        previous = self.selected_index()
        if index is not None and 0 <= index < len(self._shapes):
            self._state = SelectedAt(index)
        else:
            self._state = NoSelection()
        current = self.selected_index()

        self._session.log_selection(previous, current)
        return union_rects(self._bounds_of(previous), self._bounds_of(current))

    def deselect(self) -> Rect | None:
        """Clear the selection."""
        return self.select(None)

    def add(self, shape: Shape) -> Rect:
        """Append ``shape`` on top of the others.

        Returns:
            The new shape's total bounds
        """
        self._shapes.append(shape)
        self._session.log_shape_added(len(self._shapes) - 1, shape.kind.value if shape.kind else "custom")
        return shape.total_bounds()

    def remove(self, index: int) -> Rect | None:
        """Remove the shape at ``index``.

        An index outside the collection removes nothing and clears the
        selection, like :meth:`select`.

        Returns:
            The removed shape's total bounds. For an out-of-range index, the
            bounds of the cleared selection or None

        Raises:
            SelectionError: If a different shape is selected
        """
        if not 0 <= index < len(self._shapes):
            return self.deselect()

        selected = self.selected_index()
        if selected is not None and selected != index:
            raise SelectionError(index, selected)

        dirty = self._shapes[index].total_bounds()
        del self._shapes[index]
        if selected == index:
            self._state = NoSelection()

        self._session.log_shape_removed(index, was_selected=selected == index)
        return dirty

    def delete_selected(self) -> Rect | None:
        """Remove the selected shape, if any."""
        index = self.selected_index()
        if index is None:
            return None
        return self.remove(index)

    def move_selected(self, delta: Point) -> Rect | None:
        """Move the selected shape by ``delta``.

        Returns:
            Union of the bounds before and after the move, or None without
            a selection
        """
        index = self.selected_index()
        if index is None:
            return None

        shape = self._shapes[index]
        before = shape.total_bounds()
        shape.move_by(delta)
        after = shape.total_bounds()

        self._session.log_move(index, delta.x, delta.y)
        return before.union(after)

    # Queries

    def hit_test(self, point: Point) -> int | None:
        """Index of the first shape whose tap target contains ``point``.

        Shapes are scanned in draw order, so where shapes overlap the
        bottom-most one wins.
        """
        hit = next(
            (i for i, shape in enumerate(self._shapes) if shape.contains_point(point)),
            None,
        )
        self._session.log_hit_test(point.x, point.y, hit)
        return hit

    def shapes_in_rect(self, region: Rect) -> list[int]:
        """Indices of shapes whose bounds intersect ``region``, in draw order."""
        return [i for i, shape in enumerate(self._shapes) if shape.total_bounds().intersects(region)]

    def bounds(self) -> Rect | None:
        """Union of every shape's total bounds."""
        return union_rects(*(shape.total_bounds() for shape in self._shapes))
