"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from shapetap.core import Shape, ShapeCollection
from shapetap.domain import Point, Rect

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Shapetap[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def format_rect(rect: Rect) -> str:
    """Format a rectangle as ``x,y wxh`` with one decimal."""
    r = rect.normalized()
    return f"{r.x:.1f},{r.y:.1f} {r.width:.1f}x{r.height:.1f}"


def print_scene_info(canvas: Rect, count: int, seed: int) -> None:
    console.print(f"  {count} shapes {SYM_DOT} seed {seed} {SYM_DOT} canvas {format_rect(canvas)}")


def print_scene_table(collection: ShapeCollection) -> None:
    """Print one row per shape, in draw order.

    Args:
        collection: Shapes to list
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Color")
    table.add_column("Width", justify="right")
    table.add_column("Bounds")

    selected = collection.selected_index()
    for index, shape in enumerate(collection):
        marker = f" {SYM_OK}" if index == selected else ""
        table.add_row(
            f"{index}{marker}",
            shape.kind.value if shape.kind else "custom",
            Text(shape.line_color.value, style=shape.line_color.hex),
            f"{shape.line_width:g}",
            format_rect(shape.total_bounds()),
        )

    console.print(table)


def print_hit_result(point: Point, index: int | None, shape: Shape | None) -> None:
    """Print which shape a tap at ``point`` selects.

    Args:
        point: Tap location
        index: Index of the hit shape, or None on a miss
        shape: The hit shape, or None on a miss
    """
    where = f"({point.x:g}, {point.y:g})"
    if index is None or shape is None:
        console.print(f"\n{SYM_DOT} No shape at {where}")
        return

    kind = shape.kind.value if shape.kind else "custom"
    console.print(f"\n[bold green]{SYM_OK} Hit[/bold green] shape {index} at {where}")
    console.print(f"  {kind} {SYM_DOT} {shape.line_color.value} {SYM_DOT} width {shape.line_width:g}")


def print_export_success(output_path: str, file_size: str, shape_count: int, selected: int | None) -> None:
    """Print export summary.

    Args:
        output_path: Path to the written SVG
        file_size: Human-readable file size string
        shape_count: Number of shapes in the scene
        selected: Index of the selected shape, if any
    """
    console.print(f"\n[bold green]{SYM_OK} Exported[/bold green]")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    selection = "no selection" if selected is None else f"shape {selected} selected"
    console.print(f"  {shape_count} shapes {SYM_DOT} {selection}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
