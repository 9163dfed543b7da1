"""CLI application entry point for shapetap.

This module provides the main CLI interface using Typer. Every command
rebuilds the same scene from a seed, so a scene listed by ``generate`` can
be hit tested or exported by later invocations.
"""

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from shapetap import __version__
from shapetap.cli.output import (
    console,
    print_error,
    print_export_success,
    print_header,
    print_hit_result,
    print_scene_info,
    print_scene_table,
    print_step,
)
from shapetap.config import LoggingConfig, ShapetapSettings
from shapetap.core import CanvasController, ShapeFactory
from shapetap.domain import Point, Rect
from shapetap.exceptions import ExportError, InvalidBoundsError, ShapetapError
from shapetap.io import SvgSceneWriter
from shapetap.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="shapetap",
    help="Generate random stroked shapes and hit test them by their stroke outline.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Options shared by every command."""

    settings: ShapetapSettings
    quiet: bool = False


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Shapetap[/bold blue] v{__version__}")
        raise typer.Exit()


def parse_point(value: str) -> Point:
    """Parse ``X,Y`` into a point.

    Raises:
        typer.BadParameter: If the value is not two comma-separated numbers
    """
    parts = value.split(",")
    if len(parts) != 2:
        raise typer.BadParameter(f"Expected X,Y but got '{value}'")
    try:
        return Point(float(parts[0]), float(parts[1]))
    except ValueError:
        raise typer.BadParameter(f"Expected X,Y but got '{value}'") from None


def build_scene(
    settings: ShapetapSettings,
    count: int,
    seed: int,
    width: float,
    height: float,
) -> CanvasController:
    """Build a seeded scene of ``count`` random shapes.

    Shapes are added through the controller, so they keep the same inset
    from the canvas edge as interactively added shapes.
    """
    canvas = Rect(0.0, 0.0, width, height)
    factory = ShapeFactory(
        config=settings.generator,
        rng=random.Random(seed),
        geometry=settings.geometry,
    )
    controller = CanvasController(canvas, factory=factory, settings=settings)
    for _ in range(count):
        controller.on_add_requested()
    return controller


CountOption = Annotated[
    int,
    typer.Option("--count", "-n", help="Number of shapes to generate", min=0, max=1000),
]
SeedOption = Annotated[
    int,
    typer.Option("--seed", "-s", help="Random seed"),
]
WidthOption = Annotated[
    float,
    typer.Option("--width", help="Canvas width", min=1.0),
]
HeightOption = Annotated[
    float,
    typer.Option("--height", help="Canvas height", min=1.0),
]


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Generate random stroked shapes and hit test them by their stroke outline."""
    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR",
        )
        raise typer.Exit(code=1)

    settings = ShapetapSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level.upper()),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliState(settings=settings, quiet=quiet)


@app.command()
def generate(
    ctx: typer.Context,
    count: CountOption = 5,
    seed: SeedOption = 0,
    width: WidthOption = 320.0,
    height: HeightOption = 480.0,
) -> None:
    """List a seeded scene of random shapes.

    Example:
        shapetap generate --count 8 --seed 42
    """
    state: CliState = ctx.obj
    if not state.quiet:
        print_header(__version__)
        print_step("Generating shapes")

    try:
        controller = build_scene(state.settings, count, seed, width, height)
    except InvalidBoundsError as e:
        print_error("Canvas too small", details=str(e))
        raise typer.Exit(code=1)
    except ShapetapError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not state.quiet:
        print_scene_info(controller.canvas_bounds, count, seed)
    print_scene_table(controller.collection)


@app.command("hit-test")
def hit_test(
    ctx: typer.Context,
    x: Annotated[float, typer.Argument(help="Tap X coordinate", show_default=False)],
    y: Annotated[float, typer.Argument(help="Tap Y coordinate", show_default=False)],
    count: CountOption = 5,
    seed: SeedOption = 0,
    width: WidthOption = 320.0,
    height: HeightOption = 480.0,
) -> None:
    """Report which shape of a seeded scene a tap at X Y selects.

    Example:
        shapetap hit-test 120 200 --seed 42
    """
    state: CliState = ctx.obj
    if not state.quiet:
        print_header(__version__)

    try:
        controller = build_scene(state.settings, count, seed, width, height)
    except ShapetapError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    point = Point(x, y)
    controller.on_tap(point)
    collection = controller.collection
    print_hit_result(point, collection.selected_index(), collection.selected_shape())


@app.command()
def export(
    ctx: typer.Context,
    output: Annotated[Path, typer.Argument(help="Output SVG path", show_default=False)],
    count: CountOption = 5,
    seed: SeedOption = 0,
    width: WidthOption = 320.0,
    height: HeightOption = 480.0,
    select_at: Annotated[
        str | None,
        typer.Option(
            "--select-at",
            help="Select the shape under X,Y before exporting",
        ),
    ] = None,
) -> None:
    """Write a seeded scene as SVG.

    Example:
        shapetap export scene.svg --seed 42 --select-at 120,200
    """
    state: CliState = ctx.obj
    tap = parse_point(select_at) if select_at is not None else None

    if not state.quiet:
        print_header(__version__)
        print_step("Rendering scene")

    try:
        controller = build_scene(state.settings, count, seed, width, height)
        if tap is not None:
            controller.on_tap(tap)

        writer = SvgSceneWriter(
            controller.collection,
            controller.canvas_bounds,
            geometry=state.settings.geometry,
        )
        written = writer.save(output)
    except ExportError as e:
        print_error(f"Could not write SVG: {e.reason}")
        raise typer.Exit(code=1)
    except ShapetapError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not state.quiet:
        print_export_success(
            output_path=str(written),
            file_size=_format_file_size(written),
            shape_count=len(controller.collection),
            selected=controller.collection.selected_index(),
        )


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
