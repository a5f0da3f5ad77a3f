"""CLI application entry point for rasterclip.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from rasterclip import __version__
from rasterclip.cli.output import (
    console,
    create_progress,
    print_boundary,
    print_cancellation_notice,
    print_clip_summary,
    print_error,
    print_fragments,
    print_header,
    print_pixels,
    print_raster_summary,
    print_scene_info,
    print_step,
)
from rasterclip.config import (
    ClipConfig,
    LoggingConfig,
    ProcessingConfig,
    RasterClipSettings,
    RasterConfig,
)
from rasterclip.core import Algorithm, BatchProcessor, inscribed_polygon, rasterize
from rasterclip.domain import Circle, Point, Polygon, Rect, Segment
from rasterclip.exceptions import RasterClipError
from rasterclip.io import GeometryReader, GeometryWriter
from rasterclip.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="rasterclip",
    help="Rasterize lines and circles, and clip segments against windows or convex polygons.",
    add_completion=False,
    no_args_is_help=True,
)

_ALGORITHM_NAMES = ", ".join(a.value for a in Algorithm)


@app.command("rasterize")
def rasterize_command(
    algorithm: Annotated[
        str,
        typer.Argument(
            help=f"Algorithm ({_ALGORITHM_NAMES})",
            show_default=False,
        ),
    ],
    start: Annotated[
        tuple[float, float],
        typer.Option(
            "--start",
            "-a",
            help="Segment start, or circle center",
        ),
    ] = (-8.0, -5.0),
    end: Annotated[
        tuple[float, float],
        typer.Option(
            "--end",
            "-b",
            help="Segment end (ignored for circles)",
        ),
    ] = (8.0, 2.0),
    radius: Annotated[
        int,
        typer.Option(
            "--radius",
            "-r",
            help="Circle radius (bresenham_circle only)",
            min=0,
        ),
    ] = 10,
    major_axis: Annotated[
        bool,
        typer.Option(
            "--major-axis",
            help="Let the step algorithm step along Y for steep segments",
        ),
    ] = False,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            help="Maximum pixel rows to print",
            min=0,
        ),
    ] = 50,
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
            help="Print only the summary line",
        ),
    ] = False,
) -> None:
    """Rasterize a segment or circle and print the resulting pixels.

    Example:
        rasterclip rasterize bresenham_line --start 0 0 --end 5 2
    """
    try:
        algo = Algorithm(algorithm.lower())
    except ValueError:
        print_error(
            f"Invalid algorithm: {algorithm}",
            details=f"Valid values: {_ALGORITHM_NAMES}",
        )
        raise typer.Exit(code=1)

    settings = RasterClipSettings(
        raster=RasterConfig(step_major_axis=major_axis),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    p1 = Point(*start)
    primitive: Segment | Circle
    if algo.draws_circle:
        primitive = Circle(center=p1, radius=radius)
    else:
        primitive = Segment(p1, Point(*end))

    if not quiet:
        print_header(__version__)
        print_step(f"Rasterizing with {algo.value}")

    try:
        started = time.perf_counter()
        pixels = rasterize(algo, primitive, settings.raster)
        elapsed_ms = (time.perf_counter() - started) * 1000
    except RasterClipError as e:
        logger.error("Rasterization failed", algorithm=algo.value, error=str(e))
        print_error(str(e))
        raise typer.Exit(code=1)

    logger.info(
        "Rasterized",
        algorithm=algo.value,
        pixels=len(pixels),
        elapsed_ms=round(elapsed_ms, 4),
    )

    if not quiet and limit > 0:
        print_pixels(pixels, limit=limit)
    print_raster_summary(algo.value, len(pixels), elapsed_ms)


@app.command("clip")
def clip_command(
    geometry_file: Annotated[
        Path,
        typer.Argument(
            help="Geometry file (segment count, segments, window corners)",
            show_default=False,
        ),
    ],
    polygon_sides: Annotated[
        int,
        typer.Option(
            "--polygon-sides",
            "-s",
            help="Clip against a regular polygon with this many sides inscribed in the window (0 = window)",
            min=0,
        ),
    ] = 0,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write clipped segments to this geometry file",
        ),
    ] = None,
    save: Annotated[
        bool,
        typer.Option(
            "--save",
            help="Write clipped segments next to the input ({name}-clipped.{ext})",
        ),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto, 1 = inline)",
            min=1,
        ),
    ] = None,
    no_merge: Annotated[
        bool,
        typer.Option(
            "--no-merge",
            help="Keep raw subdivision fragments instead of joining them",
        ),
    ] = False,
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
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Print every clipped segment",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Clip every segment of a geometry file against its window.

    With --polygon-sides N (N >= 3) the segments are clipped against a
    regular N-gon inscribed in the window instead.

    Example:
        rasterclip clip lines.txt --polygon-sides 5 --save
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if polygon_sides in (1, 2):
        print_error(
            f"Invalid polygon sides: {polygon_sides}",
            details="Use 0 for the window rectangle or at least 3 sides",
        )
        raise typer.Exit(code=1)

    if not geometry_file.exists():
        print_error(
            f"Input file not found: {geometry_file}",
            details=f"The file '{geometry_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    settings = RasterClipSettings(
        clip=ClipConfig(merge_fragments=not no_merge),
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    if output is None and save:
        output = GeometryWriter.get_clipped_path(geometry_file)

    if not quiet:
        print_header(__version__)

    try:
        if not quiet:
            print_step("Loading geometry")

        with GeometryReader(geometry_file) as reader:
            scene = reader.scene
            window = reader.window

        if not quiet:
            print_scene_info(str(geometry_file), len(scene.segments), window)

        boundary: Rect | Polygon = window
        if polygon_sides >= 3:
            boundary = inscribed_polygon(window, sides=polygon_sides)

        if not quiet:
            print_boundary(boundary)
            print_step("Clipping")

        processor = BatchProcessor(settings)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Clipping {len(scene.segments)} segments",
                        total=len(scene.segments),
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    result = processor.clip_batch(
                        scene.segments,
                        boundary,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                result = processor.clip_batch(scene.segments, boundary, max_workers=workers)
        except KeyboardInterrupt:
            if not quiet:
                print_cancellation_notice(processed=0, cancelled=len(scene.segments))
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if verbose:
            print_fragments(result.items)

        visible = [fragment for item in result.items if item for fragment in item]

        if output is not None:
            GeometryWriter(output).write(
                visible,
                window,
                header=f"Clipped from {geometry_file.name}",
            )

        if not quiet:
            print_clip_summary(
                total_time_s=result.stats.duration_seconds,
                processed=result.stats.processed_count,
                visible=sum(1 for item in result.items if item),
                errors=result.stats.error_count,
                output_path=str(output) if output is not None else None,
            )

        if not result.succeeded:
            raise typer.Exit(code=1)

    except RasterClipError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise


@app.command("version")
def version_command() -> None:
    """Print version and exit."""
    console.print(f"[bold blue]Rasterclip[/bold blue] v{__version__}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
