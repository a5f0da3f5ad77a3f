"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from rasterclip.domain import Pixel, Polygon, Rect, Segment

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch clipping.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header."""
    console.print(f"\n[bold]Rasterclip[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def _fmt(value: float) -> str:
    return f"{value:g}"


def print_scene_info(path: str, segment_count: int, window: Rect) -> None:
    """Print geometry file information.

    Args:
        path: Path to the geometry file
        segment_count: Number of segments read
        window: Clip window from the file
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    console.print(line)
    console.print(
        f"  {segment_count:,} segments {SYM_DOT} window "
        f"({_fmt(window.min.x)}, {_fmt(window.min.y)}) – "
        f"({_fmt(window.max.x)}, {_fmt(window.max.y)})"
    )


def print_boundary(boundary: Rect | Polygon) -> None:
    """Print the boundary being clipped against."""
    if isinstance(boundary, Rect):
        console.print("  Boundary: window rectangle")
        return
    vertices = ", ".join(f"({_fmt(v.x)}, {_fmt(v.y)})" for v in boundary.vertices)
    console.print(f"  Boundary: {len(boundary)}-gon {SYM_DOT} {vertices}")


def print_pixels(pixels: Sequence[Pixel], limit: int = 50) -> None:
    """Print pixels as a table.

    Args:
        pixels: Pixels to show
        limit: Maximum rows before the table is truncated
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right", style="dim")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("coverage", justify="right")

    for index, pixel in enumerate(pixels[:limit]):
        table.add_row(str(index), str(pixel.x), str(pixel.y), f"{pixel.coverage:.3f}")

    console.print(table)
    if len(pixels) > limit:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(pixels) - limit} more)")


def print_raster_summary(algorithm: str, pixel_count: int, elapsed_ms: float) -> None:
    """Print pixel count and timing for a rasterization."""
    console.print(
        f"\n[bold green]{SYM_OK} {algorithm}[/bold green] "
        f"{pixel_count} pixels {SYM_DOT} {elapsed_ms:.4f}ms"
    )


def print_fragments(results: Sequence[list[Segment] | None]) -> None:
    """Print clipped fragments per input segment."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right", style="dim")
    table.add_column("visible part")

    for index, fragments in enumerate(results):
        if fragments is None:
            table.add_row(str(index), f"[red]{SYM_ERR} failed[/red]")
        elif not fragments:
            table.add_row(str(index), "[dim]outside[/dim]")
        else:
            parts = "; ".join(
                f"({_fmt(f.p1.x)}, {_fmt(f.p1.y)}) – ({_fmt(f.p2.x)}, {_fmt(f.p2.y)})"
                for f in fragments
            )
            table.add_row(str(index), parts)

    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_clip_summary(
    total_time_s: float,
    processed: int,
    visible: int,
    errors: int,
    output_path: str | None = None,
) -> None:
    """Print clipping summary.

    Args:
        total_time_s: Total processing time in seconds
        processed: Number of segments processed
        visible: Number of segments with a visible part
        errors: Number of segments that failed
        output_path: Path the result was written to, if any
    """
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}"
    )

    if output_path is not None:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} segments {SYM_DOT} {visible} visible {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice(processed: int, cancelled: int) -> None:
    """Print cancellation summary."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} segments completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
