"""Geometry writer for saving clipped segments.

Output uses the same format GeometryReader parses, so clipped results can be
loaded back or clipped again.
"""

from collections.abc import Sequence
from pathlib import Path

from rasterclip.domain import Rect, Segment
from rasterclip.exceptions import GeometrySaveError


def _format_number(value: float) -> str:
    """Write whole numbers without a trailing .0 and others via repr."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_geometry(
    segments: Sequence[Segment],
    window: Rect,
    header: str | None = None,
) -> str:
    """Render segments and a window as geometry text.

    Args:
        segments: Segments to write
        window: Clip window, written as min corner then max corner
        header: Optional comment; each line is prefixed with "* "

    Returns:
        Geometry text ending with a newline
    """
    lines: list[str] = []
    if header:
        lines.extend(f"* {line}" for line in header.splitlines())

    lines.append(str(len(segments)))
    for segment in segments:
        coords = (segment.p1.x, segment.p1.y, segment.p2.x, segment.p2.y)
        lines.append(" ".join(_format_number(c) for c in coords))

    corners = (window.min.x, window.min.y, window.max.x, window.max.y)
    lines.append(" ".join(_format_number(c) for c in corners))

    return "\n".join(lines) + "\n"


class GeometryWriter:
    """Writes geometry files.

    Example:
        writer = GeometryWriter(GeometryWriter.get_clipped_path(Path("lines.txt")))
        writer.write(fragments, window)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the geometry writer.

        Args:
            output_path: Where to write the file
        """
        self.output_path = output_path

    def write(
        self,
        segments: Sequence[Segment],
        window: Rect,
        header: str | None = None,
    ) -> None:
        """Save segments and window to the output path.

        Raises:
            GeometrySaveError: If the file cannot be written
        """
        text = format_geometry(segments, window, header=header)
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise GeometrySaveError(str(self.output_path), str(e)) from e

    @staticmethod
    def get_clipped_path(input_path: Path) -> Path:
        """Generate the default output path for clipped geometry.

        Args:
            input_path: Path to the input geometry file

        Returns:
            Path with "-clipped" added before the extension
            (e.g. "lines.txt" -> "lines-clipped.txt")
        """
        return input_path.with_name(f"{input_path.stem}-clipped{input_path.suffix}")
