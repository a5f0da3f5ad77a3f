"""Geometry reader for loading segment/window files.

The format is line oriented:

    * comment lines start with an asterisk
    3                 <- segment count (leading integer)
    x1 y1 x2 y2       <- one line per segment
    x1 y1 x2 y2
    x1 y1 x2 y2
    x1 y1 x2 y2       <- two opposite corners of the clip window

Blank lines are ignored, and tokens after the expected numbers are ignored.
"""

from pathlib import Path

from rasterclip.domain import ClipScene, Point, Rect, Segment
from rasterclip.exceptions import GeometryLoadError, GeometryParseError


def _significant_lines(text: str) -> list[tuple[int, str]]:
    """Return (line_number, stripped_line) for non-blank, non-comment lines."""
    lines = []
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if line and not line.startswith("*"):
            lines.append((number, line))
    return lines


def _parse_quad(line_number: int, line: str) -> tuple[float, float, float, float]:
    parts = line.split()
    if len(parts) < 4:
        raise GeometryParseError(
            line_number, f"expected 4 numbers, got {len(parts)}"
        )
    try:
        x1, y1, x2, y2 = (float(p) for p in parts[:4])
    except ValueError as e:
        raise GeometryParseError(line_number, f"invalid number ({e})") from e
    return x1, y1, x2, y2


def parse_geometry(text: str) -> ClipScene:
    """Parse geometry text into segments and a clip window.

    Args:
        text: File contents

    Returns:
        ClipScene with segments in file order and a normalized window

    Raises:
        GeometryParseError: If the count is missing or invalid, a line is
            malformed, or there are fewer data lines than required
    """
    lines = _significant_lines(text)
    if not lines:
        raise GeometryParseError(None, "no data lines")

    count_line_number, count_line = lines[0]
    try:
        count = int(count_line.split()[0])
    except ValueError as e:
        raise GeometryParseError(
            count_line_number, f"segment count must be an integer, got {count_line!r}"
        ) from e
    if count < 0:
        raise GeometryParseError(count_line_number, f"negative segment count {count}")

    # Count line + n segments + window line
    required = count + 2
    if len(lines) < required:
        raise GeometryParseError(
            None,
            f"expected {count} segment lines and a window line, "
            f"found {len(lines) - 1} data lines",
        )

    segments = []
    for line_number, line in lines[1 : count + 1]:
        segments.append(Segment.from_coords(*_parse_quad(line_number, line)))

    window_line_number, window_line = lines[count + 1]
    x1, y1, x2, y2 = _parse_quad(window_line_number, window_line)
    window = Rect.from_corners(Point(x1, y1), Point(x2, y2))

    return ClipScene(segments=segments, window=window)


class GeometryReader:
    """Loads geometry files into a ClipScene.

    Example:
        reader = GeometryReader(Path("lines.txt"))
        reader.load()
        for segment in reader.scene.segments:
            print(segment)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the geometry reader.

        Args:
            path: Path to the geometry text file
        """
        self._path = path
        self._scene: ClipScene | None = None

    def load(self) -> None:
        """Read and parse the file.

        Raises:
            FileNotFoundError: If the file does not exist
            GeometryLoadError: If the file cannot be read
            GeometryParseError: If the contents are malformed
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Geometry file not found: {self._path}")

        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise GeometryLoadError(str(self._path), str(e)) from e

        self._scene = parse_geometry(text)

    @property
    def scene(self) -> ClipScene:
        """Return the parsed scene.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._scene is None:
            raise RuntimeError("Geometry not loaded. Call load() first.")
        return self._scene

    @property
    def segment_count(self) -> int:
        """Return the number of segments in the file."""
        return len(self.scene.segments)

    @property
    def window(self) -> Rect:
        """Return the clip window."""
        window = self.scene.window
        if window is None:
            raise RuntimeError("Geometry has no clip window")
        return window

    def close(self) -> None:
        """Drop the loaded scene."""
        self._scene = None

    def __enter__(self) -> "GeometryReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
