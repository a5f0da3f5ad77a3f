"""Integration tests for the command line interface.

These run the Typer app in-process with CliRunner. Logging setup is patched
out so the tests do not install handlers on the root logger.
"""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from rasterclip import __version__
from rasterclip.cli.app import app
from rasterclip.domain import Point, Rect, Segment
from rasterclip.io import GeometryReader

runner = CliRunner()

GEOMETRY = """\
* crossing, outside, inside
3
-10 0 10 0
-5 2 5 3
-0.5 0.5 0.5 -0.5
-1 -1 1 1
"""


@pytest.fixture(autouse=True)
def no_logging_setup() -> Iterator[None]:
    """Replace logging configuration with mocks."""
    with (
        patch("rasterclip.cli.app.configure_logging", return_value=Mock()),
        patch("rasterclip.core.processor.configure_logging", return_value=Mock()),
    ):
        yield


@pytest.fixture
def geometry_file(tmp_path: Path) -> Path:
    """Write the sample geometry file."""
    path = tmp_path / "lines.txt"
    path.write_text(GEOMETRY, encoding="utf-8")
    return path


class TestVersion:
    """Tests for the version command."""

    def test_version(self):
        """Test version output."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestRasterizeCommand:
    """Tests for the rasterize command."""

    def test_bresenham_line(self):
        """Test pixel table and summary for a short line."""
        result = runner.invoke(
            app,
            ["rasterize", "bresenham_line", "--start", "0", "0", "--end", "5", "2"],
        )
        assert result.exit_code == 0, result.output
        assert "6 pixels" in result.output

    def test_quiet_prints_summary_only(self):
        """Test --quiet still prints the summary line."""
        result = runner.invoke(
            app,
            ["rasterize", "dda", "--start", "0", "0", "--end", "5", "2", "--quiet"],
        )
        assert result.exit_code == 0, result.output
        assert "6 pixels" in result.output
        assert "coverage" not in result.output

    def test_circle(self):
        """Test circle rasterization uses the radius option."""
        result = runner.invoke(
            app,
            ["rasterize", "bresenham_circle", "--start", "3", "3", "--radius", "1"],
        )
        assert result.exit_code == 0, result.output
        assert "8 pixels" in result.output

    def test_step_major_axis(self):
        """Test --major-axis fills in steep segments."""
        args = ["rasterize", "step", "--start", "0", "0", "--end", "1", "5", "-q"]

        plain = runner.invoke(app, args)
        stepped = runner.invoke(app, [*args, "--major-axis"])

        assert "2 pixels" in plain.output
        assert "6 pixels" in stepped.output

    def test_uppercase_algorithm(self):
        """Test algorithm names are case-insensitive."""
        result = runner.invoke(app, ["rasterize", "WU", "-q"])
        assert result.exit_code == 0, result.output

    def test_invalid_algorithm(self):
        """Test an unknown algorithm exits with code 1."""
        result = runner.invoke(app, ["rasterize", "scanline"])
        assert result.exit_code == 1
        assert "Invalid algorithm" in result.output

    def test_degenerate_dda(self):
        """Test precondition errors exit with code 1."""
        result = runner.invoke(
            app,
            ["rasterize", "dda", "--start", "1", "1", "--end", "1", "1"],
        )
        assert result.exit_code == 1
        assert "non-degenerate" in result.output


class TestClipCommand:
    """Tests for the clip command."""

    def test_clip_window(self, geometry_file: Path):
        """Test clipping against the file's window."""
        result = runner.invoke(app, ["clip", str(geometry_file), "--workers", "1"])
        assert result.exit_code == 0, result.output
        assert "2 visible" in result.output
        assert "0 errors" in result.output

    def test_clip_output_file(self, geometry_file: Path, tmp_path: Path):
        """Test --output writes a geometry file that can be read back."""
        output = tmp_path / "out.txt"

        result = runner.invoke(
            app,
            ["clip", str(geometry_file), "--workers", "1", "--output", str(output)],
        )

        assert result.exit_code == 0, result.output
        with GeometryReader(output) as reader:
            assert reader.scene.segments == [
                Segment.from_coords(-1.25, 0, 1.25, 0),
                Segment.from_coords(-0.5, 0.5, 0.5, -0.5),
            ]
            assert reader.window == Rect(Point(-1, -1), Point(1, 1))

    def test_clip_save_next_to_input(self, geometry_file: Path):
        """Test --save writes {name}-clipped.{ext}."""
        result = runner.invoke(
            app, ["clip", str(geometry_file), "--workers", "1", "--save", "-q"]
        )
        assert result.exit_code == 0, result.output
        assert (geometry_file.parent / "lines-clipped.txt").exists()

    def test_clip_polygon(self, geometry_file: Path):
        """Test clipping against an inscribed pentagon."""
        result = runner.invoke(
            app,
            ["clip", str(geometry_file), "--workers", "1", "--polygon-sides", "5"],
        )
        assert result.exit_code == 0, result.output
        assert "5-gon" in result.output

    def test_clip_verbose(self, geometry_file: Path):
        """Test --verbose lists every segment."""
        result = runner.invoke(
            app, ["clip", str(geometry_file), "--workers", "1", "--verbose"]
        )
        assert result.exit_code == 0, result.output
        assert "outside" in result.output

    def test_missing_file(self, tmp_path: Path):
        """Test a missing input file exits with code 1."""
        result = runner.invoke(app, ["clip", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_malformed_file(self, tmp_path: Path):
        """Test a malformed file exits with code 1."""
        path = tmp_path / "bad.txt"
        path.write_text("2\n0 0 1 1\n", encoding="utf-8")

        result = runner.invoke(app, ["clip", str(path), "--workers", "1"])

        assert result.exit_code == 1
        assert "Failed to parse geometry" in result.output

    def test_invalid_polygon_sides(self, geometry_file: Path):
        """Test one or two polygon sides are rejected."""
        result = runner.invoke(app, ["clip", str(geometry_file), "--polygon-sides", "2"])
        assert result.exit_code == 1

    def test_verbose_and_quiet(self, geometry_file: Path):
        """Test --verbose and --quiet are mutually exclusive."""
        result = runner.invoke(app, ["clip", str(geometry_file), "-v", "-q"])
        assert result.exit_code == 1
