"""Tests for batch processing orchestration."""

from unittest.mock import MagicMock, Mock, patch

import pytest

from rasterclip.config import ClipConfig, ProcessingConfig, RasterClipSettings, RasterConfig
from rasterclip.core.processor import BatchProcessor, clip_task, rasterize_task
from rasterclip.core.rasterizer import Algorithm
from rasterclip.domain import Circle, Pixel, Point, Rect, Segment
from rasterclip.exceptions import PrimitiveTypeError


@pytest.fixture
def window() -> Rect:
    """Create the unit clip window."""
    return Rect(Point(-1, -1), Point(1, 1))


@pytest.fixture
def segments() -> list[Segment]:
    """Create segments that are crossing, outside, and inside the window."""
    return [
        Segment.from_coords(-10, 0, 10, 0),
        Segment.from_coords(-5, 2, 5, 3),
        Segment.from_coords(-0.5, 0.5, 0.5, -0.5),
    ]


@pytest.fixture
def settings() -> RasterClipSettings:
    """Create test settings that run batches inline."""
    return RasterClipSettings(processing=ProcessingConfig(max_workers=1))


class TestRasterizeTask:
    """Tests for rasterize_task function."""

    def test_segment(self):
        """Test rasterizing a serialized segment."""
        segment = Segment.from_coords(0, 0, 5, 2)

        result = rasterize_task(
            "bresenham_line", segment.to_dict(), RasterConfig().model_dump()
        )

        assert "error" not in result
        pixels = [Pixel.from_dict(p) for p in result["output"]]
        assert [p.to_tuple() for p in pixels] == [
            (0, 0), (1, 0), (2, 1), (3, 1), (4, 2), (5, 2)
        ]
        assert result["duration_ms"] >= 0

    def test_circle(self):
        """Test rasterizing a serialized circle."""
        circle = Circle(Point(0, 0), 0)

        result = rasterize_task(
            "bresenham_circle", circle.to_dict(), RasterConfig().model_dump()
        )

        assert result["output"] == [{"x": 0, "y": 0, "coverage": 1.0}]

    def test_error_is_returned(self):
        """Test precondition failures come back as an error dict."""
        segment = Segment.from_coords(1, 1, 1, 1)

        result = rasterize_task("dda", segment.to_dict(), RasterConfig().model_dump())

        assert result["error_type"] == "DegenerateSegmentError"
        assert "dda" in result["error"]
        assert "traceback" in result


class TestClipTask:
    """Tests for clip_task function."""

    def test_clip(self, window: Rect):
        """Test clipping a serialized segment."""
        segment = Segment.from_coords(-10, 0, 10, 0)

        result = clip_task(segment.to_dict(), window.to_dict(), ClipConfig().model_dump())

        assert "error" not in result
        fragments = [Segment.from_dict(s) for s in result["output"]]
        assert fragments == [Segment.from_coords(-1.25, 0, 1.25, 0)]

    def test_unknown_boundary_kind(self):
        """Test an unrecognized boundary tag is reported as an error."""
        segment = Segment.from_coords(0, 0, 1, 1)

        result = clip_task(segment.to_dict(), {"kind": "ellipse"}, ClipConfig().model_dump())

        assert result["error_type"] == "ValueError"


class TestBatchProcessor:
    """Tests for BatchProcessor class."""

    def test_init(self, settings: RasterClipSettings):
        """Test BatchProcessor initialization."""
        with patch("rasterclip.core.processor.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            processor = BatchProcessor(settings)

            assert processor.config == settings
            mock_logging.assert_called_once()

    @patch("rasterclip.core.processor.configure_logging")
    def test_clip_batch_inline(
        self,
        mock_logging,
        settings: RasterClipSettings,
        segments: list[Segment],
        window: Rect,
    ):
        """Test clipping a batch in the calling process."""
        mock_logging.return_value = Mock()

        result = BatchProcessor(settings).clip_batch(segments, window)

        assert result.succeeded
        assert result.items == [
            [Segment.from_coords(-1.25, 0, 1.25, 0)],
            [],
            [segments[2]],
        ]
        assert result.stats.processed_count == 3
        assert result.stats.output_count == 2
        assert result.stats.duration_seconds >= 0
        assert len(result.stats.item_timings_ms) == 3
        assert result.stats.min_item_time_ms <= result.stats.avg_item_time_ms + 1e-9
        assert result.stats.avg_item_time_ms <= result.stats.max_item_time_ms + 1e-9

    @patch("rasterclip.core.processor.configure_logging")
    def test_clip_batch_progress(
        self,
        mock_logging,
        settings: RasterClipSettings,
        segments: list[Segment],
        window: Rect,
    ):
        """Test the progress callback fires once per segment."""
        mock_logging.return_value = Mock()
        calls = []

        BatchProcessor(settings).clip_batch(
            segments,
            window,
            progress_callback=lambda *args: calls.append(args),
        )

        assert calls == [(1, 3, 0, True), (2, 3, 1, True), (3, 3, 2, True)]

    @patch("rasterclip.core.processor.configure_logging")
    def test_rasterize_batch_mixed(self, mock_logging, settings: RasterClipSettings):
        """Test lines and circles in one batch, with one failing job."""
        mock_logging.return_value = Mock()
        jobs = [
            (Algorithm.BRESENHAM_LINE, Segment.from_coords(0, 0, 5, 2)),
            ("bresenham_circle", (Point(0, 0), 1)),
            (Algorithm.DDA, Segment.from_coords(3, 3, 3, 3)),
        ]

        result = BatchProcessor(settings).rasterize_batch(jobs)

        assert not result.succeeded
        assert len(result.items[0]) == 6
        assert len(result.items[1]) == 8
        assert result.items[2] is None
        assert result.stats.error_count == 1
        assert result.stats.errors[0][0] == 2

    @patch("rasterclip.core.processor.configure_logging")
    def test_rasterize_batch_bad_primitive(
        self, mock_logging, settings: RasterClipSettings
    ):
        """Test a primitive that cannot be serialized fails up front."""
        mock_logging.return_value = Mock()

        with pytest.raises(PrimitiveTypeError):
            BatchProcessor(settings).rasterize_batch([(Algorithm.WU, "segment")])

    @patch("rasterclip.core.processor.configure_logging")
    @patch("rasterclip.core.processor.ProcessPoolExecutor")
    def test_parallel_results_keep_input_order(
        self,
        mock_executor_class,
        mock_logging,
        segments: list[Segment],
        window: Rect,
    ):
        """Test results land in input slots even when completed out of order."""
        mock_logging.return_value = Mock()

        futures = []
        for segment in segments:
            future = MagicMock()
            future.result.return_value = clip_task(
                segment.to_dict(), window.to_dict(), ClipConfig().model_dump()
            )
            futures.append(future)

        mock_executor = MagicMock()
        mock_executor.submit.side_effect = futures
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor

        with patch("rasterclip.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.return_value = list(reversed(futures))

            processor = BatchProcessor(RasterClipSettings())
            result = processor.clip_batch(segments, window, max_workers=2)

        assert mock_executor.submit.call_count == 3
        assert result.items == [
            [Segment.from_coords(-1.25, 0, 1.25, 0)],
            [],
            [segments[2]],
        ]

    @patch("rasterclip.core.processor.configure_logging")
    @patch("rasterclip.core.processor.ProcessPoolExecutor")
    def test_parallel_executor_failure(
        self,
        mock_executor_class,
        mock_logging,
        segments: list[Segment],
        window: Rect,
    ):
        """Test a future that raises is counted as an item error."""
        mock_logging.return_value = Mock()

        good = MagicMock()
        good.result.return_value = {"output": [], "duration_ms": 0.1}
        broken = MagicMock()
        broken.result.side_effect = RuntimeError("worker died")

        mock_executor = MagicMock()
        mock_executor.submit.side_effect = [good, broken]
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor

        with patch("rasterclip.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.return_value = [good, broken]

            result = BatchProcessor(RasterClipSettings()).clip_batch(
                segments[:2], window, max_workers=2
            )

        assert result.stats.error_count == 1
        assert result.items == [[], None]
