"""Batch orchestration for rasterizing and clipping many inputs.

Every segment x algorithm pair (or segment x boundary pair) is independent,
so batches can be spread over worker processes with ProcessPoolExecutor.
Results are written back into slots indexed by input position, so output
order always matches input order regardless of completion order.

Key components:
- rasterize_task / clip_task: Top-level picklable functions for workers
- BatchProcessor: Orchestrator class with inline and parallel modes
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any

from rasterclip.config import ClipConfig, RasterClipSettings, RasterConfig
from rasterclip.core.clipper import clip
from rasterclip.core.rasterizer import Algorithm, rasterize
from rasterclip.domain import (
    Circle,
    Pixel,
    Point,
    Polygon,
    Rect,
    Segment,
    boundary_from_dict,
    primitive_from_dict,
)
from rasterclip.exceptions import PrimitiveTypeError
from rasterclip.utils import ProcessingLogger, ProcessingStats, configure_logging

ProgressCallback = Callable[[int, int, int, bool], None]


def rasterize_task(
    algorithm: str,
    primitive_dict: dict[str, Any],
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rasterize a single primitive.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        algorithm: Algorithm value (e.g. "bresenham_line")
        primitive_dict: Serialized Segment or Circle
        config_dict: Serialized RasterConfig

    Returns:
        Dictionary containing either:
        - Success: {"output": [pixel_dict, ...], "duration_ms": float}
        - Error: {"error": str, "error_type": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        primitive = primitive_from_dict(primitive_dict)
        pixels = rasterize(algorithm, primitive, RasterConfig(**config_dict))
        return {
            "output": [p.to_dict() for p in pixels],
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


def clip_task(
    segment_dict: dict[str, Any],
    boundary_dict: dict[str, Any],
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Clip a single segment.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        segment_dict: Serialized Segment
        boundary_dict: Serialized Rect or Polygon
        config_dict: Serialized ClipConfig

    Returns:
        Dictionary containing either:
        - Success: {"output": [segment_dict, ...], "duration_ms": float}
        - Error: {"error": str, "error_type": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        segment = Segment.from_dict(segment_dict)
        boundary = boundary_from_dict(boundary_dict)
        fragments = clip(segment, boundary, ClipConfig(**config_dict))
        return {
            "output": [s.to_dict() for s in fragments],
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


@dataclass
class BatchResult:
    """Outputs of a batch run in input order.

    Attributes:
        items: One entry per input; None where that input failed
        stats: Counts, timings and error details
    """

    items: list[Any]
    stats: ProcessingStats

    @property
    def succeeded(self) -> bool:
        """True if no item failed."""
        return self.stats.error_count == 0


class BatchProcessor:
    """Runs rasterization and clipping over many inputs.

    With max_workers=1 the batch runs inline in the calling process;
    otherwise tasks are spread over a process pool.

    Example:
        processor = BatchProcessor(RasterClipSettings())
        result = processor.clip_batch(scene.segments, scene.window)
        for fragments in result.items:
            ...
    """

    def __init__(self, config: RasterClipSettings) -> None:
        """Initialize batch processor with configuration.

        Args:
            config: Settings containing raster, clip and processing config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )

    def rasterize_batch(
        self,
        jobs: Sequence[tuple[Algorithm | str, Segment | Circle | tuple[Point, int]]],
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> BatchResult:
        """Rasterize every (algorithm, primitive) job.

        Args:
            jobs: Algorithm and primitive pairs
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, index, success)

        Returns:
            BatchResult whose items are pixel lists

        Raises:
            PrimitiveTypeError: If a primitive cannot be serialized
        """
        config_dict = self.config.raster.model_dump()
        task_args = [
            (_algorithm_value(algorithm), _primitive_dict(algorithm, primitive), config_dict)
            for algorithm, primitive in jobs
        ]
        return self._run(
            kind="rasterize",
            task_fn=rasterize_task,
            task_args=task_args,
            decode=Pixel.from_dict,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )

    def clip_batch(
        self,
        segments: Sequence[Segment],
        boundary: Rect | Polygon,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> BatchResult:
        """Clip every segment against the same boundary.

        Args:
            segments: Segments to clip
            boundary: Shared Rect or Polygon
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, index, success)

        Returns:
            BatchResult whose items are fragment lists
        """
        config_dict = self.config.clip.model_dump()
        boundary_dict = boundary.to_dict()
        task_args = [
            (segment.to_dict(), boundary_dict, config_dict) for segment in segments
        ]
        return self._run(
            kind="clip",
            task_fn=clip_task,
            task_args=task_args,
            decode=Segment.from_dict,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )

    def _run(
        self,
        kind: str,
        task_fn: Callable[..., dict[str, Any]],
        task_args: list[tuple[Any, ...]],
        decode: Callable[[dict[str, Any]], Any],
        max_workers: int | None,
        progress_callback: ProgressCallback | None,
    ) -> BatchResult:
        processing_logger = ProcessingLogger(self.logger)
        stats = processing_logger.stats
        stats.start_time = time.time()

        # Use config default if max_workers not specified
        if max_workers is None:
            max_workers = self.config.processing.max_workers

        items: list[Any] = [None] * len(task_args)

        self.logger.info(
            "Starting batch",
            kind=kind,
            item_count=len(task_args),
            max_workers=max_workers,
        )

        if max_workers == 1 or len(task_args) <= 1:
            self._run_inline(
                kind, task_fn, task_args, decode, items, processing_logger, progress_callback
            )
        else:
            self._run_parallel(
                kind,
                task_fn,
                task_args,
                decode,
                items,
                processing_logger,
                max_workers,
                progress_callback,
            )

        stats.end_time = time.time()

        self.logger.info(
            "Batch complete",
            kind=kind,
            processed=stats.processed_count,
            errors=stats.error_count,
            outputs=stats.output_count,
            duration_seconds=round(stats.duration_seconds, 3),
        )

        return BatchResult(items=items, stats=stats)

    def _run_inline(
        self,
        kind: str,
        task_fn: Callable[..., dict[str, Any]],
        task_args: list[tuple[Any, ...]],
        decode: Callable[[dict[str, Any]], Any],
        items: list[Any],
        processing_logger: ProcessingLogger,
        progress_callback: ProgressCallback | None,
    ) -> None:
        total = len(task_args)
        for index, args in enumerate(task_args):
            processing_logger.log_item_start(index, kind)
            result = task_fn(*args)
            success = self._store_result(index, result, decode, items, processing_logger)
            if progress_callback is not None:
                progress_callback(index + 1, total, index, success)

    def _run_parallel(
        self,
        kind: str,
        task_fn: Callable[..., dict[str, Any]],
        task_args: list[tuple[Any, ...]],
        decode: Callable[[dict[str, Any]], Any],
        items: list[Any],
        processing_logger: ProcessingLogger,
        max_workers: int | None,
        progress_callback: ProgressCallback | None,
    ) -> None:
        """Process items in parallel using ProcessPoolExecutor."""
        total = len(task_args)
        completed = 0
        pending_futures: dict[Future, int] = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for index, args in enumerate(task_args):
                processing_logger.log_item_start(index, kind)
                future = executor.submit(task_fn, *args)
                pending_futures[future] = index

            try:
                # Collect results as they complete
                for future in as_completed(list(pending_futures)):
                    index = pending_futures.pop(future)
                    success = False

                    try:
                        success = self._store_result(
                            index, future.result(), decode, items, processing_logger
                        )
                    except Exception as e:
                        # Executor-level error
                        processing_logger.log_item_error(
                            index=index,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, index, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                processing_logger.stats.was_cancelled = True
                processing_logger.stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

    @staticmethod
    def _store_result(
        index: int,
        result: dict[str, Any],
        decode: Callable[[dict[str, Any]], Any],
        items: list[Any],
        processing_logger: ProcessingLogger,
    ) -> bool:
        if "error" in result:
            processing_logger.log_item_error(
                index=index,
                error=Exception(result["error"]),
                traceback=result.get("traceback"),
            )
            return False

        output = [decode(entry) for entry in result["output"]]
        items[index] = output
        processing_logger.log_item_complete(
            index=index,
            output_count=len(output),
            duration_ms=result.get("duration_ms", 0.0),
        )
        return True


def _algorithm_value(algorithm: Algorithm | str) -> str:
    if isinstance(algorithm, Algorithm):
        return algorithm.value
    return str(algorithm)


def _primitive_dict(
    algorithm: Algorithm | str, primitive: Segment | Circle | tuple[Point, int]
) -> dict[str, Any]:
    if isinstance(primitive, (Segment, Circle)):
        return primitive.to_dict()
    if isinstance(primitive, tuple) and len(primitive) == 2:
        center, radius = primitive
        if isinstance(center, Point):
            return Circle(center=center, radius=radius).to_dict()
    raise PrimitiveTypeError(_algorithm_value(algorithm), "Segment or Circle", primitive)
