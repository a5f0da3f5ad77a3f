"""Core algorithms for rasterclip.

This module contains the core algorithms for:

- Geometry helpers (half-up rounding, fractional parts, cross products)
- Rasterization (six line/circle algorithms behind one dispatch)
- Clipping (midpoint subdivision against windows and convex polygons)
- Batch processing (order-preserving, optionally parallel)

All algorithms are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects)

Key functions:
- rasterize: Rasterize a primitive with a chosen Algorithm
- clip: Clip a segment to a Rect or Polygon
- inscribed_polygon: Regular polygon centered in a window

Key classes:
- Algorithm: Enum of rasterization algorithms
- BatchProcessor: Runs many rasterize/clip calls
"""

from rasterclip.core.clipper import (
    clip,
    clip_to_polygon,
    clip_to_rect,
    compute_outcode,
    is_inside,
    is_trivially_outside,
    merge_fragments,
)
from rasterclip.core.geometry import cross_product, inscribed_polygon, round_half_up
from rasterclip.core.processor import BatchProcessor, BatchResult, clip_task, rasterize_task
from rasterclip.core.rasterizer import (
    Algorithm,
    bresenham_circle,
    bresenham_line,
    castle_piteway_line,
    dda_line,
    rasterize,
    step_line,
    wu_line,
)

__all__ = [
    # Rasterizer
    "Algorithm",
    # Processor classes
    "BatchProcessor",
    "BatchResult",
    "bresenham_circle",
    "bresenham_line",
    "castle_piteway_line",
    # Clipper
    "clip",
    "clip_task",
    "clip_to_polygon",
    "clip_to_rect",
    "compute_outcode",
    # Geometry functions
    "cross_product",
    "dda_line",
    "inscribed_polygon",
    "is_inside",
    "is_trivially_outside",
    "merge_fragments",
    "rasterize",
    "rasterize_task",
    "round_half_up",
    "step_line",
    "wu_line",
]
