"""Domain models for rasterclip.

This module contains the value types passed into and out of the engine.
All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of any drawing surface

Key classes:
- Point: A real-valued 2D point
- Segment: An ordered pair of points
- Circle: Center and integer radius
- Pixel: Integer pixel with coverage
- Rect: Axis-aligned clip window
- Polygon: Convex clip polygon
- ClipScene: Segments plus window, as read from a geometry file
"""

from rasterclip.domain.boundary import Polygon, Rect, boundary_from_dict
from rasterclip.domain.pixel import Pixel
from rasterclip.domain.primitives import Circle, Point, Segment, primitive_from_dict
from rasterclip.domain.scene import ClipScene

__all__: list[str] = [
    # Core types
    "Point",
    "Segment",
    "Circle",
    "Pixel",
    # Boundaries
    "Rect",
    "Polygon",
    "ClipScene",
    # Deserialization helpers
    "boundary_from_dict",
    "primitive_from_dict",
]
