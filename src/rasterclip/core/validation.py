"""Precondition checks run before algorithm dispatch.

Every check raises a PreconditionError subclass instead of coercing bad
input, so callers see the violation at the call site.
"""

import math
from numbers import Integral

from rasterclip.domain import Circle, Point, Polygon, Rect, Segment
from rasterclip.exceptions import (
    InvalidBoundaryError,
    InvalidRadiusError,
    NonFiniteCoordinateError,
)


def require_finite_point(point: Point, name: str = "point") -> None:
    """Reject points with NaN or infinite coordinates.

    Raises:
        NonFiniteCoordinateError: If either coordinate is not finite
    """
    if not math.isfinite(point.x):
        raise NonFiniteCoordinateError(f"{name}.x", point.x)
    if not math.isfinite(point.y):
        raise NonFiniteCoordinateError(f"{name}.y", point.y)


def require_finite_segment(segment: Segment) -> None:
    """Reject segments with non-finite endpoints."""
    require_finite_point(segment.p1, "p1")
    require_finite_point(segment.p2, "p2")


def require_valid_circle(circle: Circle) -> None:
    """Reject non-finite centers and negative or fractional radii.

    Raises:
        NonFiniteCoordinateError: If the center is not finite
        InvalidRadiusError: If the radius is not a non-negative integer
    """
    require_finite_point(circle.center, "center")
    radius = circle.radius
    if isinstance(radius, bool) or not isinstance(radius, Integral) or radius < 0:
        raise InvalidRadiusError(radius)


def require_valid_rect(rect: Rect) -> None:
    """Reject non-finite or inverted clip windows.

    Raises:
        NonFiniteCoordinateError: If a corner is not finite
        InvalidBoundaryError: If min exceeds max on either axis
    """
    require_finite_point(rect.min, "min")
    require_finite_point(rect.max, "max")
    if rect.min.x > rect.max.x or rect.min.y > rect.max.y:
        raise InvalidBoundaryError(
            f"window min {rect.min.to_tuple()} exceeds max {rect.max.to_tuple()}"
        )


def require_valid_polygon(polygon: Polygon) -> None:
    """Reject polygons that cannot be used as a convex clip boundary.

    Raises:
        NonFiniteCoordinateError: If a vertex is not finite
        InvalidBoundaryError: If there are fewer than 3 vertices or two
            consecutive vertices coincide
    """
    if len(polygon.vertices) < 3:
        raise InvalidBoundaryError(
            f"polygon needs at least 3 vertices, got {len(polygon.vertices)}"
        )

    for i, vertex in enumerate(polygon.vertices):
        require_finite_point(vertex, f"vertices[{i}]")

    for i, (start, end) in enumerate(polygon.edges()):
        if start == end:
            raise InvalidBoundaryError(f"vertex {i} duplicates its successor")
