"""Numeric helpers shared by the rasterizer and clipper.

This module provides small mathematical utilities for:
- Half-up rounding to pixel coordinates
- Integer/fractional part splitting used by anti-aliasing
- Edge cross products for side-of-line tests
- Regular polygon construction inside a window

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math

from rasterclip.domain import Point, Polygon, Rect


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up.

    Python's built-in round() uses banker's rounding, which would shift
    pixels on exact .5 samples.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return math.floor(value + 0.5)


def round_point(point: Point) -> tuple[int, int]:
    """Snap a point to its nearest pixel."""
    return round_half_up(point.x), round_half_up(point.y)


def ipart(value: float) -> int:
    """Integer part (floor)."""
    return math.floor(value)


def fpart(value: float) -> float:
    """Fractional part in [0, 1)."""
    return value - math.floor(value)


def rfpart(value: float) -> float:
    """One minus the fractional part."""
    return 1.0 - fpart(value)


def sign(value: float) -> int:
    """Return -1, 0 or 1 matching the sign of value."""
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def cross_product(a: Point, b: Point, p: Point) -> float:
    """Cross product of edge a->b with vector a->p.

    Positive when p is to the left of the directed edge, negative when to
    the right, zero when collinear.

    Examples:
        >>> cross_product(Point(0, 0), Point(1, 0), Point(0, 1))
        1
    """
    return (b.x - a.x) * (p.y - a.y) - (b.y - a.y) * (p.x - a.x)


def inscribed_polygon(window: Rect, sides: int = 5) -> Polygon:
    """Build a regular polygon centered in a clip window.

    The polygon's radii are the window's width and height divided by 2.5,
    and its first vertex points straight down (angle -pi/2).

    Args:
        window: Window to center the polygon in
        sides: Number of vertices (at least 3)

    Returns:
        Convex polygon

    Raises:
        ValueError: If sides < 3
    """
    if sides < 3:
        raise ValueError(f"Polygon needs at least 3 sides, got {sides}")

    center = window.center
    rx = window.width / 2.5
    ry = window.height / 2.5

    vertices = []
    for i in range(sides):
        angle = i * 2 * math.pi / sides - math.pi / 2
        vertices.append(
            Point(center.x + rx * math.cos(angle), center.y + ry * math.sin(angle))
        )
    return Polygon(vertices=tuple(vertices))
