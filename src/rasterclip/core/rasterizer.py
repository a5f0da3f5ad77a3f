"""Rasterization algorithms for lines and circles.

Six interchangeable algorithms convert continuous primitives into pixels:

- step: slope-intercept stepping along X (optionally along the major axis)
- dda: digital differential analyzer
- bresenham_line: integer error-term line walk
- bresenham_circle: integer midpoint circle with 8-way symmetry
- wu: anti-aliased line with per-pixel coverage
- castle_piteway: line built from a Euclidean step pattern

Each algorithm is a plain pure function. rasterize() validates the input
and dispatches on the Algorithm enum.
"""

from collections.abc import Callable
from enum import Enum

from rasterclip.config import RasterConfig
from rasterclip.core.geometry import (
    fpart,
    ipart,
    rfpart,
    round_half_up,
    round_point,
    sign,
)
from rasterclip.core.validation import require_finite_segment, require_valid_circle
from rasterclip.domain import Circle, Pixel, Point, Segment
from rasterclip.exceptions import (
    DegenerateSegmentError,
    PrimitiveTypeError,
    UnknownAlgorithmError,
)


class Algorithm(str, Enum):
    """Available rasterization algorithms."""

    STEP = "step"
    DDA = "dda"
    BRESENHAM_LINE = "bresenham_line"
    BRESENHAM_CIRCLE = "bresenham_circle"
    WU = "wu"
    CASTLE_PITEWAY = "castle_piteway"

    @property
    def draws_circle(self) -> bool:
        """True for algorithms that take a Circle instead of a Segment."""
        return self is Algorithm.BRESENHAM_CIRCLE


def step_line(segment: Segment, major_axis: bool = False) -> list[Pixel]:
    """Rasterize with the slope-intercept equation y = kx + b.

    One pixel is emitted per integer x between the endpoints, so steep
    segments leave gaps along Y. With major_axis=True, steep segments are
    instead stepped along Y using x = k'y + b'.

    Args:
        segment: Segment to draw (endpoints are snapped to pixels)
        major_axis: Step along Y when |dy| > |dx|

    Returns:
        Pixels ordered by increasing stepping coordinate
    """
    x1, y1 = round_point(segment.p1)
    x2, y2 = round_point(segment.p2)
    dx = x2 - x1
    dy = y2 - y1

    if major_axis and abs(dy) > abs(dx):
        k = dx / dy
        b = x1 - k * y1
        return [
            Pixel(round_half_up(k * y + b), y)
            for y in range(min(y1, y2), max(y1, y2) + 1)
        ]

    if dx == 0:
        return [Pixel(x1, y1)]

    k = dy / dx
    b = y1 - k * x1
    return [
        Pixel(x, round_half_up(k * x + b))
        for x in range(min(x1, x2), max(x1, x2) + 1)
    ]


def dda_line(segment: Segment) -> list[Pixel]:
    """Rasterize with the digital differential analyzer.

    Walks max(|dx|, |dy|) equal increments from p1 and rounds each sample.

    Raises:
        DegenerateSegmentError: If the segment has zero length
    """
    dx = segment.dx
    dy = segment.dy
    steps = max(abs(dx), abs(dy))
    if steps == 0:
        raise DegenerateSegmentError(Algorithm.DDA.value)

    x_inc = dx / steps
    y_inc = dy / steps
    x = segment.p1.x
    y = segment.p1.y

    pixels = []
    for _ in range(int(steps) + 1):
        pixels.append(Pixel(round_half_up(x), round_half_up(y)))
        x += x_inc
        y += y_inc
    return pixels


def bresenham_line(segment: Segment) -> list[Pixel]:
    """Rasterize with Bresenham's integer line algorithm.

    Emits exactly max(|dx|, |dy|) + 1 eight-connected pixels from p1 to p2.
    """
    x0, y0 = round_point(segment.p1)
    x1, y1 = round_point(segment.p2)

    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    pixels = []
    while True:
        pixels.append(Pixel(x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy
    return pixels


def bresenham_circle(center: Point, radius: int) -> list[Pixel]:
    """Rasterize a circle with Bresenham's midpoint algorithm.

    Walks one octant from (0, r) and mirrors every step into all eight
    octants, so each iteration contributes eight pixels in a fixed order.
    Points on the octant borders appear more than once.

    Args:
        center: Circle center (snapped to a pixel)
        radius: Non-negative integer radius

    Returns:
        Pixels in octant order; a single center pixel for radius 0
    """
    xc, yc = round_point(center)
    if radius == 0:
        return [Pixel(xc, yc)]

    pixels: list[Pixel] = []
    x = 0
    y = radius
    d = 3 - 2 * radius

    while y >= x:
        pixels.extend(
            (
                Pixel(xc + x, yc + y),
                Pixel(xc - x, yc + y),
                Pixel(xc + x, yc - y),
                Pixel(xc - x, yc - y),
                Pixel(xc + y, yc + x),
                Pixel(xc - y, yc + x),
                Pixel(xc + y, yc - x),
                Pixel(xc - y, yc - x),
            )
        )
        if d > 0:
            d += 4 * (x - y) + 10
            y -= 1
        else:
            d += 4 * x + 6
        x += 1
    return pixels


def wu_line(segment: Segment) -> list[Pixel]:
    """Rasterize an anti-aliased line with Xiaolin Wu's algorithm.

    Every column between the endpoints gets two stacked pixels whose
    coverages sum to 1. The endpoint columns are weighted by how much of
    the pixel the segment actually covers horizontally. Steep lines are
    processed with X and Y swapped and swapped back on output.

    Returns:
        Pixels with fractional coverage; endpoint pixels come first
    """
    x0, y0 = segment.p1.x, segment.p1.y
    x1, y1 = segment.p2.x, segment.p2.y

    steep = abs(y1 - y0) > abs(x1 - x0)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = y1 - y0
    gradient = dy / dx if dx != 0 else 1.0

    pixels: list[Pixel] = []

    def plot(x: int, y: int, coverage: float) -> None:
        if steep:
            pixels.append(Pixel(y, x, coverage))
        else:
            pixels.append(Pixel(x, y, coverage))

    # First endpoint
    xend = round_half_up(x0)
    yend = y0 + gradient * (xend - x0)
    xgap = rfpart(x0 + 0.5)
    xpxl1 = xend
    ypxl1 = ipart(yend)
    plot(xpxl1, ypxl1, rfpart(yend) * xgap)
    plot(xpxl1, ypxl1 + 1, fpart(yend) * xgap)
    intery = yend + gradient

    # Second endpoint
    xend = round_half_up(x1)
    yend = y1 + gradient * (xend - x1)
    xgap = fpart(x1 + 0.5)
    xpxl2 = xend
    ypxl2 = ipart(yend)
    plot(xpxl2, ypxl2, rfpart(yend) * xgap)
    plot(xpxl2, ypxl2 + 1, fpart(yend) * xgap)

    for x in range(xpxl1 + 1, xpxl2):
        plot(x, ipart(intery), rfpart(intery))
        plot(x, ipart(intery) + 1, fpart(intery))
        intery += gradient

    return pixels


_STRAIGHT = "s"
_DIAGONAL = "d"


def castle_piteway_line(segment: Segment) -> list[Pixel]:
    """Rasterize with the Castle-Pitway step pattern.

    With a = max(|dx|, |dy|) and b = min(|dx|, |dy|), the line consists of
    a - b straight (s) moves and b diagonal (d) moves.
    Running the subtractive Euclidean algorithm on (a - b, b) while
    concatenating the two move strings yields the repeating pattern;
    it is then replayed gcd times.

    Axis-aligned and pure diagonal lines are stepped directly.
    """
    x, y = round_point(segment.p1)
    dx = round_half_up(segment.dx)
    dy = round_half_up(segment.dy)
    sign_x = sign(dx)
    sign_y = sign(dy)

    a = abs(dx)
    b = abs(dy)
    swapped = False
    if b > a:
        a, b = b, a
        swapped = True

    pixels = [Pixel(x, y)]

    if b == 0:
        for _ in range(a):
            if swapped:
                y += sign_y
            else:
                x += sign_x
            pixels.append(Pixel(x, y))
        return pixels

    if a == b:
        for _ in range(a):
            x += sign_x
            y += sign_y
            pixels.append(Pixel(x, y))
        return pixels

    y_alg = b
    x_alg = a - b
    m1 = [_STRAIGHT]
    m2 = [_DIAGONAL]

    while x_alg != y_alg:
        if x_alg > y_alg:
            x_alg -= y_alg
            m2 = m1 + m2
        else:
            y_alg -= x_alg
            m1 = m2 + m1

    pattern = m2 + m1
    for _ in range(x_alg):
        for move in pattern:
            if move == _DIAGONAL:
                x += sign_x
                y += sign_y
            elif swapped:
                y += sign_y
            else:
                x += sign_x
            pixels.append(Pixel(x, y))

    return pixels


# Line algorithms that need nothing beyond the segment
_LINE_RASTERIZERS: dict[Algorithm, Callable[[Segment], list[Pixel]]] = {
    Algorithm.DDA: dda_line,
    Algorithm.BRESENHAM_LINE: bresenham_line,
    Algorithm.WU: wu_line,
    Algorithm.CASTLE_PITEWAY: castle_piteway_line,
}


def _coerce_algorithm(algorithm: Algorithm | str) -> Algorithm:
    if isinstance(algorithm, Algorithm):
        return algorithm
    try:
        return Algorithm(str(algorithm).lower())
    except ValueError:
        raise UnknownAlgorithmError(str(algorithm)) from None


def _coerce_circle(primitive: object) -> Circle:
    if isinstance(primitive, Circle):
        return primitive
    if (
        isinstance(primitive, tuple)
        and len(primitive) == 2
        and isinstance(primitive[0], Point)
    ):
        return Circle(center=primitive[0], radius=primitive[1])
    raise PrimitiveTypeError(Algorithm.BRESENHAM_CIRCLE.value, "Circle", primitive)


def rasterize(
    algorithm: Algorithm | str,
    primitive: Segment | Circle | tuple[Point, int],
    params: RasterConfig | None = None,
) -> list[Pixel]:
    """Rasterize a primitive with the selected algorithm.

    Args:
        algorithm: Algorithm member or its string value
        primitive: Segment for line algorithms; Circle or (center, radius)
            for bresenham_circle
        params: Rasterization options (defaults if None)

    Returns:
        Pixels in the algorithm's emission order

    Raises:
        UnknownAlgorithmError: If the algorithm name is not recognized
        PrimitiveTypeError: If the primitive does not fit the algorithm
        NonFiniteCoordinateError: If any coordinate is NaN or infinite
        InvalidRadiusError: If a circle radius is negative or fractional
        DegenerateSegmentError: If DDA receives a zero-length segment
    """
    if params is None:
        params = RasterConfig()

    algo = _coerce_algorithm(algorithm)

    if algo.draws_circle:
        circle = _coerce_circle(primitive)
        require_valid_circle(circle)
        return bresenham_circle(circle.center, int(circle.radius))

    if not isinstance(primitive, Segment):
        raise PrimitiveTypeError(algo.value, "Segment", primitive)
    require_finite_segment(primitive)

    if algo is Algorithm.STEP:
        return step_line(primitive, major_axis=params.step_major_axis)
    return _LINE_RASTERIZERS[algo](primitive)
