"""Segment clipping by midpoint subdivision.

Segments are clipped against an axis-aligned window or a convex polygon by
repeatedly bisecting the pieces that cannot be classified outright:

- Rectangle: Cohen-Sutherland outcodes accept pieces fully inside and reject
  pieces sharing an excluded half-plane.
- Polygon: a winding-agnostic cross-product test accepts pieces with both
  ends inside; an edge-by-edge test rejects pieces wholly outside one edge.

Pending pieces live on an explicit work stack, so the depth ceiling is a
loop-exit condition rather than a recursion limit. Pieces are emitted in
order along the segment, and adjacent pieces are merged back together.
"""

import logging

from rasterclip.config import ClipConfig
from rasterclip.core.geometry import cross_product
from rasterclip.core.validation import (
    require_finite_segment,
    require_valid_polygon,
    require_valid_rect,
)
from rasterclip.domain import Point, Polygon, Rect, Segment
from rasterclip.exceptions import InvalidBoundaryError

logger = logging.getLogger(__name__)

# Outcode bits
INSIDE = 0
LEFT = 1
RIGHT = 2
BOTTOM = 4
TOP = 8


def compute_outcode(point: Point, rect: Rect) -> int:
    """Classify a point against the window's four half-planes.

    Examples:
        >>> window = Rect(Point(-1, -1), Point(1, 1))
        >>> compute_outcode(Point(-5, 0), window) == LEFT
        True
        >>> compute_outcode(Point(5, 5), window) == RIGHT | TOP
        True
    """
    code = INSIDE
    if point.x < rect.min.x:
        code |= LEFT
    elif point.x > rect.max.x:
        code |= RIGHT
    if point.y < rect.min.y:
        code |= BOTTOM
    elif point.y > rect.max.y:
        code |= TOP
    return code


def clip_to_rect(
    segment: Segment,
    rect: Rect,
    max_depth: int = 10,
    min_extent: float = 0.5,
) -> list[Segment]:
    """Clip a segment to a window by midpoint subdivision.

    Each piece is, in order of precedence: accepted when deeper than
    max_depth, accepted when both outcodes are zero, rejected when the
    outcodes share a bit, accepted when smaller than min_extent on both
    axes, or otherwise split in half.

    Args:
        segment: Segment to clip
        rect: Clip window
        max_depth: Depth past which pieces are accepted unconditionally
        min_extent: Size below which a straddling piece counts as a point

    Returns:
        Unmerged fragments in order from p1 to p2
    """
    fragments: list[Segment] = []
    stack: list[tuple[Point, Point, int]] = [(segment.p1, segment.p2, 0)]

    while stack:
        p1, p2, depth = stack.pop()

        if depth > max_depth:
            logger.debug(
                "Rectangle clip depth ceiling reached at (%.3f, %.3f)-(%.3f, %.3f)",
                p1.x, p1.y, p2.x, p2.y
            )
            fragments.append(Segment(p1, p2))
            continue

        code1 = compute_outcode(p1, rect)
        code2 = compute_outcode(p2, rect)

        if (code1 | code2) == INSIDE:
            fragments.append(Segment(p1, p2))
            continue

        if code1 & code2:
            continue

        if abs(p1.x - p2.x) < min_extent and abs(p1.y - p2.y) < min_extent:
            fragments.append(Segment(p1, p2))
            continue

        mid = p1.midpoint(p2)
        # Second half first so the first half is processed next
        stack.append((mid, p2, depth + 1))
        stack.append((p1, mid, depth + 1))

    return fragments


def is_inside(point: Point, polygon: Polygon) -> bool:
    """Test whether a point lies inside a convex polygon.

    The point is inside unless it sits on the positive side of one edge and
    the negative side of another, which makes the test independent of the
    polygon's winding. Points on an edge count as inside.
    """
    positive = False
    negative = False

    for a, b in polygon.edges():
        cp = cross_product(a, b, point)
        if cp > 0:
            positive = True
        elif cp < 0:
            negative = True
        if positive and negative:
            return False

    return True


def is_trivially_outside(p1: Point, p2: Point, polygon: Polygon) -> bool:
    """Test whether both points lie strictly outside the same polygon edge.

    The interior side of each edge is taken from the side the vertex centroid
    falls on. A centroid lying very close to an edge can misclassify that
    edge.
    """
    center = polygon.centroid()

    for a, b in polygon.edges():
        inner_positive = cross_product(a, b, center) >= 0

        cp1 = cross_product(a, b, p1)
        cp2 = cross_product(a, b, p2)

        if inner_positive:
            p1_outside = cp1 < 0
            p2_outside = cp2 < 0
        else:
            p1_outside = cp1 > 0
            p2_outside = cp2 > 0

        if p1_outside and p2_outside:
            return True

    return False


def clip_to_polygon(
    segment: Segment,
    polygon: Polygon,
    max_depth: int = 12,
    min_length_sq: float = 1.0,
) -> list[Segment]:
    """Clip a segment to a convex polygon by midpoint subdivision.

    Pieces deeper than max_depth or shorter than sqrt(min_length_sq) are kept
    only if their midpoint is inside. Otherwise a piece is accepted when both
    ends are inside, rejected when trivially outside, or split in half.

    Args:
        segment: Segment to clip
        polygon: Convex clip polygon
        max_depth: Depth past which pieces are classified by their midpoint
        min_length_sq: Squared length below which the same applies

    Returns:
        Unmerged fragments in order from p1 to p2
    """
    fragments: list[Segment] = []
    stack: list[tuple[Point, Point, int]] = [(segment.p1, segment.p2, 0)]

    while stack:
        p1, p2, depth = stack.pop()
        piece = Segment(p1, p2)

        if depth > max_depth or piece.length_squared() < min_length_sq:
            if is_inside(piece.midpoint(), polygon):
                fragments.append(piece)
            continue

        if is_inside(p1, polygon) and is_inside(p2, polygon):
            fragments.append(piece)
            continue

        if is_trivially_outside(p1, p2, polygon):
            continue

        mid = piece.midpoint()
        stack.append((mid, p2, depth + 1))
        stack.append((p1, mid, depth + 1))

    return fragments


def merge_fragments(fragments: list[Segment]) -> list[Segment]:
    """Join consecutive fragments where one ends exactly where the next starts.

    Subdivision reuses the same midpoint object for both halves, so exact
    comparison is sufficient.

    Examples:
        >>> a = Segment(Point(0, 0), Point(1, 0))
        >>> b = Segment(Point(1, 0), Point(2, 0))
        >>> merge_fragments([a, b])
        [Segment(p1=Point(x=0, y=0), p2=Point(x=2, y=0))]
    """
    merged: list[Segment] = []
    for fragment in fragments:
        if merged and merged[-1].p2 == fragment.p1:
            merged[-1] = Segment(merged[-1].p1, fragment.p2)
        else:
            merged.append(fragment)
    return merged


def clip(
    segment: Segment,
    boundary: Rect | Polygon,
    params: ClipConfig | None = None,
) -> list[Segment]:
    """Clip a segment against a window or convex polygon.

    Args:
        segment: Segment to clip
        boundary: Rect window or convex Polygon
        params: Subdivision tolerances (defaults if None)

    Returns:
        Visible part(s) of the segment; empty if it lies fully outside

    Raises:
        NonFiniteCoordinateError: If any coordinate is NaN or infinite
        InvalidBoundaryError: If the boundary violates its invariants
    """
    if params is None:
        params = ClipConfig()

    require_finite_segment(segment)

    if isinstance(boundary, Rect):
        require_valid_rect(boundary)
        fragments = clip_to_rect(
            segment,
            boundary,
            max_depth=params.rect_max_depth,
            min_extent=params.rect_min_extent,
        )
    elif isinstance(boundary, Polygon):
        require_valid_polygon(boundary)
        fragments = clip_to_polygon(
            segment,
            boundary,
            max_depth=params.polygon_max_depth,
            min_length_sq=params.polygon_min_length_sq,
        )
    else:
        raise InvalidBoundaryError(
            f"expected Rect or Polygon, got {type(boundary).__name__}"
        )

    if params.merge_fragments:
        return merge_fragments(fragments)
    return fragments
