"""Clip boundary types.

This module defines the two convex regions segments can be clipped against:
- Rect: An axis-aligned clip window
- Polygon: A convex polygon with implicit closing edge
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from rasterclip.domain.primitives import Point


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned clip window.

    Attributes:
        min: Lower-left corner (smallest x and y)
        max: Upper-right corner (largest x and y)
    """

    min: Point
    max: Point

    @classmethod
    def from_corners(cls, a: Point, b: Point) -> "Rect":
        """Build a window from any two opposite corners.

        Min and max are taken component-wise, so corner order does not matter.

        Args:
            a: One corner
            b: The opposite corner

        Returns:
            Normalized Rect
        """
        return cls(
            min=Point(min(a.x, b.x), min(a.y, b.y)),
            max=Point(max(a.x, b.x), max(a.y, b.y)),
        )

    @property
    def width(self) -> float:
        """Horizontal size of the window."""
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        """Vertical size of the window."""
        return self.max.y - self.min.y

    @property
    def center(self) -> Point:
        """Center of the window."""
        return self.min.midpoint(self.max)

    def contains(self, point: Point) -> bool:
        """Check whether a point lies inside or on the window border."""
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "kind": "rect",
            "min": self.min.to_dict(),
            "max": self.max.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Rect":
        """Deserialize from dictionary."""
        return cls(min=Point.from_dict(data["min"]), max=Point.from_dict(data["max"]))


@dataclass(frozen=True, slots=True)
class Polygon:
    """Convex polygon given by its vertices in either winding.

    Edges run between consecutive vertices, plus the closing edge from the
    last vertex back to the first.

    Attributes:
        vertices: Ordered polygon vertices
    """

    vertices: tuple[Point, ...]

    def __len__(self) -> int:
        return len(self.vertices)

    def edges(self) -> Iterator[tuple[Point, Point]]:
        """Yield (start, end) pairs for every edge, closing edge last."""
        n = len(self.vertices)
        for i in range(n):
            yield self.vertices[i], self.vertices[(i + 1) % n]

    def centroid(self) -> Point:
        """Average of the vertices.

        Returns:
            Vertex centroid (not the area centroid)
        """
        n = len(self.vertices)
        return Point(
            sum(v.x for v in self.vertices) / n,
            sum(v.y for v in self.vertices) / n,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "kind": "polygon",
            "vertices": [v.to_dict() for v in self.vertices],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary."""
        return cls(vertices=tuple(Point.from_dict(v) for v in data["vertices"]))

    @classmethod
    def from_coords(cls, coords: list[tuple[float, float]]) -> "Polygon":
        """Build a polygon from (x, y) pairs."""
        return cls(vertices=tuple(Point(x, y) for x, y in coords))


def boundary_from_dict(data: dict[str, Any]) -> Rect | Polygon:
    """Deserialize a clip boundary using its kind tag.

    Raises:
        ValueError: If the kind tag is missing or unknown
    """
    kind = data.get("kind")
    if kind == "rect":
        return Rect.from_dict(data)
    if kind == "polygon":
        return Polygon.from_dict(data)
    raise ValueError(f"Unknown boundary kind: {kind!r}")
