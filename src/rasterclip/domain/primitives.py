"""Core geometric primitives fed to the rasterizer and clipper.

This module defines the continuous input types:
- Point: An immutable real-valued 2D point
- Segment: An ordered pair of points
- Circle: A center point with an integer radius
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.
    Uses slots for memory efficiency in parallel processing.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def midpoint(self, other: "Point") -> "Point":
        """Return the point halfway between this point and another."""
        return Point((self.x + other.x) / 2, (self.y + other.y) / 2)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class Segment:
    """A line segment between two points.

    Endpoint order matters to the algorithms that walk from p1 to p2
    (Bresenham error accumulation, subdivision output order).

    Attributes:
        p1: Start point
        p2: End point
    """

    p1: Point
    p2: Point

    @property
    def dx(self) -> float:
        """Signed horizontal extent."""
        return self.p2.x - self.p1.x

    @property
    def dy(self) -> float:
        """Signed vertical extent."""
        return self.p2.y - self.p1.y

    def length_squared(self) -> float:
        """Squared Euclidean length."""
        return self.dx * self.dx + self.dy * self.dy

    def midpoint(self) -> Point:
        """Return the segment's midpoint."""
        return self.p1.midpoint(self.p2)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with a kind tag and both endpoints
        """
        return {
            "kind": "segment",
            "p1": self.p1.to_dict(),
            "p2": self.p2.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        """Deserialize from dictionary."""
        return cls(p1=Point.from_dict(data["p1"]), p2=Point.from_dict(data["p2"]))

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> "Segment":
        """Build a segment from four raw coordinates."""
        return cls(Point(x1, y1), Point(x2, y2))


@dataclass(frozen=True, slots=True)
class Circle:
    """A circle given by its center and integer radius.

    Attributes:
        center: Circle center
        radius: Radius in pixels (non-negative integer)
    """

    center: Point
    radius: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "kind": "circle",
            "center": self.center.to_dict(),
            "radius": self.radius,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Circle":
        """Deserialize from dictionary."""
        return cls(center=Point.from_dict(data["center"]), radius=data["radius"])


def primitive_from_dict(data: dict[str, Any]) -> Segment | Circle:
    """Deserialize a rasterizable primitive using its kind tag.

    Args:
        data: Dictionary produced by Segment.to_dict() or Circle.to_dict()

    Returns:
        Segment or Circle instance

    Raises:
        ValueError: If the kind tag is missing or unknown
    """
    kind = data.get("kind")
    if kind == "segment":
        return Segment.from_dict(data)
    if kind == "circle":
        return Circle.from_dict(data)
    raise ValueError(f"Unknown primitive kind: {kind!r}")
