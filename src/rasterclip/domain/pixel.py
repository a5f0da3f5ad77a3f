"""Rasterizer output type."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Pixel:
    """A discrete pixel with coverage.

    Attributes:
        x: Integer column
        y: Integer row
        coverage: Alpha in [0, 1]; 1.0 unless produced by anti-aliasing
    """

    x: int
    y: int
    coverage: float = 1.0

    def to_tuple(self) -> tuple[int, int]:
        """Convert to (x, y), dropping coverage."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y, "coverage": self.coverage}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pixel":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"], coverage=data.get("coverage", 1.0))
