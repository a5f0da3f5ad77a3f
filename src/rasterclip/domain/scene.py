"""Clip scene loaded from a geometry file."""

from dataclasses import dataclass, field
from typing import Any

from rasterclip.domain.boundary import Rect
from rasterclip.domain.primitives import Segment


@dataclass
class ClipScene:
    """Segments to clip together with their clip window.

    Attributes:
        segments: Segments in file order
        window: Clip window normalized to min/max corners
    """

    segments: list[Segment] = field(default_factory=list)
    window: Rect | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "segments": [s.to_dict() for s in self.segments],
            "window": self.window.to_dict() if self.window else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClipScene":
        """Deserialize from dictionary."""
        window = Rect.from_dict(data["window"]) if data["window"] is not None else None
        return cls(
            segments=[Segment.from_dict(s) for s in data["segments"]],
            window=window,
        )
