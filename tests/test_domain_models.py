"""Tests for domain models to verify they work correctly."""

import pytest

from rasterclip.domain import (
    Circle,
    ClipScene,
    Pixel,
    Point,
    Polygon,
    Rect,
    Segment,
    boundary_from_dict,
    primitive_from_dict,
)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(1.5, -2.0)
        assert p.x == 1.5
        assert p.y == -2.0

    def test_point_midpoint(self) -> None:
        """Test midpoint between two points."""
        assert Point(-10, 0).midpoint(Point(10, 4)) == Point(0, 2)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(0.25, 7.0)
        assert Point.from_dict(p1.to_dict()) == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(1.0, 2.0)
        with pytest.raises(AttributeError):
            p.x = 3.0  # type: ignore

    def test_point_hashable(self) -> None:
        """Test points can be used in sets."""
        assert len({Point(1, 2), Point(1.0, 2.0), Point(2, 1)}) == 2


class TestSegment:
    """Tests for Segment class."""

    def test_segment_extents(self) -> None:
        """Test signed extents and squared length."""
        segment = Segment.from_coords(3, 4, 0, 0)
        assert segment.dx == -3
        assert segment.dy == -4
        assert segment.length_squared() == 25

    def test_segment_midpoint(self) -> None:
        """Test segment midpoint."""
        assert Segment.from_coords(0, 0, 4, 2).midpoint() == Point(2, 1)

    def test_segment_serialization(self) -> None:
        """Test segment dict carries its kind tag."""
        segment = Segment.from_coords(-1, 2, 3, -4)
        data = segment.to_dict()

        assert data["kind"] == "segment"
        assert primitive_from_dict(data) == segment


class TestCircle:
    """Tests for Circle class."""

    def test_circle_serialization(self) -> None:
        """Test circle dict carries its kind tag."""
        circle = Circle(Point(3, -2), 10)
        data = circle.to_dict()

        assert data["kind"] == "circle"
        assert primitive_from_dict(data) == circle

    def test_unknown_primitive_kind(self) -> None:
        """Test deserializing an unknown kind fails."""
        with pytest.raises(ValueError, match="Unknown primitive kind"):
            primitive_from_dict({"kind": "ellipse"})


class TestPixel:
    """Tests for Pixel class."""

    def test_pixel_default_coverage(self) -> None:
        """Test pixels are fully covered by default."""
        assert Pixel(1, 2).coverage == 1.0

    def test_pixel_serialization(self) -> None:
        """Test pixel serialization and deserialization."""
        pixel = Pixel(-3, 4, 0.25)
        assert Pixel.from_dict(pixel.to_dict()) == pixel

    def test_pixel_from_dict_without_coverage(self) -> None:
        """Test coverage defaults when missing from the dict."""
        assert Pixel.from_dict({"x": 1, "y": 1}) == Pixel(1, 1, 1.0)


class TestRect:
    """Tests for Rect class."""

    def test_from_corners_normalizes(self) -> None:
        """Test any two opposite corners produce the same window."""
        a = Rect.from_corners(Point(1, -1), Point(-1, 1))
        b = Rect.from_corners(Point(-1, -1), Point(1, 1))
        assert a == b
        assert a.min == Point(-1, -1)
        assert a.max == Point(1, 1)

    def test_rect_dimensions(self) -> None:
        """Test width, height and center."""
        rect = Rect(Point(0, 10), Point(40, 30))
        assert rect.width == 40
        assert rect.height == 20
        assert rect.center == Point(20, 20)

    def test_rect_contains(self) -> None:
        """Test containment includes the border."""
        rect = Rect(Point(0, 0), Point(1, 1))
        assert rect.contains(Point(1, 0.5))
        assert not rect.contains(Point(1.01, 0.5))

    def test_rect_serialization(self) -> None:
        """Test rect serialization through the boundary dispatcher."""
        rect = Rect(Point(-1, -1), Point(1, 1))
        assert boundary_from_dict(rect.to_dict()) == rect


class TestPolygon:
    """Tests for Polygon class."""

    def test_polygon_edges_close(self) -> None:
        """Test the closing edge comes last."""
        polygon = Polygon.from_coords([(0, 0), (4, 0), (0, 3)])
        edges = list(polygon.edges())

        assert len(edges) == 3
        assert edges[-1] == (Point(0, 3), Point(0, 0))

    def test_polygon_centroid(self) -> None:
        """Test vertex centroid."""
        polygon = Polygon.from_coords([(0, 0), (10, 0), (10, 10), (0, 10)])
        assert polygon.centroid() == Point(5, 5)

    def test_polygon_serialization(self) -> None:
        """Test polygon serialization through the boundary dispatcher."""
        polygon = Polygon.from_coords([(0, 0), (4, 0), (0, 3)])
        assert boundary_from_dict(polygon.to_dict()) == polygon

    def test_unknown_boundary_kind(self) -> None:
        """Test deserializing an unknown boundary kind fails."""
        with pytest.raises(ValueError, match="Unknown boundary kind"):
            boundary_from_dict({"kind": "circle"})


class TestClipScene:
    """Tests for ClipScene class."""

    def test_scene_serialization(self) -> None:
        """Test scene serialization and deserialization."""
        scene = ClipScene(
            segments=[Segment.from_coords(0, 0, 1, 1)],
            window=Rect(Point(0, 0), Point(2, 2)),
        )
        assert ClipScene.from_dict(scene.to_dict()) == scene

    def test_scene_without_window(self) -> None:
        """Test a scene with no window serializes to None."""
        scene = ClipScene()
        assert scene.to_dict() == {"segments": [], "window": None}
        assert ClipScene.from_dict(scene.to_dict()) == scene
