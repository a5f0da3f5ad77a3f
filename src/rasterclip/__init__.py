"""Rasterclip - Line rasterization and segment clipping engine.

Rasterclip converts continuous primitives (line segments, circles) into
pixel lists using six classic rasterization algorithms, and clips segments
against rectangular windows or convex polygons by midpoint subdivision.

Example:
    >>> from rasterclip import Point, Segment, rasterize
    >>> pixels = rasterize("bresenham_line", Segment(Point(0, 0), Point(5, 2)))
    >>> [(p.x, p.y) for p in pixels]
    [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2), (5, 2)]

The command line tool wraps the same functions:
    $ rasterclip clip lines.txt --polygon-sides 5
"""

from rasterclip.core.clipper import clip
from rasterclip.core.rasterizer import Algorithm, rasterize
from rasterclip.domain import Circle, Pixel, Point, Polygon, Rect, Segment

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = [
    "Algorithm",
    "Circle",
    "Pixel",
    "Point",
    "Polygon",
    "Rect",
    "Segment",
    "__author__",
    "__version__",
    "clip",
    "rasterize",
]
