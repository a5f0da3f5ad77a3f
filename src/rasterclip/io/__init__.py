"""Geometry file I/O layer for rasterclip.

This module handles reading and writing the plain-text geometry format:
a segment count, one "x1 y1 x2 y2" line per segment, then one line with two
opposite corners of the clip window. Lines starting with "*" are comments.

Key classes:
- GeometryReader: Load geometry files into a ClipScene
- GeometryWriter: Save segments and a window

Key functions:
- parse_geometry: Parse geometry text
- format_geometry: Render geometry text
"""

from rasterclip.io.reader import GeometryReader, parse_geometry
from rasterclip.io.writer import GeometryWriter, format_geometry

__all__ = [
    "GeometryReader",
    "GeometryWriter",
    "format_geometry",
    "parse_geometry",
]
