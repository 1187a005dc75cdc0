"""Domain models for etchpath.

This module contains the value types the etching pipeline passes between
stages. All models are designed to be:

- Immutable (frozen dataclasses, read-only pixel buffers)
- Independent of Pillow and file formats

Key classes:
- Point: An integer pixel coordinate
- Path: An ordered point sequence with its length
- EtchSegment, Line: Scanline runs for raster mode
- Body: A connected group of black pixels with its outline
- Move, MoveType: A single head movement
- Route: The complete toolpath for one image
- BinaryRaster: A black and white image
"""

from etchpath.domain.body import Body
from etchpath.domain.geometry import ORIGIN, Path, Point, distance, path_length
from etchpath.domain.raster import BLACK, WHITE, BinaryRaster
from etchpath.domain.route import Move, MoveType, Route, RouteElement, build_trace
from etchpath.domain.scanline import EtchSegment, Line

__all__: list[str] = [
    # Constants
    "BLACK",
    "ORIGIN",
    "WHITE",
    # Enums
    "MoveType",
    # Core types
    "BinaryRaster",
    "Body",
    "EtchSegment",
    "Line",
    "Move",
    "Path",
    "Point",
    "Route",
    "RouteElement",
    # Functions
    "build_trace",
    "distance",
    "path_length",
]
