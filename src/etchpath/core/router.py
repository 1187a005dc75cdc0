"""Route construction for raster and stencil modes.

Raster routing walks the lines top to bottom and etches each one from
whichever end is closer to where the head currently is (ties go to the
left end). This is a local heuristic and is kept that way: time estimates
and G-code are defined relative to this exact ordering.

Stencil routing etches each body outline in discovery order.
"""

import logging

from etchpath.config import EtchMode
from etchpath.core.bodies import BodyFinder
from etchpath.core.scanline import ScanlineSegmenter
from etchpath.domain import (
    ORIGIN,
    BinaryRaster,
    Body,
    Line,
    Move,
    MoveType,
    Point,
    Route,
    build_trace,
    distance,
)

logger = logging.getLogger(__name__)


class RasterRouter:
    """Routes scanline segments into travel and etch moves."""

    def __init__(self, segmenter: ScanlineSegmenter | None = None) -> None:
        self.segmenter = segmenter or ScanlineSegmenter()

    def route(self, raster: BinaryRaster) -> Route:
        """Segment and route a binarized image.

        Args:
            raster: Binarized image

        Returns:
            Route whose main sequence is alternating TRAVEL and ETCH moves
        """
        lines = self.segmenter.segment(raster)
        return self.route_lines(lines, raster.width, raster.height)

    def route_lines(self, lines: list[Line], width: int, height: int) -> Route:
        """Order pre-computed lines into moves.

        Args:
            lines: Lines in top-to-bottom order
            width: Image width in pixels
            height: Image height in pixels

        Returns:
            Raster route
        """
        moves: list[Move] = []
        last_point = ORIGIN

        for line in lines:
            line_start = Point(line.start, line.y)
            line_end = Point(line.end, line.y)

            if distance(last_point, line_start) <= distance(last_point, line_end):
                # Left to right
                for segment in line.segments:
                    etch_start = Point(segment.start, line.y)
                    etch_end = Point(segment.end, line.y)
                    moves.append(Move(MoveType.TRAVEL, last_point, etch_start))
                    moves.append(Move(MoveType.ETCH, etch_start, etch_end))
                    last_point = etch_end
            else:
                # Right to left
                for segment in reversed(line.segments):
                    etch_start = Point(segment.end, line.y)
                    etch_end = Point(segment.start, line.y)
                    moves.append(Move(MoveType.TRAVEL, last_point, etch_start))
                    moves.append(Move(MoveType.ETCH, etch_start, etch_end))
                    last_point = etch_end

        logger.debug("Routed %d lines into %d moves", len(lines), len(moves))
        return Route(
            mode=EtchMode.RASTER,
            width=width,
            height=height,
            trace=build_trace(width, height),
            sequence=tuple(moves),
        )


class StencilRouter:
    """Routes body outlines into etch paths."""

    def __init__(self, finder: BodyFinder | None = None) -> None:
        self.finder = finder or BodyFinder()

    def route(self, raster: BinaryRaster) -> Route:
        """Find bodies in a binarized image and route their outlines.

        Args:
            raster: Binarized image

        Returns:
            Route whose main sequence is one Path per body
        """
        bodies = self.finder.find_bodies(raster)
        return self.route_bodies(bodies, raster.width, raster.height)

    def route_bodies(self, bodies: list[Body], width: int, height: int) -> Route:
        """Turn bodies into a route without reordering them.

        Args:
            bodies: Bodies in discovery order
            width: Image width in pixels
            height: Image height in pixels

        Returns:
            Stencil route
        """
        return Route(
            mode=EtchMode.STENCIL,
            width=width,
            height=height,
            trace=build_trace(width, height),
            sequence=tuple(body.outline for body in bodies),
        )

