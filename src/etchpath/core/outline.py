"""Boundary tracing for stencil bodies.

The tracer walks the edge of a body starting from its seed pixel. At each
step it scans the current pixel's 8 neighbors clockwise (starting directly
above) and moves to the first unvisited black neighbor that touches white
or sits on the raster edge. Each candidate's own neighbors are scanned
starting from the current pixel, which keeps the walk hugging the outside
of thin bodies instead of cutting through them.

The walk stops when no neighbor qualifies. It is not guaranteed to return
to the seed; spurs and other complex shapes can leave it open.
"""

import logging

from etchpath.domain import BinaryRaster, Path, Point

logger = logging.getLogger(__name__)

# (dx, dy) offsets clockwise from the pixel directly above
CLOCKWISE_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, -1),
    (1, -1),
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
)


def clockwise_neighbors(
    point: Point,
    width: int,
    height: int,
    start_from: Point | None = None,
) -> list[Point]:
    """List the in-bounds 8-neighbors of a pixel in clockwise order.

    Args:
        point: Pixel whose neighbors to list
        width: Raster width
        height: Raster height
        start_from: Neighbor to rotate to the front of the list; ignored if
            it is not one of the neighbors

    Returns:
        Neighbors clockwise, beginning directly above (or at ``start_from``)
    """
    neighbors = [
        Point(point.x + dx, point.y + dy)
        for dx, dy in CLOCKWISE_OFFSETS
        if 0 <= point.x + dx < width and 0 <= point.y + dy < height
    ]

    if start_from is not None and start_from in neighbors:
        i = neighbors.index(start_from)
        neighbors = neighbors[i:] + neighbors[:i]

    return neighbors


class OutlineTracer:
    """Traces the outline of a body in a binarized raster.

    The tracer is stateless; each call to :meth:`trace` keeps its own
    visited set.
    """

    def trace(self, raster: BinaryRaster, start: Point) -> Path:
        """Walk the boundary of the body containing ``start``.

        Args:
            raster: Binarized image
            start: A black pixel of the body, normally its seed

        Returns:
            Path with the boundary points in walk order, beginning at ``start``
        """
        width, height = raster.width, raster.height
        outline: list[Point] = []
        visited: set[Point] = set()

        current = start
        current_neighbors = clockwise_neighbors(current, width, height)

        while True:
            outline.append(current)
            visited.add(current)

            step = self._next_step(raster, current, current_neighbors, visited)
            if step is None:
                break
            current, current_neighbors = step

        logger.debug(
            "Traced outline from (%d, %d): %d points, closed=%s",
            start.x,
            start.y,
            len(outline),
            len(outline) > 2 and outline[-1] in clockwise_neighbors(start, width, height),
        )
        return Path(outline)

    def _next_step(
        self,
        raster: BinaryRaster,
        current: Point,
        current_neighbors: list[Point],
        visited: set[Point],
    ) -> tuple[Point, list[Point]] | None:
        """Find the next outline pixel after ``current``.

        Returns:
            The next pixel with its neighbors (rotated to start at
            ``current``), or None if the walk is over
        """
        for candidate in current_neighbors:
            if candidate in visited or raster.is_white(candidate):
                continue

            candidate_neighbors = clockwise_neighbors(
                candidate, raster.width, raster.height, start_from=current
            )
            touches_white = any(raster.is_white(n) for n in candidate_neighbors)
            if touches_white or raster.is_edge(candidate):
                return candidate, candidate_neighbors

        return None
