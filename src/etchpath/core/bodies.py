"""Connected-component detection for stencil mode.

Bodies are discovered by scanning the raster row by row and flood filling
(breadth-first, 8-connected) from every black pixel not yet claimed by an
earlier body. Discovery order is therefore the row-major order of each
body's topmost-then-leftmost pixel.
"""

import logging
from collections import deque

import numpy as np

from etchpath.core.outline import OutlineTracer, clockwise_neighbors
from etchpath.domain import BinaryRaster, Body, Point

logger = logging.getLogger(__name__)


class BodyFinder:
    """Finds bodies in a binarized raster and traces their outlines.

    Example:
        finder = BodyFinder()
        for body in finder.find_bodies(raster):
            print(body.size, len(body.outline))
    """

    def __init__(self, tracer: OutlineTracer | None = None) -> None:
        """Initialize the body finder.

        Args:
            tracer: Outline tracer to use (default: a new OutlineTracer)
        """
        self.tracer = tracer or OutlineTracer()

    def find_bodies(self, raster: BinaryRaster) -> list[Body]:
        """Find all bodies in raster scan order.

        Args:
            raster: Binarized image

        Returns:
            Bodies ordered by the row-major position of their seed pixel
        """
        visited = np.zeros((raster.height, raster.width), dtype=bool)
        bodies: list[Body] = []

        # Row-major flat indices of every black pixel
        for index in np.flatnonzero(raster.black_mask()):
            y, x = divmod(int(index), raster.width)
            if visited[y, x]:
                continue
            visited[y, x] = True

            points = self._flood_fill(raster, Point(x, y), visited)
            outline = self.tracer.trace(raster, points[0])
            bodies.append(Body(points=tuple(points), outline=outline))

        logger.debug("Found %d bodies in %r", len(bodies), raster)
        return bodies

    def _flood_fill(
        self,
        raster: BinaryRaster,
        seed: Point,
        visited: np.ndarray,
    ) -> list[Point]:
        """Collect every black pixel 8-connected to ``seed``.

        Pixels are marked in ``visited`` as they are enqueued, so each one is
        collected once. The seed must already be marked.

        Args:
            raster: Binarized image
            seed: Black pixel to start from
            visited: Mutable ``(height, width)`` bool grid shared across fills

        Returns:
            Body pixels in breadth-first order, starting with the seed
        """
        points: list[Point] = []
        queue: deque[Point] = deque([seed])

        while queue:
            point = queue.popleft()
            points.append(point)

            for neighbor in clockwise_neighbors(point, raster.width, raster.height):
                if visited[neighbor.y, neighbor.x]:
                    continue
                if raster.is_black(neighbor):
                    visited[neighbor.y, neighbor.x] = True
                    queue.append(neighbor)

        return points
