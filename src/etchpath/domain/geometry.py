"""Pixel-space geometric types.

This module defines the basic geometry used throughout etchpath:
- Point: An integer pixel coordinate
- Path: An ordered run of points with a precomputed length
- distance: The machine distance between two pixels
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Point:
    """A pixel coordinate.

    Immutable and hashable for use in sets/dicts. The origin is the
    top-left pixel of the image, with +Y pointing down.

    Attributes:
        x: Column index in pixels
        y: Row index in pixels
    """

    x: int
    y: int


ORIGIN = Point(0, 0)


def distance(a: Point, b: Point) -> float:
    """Distance between two pixels, in pixels.

    Axis-aligned pairs measure the plain difference along the moving axis;
    anything else is Euclidean.

    Args:
        a: First point
        b: Second point

    Returns:
        Non-negative distance, zero only when the points are equal
    """
    dx = a.x - b.x
    dy = a.y - b.y
    if dx == 0:
        return float(abs(dy))
    if dy == 0:
        return float(abs(dx))
    return math.sqrt(dx * dx + dy * dy)


def path_length(points: Sequence[Point]) -> float:
    """Sum of the distances between consecutive points."""
    return sum(distance(points[i], points[i + 1]) for i in range(len(points) - 1))


@dataclass(frozen=True)
class Path:
    """An ordered sequence of points followed by the head.

    Attributes:
        points: Points in travel order
        length: Cumulative length in pixels, computed on construction
    """

    points: tuple[Point, ...]
    length: float = field(init=False)

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable copy
        object.__setattr__(self, "points", tuple(self.points))
        object.__setattr__(self, "length", path_length(self.points))

    @property
    def start(self) -> Point:
        """First point of the path.

        Raises:
            IndexError: If the path is empty
        """
        return self.points[0]

    @property
    def end(self) -> Point:
        """Last point of the path.

        Raises:
            IndexError: If the path is empty
        """
        return self.points[-1]

    def is_empty(self) -> bool:
        """Check if the path has no points."""
        return len(self.points) == 0

    def __len__(self) -> int:
        return len(self.points)
