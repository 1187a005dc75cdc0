"""Head movements and routes.

A Route is the complete toolpath for one image: a low-power trace around
the image bounds followed by the main etch sequence. Raster routes carry
Moves in the main sequence; stencil routes carry one Path per body outline.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from etchpath.config.settings import EtchMode
from etchpath.domain.geometry import ORIGIN, Path, Point, distance


class MoveType(Enum):
    """What the laser does during a move.

    - TRACE: Boundary preview stroke (laser on low power)
    - TRAVEL: Repositioning with the laser off
    - ETCH: Etching stroke with the laser on full power
    """

    TRACE = auto()
    TRAVEL = auto()
    ETCH = auto()


@dataclass(frozen=True, slots=True)
class Move:
    """A single straight head movement.

    Attributes:
        kind: What the laser does during the move
        start: Where the move begins
        end: Where the move ends
        length: Distance in pixels, derived from start and end
    """

    kind: MoveType
    start: Point
    end: Point
    length: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", distance(self.start, self.end))


def build_trace(width: int, height: int) -> tuple[Move, ...]:
    """Build the pre-etch trace around the image bounds.

    The trace runs clockwise from the origin through the top-right,
    bottom-right and bottom-left corners and back.

    Args:
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        Four TRACE moves
    """
    right = max(width - 1, 0)
    bottom = max(height - 1, 0)
    top_right = Point(right, 0)
    bottom_right = Point(right, bottom)
    bottom_left = Point(0, bottom)
    return (
        Move(MoveType.TRACE, ORIGIN, top_right),
        Move(MoveType.TRACE, top_right, bottom_right),
        Move(MoveType.TRACE, bottom_right, bottom_left),
        Move(MoveType.TRACE, bottom_left, ORIGIN),
    )


RouteElement = Move | Path


@dataclass(frozen=True)
class Route:
    """Immutable result of routing one binarized image.

    Attributes:
        mode: Etch mode the route was built for
        width: Image width in pixels
        height: Image height in pixels
        trace: Pre-etch trace moves around the image bounds
        sequence: Main etch sequence (Moves for raster, Paths for stencil)
    """

    mode: EtchMode
    width: int
    height: int
    trace: tuple[Move, ...]
    sequence: tuple[RouteElement, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "trace", tuple(self.trace))
        object.__setattr__(self, "sequence", tuple(self.sequence))

    def is_empty(self) -> bool:
        """Check if there is nothing to etch."""
        return len(self.sequence) == 0

    def etch_length(self) -> float:
        """Total laser-on length of the main sequence, in pixels."""
        total = 0.0
        for element in self.sequence:
            match element:
                case Move(kind=MoveType.ETCH):
                    total += element.length
                case Path():
                    total += element.length
        return total
