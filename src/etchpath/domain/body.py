"""Body type for stencil etching."""

from dataclasses import dataclass

from etchpath.domain.geometry import Path, Point


@dataclass(frozen=True)
class Body:
    """A maximal 8-connected group of black pixels.

    Attributes:
        points: Member pixels in flood-fill order; the first one is the
            topmost-then-leftmost pixel of the body
        outline: Boundary walk starting at the first point
    """

    points: tuple[Point, ...]
    outline: Path

    @property
    def seed(self) -> Point:
        """The pixel the body was discovered from."""
        return self.points[0]

    @property
    def size(self) -> int:
        """Number of pixels in the body."""
        return len(self.points)
