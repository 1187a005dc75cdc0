"""Scanline types for raster etching.

A Line is one image row holding the contiguous black runs (EtchSegments)
found on it. Rows without black pixels are never represented.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EtchSegment:
    """A contiguous run of black pixels on one scanline.

    Attributes:
        start: X of the first black pixel (inclusive)
        end: X of the last black pixel (inclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Segment start {self.start} is past its end {self.end}")

    @property
    def pixel_count(self) -> int:
        """Number of pixels covered by the segment."""
        return self.end - self.start + 1


@dataclass(frozen=True)
class Line:
    """One scanline with its etch segments.

    Attributes:
        y: Row index
        segments: Segments in increasing, non-overlapping X order
    """

    y: int
    segments: tuple[EtchSegment, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))
        if not self.segments:
            raise ValueError(f"Line {self.y} has no segments")
        for left, right in zip(self.segments, self.segments[1:]):
            if left.end >= right.start:
                raise ValueError(
                    f"Line {self.y} segments overlap or are out of order: "
                    f"[{left.start}, {left.end}] then [{right.start}, {right.end}]"
                )

    @property
    def start(self) -> int:
        """X of the first black pixel on the line."""
        return self.segments[0].start

    @property
    def end(self) -> int:
        """X of the last black pixel on the line."""
        return self.segments[-1].end
