"""Scanline segmentation for raster mode."""

import numpy as np

from etchpath.domain import BinaryRaster, EtchSegment, Line
from etchpath.domain.raster import BLACK


def row_segments(row: np.ndarray) -> list[EtchSegment]:
    """Split one row of pixels into runs of black.

    Args:
        row: 1D array of 0/255 pixel values

    Returns:
        Segments in left-to-right order (empty if the row has no black)
    """
    black = (row == BLACK).astype(np.int8)
    # Pad with white on both sides so every run has a rising and falling edge
    edges = np.diff(np.concatenate(([0], black, [0])))
    starts = np.flatnonzero(edges == 1)
    ends = np.flatnonzero(edges == -1) - 1
    return [EtchSegment(int(s), int(e)) for s, e in zip(starts, ends)]


class ScanlineSegmenter:
    """Decomposes a binarized raster into etch lines."""

    def segment(self, raster: BinaryRaster) -> list[Line]:
        """Find the black runs on every row.

        Args:
            raster: Binarized image

        Returns:
            One Line per row that has black pixels, top to bottom
        """
        lines: list[Line] = []
        for y in range(raster.height):
            segments = row_segments(raster.row(y))
            if segments:
                lines.append(Line(y=y, segments=tuple(segments)))
        return lines
