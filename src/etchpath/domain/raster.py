"""Black and white raster with bounds-checked pixel access."""

import numpy as np

from etchpath.domain.geometry import Point
from etchpath.exceptions import RasterError

BLACK = 0
WHITE = 255


class BinaryRaster:
    """A binarized image.

    Pixels are stored row-major in an owned ``uint8`` array of shape
    ``(height, width)`` holding only ``BLACK`` (0) or ``WHITE`` (255).
    The buffer is read-only once constructed.

    Example:
        raster = BinaryRaster(np.array([[0, 255]], dtype=np.uint8))
        raster.is_black(Point(0, 0))  # True
    """

    def __init__(self, pixels: np.ndarray) -> None:
        """Initialize the raster.

        Args:
            pixels: 2D array of 0/255 values, indexed ``[y, x]``

        Raises:
            RasterError: If the array is not 2D or holds other values
        """
        if pixels.ndim != 2:
            raise RasterError(f"Raster must be 2D, got {pixels.ndim} dimensions")
        if not np.isin(pixels, (BLACK, WHITE)).all():
            raise RasterError("Raster pixels must be 0 (black) or 255 (white)")
        data = np.array(pixels, dtype=np.uint8, copy=True)
        data.setflags(write=False)
        self._pixels = data

    @classmethod
    def from_mask(cls, black: np.ndarray) -> "BinaryRaster":
        """Build a raster from a boolean mask where True means black."""
        return cls(np.where(black, BLACK, WHITE).astype(np.uint8))

    @property
    def width(self) -> int:
        """Width in pixels."""
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        """Height in pixels."""
        return int(self._pixels.shape[0])

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the pixel buffer."""
        return self._pixels

    def contains(self, point: Point) -> bool:
        """Check if a point lies inside the raster."""
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def value(self, point: Point) -> int:
        """Get the 0/255 value of a pixel.

        Raises:
            IndexError: If the point is outside the raster
        """
        if not self.contains(point):
            raise IndexError(
                f"Pixel ({point.x}, {point.y}) outside {self.width}x{self.height} raster"
            )
        return int(self._pixels[point.y, point.x])

    def is_black(self, point: Point) -> bool:
        """Check if a pixel is black."""
        return self.value(point) == BLACK

    def is_white(self, point: Point) -> bool:
        """Check if a pixel is white."""
        return self.value(point) == WHITE

    def is_edge(self, point: Point) -> bool:
        """Check if a pixel lies in the first/last row or column."""
        return (
            point.x == 0
            or point.y == 0
            or point.x == self.width - 1
            or point.y == self.height - 1
        )

    def row(self, y: int) -> np.ndarray:
        """Read-only view of one row."""
        return self._pixels[y]

    def black_mask(self) -> np.ndarray:
        """Boolean array, True where pixels are black."""
        return self._pixels == BLACK

    def black_count(self) -> int:
        """Number of black pixels."""
        return int(np.count_nonzero(self._pixels == BLACK))

    def to_bytes(self) -> bytes:
        """Raw row-major pixel bytes."""
        return self._pixels.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryRaster):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    def __repr__(self) -> str:
        return f"BinaryRaster({self.width}x{self.height})"
