"""Luminance thresholding.

Perceptual luminance is computed once from the decoded RGBA samples:
the linear Rec. 709 luminance of the normalized channels is passed through
the sRGB transfer curve. A pixel is white when its perceptual luminance is
at or above the white threshold, black otherwise. Alpha is ignored.
"""

import numpy as np

from etchpath.domain.raster import BLACK, WHITE, BinaryRaster
from etchpath.exceptions import RasterError, ThresholdError

LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)
SRGB_LINEAR_CUTOFF = 0.0031308


def perceptual_luminance(rgba: np.ndarray) -> np.ndarray:
    """Compute sRGB-encoded luminance for every pixel.

    Args:
        rgba: ``uint8`` array of shape ``(height, width, 4)`` (or 3 channels)

    Returns:
        ``float64`` array of shape ``(height, width)`` with values in [0, 1]

    Raises:
        RasterError: If the array does not hold RGB(A) samples
    """
    if rgba.ndim != 3 or rgba.shape[2] not in (3, 4):
        raise RasterError(f"Expected an RGBA pixel array, got shape {rgba.shape}")

    rgb = rgba[..., :3].astype(np.float64) / 255.0
    r_weight, g_weight, b_weight = LUMA_WEIGHTS
    linear = r_weight * rgb[..., 0] + g_weight * rgb[..., 1] + b_weight * rgb[..., 2]

    return np.where(
        linear <= SRGB_LINEAR_CUTOFF,
        12.92 * linear,
        1.055 * np.power(linear, 1 / 2.4) - 0.055,
    )


class Binarizer:
    """Thresholds one decoded image into black and white.

    The luminance of the source image is computed on construction and kept,
    so every call to :meth:`binarize` works from the original values and
    never from a previous result.

    Example:
        binarizer = Binarizer(rgba)
        raster = binarizer.binarize(0.5)
        darker = binarizer.binarize(0.3)
    """

    def __init__(self, rgba: np.ndarray) -> None:
        """Initialize the binarizer.

        Args:
            rgba: Decoded ``uint8`` pixels of shape ``(height, width, 4)``
        """
        luminance = perceptual_luminance(rgba)
        luminance.setflags(write=False)
        self._luminance = luminance

    @property
    def width(self) -> int:
        return int(self._luminance.shape[1])

    @property
    def height(self) -> int:
        return int(self._luminance.shape[0])

    @property
    def luminance(self) -> np.ndarray:
        """Read-only perceptual luminance, indexed ``[y, x]``."""
        return self._luminance

    def binarize(self, white_threshold: float) -> BinaryRaster:
        """Produce a black and white raster.

        Args:
            white_threshold: Luminance in [0, 1] at or above which a pixel is white

        Returns:
            New raster with the same dimensions as the source image

        Raises:
            ThresholdError: If the threshold is outside [0, 1]
        """
        if not 0.0 <= white_threshold <= 1.0:
            raise ThresholdError(white_threshold)

        pixels = np.where(self._luminance >= white_threshold, WHITE, BLACK)
        return BinaryRaster(pixels.astype(np.uint8))
