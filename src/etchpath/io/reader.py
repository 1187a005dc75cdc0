"""Image reader for loading source images.

This module provides the ImageReader class for decoding image files into
the RGBA sample arrays the binarizer works from.
"""

from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from etchpath.exceptions import ImageLoadError


class ImageReader:
    """Loads raster images and exposes their RGBA samples.

    Example:
        reader = ImageReader(Path("logo.png"))
        reader.load()
        rgba = reader.rgba
    """

    def __init__(self, image_path: Path) -> None:
        """Initialize the image reader.

        Args:
            image_path: Path to a PNG, BMP, JPEG or other Pillow-readable image
        """
        self._image_path = image_path
        self._rgba: np.ndarray | None = None
        self._format: str | None = None

    @property
    def path(self) -> Path:
        """Path of the image file."""
        return self._image_path

    def load(self) -> None:
        """Decode the image file.

        Raises:
            ImageLoadError: If the file is missing, unreadable or not an image
        """
        if not self._image_path.exists():
            raise ImageLoadError(str(self._image_path), "file not found")

        try:
            with Image.open(self._image_path) as image:
                self._format = image.format or "unknown"
                rgba = image.convert("RGBA")
                self._rgba = np.asarray(rgba, dtype=np.uint8).copy()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageLoadError(str(self._image_path), str(e)) from e

    def _require_loaded(self) -> np.ndarray:
        if self._rgba is None:
            raise RuntimeError("Image not loaded. Call load() first.")
        return self._rgba

    @property
    def rgba(self) -> np.ndarray:
        """Decoded ``uint8`` samples of shape ``(height, width, 4)``.

        Raises:
            RuntimeError: If the image has not been loaded yet
        """
        return self._require_loaded()

    @property
    def width(self) -> int:
        """Image width in pixels.

        Raises:
            RuntimeError: If the image has not been loaded yet
        """
        return int(self._require_loaded().shape[1])

    @property
    def height(self) -> int:
        """Image height in pixels.

        Raises:
            RuntimeError: If the image has not been loaded yet
        """
        return int(self._require_loaded().shape[0])

    @property
    def format(self) -> str:
        """Decoder format name (e.g. 'PNG', 'BMP', 'JPEG').

        Raises:
            RuntimeError: If the image has not been loaded yet
        """
        self._require_loaded()
        return self._format or "unknown"

    def close(self) -> None:
        """Free the decoded samples."""
        self._rgba = None
        self._format = None

    def __enter__(self) -> "ImageReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
