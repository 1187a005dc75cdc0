"""Unit tests for luminance thresholding."""

import numpy as np
import pytest

from etchpath.core.binarizer import Binarizer, perceptual_luminance
from etchpath.domain import Point
from etchpath.exceptions import RasterError, ThresholdError


def solid(rgba: tuple[int, int, int, int], width: int = 2, height: int = 2) -> np.ndarray:
    """Create a single-color RGBA image."""
    return np.full((height, width, 4), rgba, dtype=np.uint8)


class TestPerceptualLuminance:
    """Tests for the luminance computation."""

    def test_black_is_zero(self) -> None:
        """Black has zero luminance."""
        lum = perceptual_luminance(solid((0, 0, 0, 255)))
        assert np.all(lum == 0.0)

    def test_white_is_one(self) -> None:
        """White has luminance (very nearly) one."""
        lum = perceptual_luminance(solid((255, 255, 255, 255)))
        assert lum[0, 0] == pytest.approx(1.0)

    def test_mid_gray(self) -> None:
        """Gray 128 maps back to about 0.737 on the sRGB curve."""
        lum = perceptual_luminance(solid((128, 128, 128, 255)))
        assert lum[0, 0] == pytest.approx(0.7367, abs=1e-3)

    def test_pure_red(self) -> None:
        """Red carries the Rec. 709 red weight before gamma."""
        lum = perceptual_luminance(solid((255, 0, 0, 255)))
        assert lum[0, 0] == pytest.approx(0.4984, abs=1e-3)

    def test_linear_segment_near_black(self) -> None:
        """Very dark values use the linear part of the curve."""
        lum = perceptual_luminance(solid((1, 0, 0, 255)))
        assert lum[0, 0] == pytest.approx(12.92 * 0.2126 / 255.0)

    def test_alpha_ignored(self) -> None:
        """Transparent pixels are measured by their color only."""
        opaque = perceptual_luminance(solid((40, 90, 200, 255)))
        transparent = perceptual_luminance(solid((40, 90, 200, 0)))
        assert np.array_equal(opaque, transparent)

    def test_rgb_input_accepted(self) -> None:
        """Three-channel input works the same as RGBA."""
        rgb = np.full((1, 1, 3), 128, dtype=np.uint8)
        assert perceptual_luminance(rgb)[0, 0] == pytest.approx(0.7367, abs=1e-3)

    def test_rejects_grayscale_array(self) -> None:
        """Arrays without color channels are rejected."""
        with pytest.raises(RasterError):
            perceptual_luminance(np.zeros((2, 2), dtype=np.uint8))


class TestBinarizer:
    """Tests for Binarizer class."""

    def test_dimensions_preserved(self) -> None:
        """The raster has the source dimensions."""
        binarizer = Binarizer(solid((0, 0, 0, 255), width=5, height=3))
        raster = binarizer.binarize(0.5)
        assert (raster.width, raster.height) == (5, 3)
        assert (binarizer.width, binarizer.height) == (5, 3)

    def test_threshold_is_inclusive_for_white(self) -> None:
        """Luminance equal to the threshold is white."""
        binarizer = Binarizer(solid((128, 128, 128, 255), width=1, height=1))
        threshold = float(binarizer.luminance[0, 0])
        assert binarizer.binarize(threshold).is_white(Point(0, 0))

    def test_gray_flips_with_threshold(self) -> None:
        """Mid gray is white at 0.5 and black at 0.8."""
        binarizer = Binarizer(solid((128, 128, 128, 255), width=1, height=1))
        assert binarizer.binarize(0.5).is_white(Point(0, 0))
        assert binarizer.binarize(0.8).is_black(Point(0, 0))

    def test_transparent_black_stays_black(self) -> None:
        """Alpha does not whiten transparent pixels."""
        binarizer = Binarizer(solid((0, 0, 0, 0), width=1, height=1))
        assert binarizer.binarize(0.5).is_black(Point(0, 0))

    def test_threshold_zero_is_all_white(self) -> None:
        """Every luminance is at or above zero."""
        binarizer = Binarizer(solid((0, 0, 0, 255)))
        assert binarizer.binarize(0.0).black_count() == 0

    def test_black_count_monotonic_in_threshold(self) -> None:
        """Raising the threshold never removes black pixels."""
        rng = np.random.default_rng(1234)
        rgba = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
        binarizer = Binarizer(rgba)

        previous = -1
        for threshold in np.linspace(0.0, 1.0, 21):
            raster = binarizer.binarize(float(threshold))
            assert raster.black_count() >= previous
            previous = raster.black_count()

    def test_black_set_grows_with_threshold(self) -> None:
        """A pixel black at t1 is black at every t2 >= t1."""
        rng = np.random.default_rng(99)
        rgba = rng.integers(0, 256, size=(8, 8, 4), dtype=np.uint8)
        binarizer = Binarizer(rgba)

        low = binarizer.binarize(0.3).black_mask()
        high = binarizer.binarize(0.7).black_mask()
        assert np.all(high[low])

    def test_rebinarize_uses_source_luminance(self) -> None:
        """Binarizing again at the same threshold gives identical bytes."""
        rng = np.random.default_rng(7)
        rgba = rng.integers(0, 256, size=(10, 12, 4), dtype=np.uint8)
        binarizer = Binarizer(rgba)

        first = binarizer.binarize(0.4)
        binarizer.binarize(0.9)
        binarizer.binarize(0.1)
        again = binarizer.binarize(0.4)

        assert first.to_bytes() == again.to_bytes()
        assert first == again

    @pytest.mark.parametrize("threshold", [-0.01, 1.01, 5.0])
    def test_threshold_out_of_range(self, threshold: float) -> None:
        """Thresholds outside [0, 1] are rejected."""
        binarizer = Binarizer(solid((0, 0, 0, 255)))
        with pytest.raises(ThresholdError):
            binarizer.binarize(threshold)

    def test_threshold_error_is_raster_error(self) -> None:
        """ThresholdError can be caught as RasterError."""
        binarizer = Binarizer(solid((0, 0, 0, 255)))
        with pytest.raises(RasterError):
            binarizer.binarize(2.0)

    def test_luminance_read_only(self) -> None:
        """The stored luminance cannot be modified."""
        binarizer = Binarizer(solid((10, 20, 30, 255)))
        with pytest.raises(ValueError):
            binarizer.luminance[0, 0] = 1.0
