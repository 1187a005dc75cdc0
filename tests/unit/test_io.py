"""Tests for image reading and G-code writing."""

from datetime import datetime
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from etchpath.config import EtchSettings, PreviewConfig
from etchpath.core.router import RasterRouter
from etchpath.domain import BinaryRaster
from etchpath.exceptions import ExportError, ImageLoadError, ProgramWriteError
from etchpath.io import ImageReader, ProgramWriter, export_program


@pytest.fixture
def checker_png(tmp_path: Path) -> Path:
    """Create a 4x3 RGB PNG with a black top-left pixel."""
    pixels = np.full((3, 4, 3), 255, dtype=np.uint8)
    pixels[0, 0] = (0, 0, 0)
    path = tmp_path / "checker.png"
    Image.fromarray(pixels).save(path)
    return path


@pytest.fixture
def square_route():
    """Route for an all-black 2x2 image."""
    return RasterRouter().route(BinaryRaster(np.zeros((2, 2), dtype=np.uint8)))


class TestImageReader:
    """Tests for ImageReader class."""

    def test_load_png(self, checker_png: Path) -> None:
        """PNG files decode to RGBA samples."""
        reader = ImageReader(checker_png)
        reader.load()

        assert reader.width == 4
        assert reader.height == 3
        assert reader.format == "PNG"
        assert reader.rgba.shape == (3, 4, 4)
        assert reader.rgba.dtype == np.uint8
        assert tuple(reader.rgba[0, 0]) == (0, 0, 0, 255)
        assert tuple(reader.rgba[2, 3]) == (255, 255, 255, 255)

    def test_load_grayscale_bmp(self, tmp_path: Path) -> None:
        """Other formats and color modes are converted to RGBA."""
        path = tmp_path / "gray.bmp"
        Image.new("L", (5, 2), color=128).save(path)

        with ImageReader(path) as reader:
            assert reader.format == "BMP"
            assert reader.rgba.shape == (2, 5, 4)
            assert tuple(reader.rgba[1, 4]) == (128, 128, 128, 255)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise ImageLoadError."""
        reader = ImageReader(tmp_path / "nope.png")
        with pytest.raises(ImageLoadError, match="file not found"):
            reader.load()

    def test_not_an_image(self, tmp_path: Path) -> None:
        """Files that are not images raise ImageLoadError."""
        path = tmp_path / "notes.png"
        path.write_text("definitely not a png")
        with pytest.raises(ImageLoadError) as exc_info:
            ImageReader(path).load()
        assert exc_info.value.path == str(path)

    def test_access_before_load(self, checker_png: Path) -> None:
        """Properties require a loaded image."""
        reader = ImageReader(checker_png)
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.rgba
        with pytest.raises(RuntimeError):
            _ = reader.width

    def test_close_frees_samples(self, checker_png: Path) -> None:
        """Closing drops the decoded samples."""
        with ImageReader(checker_png) as reader:
            pass
        with pytest.raises(RuntimeError):
            _ = reader.rgba


class TestProgramWriter:
    """Tests for ProgramWriter class."""

    def test_write_program(self, tmp_path: Path, square_route) -> None:
        """The serialized program is written to the output path."""
        output = tmp_path / "square.gcode"
        writer = ProgramWriter(EtchSettings(), output)
        writer.write(square_route, "square.png", timestamp=datetime(2024, 5, 6, 7, 8, 9))

        text = output.read_text(encoding="utf-8")
        assert "; Exported on 2024-05-06 07:08:09" in text
        assert "; Generated from [square.png]" in text
        assert text.endswith("M84 ; Disable motors\n")
        assert "\r" not in text

    def test_write_failure(self, tmp_path: Path, square_route) -> None:
        """Unwritable paths raise ProgramWriteError."""
        output = tmp_path / "missing-dir" / "square.gcode"
        writer = ProgramWriter(EtchSettings(), output)
        with pytest.raises(ProgramWriteError) as exc_info:
            writer.write(square_route, "square.png")
        assert exc_info.value.path == str(output)
        assert isinstance(exc_info.value, ExportError)

    def test_get_gcode_path(self) -> None:
        """The default output sits beside the image."""
        assert ProgramWriter.get_gcode_path(Path("logo.png")) == Path("logo.gcode")
        assert ProgramWriter.get_gcode_path(Path("photos/cat.jpg")) == Path("photos/cat.gcode")

    def test_export_program(self, tmp_path: Path, square_route) -> None:
        """export_program writes and returns the output path."""
        settings = EtchSettings(preview=PreviewConfig(enabled=False))
        output = export_program(square_route, settings, tmp_path / "out.gcode", "square.png")
        assert output.exists()
        assert "Perform the pre-etch trace preview" not in output.read_text(encoding="utf-8")
