"""Program writer for saving G-code files.

This module provides the ProgramWriter class, which streams a serialized
route into a file with the ``.gcode`` naming convention.
"""

from datetime import datetime
from pathlib import Path

from etchpath.config import EtchSettings
from etchpath.core.gcode import GcodeSerializer
from etchpath.domain import Route
from etchpath.exceptions import ProgramWriteError


class ProgramWriter:
    """Writes G-code programs to disk.

    A failed write leaves whatever was already written in place; callers
    must treat that file as corrupt.

    Example:
        writer = ProgramWriter(settings, Path("logo.gcode"))
        writer.write(route, source_name="logo.png")
    """

    def __init__(self, settings: EtchSettings, output_path: Path) -> None:
        """Initialize the program writer.

        Args:
            settings: Settings used to serialize the route
            output_path: Path where the program will be saved
        """
        self._serializer = GcodeSerializer(settings)
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write(
        self,
        route: Route,
        source_name: str,
        timestamp: datetime | None = None,
    ) -> None:
        """Serialize a route into the output file.

        Args:
            route: Route to write
            source_name: Source image name recorded in the header
            timestamp: Export time for the header (default: now)

        Raises:
            ProgramWriteError: If the file cannot be opened or written
        """
        try:
            with self._output_path.open("w", encoding="utf-8", newline="\n") as sink:
                self._serializer.serialize(route, sink, source_name, timestamp)
        except OSError as e:
            raise ProgramWriteError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_gcode_path(image_path: Path) -> Path:
        """Generate the default output path for an image.

        Converts: logo.png -> logo.gcode
                  photos/cat.jpg -> photos/cat.gcode

        Args:
            image_path: Source image path

        Returns:
            Path beside the image with a .gcode extension
        """
        return image_path.with_suffix(".gcode")


def export_program(
    route: Route,
    settings: EtchSettings,
    output_path: Path,
    source_name: str,
) -> Path:
    """Write a route to ``output_path`` and return the path."""
    ProgramWriter(settings, output_path).write(route, source_name)
    return output_path
