"""File I/O layer for etchpath.

This module handles reading source images with Pillow and writing G-code
programs. It keeps file formats out of the domain and core layers.

Key responsibilities:
- Decode images into RGBA sample arrays
- Report decode failures as ImageLoadError
- Write serialized routes to .gcode files
- Report write failures as ProgramWriteError

Key classes:
- ImageReader: Load images
- ProgramWriter: Save G-code programs
"""

from etchpath.io.reader import ImageReader
from etchpath.io.writer import ProgramWriter, export_program

__all__ = [
    "ImageReader",
    "ProgramWriter",
    "export_program",
]
