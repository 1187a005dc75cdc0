"""Etchpath - Turn raster images into laser-etching G-code.

Etchpath binarizes an image with a luminance threshold, decomposes the black
pixels into etchable geometry (scanline segments for raster mode, traced body
outlines for stencil mode), orders that geometry into a single head-movement
route and serializes the route as a machine-control program.

Example:
    $ etchpath logo.png --mode stencil

This will create logo.gcode next to the source image.
"""

__version__ = "0.1.0"
__author__ = "Etchpath Contributors"

__all__ = ["__author__", "__version__"]
