"""Core processing algorithms for etchpath.

This module contains the core algorithms for:

- Luminance thresholding (image to black and white raster)
- Body detection and outline tracing (stencil mode)
- Scanline segmentation (raster mode)
- Route construction for both modes
- Run time and distance estimation
- G-code serialization

All services are designed to be:
- Synchronous and single-threaded
- Free of shared state between calls (each route is built from scratch)

The pipeline orchestrator lives in :mod:`etchpath.core.processor`; it is not
re-exported here because it depends on the I/O layer.

Key classes:
- Binarizer: Thresholds decoded images
- BodyFinder: Finds 8-connected bodies of black pixels
- OutlineTracer: Walks body boundaries
- ScanlineSegmenter: Splits rows into black runs
- RasterRouter / StencilRouter: Order geometry into routes
- Estimator: Estimates run time and distance
- GcodeSerializer: Writes routes as G-code
"""

from etchpath.core.binarizer import Binarizer, perceptual_luminance
from etchpath.core.bodies import BodyFinder
from etchpath.core.estimator import ElementCost, Estimate, Estimator
from etchpath.core.gcode import GcodeSerializer, format_number
from etchpath.core.outline import OutlineTracer, clockwise_neighbors
from etchpath.core.router import RasterRouter, StencilRouter
from etchpath.core.scanline import ScanlineSegmenter, row_segments

__all__ = [
    # Binarization
    "Binarizer",
    # Stencil geometry
    "BodyFinder",
    # Estimation
    "ElementCost",
    "Estimate",
    "Estimator",
    # Serialization
    "GcodeSerializer",
    "OutlineTracer",
    # Routing
    "RasterRouter",
    # Raster geometry
    "ScanlineSegmenter",
    "StencilRouter",
    "clockwise_neighbors",
    "format_number",
    "perceptual_luminance",
    "row_segments",
]
