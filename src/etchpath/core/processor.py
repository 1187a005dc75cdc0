"""Pipeline orchestration for turning an image into G-code.

This module coordinates the full workflow: decode the image, binarize it,
route it for the configured etch mode, estimate the run time and export
the program.

Key components:
- EtchJob: The result of routing one binarized image
- EtchProcessor: Main orchestrator class
"""

import time
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from etchpath.config import EtchMode, EtchSettings
from etchpath.core.binarizer import Binarizer
from etchpath.core.bodies import BodyFinder
from etchpath.core.estimator import Estimate, Estimator
from etchpath.core.router import RasterRouter, StencilRouter
from etchpath.core.scanline import ScanlineSegmenter
from etchpath.domain import BinaryRaster, Route
from etchpath.exceptions import ProcessingCancelledError
from etchpath.io.reader import ImageReader
from etchpath.io.writer import ProgramWriter
from etchpath.utils import ProcessingLogger, ProcessingStats, configure_logging


@dataclass(frozen=True)
class EtchJob:
    """A routed image ready for export.

    Attributes:
        threshold: White threshold the raster was produced with
        raster: Binarized image
        route: Toolpath for the raster
        estimate: Run time and distance for the configured passes and preview
        feature_count: Lines (raster mode) or bodies (stencil mode) found
    """

    threshold: float
    raster: BinaryRaster
    route: Route
    estimate: Estimate
    feature_count: int


class EtchProcessor:
    """Orchestrates image to G-code processing.

    Manages the complete workflow:
    1. Load and decode the image
    2. Binarize it at the configured threshold
    3. Route it (scanlines or body outlines)
    4. Estimate run time and distance
    5. Write the G-code program

    Changing the threshold only requires calling :meth:`route` again on the
    same Binarizer; every call produces a new job.

    Example:
        settings = EtchSettings()
        processor = EtchProcessor(settings)
        stats = processor.process(image_path=Path("logo.png"))
    """

    def __init__(self, config: EtchSettings, quiet: bool = False) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Settings for binarization, routing and export
            quiet: Suppress console log output
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)
        self.segmenter = ScanlineSegmenter()
        self.finder = BodyFinder()

    def load(self, image_path: Path) -> Binarizer:
        """Decode an image and compute its luminance.

        Args:
            image_path: Path to the source image

        Returns:
            Binarizer holding the image's luminance

        Raises:
            ImageLoadError: If the image cannot be decoded
        """
        with ImageReader(image_path) as reader:
            self.processing_logger.log_image_loaded(
                str(image_path), reader.width, reader.height, reader.format
            )
            return Binarizer(reader.rgba)

    def route(
        self,
        binarizer: Binarizer,
        white_threshold: float | None = None,
        mode: EtchMode | None = None,
    ) -> EtchJob:
        """Binarize and route a loaded image.

        Args:
            binarizer: Binarizer from :meth:`load`
            white_threshold: Threshold override (default: configured threshold)
            mode: Etch mode override (default: configured mode)

        Returns:
            New EtchJob

        Raises:
            ThresholdError: If the threshold is outside [0, 1]
        """
        if white_threshold is None:
            white_threshold = self.config.image.white_threshold
        if mode is None:
            mode = self.config.image.mode

        raster = binarizer.binarize(white_threshold)
        self.processing_logger.log_binarized(white_threshold, raster.black_count())

        start_time = time.time()
        if mode == EtchMode.STENCIL:
            bodies = self.finder.find_bodies(raster)
            route = StencilRouter(self.finder).route_bodies(bodies, raster.width, raster.height)
            feature_count = len(bodies)
        else:
            lines = self.segmenter.segment(raster)
            route = RasterRouter(self.segmenter).route_lines(lines, raster.width, raster.height)
            feature_count = len(lines)
        duration_ms = (time.time() - start_time) * 1000

        self.processing_logger.log_route(
            mode=mode.value,
            feature_count=feature_count,
            element_count=len(route.sequence),
            etch_length_mm=route.etch_length() * self.config.physical.pixel_size,
            duration_ms=duration_ms,
        )

        estimate = Estimator.from_settings(self.config).estimate_for_settings(route, self.config)
        self.processing_logger.log_estimate(estimate.milliseconds, estimate.distance_mm)

        return EtchJob(
            threshold=white_threshold,
            raster=raster,
            route=route,
            estimate=estimate,
            feature_count=feature_count,
        )

    def export(self, job: EtchJob, output_path: Path, source_name: str) -> None:
        """Write a job's G-code program.

        Raises:
            ProgramWriteError: If the file cannot be written
        """
        start_time = time.time()
        ProgramWriter(self.config, output_path).write(job.route, source_name)
        self.processing_logger.log_export(
            str(output_path), (time.time() - start_time) * 1000
        )

    def process(
        self,
        image_path: Path,
        output_path: Path | None = None,
        write_output: bool = True,
        progress_callback: Callable[[str, ProcessingStats], None] | None = None,
    ) -> ProcessingStats:
        """Process an image file end to end.

        Args:
            image_path: Path to the source image
            output_path: Path for the G-code (default: image path with .gcode)
            write_output: If False, stop after estimating
            progress_callback: Optional callback(stage, stats) invoked after the
                "load", "route" and "export" stages complete

        Returns:
            ProcessingStats with counts, estimate and timing

        Raises:
            ImageLoadError: If the image cannot be decoded
            ProgramWriteError: If the program cannot be written
            ProcessingCancelledError: If processing is interrupted by the user
        """
        self.processing_logger.reset()
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if output_path is None:
            output_path = ProgramWriter.get_gcode_path(image_path)

        self.logger.info(
            "Starting image processing",
            input=str(image_path),
            output=str(output_path) if write_output else None,
            mode=self.config.image.mode.value,
        )

        stage = "load"
        try:
            binarizer = self.load(image_path)
            self._notify(progress_callback, stage)

            stage = "route"
            job = self.route(binarizer)
            self._notify(progress_callback, stage)

            if write_output:
                stage = "export"
                self.export(job, output_path, image_path.name)
                self._notify(progress_callback, stage)
        except KeyboardInterrupt:
            self.logger.info("Cancellation requested by user", stage=stage)
            raise ProcessingCancelledError(stage) from None
        except Exception as e:
            self.processing_logger.log_error(stage, e, traceback.format_exc())
            raise

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            mode=stats.mode,
            features=stats.feature_count,
            elements=stats.element_count,
            estimated_ms=stats.estimated_ms,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _notify(
        self,
        progress_callback: Callable[[str, ProcessingStats], None] | None,
        stage: str,
    ) -> None:
        if progress_callback is not None:
            progress_callback(stage, self.processing_logger.stats)
