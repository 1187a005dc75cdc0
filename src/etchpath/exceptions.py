"""Exception hierarchy for Etchpath."""


class EtchPathError(Exception):
    """Base exception for all Etchpath errors."""

    pass


class ImageError(EtchPathError):
    """Errors related to loading source images."""

    pass


class ImageLoadError(ImageError):
    """Error decoding an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class RasterError(EtchPathError):
    """Malformed raster or pixel buffer."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ThresholdError(RasterError):
    """White threshold outside the [0, 1] range."""

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(f"White threshold must be between 0 and 1, got {value}")


class ExportError(EtchPathError):
    """Errors related to writing the control program."""

    pass


class ProgramWriteError(ExportError):
    """Error writing a G-code file.

    Any partially written file at ``path`` is not valid G-code.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write G-code '{path}': {reason}")


class ProcessingCancelledError(EtchPathError):
    """Processing was cancelled by user."""

    def __init__(self, stage: str) -> None:
        self.stage = stage
        super().__init__(f"Processing cancelled during {stage}")
