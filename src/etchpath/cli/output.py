"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, summary and error messages.
"""

from rich.console import Console
from rich.text import Text

from etchpath.core.estimator import Estimate

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Etchpath[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_image_info(image_path: str, image_format: str, width: int, height: int) -> None:
    """Print source image information.

    Args:
        image_path: Path to the image file
        image_format: Decoder format name (e.g., "PNG")
        width: Width in pixels
        height: Height in pixels
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(image_path)
    line.append(f" ({image_format})")
    console.print(line)
    console.print(f"  {width:,} {SYM_DOT} {height:,} px")


def print_physical_size(width: int, height: int, pixel_size: float) -> None:
    """Print the etched area in millimeters."""
    console.print(
        f"  {width * pixel_size:.1f} × {height * pixel_size:.1f} mm "
        f"{SYM_DOT} {pixel_size} mm/px"
    )


def print_route_info(
    mode: str,
    black_pixels: int,
    features: int,
    elements: int,
    etch_length_mm: float,
) -> None:
    """Print routing results.

    Args:
        mode: Etch mode name
        black_pixels: Number of black pixels after thresholding
        features: Lines (raster) or bodies (stencil)
        elements: Moves or paths in the main sequence
        etch_length_mm: Laser-on length of one pass in millimeters
    """
    feature_name = "bodies" if mode == "stencil" else "lines"
    element_name = "paths" if mode == "stencil" else "moves"
    console.print(f"  {black_pixels:,} black pixels {SYM_DOT} {mode} mode")
    console.print(
        f"  [green]{features:,}[/green] {feature_name} {SYM_DOT} "
        f"{elements:,} {element_name} {SYM_DOT} {etch_length_mm:,.1f} mm etched per pass"
    )


def format_duration(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.0f}s"
    else:
        hours = int(seconds // 3600)
        mins = int((seconds % 3600) // 60)
        return f"{hours}h {mins}m"


def print_estimate(estimate: Estimate, passes: int) -> None:
    """Print the run time estimate.

    Args:
        estimate: Estimate for the whole job
        passes: Number of etch passes included
    """
    plural = "pass" if passes == 1 else "passes"
    console.print(
        f"  ~{format_duration(estimate.duration.total_seconds())} {SYM_DOT} "
        f"{estimate.distance_mm:,.1f} mm head travel {SYM_DOT} {passes} {plural}"
    )


def print_success(output_path: str, file_size: str, total_time_s: float) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {format_duration(total_time_s)}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice(stage: str) -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold] during {stage}")
    console.print("  Any partially written G-code file is incomplete")
