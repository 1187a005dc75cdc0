"""CLI application entry point for etchpath.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from etchpath import __version__
from etchpath.cli.output import (
    SYM_OK,
    console,
    print_cancellation_notice,
    print_error,
    print_estimate,
    print_header,
    print_image_info,
    print_physical_size,
    print_route_info,
    print_step,
    print_success,
)
from etchpath.config import (
    CommentStyle,
    EtchMode,
    EtchSettings,
    GcodeConfig,
    ImageConfig,
    LoggingConfig,
    PhysicalConfig,
    PreviewConfig,
)
from etchpath.core.estimator import Estimate
from etchpath.core.processor import EtchProcessor
from etchpath.exceptions import (
    EtchPathError,
    ImageLoadError,
    ProcessingCancelledError,
    ProgramWriteError,
)
from etchpath.io import ProgramWriter
from etchpath.utils import ProcessingStats

# Create the Typer app
app = typer.Typer(
    name="etchpath",
    help="Convert raster images into laser-etching G-code.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Etchpath[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def etch(
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image (PNG, BMP, JPEG, ...)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}.gcode)",
        ),
    ] = None,
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            "-m",
            help="Etch mode (raster|stencil)",
        ),
    ] = "raster",
    threshold: Annotated[
        float,
        typer.Option(
            "--threshold",
            "-t",
            help="White threshold: pixels at or above this luminance are not etched (0-1)",
            min=0.0,
            max=1.0,
        ),
    ] = 0.5,
    pixel_size: Annotated[
        float,
        typer.Option("--pixel-size", "-s", help="Pixel size in mm"),
    ] = 0.02,
    origin_x: Annotated[
        float,
        typer.Option("--origin-x", help="Machine X of the image's top-left corner (mm)"),
    ] = 70.0,
    origin_y: Annotated[
        float,
        typer.Option("--origin-y", help="Machine Y of the image's top-left corner (mm)"),
    ] = 140.0,
    z_height: Annotated[
        float,
        typer.Option("--z-height", "-z", help="Z height during etching (mm)"),
    ] = 50.0,
    skip_z: Annotated[
        bool,
        typer.Option("--skip-z", help="Do not move the Z axis"),
    ] = False,
    travel_speed: Annotated[
        float,
        typer.Option("--travel-speed", help="Laser-off speed (mm/min)"),
    ] = 1000.0,
    etch_speed: Annotated[
        float,
        typer.Option("--etch-speed", help="Laser-on speed (mm/min)"),
    ] = 100.0,
    passes: Annotated[
        int,
        typer.Option("--passes", "-n", help="Number of etch passes", min=1),
    ] = 1,
    laser_off: Annotated[
        str,
        typer.Option("--laser-off", help="Laser off command"),
    ] = "M107",
    laser_low: Annotated[
        str,
        typer.Option("--laser-low", help="Low-power laser command (trace preview)"),
    ] = "M106 S16",
    laser_high: Annotated[
        str,
        typer.Option("--laser-high", help="Full-power laser command"),
    ] = "M106 S255",
    move_command: Annotated[
        str,
        typer.Option("--move-command", help="Move command (G0|G1)"),
    ] = "G0",
    comment_style: Annotated[
        str,
        typer.Option("--comment-style", help="Comment style (semicolon|parentheses)"),
    ] = "semicolon",
    home_xy: Annotated[
        bool,
        typer.Option("--home-xy", help="Home the X and Y axes before etching"),
    ] = False,
    preview: Annotated[
        bool,
        typer.Option("--preview/--no-preview", help="Trace the image bounds before etching"),
    ] = True,
    preview_delay: Annotated[
        int,
        typer.Option("--preview-delay", help="Pause before and after the trace (ms)", min=0),
    ] = 5000,
    estimate_only: Annotated[
        bool,
        typer.Option(
            "--estimate-only",
            help="Route and estimate the job without writing G-code",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert an image into a laser-etching G-code program.

    Raster mode etches every black pixel row by row. Stencil mode etches the
    outline of every connected black shape.

    Example:
        etchpath logo.png --mode stencil --pixel-size 0.1

    This will create logo.gcode next to logo.png.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_image.exists():
        print_error(
            f"Input file not found: {input_image}",
            details=f"The file '{input_image}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_image.is_file():
        print_error(
            f"Input path is not a file: {input_image}",
            details="Please provide a path to an image file.",
        )
        raise typer.Exit(code=1)

    # Validate enum arguments
    try:
        etch_mode = EtchMode(mode.lower())
    except ValueError:
        print_error(f"Invalid mode: {mode}", details="Valid values: raster, stencil")
        raise typer.Exit(code=1)

    try:
        comments = CommentStyle(comment_style.lower())
    except ValueError:
        print_error(
            f"Invalid comment style: {comment_style}",
            details="Valid values: semicolon, parentheses",
        )
        raise typer.Exit(code=1)

    # Create settings from CLI arguments
    try:
        settings = EtchSettings(
            image=ImageConfig(white_threshold=threshold, mode=etch_mode),
            physical=PhysicalConfig(
                pixel_size=pixel_size,
                origin_x=origin_x,
                origin_y=origin_y,
                z_height=None if skip_z else z_height,
                travel_speed=travel_speed,
                etch_speed=etch_speed,
                passes=passes,
            ),
            gcode=GcodeConfig(
                laser_off_command=laser_off,
                laser_low_command=laser_low,
                laser_high_command=laser_high,
                move_command=move_command,
                comment_style=comments,
                home_xy=home_xy,
            ),
            preview=PreviewConfig(enabled=preview, delay_ms=preview_delay),
            logging=LoggingConfig(
                log_file=log_file,
                log_level="DEBUG" if verbose else (log_level if not quiet else "WARNING"),
            ),
        )
    except ValidationError as e:
        print_error("Invalid settings", details=_summarize_validation(e))
        raise typer.Exit(code=1)

    output_path = output if output is not None else ProgramWriter.get_gcode_path(input_image)

    # Print header
    if not quiet:
        print_header(__version__)

    start_time = time.time()

    def report_stage(stage: str, stats: ProcessingStats) -> None:
        match stage:
            case "load":
                print_step("Loading image")
                print_image_info(
                    image_path=str(input_image),
                    image_format=stats.image_format or "unknown",
                    width=stats.width,
                    height=stats.height,
                )
                print_physical_size(stats.width, stats.height, pixel_size)
            case "route":
                print_step(f"Routing ({etch_mode.value})")
                print_route_info(
                    mode=etch_mode.value,
                    black_pixels=stats.black_pixels,
                    features=stats.feature_count,
                    elements=stats.element_count,
                    etch_length_mm=stats.etch_length_mm,
                )
                print_estimate(Estimate(stats.estimated_ms, stats.distance_mm), passes)
                if stats.element_count == 0:
                    console.print(
                        "\nNo black pixels at this threshold. The program will only trace."
                    )
            case "export":
                print_step("Writing G-code")

    try:
        processor = EtchProcessor(settings, quiet=quiet)
        processor.process(
            image_path=input_image,
            output_path=output_path,
            write_output=not estimate_only,
            progress_callback=None if quiet else report_stage,
        )
    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_notice("processing")
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except ProcessingCancelledError as e:
        if not quiet:
            print_cancellation_notice(e.stage)
        raise typer.Exit(code=130) from None
    except ImageLoadError as e:
        print_error(f"Could not load image: {e.reason}")
        raise typer.Exit(code=1)
    except ProgramWriteError as e:
        print_error(
            f"Could not write G-code: {e.reason}",
            details=f"'{e.path}' may be incomplete and should not be used.",
        )
        raise typer.Exit(code=1)
    except EtchPathError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)

    if quiet:
        return

    if estimate_only:
        console.print(f"\n[bold green]{SYM_OK} Estimate complete[/bold green], no G-code written")
    else:
        print_success(
            output_path=str(output_path),
            file_size=_format_file_size(output_path),
            total_time_s=time.time() - start_time,
        )


def _summarize_validation(error: ValidationError) -> str:
    """Summarize pydantic validation errors on one line per field."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
