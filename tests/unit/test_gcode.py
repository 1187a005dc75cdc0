"""Unit tests for G-code serialization."""

from datetime import datetime

import numpy as np
import pytest

from etchpath.config import (
    CommentStyle,
    EtchMode,
    EtchSettings,
    GcodeConfig,
    PhysicalConfig,
    PreviewConfig,
)
from etchpath.core.gcode import GcodeSerializer, format_number
from etchpath.core.router import RasterRouter, StencilRouter
from etchpath.domain import BinaryRaster, Path, Point, Route, build_trace

TIMESTAMP = datetime(2024, 1, 2, 3, 4, 5)


def make_settings(
    passes: int = 1,
    preview: bool = False,
    delay_ms: int = 0,
    origin: tuple[float, float] = (0.0, 0.0),
    z_height: float | None = None,
    **gcode: object,
) -> EtchSettings:
    """Create settings with 1 mm pixels and simple speeds."""
    return EtchSettings(
        physical=PhysicalConfig(
            pixel_size=1.0,
            origin_x=origin[0],
            origin_y=origin[1],
            z_height=z_height,
            travel_speed=1000,
            etch_speed=100,
            passes=passes,
        ),
        gcode=GcodeConfig(**gcode),
        preview=PreviewConfig(enabled=preview, delay_ms=delay_ms),
    )


def black_square_route() -> Route:
    """Route for an all-black 2x2 image."""
    return RasterRouter().route(BinaryRaster(np.zeros((2, 2), dtype=np.uint8)))


def render(route: Route, settings: EtchSettings) -> list[str]:
    program = GcodeSerializer(settings).to_string(route, "square.png", TIMESTAMP)
    return program.splitlines()


class TestFormatNumber:
    """Tests for format_number function."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1000.0, "1000"), (50, "50"), (12.5, "12.5"), (0.25, "0.25")],
    )
    def test_format(self, value: float, expected: str) -> None:
        assert format_number(value) == expected


class TestCoordinates:
    """Tests for pixel to machine coordinate conversion."""

    def test_to_machine(self) -> None:
        """X is offset from the origin and Y is inverted."""
        settings = EtchSettings(
            physical=PhysicalConfig(pixel_size=0.5, origin_x=10.0, origin_y=20.0)
        )
        assert GcodeSerializer(settings).to_machine(Point(4, 6)) == ("12.000", "17.000")

    def test_origin_maps_to_configured_origin(self) -> None:
        """Pixel (0, 0) lands on the configured origin."""
        settings = EtchSettings()
        assert GcodeSerializer(settings).to_machine(Point(0, 0)) == ("70.000", "140.000")

    def test_three_decimals(self) -> None:
        """Coordinates always carry three decimals."""
        settings = EtchSettings(
            physical=PhysicalConfig(pixel_size=0.02, origin_x=0.0, origin_y=0.0)
        )
        assert GcodeSerializer(settings).to_machine(Point(3, 1)) == ("0.060", "-0.020")


class TestProgramStructure:
    """Tests for the overall program layout."""

    def test_header(self) -> None:
        """The header records version, time and source."""
        lines = render(black_square_route(), make_settings())
        assert lines[0].startswith("; Created with etchpath v")
        assert lines[1] == "; Exported on 2024-01-02 03:04:05"
        assert lines[2] == "; Generated from [square.png]"
        assert lines[3] == ""

    def test_initialization(self) -> None:
        """The machine is set up before anything moves."""
        lines = render(black_square_route(), make_settings())
        assert lines[4:11] == [
            "; Initialize the machine",
            "M107 ; Disable the laser",
            "G90 ; Set to absolute positioning mode",
            "G21 ; Use millimeters",
            "G0 X0.000 Y0.000 F6000 ; Move to the image origin",
            "M400 ; Wait for the move to finish before starting the laser",
            "",
        ]

    def test_z_and_homing(self) -> None:
        """Z move and XY homing are emitted when configured."""
        lines = render(black_square_route(), make_settings(z_height=50.0, home_xy=True))
        assert "G0 Z50 ; Set the desired Z position (assuming it is already homed)" in lines
        assert "G28 X Y ; Home the X and Y axes" in lines

    def test_no_z_when_unset(self) -> None:
        """No Z move is written without a Z height."""
        lines = render(black_square_route(), make_settings())
        assert not any(line.startswith("G0 Z") for line in lines)
        assert not any(line.startswith("G28") for line in lines)

    def test_single_pass_black_square(self) -> None:
        """A 2x2 black image gives one pass block and the standard cleanup."""
        lines = render(black_square_route(), make_settings())

        assert sum("Main image etching route - Pass" in line for line in lines) == 1
        assert "; Main image etching route - Pass 1" in lines
        assert "Perform the pre-etch trace preview" not in "\n".join(lines)
        assert lines[-5:] == [
            "; Post-etch cleanup",
            "M107",
            "G4 ; Wait for moves to finish",
            "G0 X0 F6000 ; Move the X-axis out of the way for easy target access",
            "M84 ; Disable motors",
        ]

    def test_pass_body(self) -> None:
        """Moves are framed by laser commands and M400 with progress markers."""
        lines = render(black_square_route(), make_settings())
        start = lines.index("; Main image etching route - Pass 1") + 1
        end = lines.index("; Post-etch cleanup")

        assert lines[start:end] == [
            "M107",
            "G0 X0.000 Y0.000 F1000",
            "M400",
            "M106 S255",
            "G0 X1.000 Y0.000 F100",
            "M400",
            "M73 P33 R0",
            "M107",
            "G0 X1.000 Y-1.000 F1000",
            "M400",
            "M73 P66 R0",
            "M106 S255",
            "G0 X0.000 Y-1.000 F100",
            "M400",
            "M73 P100 R0",
            "",
        ]

    def test_multiple_passes(self) -> None:
        """Every pass repeats the main sequence."""
        lines = render(black_square_route(), make_settings(passes=3))
        headers = [line for line in lines if "Main image etching route" in line]
        assert headers == [
            "; Main image etching route - Pass 1",
            "; Main image etching route - Pass 2",
            "; Main image etching route - Pass 3",
        ]
        assert lines.count("G0 X1.000 Y0.000 F100") == 3

    def test_progress_reaches_100_on_last_pass(self) -> None:
        """Progress is measured across all passes."""
        lines = render(black_square_route(), make_settings(passes=2))
        markers = [line for line in lines if line.startswith("M73")]
        assert markers[-1].startswith("M73 P100 ")
        percents = [int(m.split()[1][1:]) for m in markers]
        assert percents == sorted(percents)

    @pytest.mark.parametrize("router", [RasterRouter(), StencilRouter()], ids=["raster", "stencil"])
    @pytest.mark.parametrize("passes", [1, 3, 7])
    @pytest.mark.parametrize("pixel_size", [0.1, 0.02, 0.07])
    @pytest.mark.parametrize("seed", range(5))
    def test_last_marker_is_complete_with_fractional_pixels(
        self, router, passes: int, pixel_size: float, seed: int
    ) -> None:
        """The final marker reads 100% even when summed distances drift."""
        rng = np.random.default_rng(seed)
        raster = BinaryRaster.from_mask(rng.random((20, 20)) < 0.4)
        settings = EtchSettings(
            physical=PhysicalConfig(pixel_size=pixel_size, passes=passes),
            preview=PreviewConfig(enabled=False),
        )

        program = GcodeSerializer(settings).to_string(router.route(raster), "noise.png")
        markers = [line for line in program.splitlines() if line.startswith("M73")]

        assert markers[-1] == "M73 P100 R0"
        percents = [int(m.split()[1][1:]) for m in markers]
        assert percents == sorted(percents)
        assert max(percents) == 100

    def test_remaining_minutes_counts_down(self) -> None:
        """Remaining minutes start from the total and never go negative."""
        route = RasterRouter().route(BinaryRaster(np.zeros((1, 200), dtype=np.uint8)))
        # 199 mm at 100 mm/min is just under two minutes
        lines = render(route, make_settings())
        markers = [line for line in lines if line.startswith("M73")]
        minutes = [int(m.split()[2][1:]) for m in markers]
        assert minutes[-1] == 0
        assert all(m >= 0 for m in minutes)

    def test_empty_route(self) -> None:
        """A blank image still gets a valid program."""
        route = RasterRouter().route(BinaryRaster(np.full((2, 2), 255, dtype=np.uint8)))
        lines = render(route, make_settings())
        assert "; Main image etching route - Pass 1" in lines
        assert not any(line.startswith("M73") for line in lines)
        assert lines[-1] == "M84 ; Disable motors"

    def test_no_trailing_whitespace(self) -> None:
        """Lines never end in spaces."""
        lines = render(black_square_route(), make_settings(preview=True, delay_ms=10))
        assert all(line == line.rstrip() for line in lines)


class TestTracePreview:
    """Tests for the pre-etch trace."""

    def test_trace_block(self) -> None:
        """The trace runs around the bounds at low power between pauses."""
        lines = render(black_square_route(), make_settings(preview=True, delay_ms=100))
        start = lines.index("; Perform the pre-etch trace preview")
        assert lines[start + 1 : start + 10] == [
            "M106 S16 ; Enable the laser in low-power mode",
            "G4 P100 ; Wait for 100ms before starting the trace",
            "G0 X1.000 Y0.000 F1000",
            "G0 X1.000 Y-1.000 F1000",
            "G0 X0.000 Y-1.000 F1000",
            "G0 X0.000 Y0.000 F1000",
            "G4 P100 ; Wait for 100ms before ending the trace",
            "M107 ; Disable the laser",
            "",
        ]

    def test_trace_before_passes(self) -> None:
        """The trace comes before the first pass."""
        lines = render(black_square_route(), make_settings(preview=True, delay_ms=100))
        assert lines.index("; Perform the pre-etch trace preview") < lines.index(
            "; Main image etching route - Pass 1"
        )

    def test_zero_delay_skips_pauses(self) -> None:
        """No dwell is written when the delay is zero."""
        lines = render(black_square_route(), make_settings(preview=True, delay_ms=0))
        assert not any(line.startswith("G4 P") for line in lines)


class TestStencilPaths:
    """Tests for serializing outline paths."""

    def test_path_block(self) -> None:
        """A path hops with the laser off, then etches every point."""
        route = Route(
            EtchMode.STENCIL,
            4,
            4,
            build_trace(4, 4),
            (Path((Point(1, 1), Point(2, 1), Point(2, 2))),),
        )
        lines = render(route, make_settings(origin=(0.0, 10.0)))
        start = lines.index("; Main image etching route - Pass 1") + 1
        assert lines[start : start + 7] == [
            "M107",
            "G0 X1.000 Y9.000 F1000",
            "M400",
            "M106 S255",
            "G0 X2.000 Y9.000 F100",
            "G0 X2.000 Y8.000 F100",
            "M400",
        ]


class TestCommentStyle:
    """Tests for configurable comment syntax."""

    def test_parentheses(self) -> None:
        """Comments can be wrapped in parentheses."""
        lines = render(
            black_square_route(),
            make_settings(comment_style=CommentStyle.PARENTHESES),
        )
        assert lines[0].startswith("(Created with etchpath v")
        assert "G90 (Set to absolute positioning mode)" in lines
        assert lines[-1] == "M84 (Disable motors)"
        assert not any(";" in line for line in lines)

    def test_custom_commands(self) -> None:
        """Laser and move commands come from settings."""
        lines = render(
            black_square_route(),
            make_settings(
                laser_off_command="M5",
                laser_high_command="M3 S1000",
                move_command="G1",
            ),
        )
        assert "M5 ; Disable the laser" in lines
        assert "M3 S1000" in lines
        assert "G1 X1.000 Y0.000 F100" in lines
        assert "M107" not in lines
