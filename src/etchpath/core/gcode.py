"""G-code serialization of routes.

Program layout:
1. Header comments (tool version, export time, source image)
2. Machine initialization (laser off, absolute mode, millimeters, optional
   Z move and XY homing, move to the image origin)
3. Optional pre-etch trace with the laser on low power
4. The main sequence once per pass, with ``M73`` progress markers
5. Cleanup (laser off, wait, park the X axis, motors off)

Pixel coordinates map to machine coordinates as
``x_mm = x * pixel_size + origin_x`` and ``y_mm = origin_y - y * pixel_size``;
Y is inverted because images start at the top-left and machines at the
bottom-left.
"""

import io
from datetime import datetime
from typing import TextIO

from etchpath import __version__
from etchpath.config import CommentStyle, EtchSettings
from etchpath.core.estimator import MS_PER_MINUTE, Estimator
from etchpath.domain import ORIGIN, Move, MoveType, Path, Point, Route

# Feed rate for the fixed positioning moves outside the etch route
POSITIONING_FEED = 6000


def format_number(value: float) -> str:
    """Format a feed rate or height without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


class GcodeSerializer:
    """Writes a route as a G-code program.

    Example:
        serializer = GcodeSerializer(settings)
        with open("out.gcode", "w", encoding="utf-8") as f:
            serializer.serialize(route, f, source_name="logo.png")
    """

    def __init__(self, settings: EtchSettings) -> None:
        """Initialize the serializer.

        Args:
            settings: Settings providing physical and G-code parameters
        """
        self.settings = settings
        self.estimator = Estimator.from_settings(settings)
        self._sink: TextIO | None = None

    def to_machine(self, point: Point) -> tuple[str, str]:
        """Convert a pixel to formatted machine coordinates in millimeters."""
        physical = self.settings.physical
        x = point.x * physical.pixel_size + physical.origin_x
        y = physical.origin_y - point.y * physical.pixel_size
        return f"{x:.3f}", f"{y:.3f}"

    def to_string(
        self,
        route: Route,
        source_name: str,
        timestamp: datetime | None = None,
    ) -> str:
        """Serialize a route into a string."""
        buffer = io.StringIO()
        self.serialize(route, buffer, source_name, timestamp)
        return buffer.getvalue()

    def serialize(
        self,
        route: Route,
        sink: TextIO,
        source_name: str,
        timestamp: datetime | None = None,
    ) -> None:
        """Write the complete program for a route.

        Args:
            route: Route to serialize
            sink: Text stream to write to
            source_name: Name of the source image, recorded in the header
            timestamp: Export time for the header (default: now)

        Raises:
            OSError: If the sink cannot be written
        """
        self._sink = sink
        try:
            self._write_header(source_name, timestamp or datetime.now())
            self._write_initialization()
            if self.settings.preview.enabled:
                self._write_trace(route)
            self._write_passes(route)
            self._write_cleanup()
        finally:
            self._sink = None

    def _write_line(self, command: str | None = None, comment: str | None = None) -> None:
        """Write one program line with an optional command and comment."""
        parts: list[str] = []
        if command:
            parts.append(command)
        if comment:
            if self.settings.gcode.comment_style == CommentStyle.PARENTHESES:
                parts.append(f"({comment})")
            else:
                parts.append(f"; {comment}")
        if self._sink is None:
            raise RuntimeError("No program is being written. Call serialize() instead.")
        self._sink.write(" ".join(parts) + "\n")

    def _move(self, point: Point, feed: float) -> str:
        x, y = self.to_machine(point)
        return f"{self.settings.gcode.move_command} X{x} Y{y} F{format_number(feed)}"

    def _write_header(self, source_name: str, timestamp: datetime) -> None:
        self._write_line(comment=f"Created with etchpath v{__version__}")
        self._write_line(comment=f"Exported on {timestamp:%Y-%m-%d %H:%M:%S}")
        self._write_line(comment=f"Generated from [{source_name}]")
        self._write_line()

    def _write_initialization(self) -> None:
        gcode = self.settings.gcode
        physical = self.settings.physical

        self._write_line(comment="Initialize the machine")
        self._write_line(gcode.laser_off_command, "Disable the laser")
        self._write_line("G90", "Set to absolute positioning mode")
        self._write_line("G21", "Use millimeters")
        if physical.z_height is not None:
            self._write_line(
                f"{gcode.move_command} Z{format_number(physical.z_height)}",
                "Set the desired Z position (assuming it is already homed)",
            )
        if gcode.home_xy:
            self._write_line("G28 X Y", "Home the X and Y axes")
        self._write_line(self._move(ORIGIN, POSITIONING_FEED), "Move to the image origin")
        self._write_line("M400", "Wait for the move to finish before starting the laser")
        self._write_line()

    def _write_trace(self, route: Route) -> None:
        gcode = self.settings.gcode
        delay = self.settings.preview.delay_ms
        travel_speed = self.settings.physical.travel_speed

        self._write_line(comment="Perform the pre-etch trace preview")
        self._write_line(gcode.laser_low_command, "Enable the laser in low-power mode")
        if delay > 0:
            self._write_line(f"G4 P{delay}", f"Wait for {delay}ms before starting the trace")
        for move in route.trace:
            self._write_line(self._move(move.end, travel_speed))
        if delay > 0:
            self._write_line(f"G4 P{delay}", f"Wait for {delay}ms before ending the trace")
        self._write_line(gcode.laser_off_command, "Disable the laser")
        self._write_line()

    def _write_passes(self, route: Route) -> None:
        passes = self.settings.physical.passes
        pass_ms, pass_mm = self.estimator.single_pass(route)
        total_ms = round(pass_ms * passes)
        total_mm = pass_mm * passes

        costs = list(self.estimator.iter_costs(route))
        distance_so_far = 0.0
        time_so_far = 0.0
        last_minutes = round(total_ms / MS_PER_MINUTE)
        last_percent = 0

        for pass_index in range(passes):
            self._write_line(comment=f"Main image etching route - Pass {pass_index + 1}")
            final_pass = pass_index == passes - 1

            for index, cost in enumerate(costs):
                self._write_element(cost.element)

                distance_so_far += cost.distance_mm
                time_so_far += cost.milliseconds
                if final_pass and index == len(costs) - 1:
                    # Summed float distances can fall just short of the total
                    percent, minutes = 100, 0
                else:
                    percent = int(distance_so_far / total_mm * 100) if total_mm > 0 else 100
                    percent = min(percent, 100)
                    minutes = max(round((total_ms - time_so_far) / MS_PER_MINUTE), 0)

                if percent != last_percent or minutes != last_minutes:
                    last_percent = percent
                    last_minutes = minutes
                    self._write_line(f"M73 P{percent} R{minutes}")

            self._write_line()

    def _write_element(self, element: Move | Path) -> None:
        gcode = self.settings.gcode
        physical = self.settings.physical

        match element:
            case Move(kind=MoveType.ETCH):
                self._write_line(gcode.laser_high_command)
                self._write_line(self._move(element.end, physical.etch_speed))
                self._write_line("M400")
            case Move(kind=MoveType.TRAVEL) | Move(kind=MoveType.TRACE):
                self._write_line(gcode.laser_off_command)
                self._write_line(self._move(element.end, physical.travel_speed))
                self._write_line("M400")
            case Path():
                self._write_line(gcode.laser_off_command)
                self._write_line(self._move(element.start, physical.travel_speed))
                self._write_line("M400")
                self._write_line(gcode.laser_high_command)
                for point in element.points[1:]:
                    self._write_line(self._move(point, physical.etch_speed))
                self._write_line("M400")

    def _write_cleanup(self) -> None:
        gcode = self.settings.gcode

        self._write_line(comment="Post-etch cleanup")
        self._write_line(gcode.laser_off_command)
        self._write_line("G4", "Wait for moves to finish")
        self._write_line(
            f"{gcode.move_command} X0 F{POSITIONING_FEED}",
            "Move the X-axis out of the way for easy target access",
        )
        self._write_line("M84", "Disable motors")
