"""Run time and distance estimation for routes.

Pixel lengths are converted to millimeters with the pixel size and divided
by the speed of the move kind (mm/min converted to mm/ms). The trace runs
at travel speed. For stencil routes the laser-off hop from where the head
is to the start of each outline is counted as travel, starting from the
origin.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import timedelta

from etchpath.config import EtchSettings
from etchpath.domain import ORIGIN, Move, MoveType, Path, Point, Route, RouteElement, distance

MS_PER_MINUTE = 60000.0


@dataclass(frozen=True)
class Estimate:
    """Estimated run time and head travel for a route.

    Attributes:
        milliseconds: Wall-clock time, rounded to the nearest millisecond
        distance_mm: Total head travel in millimeters
    """

    milliseconds: int
    distance_mm: float

    @property
    def duration(self) -> timedelta:
        """Run time as a timedelta."""
        return timedelta(milliseconds=self.milliseconds)


@dataclass(frozen=True)
class ElementCost:
    """Distance and time spent on one main-sequence element.

    Attributes:
        element: The move or path
        distance_mm: Head travel for the element, including the hop to a
            path's start
        milliseconds: Unrounded time for the element
    """

    element: RouteElement
    distance_mm: float
    milliseconds: float


class Estimator:
    """Estimates how long a route takes on the machine.

    Example:
        estimator = Estimator(pixel_size=0.1, travel_speed=1000, etch_speed=600)
        estimate = estimator.estimate(route)
        print(estimate.duration, estimate.distance_mm)
    """

    def __init__(
        self,
        pixel_size: float,
        travel_speed: float,
        etch_speed: float,
        passes: int = 1,
    ) -> None:
        """Initialize the estimator.

        Args:
            pixel_size: Millimeters per pixel
            travel_speed: Laser-off speed in mm/min (also used for the trace)
            etch_speed: Laser-on speed in mm/min
            passes: Number of times the main sequence runs
        """
        self.pixel_size = pixel_size
        self.travel_speed = travel_speed / MS_PER_MINUTE
        self.etch_speed = etch_speed / MS_PER_MINUTE
        self.trace_speed = self.travel_speed
        self.passes = passes

    @classmethod
    def from_settings(cls, settings: EtchSettings) -> "Estimator":
        """Create an estimator from application settings."""
        physical = settings.physical
        return cls(
            pixel_size=physical.pixel_size,
            travel_speed=physical.travel_speed,
            etch_speed=physical.etch_speed,
            passes=physical.passes,
        )

    def move_time_ms(self, move: Move) -> float:
        """Time to perform a single move, in milliseconds."""
        length = move.length * self.pixel_size
        match move.kind:
            case MoveType.ETCH:
                return length / self.etch_speed
            case MoveType.TRAVEL:
                return length / self.travel_speed
            case MoveType.TRACE:
                return length / self.trace_speed
        raise ValueError(f"Unknown move type: {move.kind}")

    def iter_costs(self, route: Route) -> Iterator[ElementCost]:
        """Cost of each main-sequence element for one pass, in order."""
        position: Point = ORIGIN
        for element in route.sequence:
            match element:
                case Move():
                    yield ElementCost(
                        element=element,
                        distance_mm=element.length * self.pixel_size,
                        milliseconds=self.move_time_ms(element),
                    )
                    position = element.end
                case Path() if not element.is_empty():
                    hop = distance(position, element.start) * self.pixel_size
                    etch = element.length * self.pixel_size
                    yield ElementCost(
                        element=element,
                        distance_mm=hop + etch,
                        milliseconds=hop / self.travel_speed + etch / self.etch_speed,
                    )
                    position = element.end

    def single_pass(self, route: Route) -> tuple[float, float]:
        """Unrounded (milliseconds, millimeters) for one pass of the main sequence."""
        total_ms = 0.0
        total_mm = 0.0
        for cost in self.iter_costs(route):
            total_ms += cost.milliseconds
            total_mm += cost.distance_mm
        return total_ms, total_mm

    def trace_cost(
        self,
        route: Route,
        start_pause_ms: float = 0.0,
        end_pause_ms: float = 0.0,
    ) -> tuple[float, float]:
        """Unrounded (milliseconds, millimeters) for the pre-etch trace."""
        total_ms = start_pause_ms + end_pause_ms
        total_mm = 0.0
        for move in route.trace:
            total_ms += self.move_time_ms(move)
            total_mm += move.length * self.pixel_size
        return total_ms, total_mm

    def estimate(
        self,
        route: Route,
        include_trace: bool = False,
        trace_start_pause_ms: float = 0.0,
        trace_end_pause_ms: float = 0.0,
    ) -> Estimate:
        """Estimate total run time and distance.

        The main sequence is multiplied by the pass count; the trace runs once.

        Args:
            route: Route to estimate
            include_trace: Whether the pre-etch trace is performed
            trace_start_pause_ms: Pause before the trace starts
            trace_end_pause_ms: Pause after the trace ends

        Returns:
            Estimate rounded to the nearest millisecond
        """
        pass_ms, pass_mm = self.single_pass(route)
        total_ms = pass_ms * self.passes
        total_mm = pass_mm * self.passes

        if include_trace:
            trace_ms, trace_mm = self.trace_cost(
                route, trace_start_pause_ms, trace_end_pause_ms
            )
            total_ms += trace_ms
            total_mm += trace_mm

        return Estimate(milliseconds=round(total_ms), distance_mm=total_mm)

    def estimate_for_settings(self, route: Route, settings: EtchSettings) -> Estimate:
        """Estimate using the preview settings for the trace and its pauses."""
        preview = settings.preview
        return self.estimate(
            route,
            include_trace=preview.enabled,
            trace_start_pause_ms=preview.delay_ms,
            trace_end_pause_ms=preview.delay_ms,
        )
