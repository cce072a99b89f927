"""Positions, rise/set times, phases and illumination of the Sun and Moon."""

from .astro import (
    compute_moon_illumination,
    compute_moon_phase,
    compute_moon_position,
    compute_moon_times,
    compute_sun_position,
    compute_sun_times,
)
from .definitions import Phase, Twilight
from .errors import ConvergenceError, DateError, SunCalcError
from .params import (
    FULL_CYCLE,
    ONE_DAY,
    GeoPosition,
    MoonIlluminationRequest,
    MoonPhaseRequest,
    MoonPositionRequest,
    MoonTimesRequest,
    SunPositionRequest,
    SunTimesRequest,
)
from .results import MoonIllumination, MoonPhase, MoonPosition, MoonTimes, SunPosition, SunTimes

__version__ = "1.0.0"

__all__ = [
    "compute_sun_position",
    "compute_moon_position",
    "compute_sun_times",
    "compute_moon_times",
    "compute_moon_phase",
    "compute_moon_illumination",
    "Twilight",
    "Phase",
    "SunCalcError",
    "ConvergenceError",
    "DateError",
    "ONE_DAY",
    "FULL_CYCLE",
    "GeoPosition",
    "SunPositionRequest",
    "MoonPositionRequest",
    "SunTimesRequest",
    "MoonTimesRequest",
    "MoonPhaseRequest",
    "MoonIlluminationRequest",
    "SunPosition",
    "MoonPosition",
    "SunTimes",
    "MoonTimes",
    "MoonPhase",
    "MoonIllumination",
]
