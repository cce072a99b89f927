"""Immutable result records. All angles are in degrees, distances in km."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .definitions import Phase

__all__ = [
    "SunPosition",
    "MoonPosition",
    "SunTimes",
    "MoonTimes",
    "MoonPhase",
    "MoonIllumination",
    "SUPER_MOON_DISTANCE_KM",
    "MICRO_MOON_DISTANCE_KM",
]

SUPER_MOON_DISTANCE_KM = 360000.0
MICRO_MOON_DISTANCE_KM = 405000.0


@dataclass(frozen=True)
class SunPosition:
    """Position of the Sun.

    ``azimuth`` is measured clockwise from north. ``altitude`` includes
    atmospheric refraction, ``true_altitude`` does not.
    """

    azimuth: float
    altitude: float
    true_altitude: float
    distance: float


@dataclass(frozen=True)
class MoonPosition:
    """Position of the Moon, with refraction applied to ``altitude``."""

    azimuth: float
    altitude: float
    distance: float
    parallactic_angle: float


@dataclass(frozen=True)
class SunTimes:
    """Sun events found within the search window.

    An event is ``None`` if it does not happen inside the window. ``noon`` and
    ``nadir`` are the highest and lowest points, regardless of the twilight
    angle.
    """

    rise: Optional[datetime]
    set: Optional[datetime]
    noon: Optional[datetime]
    nadir: Optional[datetime]
    always_up: bool
    always_down: bool


@dataclass(frozen=True)
class MoonTimes:
    rise: Optional[datetime]
    set: Optional[datetime]
    always_up: bool
    always_down: bool


@dataclass(frozen=True)
class MoonPhase:
    """Next occurrence of a Moon phase."""

    time: datetime
    distance: float

    @property
    def is_super_moon(self) -> bool:
        # Not an official definition.
        return self.distance < SUPER_MOON_DISTANCE_KM

    @property
    def is_micro_moon(self) -> bool:
        return self.distance > MICRO_MOON_DISTANCE_KM


@dataclass(frozen=True)
class MoonIllumination:
    """Illumination of the Moon at an instant.

    ``phase`` is negative while waxing and positive while waning (-180 new
    moon, 0 full moon, 180 new moon again). ``angle`` is the angle of the
    bright limb's midpoint, measured from the north point of the disc.
    """

    fraction: float
    phase: float
    angle: float

    @property
    def closest_phase(self) -> Phase:
        return Phase.to_phase(self.phase + 180.0)
