"""Named twilight angles and Moon phases."""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

__all__ = ["Twilight", "Phase"]


class Twilight(Enum):
    """Predefined Sun elevation angles for rise and set times.

    Each member carries the ``angle`` in degrees and an optional ``position``
    of the Sun's disc (1.0 upper edge, 0.0 center, -1.0 lower edge). Members
    with a position are topocentric: refraction and parallax are applied.
    """

    visual = (0.0, 1.0)
    """Upper edge of the Sun crosses the horizon; commonly "sunrise"/"sunset"."""

    visual_lower = (0.0, -1.0)
    """Lower edge of the Sun crosses the horizon."""

    horizon = (0.0, None)
    """Center of the Sun crosses the horizon."""

    civil = (-6.0, None)
    nautical = (-12.0, None)
    astronomical = (-18.0, None)

    golden_hour = (6.0, None)
    """Between golden hour and blue hour is the golden hour."""

    blue_hour = (-4.0, None)
    """Between night hour and blue hour is the blue hour."""

    night_hour = (-8.0, None)
    """Not an official term; marks the beginning and end of the blue hour."""

    def __init__(self, angle: float, position: Optional[float]) -> None:
        self.angle = angle
        self.position = position

    @property
    def angle_rad(self) -> float:
        return math.radians(self.angle)

    @property
    def is_topocentric(self) -> bool:
        return self.position is not None


class Phase(Enum):
    """Moon phases, by the angle between Sun and Moon in degrees."""

    new_moon = 0.0
    waxing_crescent = 45.0
    first_quarter = 90.0
    waxing_gibbous = 135.0
    full_moon = 180.0
    waning_gibbous = 225.0
    last_quarter = 270.0
    waning_crescent = 315.0

    @property
    def angle(self) -> float:
        return self.value

    @property
    def angle_rad(self) -> float:
        return math.radians(self.value)

    @classmethod
    def to_phase(cls, angle: float) -> "Phase":
        """Return the phase closest to *angle* (degrees, any range)."""

        normalized = math.fmod(angle, 360.0)
        if normalized < 0.0:
            normalized += 360.0

        for phase in cls:
            if normalized < phase.value + 22.5:
                return phase
        return cls.new_moon
