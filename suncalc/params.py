"""Validated, immutable request models for the Sun and Moon calculations."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .definitions import Phase, Twilight
from .extmath import dms
from .julian import JulianMoment

__all__ = [
    "ONE_DAY",
    "FULL_CYCLE",
    "GeoPosition",
    "SunPositionRequest",
    "MoonPositionRequest",
    "MoonIlluminationRequest",
    "SunTimesRequest",
    "MoonTimesRequest",
    "MoonPhaseRequest",
]

ONE_DAY = 86400.0  # seconds
FULL_CYCLE = 365 * ONE_DAY


def _now() -> datetime:
    return datetime.now().astimezone()


class GeoPosition(BaseModel):
    """Observer location. Negative heights are clamped to sea level."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(0.0, ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(0.0, ge=-180.0, le=180.0, description="Longitude in degrees")
    height: float = Field(0.0, description="Height above sea level in meters")

    @field_validator("height")
    @classmethod
    def clamp_height(cls, value: float) -> float:
        return max(value, 0.0)

    @classmethod
    def of(cls, coords: Sequence[float]) -> "GeoPosition":
        """Create a position from ``(lat, lng)`` or ``(lat, lng, height)``."""

        if len(coords) not in (2, 3):
            raise ValueError("Array must contain 2 or 3 values")
        height = coords[2] if len(coords) == 3 else 0.0
        return cls(latitude=coords[0], longitude=coords[1], height=height)

    @classmethod
    def from_dms(
        cls,
        latitude: Tuple[float, float, float],
        longitude: Tuple[float, float, float],
        height: float = 0.0,
    ) -> "GeoPosition":
        """Create a position from degree/minute/second tuples."""

        return cls(latitude=dms(*latitude), longitude=dms(*longitude), height=height)

    @property
    def latitude_rad(self) -> float:
        return math.radians(self.latitude)

    @property
    def longitude_rad(self) -> float:
        return math.radians(self.longitude)


class _TimedRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: datetime = Field(default_factory=_now, description="Timezone-aware instant")

    @field_validator("time")
    @classmethod
    def require_timezone(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("datetime must be timezone-aware")
        return value

    @property
    def julian_moment(self) -> JulianMoment:
        return JulianMoment.of(self.time)

    def on(self, time: datetime):
        """Return a validated copy of this request for another instant."""
        return type(self).model_validate({**dict(self), "time": time})


class _LocatedRequest(_TimedRequest):
    location: GeoPosition = Field(default_factory=GeoPosition)


class SunPositionRequest(_LocatedRequest):
    """Where the Sun stands for an observer at an instant."""


class MoonPositionRequest(_LocatedRequest):
    """Where the Moon stands for an observer at an instant."""


class MoonIlluminationRequest(_TimedRequest):
    pass


def _finite_angle(value):
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("angle must be a finite number of degrees")
    return value


class _WindowedRequest(_LocatedRequest):
    limit: float = Field(FULL_CYCLE, ge=0.0, description="Search window in seconds")

    @field_validator("limit", mode="before")
    @classmethod
    def window_seconds(cls, value):
        if isinstance(value, timedelta):
            return value.total_seconds()
        return value

    @property
    def limit_hours(self) -> float:
        return self.limit / 3600.0


class SunTimesRequest(_WindowedRequest):
    twilight: Union[Twilight, float] = Field(
        Twilight.visual,
        description="Predefined twilight, or a geocentric elevation angle in degrees",
    )

    @field_validator("twilight")
    @classmethod
    def finite_twilight(cls, value):
        return _finite_angle(value)


class MoonTimesRequest(_WindowedRequest):
    pass


class MoonPhaseRequest(_TimedRequest):
    phase: Union[Phase, float] = Field(
        Phase.new_moon, description="Predefined phase, or a phase angle in degrees"
    )

    @field_validator("phase")
    @classmethod
    def finite_phase(cls, value):
        return _finite_angle(value)

    @property
    def phase_rad(self) -> float:
        if isinstance(self.phase, Phase):
            return self.phase.angle_rad
        return math.radians(self.phase)
