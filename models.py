"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import datetime, tzinfo
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from suncalc.definitions import Phase, Twilight
from suncalc.timeutil import resolve_timezone


class TwilightName(str, Enum):
    """Twilight definitions accepted by the ``/sun/times`` endpoint."""

    visual = "visual"
    visual_lower = "visual_lower"
    horizon = "horizon"
    civil = "civil"
    nautical = "nautical"
    astronomical = "astronomical"
    golden_hour = "golden_hour"
    blue_hour = "blue_hour"
    night_hour = "night_hour"

    def to_twilight(self) -> Twilight:
        return Twilight[self.value]


class PhaseName(str, Enum):
    """Moon phases accepted by the ``/moon/phase`` endpoint."""

    new_moon = "new_moon"
    waxing_crescent = "waxing_crescent"
    first_quarter = "first_quarter"
    waxing_gibbous = "waxing_gibbous"
    full_moon = "full_moon"
    waning_gibbous = "waning_gibbous"
    last_quarter = "last_quarter"
    waning_crescent = "waning_crescent"

    def to_phase(self) -> Phase:
        return Phase[self.value]


class TimeQueryParams(BaseModel):
    """Instant of a query. Naive times are read in ``tz``."""

    time: Optional[datetime] = Field(
        None, description="ISO-8601 time; defaults to the current time"
    )
    tz: str = Field("UTC", description="IANA time zone used for local results")

    @field_validator("tz")
    @classmethod
    def validate_tz(cls, value: str) -> str:
        resolve_timezone(value)
        return value

    @property
    def zone(self) -> tzinfo:
        return resolve_timezone(self.tz)

    def instant(self) -> datetime:
        zone = self.zone
        if self.time is None:
            return datetime.now(zone)
        if self.time.tzinfo is None:
            return self.time.replace(tzinfo=zone)
        return self.time.astimezone(zone)


class ObserverQueryParams(TimeQueryParams):
    """Observer location and instant."""

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    elev_m: float = Field(0.0, ge=-500.0, description="Observer elevation in meters")


class SunTimesQueryParams(ObserverQueryParams):
    twilight: TwilightName = Field(TwilightName.visual, description="Twilight definition")
    angle: Optional[float] = Field(
        None,
        ge=-90.0,
        le=90.0,
        allow_inf_nan=False,
        description="Free geocentric elevation angle in degrees; overrides twilight",
    )
    limit_days: float = Field(365.0, ge=0.0, le=3650.0, description="Search window in days")


class MoonTimesQueryParams(ObserverQueryParams):
    limit_days: float = Field(365.0, ge=0.0, le=3650.0, description="Search window in days")


class MoonPhaseQueryParams(TimeQueryParams):
    phase: PhaseName = Field(PhaseName.new_moon, description="Moon phase to search for")
    angle: Optional[float] = Field(
        None,
        allow_inf_nan=False,
        description="Free phase angle in degrees; overrides phase",
    )


class SunPositionResponse(BaseModel):
    ok: bool = True
    time: str = Field(..., description="Instant of the position (ISO-8601)")
    latitude: float
    longitude: float
    azimuth: float = Field(..., description="Degrees clockwise from north")
    altitude: float = Field(..., description="Altitude including refraction, degrees")
    true_altitude: float = Field(..., description="Altitude without refraction, degrees")
    distance_km: float


class MoonPositionResponse(BaseModel):
    ok: bool = True
    time: str
    latitude: float
    longitude: float
    azimuth: float
    altitude: float
    distance_km: float
    parallactic_angle: float


class SunTimesResponse(BaseModel):
    """Sun rise, set, noon and nadir within the search window."""

    ok: bool = True
    twilight: str = Field(..., description="Twilight name, or the free angle used")
    rise_utc: Optional[str] = None
    set_utc: Optional[str] = None
    noon_utc: Optional[str] = None
    nadir_utc: Optional[str] = None
    rise_local: Optional[str] = None
    set_local: Optional[str] = None
    noon_local: Optional[str] = None
    nadir_local: Optional[str] = None
    always_up: bool
    always_down: bool


class MoonTimesResponse(BaseModel):
    ok: bool = True
    rise_utc: Optional[str] = None
    set_utc: Optional[str] = None
    rise_local: Optional[str] = None
    set_local: Optional[str] = None
    always_up: bool
    always_down: bool


class MoonPhaseResponse(BaseModel):
    ok: bool = True
    phase: str
    time_utc: str
    time_local: str
    distance_km: float
    is_super_moon: bool
    is_micro_moon: bool


class MoonIlluminationResponse(BaseModel):
    ok: bool = True
    time: str
    fraction: float = Field(..., description="Illuminated fraction, 0.0 to 1.0")
    phase: float
    angle: float
    closest_phase: PhaseName


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    version: str


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
