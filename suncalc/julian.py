"""Julian date representation of an instant, and sidereal time."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo

from .errors import DateError
from .extmath import PI2, frac

__all__ = ["JulianMoment", "MJD_UNIX_EPOCH", "MJD_J2000", "DAYS_PER_CENTURY"]

SECONDS_PER_DAY = 86400.0
MJD_UNIX_EPOCH = 40587.0  # Modified Julian Date of 1970-01-01T00:00Z.
MJD_J2000 = 51544.5
DAYS_PER_CENTURY = 36525.0
ANOMALISTIC_YEAR_DAYS = 365.256363


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


@dataclass(frozen=True)
class JulianMoment:
    """An absolute instant expressed as a Modified Julian Date.

    ``seconds`` are POSIX seconds of the instant; ``tz`` is only used to
    project the instant onto a calendar (day of year, displayed results).
    """

    seconds: float
    tz: tzinfo = timezone.utc

    @classmethod
    def of(cls, when: datetime) -> "JulianMoment":
        """Create a moment from a timezone-aware datetime."""

        if when.tzinfo is None:
            raise ValueError("datetime must be timezone-aware")
        return cls(when.timestamp(), when.tzinfo)

    @property
    def mjd(self) -> float:
        return self.seconds / SECONDS_PER_DAY + MJD_UNIX_EPOCH

    @property
    def julian_century(self) -> float:
        """Julian centuries since J2000.0."""
        return (self.mjd - MJD_J2000) / DAYS_PER_CENTURY

    @property
    def instant(self) -> datetime:
        try:
            return datetime.fromtimestamp(self.seconds, self.tz)
        except (OverflowError, OSError, ValueError) as exc:
            raise DateError(f"Instant out of range: {self.seconds}s") from exc

    def at_hour(self, hour: float) -> "JulianMoment":
        """Return the moment *hour* hours (fractions allowed) after this one."""

        return JulianMoment(self.seconds + hour * 3600.0, self.tz)

    def at_modified_julian_date(self, mjd: float) -> "JulianMoment":
        """Return the moment of *mjd*, rounded to whole seconds."""

        seconds = _round_half_away((mjd - MJD_UNIX_EPOCH) * SECONDS_PER_DAY)
        return JulianMoment(seconds, self.tz)

    def at_julian_century(self, jc: float) -> "JulianMoment":
        return self.at_modified_julian_date(jc * DAYS_PER_CENTURY + MJD_J2000)

    def greenwich_mean_sidereal_time(self) -> float:
        """Greenwich Mean Sidereal Time, in radians within ``[0, 2π)``."""

        secs = SECONDS_PER_DAY
        mjd = self.mjd
        mjd0 = math.floor(mjd)
        ut = (mjd - mjd0) * secs
        t0 = (mjd0 - MJD_J2000) / DAYS_PER_CENTURY
        t = (mjd - MJD_J2000) / DAYS_PER_CENTURY

        gmst = (
            24110.54841
            + 8640184.812866 * t0
            + 1.0027379093 * ut
            + (0.093104 - 6.2e-6 * t) * t * t
        )
        gmst = math.fmod(gmst, secs)
        if gmst < 0.0:
            gmst += secs
        return (PI2 / secs) * gmst

    def day_of_year(self) -> int:
        return self.instant.timetuple().tm_yday

    def true_anomaly(self) -> float:
        """Approximate true anomaly of the Earth, in radians."""

        return PI2 * frac((self.day_of_year() - 5.0) / ANOMALISTIC_YEAR_DAYS)

    def __str__(self) -> str:
        mjd = self.mjd
        return (
            f"{mjd}d {math.fmod(mjd * 24, 24)}h "
            f"{math.fmod(mjd * 24 * 60, 60)}m {math.fmod(mjd * 24 * 60 * 60, 60)}s"
        )
