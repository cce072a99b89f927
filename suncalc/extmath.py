"""Constants and numerical helpers shared by the Sun and Moon calculations."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable

from .vector import PI2, RotationMatrix, SpaceVector

if TYPE_CHECKING:  # pragma: no cover
    from .julian import JulianMoment

__all__ = [
    "PI2",
    "ARCS",
    "EARTH_MEAN_RADIUS_KM",
    "REFRACTION_AT_HORIZON",
    "frac",
    "is_zero",
    "dms",
    "apparent_refraction",
    "refraction",
    "parallax",
    "equatorial_to_horizontal",
    "equatorial_to_ecliptical",
    "readjust_extremum",
    "readjust_max",
    "readjust_min",
]

ARCS = math.degrees(3600.0)  # Arc-seconds per radian.
EARTH_MEAN_RADIUS_KM = 6371.0
REFRACTION_AT_HORIZON = math.pi / (math.tan(math.radians(7.31 / 4.4)) * 10800.0)


def frac(value: float) -> float:
    """Return the fractional part of *value*, keeping its sign."""

    return math.fmod(value, 1.0)


def is_zero(value: float) -> bool:
    """Return ``True`` for positive or negative zero only.

    Values that are merely close to zero return ``False``, so this is not a
    tolerance check for calculation results.
    """

    return value == 0.0


def dms(d: float, m: float, s: float) -> float:
    """Convert degrees, minutes and seconds to degrees.

    The sign of *d* is used for the result; the signs of *m* and *s* are
    ignored.
    """

    sign = -1.0 if d < 0 else 1.0
    return sign * ((abs(s) / 60.0 + abs(m)) / 60.0 + abs(d))


def apparent_refraction(ha: float) -> float:
    """Atmospheric refraction for an apparent altitude *ha* (radians).

    Assumes 1010 hPa and 10 °C. Negative altitudes yield ``0.0``.
    """

    if ha < 0.0:
        return 0.0
    if is_zero(ha):
        return REFRACTION_AT_HORIZON
    return math.pi / (math.tan(math.radians(ha + (7.31 / (ha + 4.4)))) * 10800.0)


def refraction(h: float) -> float:
    """Atmospheric refraction for a true altitude *h* (radians).

    Assumes 1010 hPa and 10 °C. Negative altitudes yield ``0.0``.
    """

    if h < 0.0:
        return 0.0
    return 0.000296706 / math.tan(h + 0.00312537 / (h + 0.0890118))


def parallax(height: float, distance: float) -> float:
    """Parallax of an object at the horizon, in radians.

    Parameters
    ----------
    height:
        Observer height above sea level in meters. Must not be negative.
    distance:
        Distance of the object in kilometers.
    """

    return math.asin(EARTH_MEAN_RADIUS_KM / distance) - math.acos(
        EARTH_MEAN_RADIUS_KM / (EARTH_MEAN_RADIUS_KM + (height / 1000.0))
    )


def equatorial_to_horizontal(tau: float, dec: float, dist: float, lat: float) -> SpaceVector:
    """Convert hour angle *tau* and declination *dec* to horizontal coordinates."""

    return RotationMatrix.rotate_y(math.pi / 2.0 - lat) @ SpaceVector.from_polar(tau, dec, dist)


def equatorial_to_ecliptical(moment: "JulianMoment") -> RotationMatrix:
    """Rotation from equatorial to ecliptical coordinates at *moment*."""

    jc = moment.julian_century
    eps = math.radians(23.43929111 - (46.8150 + (0.00059 - 0.001813 * jc) * jc) * jc / 3600.0)
    return RotationMatrix.rotate_x(eps)


def readjust_extremum(
    time: float,
    frame: float,
    depth: int,
    f: Callable[[float], float],
    maximum: bool = True,
) -> float:
    """Locate the true extremum of *f* within ``[time - frame, time + frame]``.

    The interval is bisected exactly *depth* times, evaluating *f* once per
    step and keeping the half whose border holds the better value.
    """

    # A minimum is searched as the maximum of the negated values.
    sign = 1.0 if maximum else -1.0

    left = time - frame
    right = time + frame
    yl = f(left)
    yr = f(right)

    for _ in range(depth):
        middle = (left + right) / 2.0
        ym = f(middle)
        if sign * yl < sign * yr:
            left, yl = middle, ym
        else:
            right, yr = middle, ym

    return right if sign * yl < sign * yr else left


def readjust_max(time: float, frame: float, depth: int, f: Callable[[float], float]) -> float:
    return readjust_extremum(time, frame, depth, f, maximum=True)


def readjust_min(time: float, frame: float, depth: int, f: Callable[[float], float]) -> float:
    return readjust_extremum(time, frame, depth, f, maximum=False)
