"""Low-precision position series for the Sun and the Moon.

All angles are in radians and all distances in kilometers. Positions are
returned as :class:`~suncalc.vector.SpaceVector` in polar form: ecliptical
(``*_equatorial`` functions, kept under their historical names), geocentric
equatorial (``*_position``) or horizontal (``*_horizontal``).
"""

from __future__ import annotations

import math

from .extmath import ARCS, PI2, equatorial_to_ecliptical, equatorial_to_horizontal, frac
from .julian import JulianMoment
from .vector import SpaceVector

__all__ = [
    "SUN_DISTANCE_KM",
    "SUN_MEAN_RADIUS_KM",
    "MOON_MEAN_RADIUS_KM",
    "sun_position_equatorial",
    "sun_position",
    "sun_position_horizontal",
    "sun_angular_radius",
    "moon_position_equatorial",
    "moon_position",
    "moon_position_horizontal",
    "moon_angular_radius",
]

SUN_DISTANCE_KM = 149598000.0
SUN_MEAN_RADIUS_KM = 695700.0
MOON_MEAN_RADIUS_KM = 1737.1


def _to_equatorial(moment: JulianMoment, ecliptical: SpaceVector) -> SpaceVector:
    return equatorial_to_ecliptical(moment).transpose() @ ecliptical


def _to_horizontal(moment: JulianMoment, position: SpaceVector, lat: float, lng: float) -> SpaceVector:
    hour_angle = moment.greenwich_mean_sidereal_time() + lng - position.phi
    return equatorial_to_horizontal(hour_angle, position.theta, position.r, lat)


def sun_position_equatorial(moment: JulianMoment) -> SpaceVector:
    """Ecliptic longitude and distance of the Sun."""

    t = moment.julian_century
    m = PI2 * frac(0.993133 + 99.997361 * t)
    l = PI2 * frac(
        0.7859453 + m / PI2 + (6893.0 * math.sin(m) + 72.0 * math.sin(2.0 * m) + 6191.2 * t) / 1296.0e3
    )
    d = SUN_DISTANCE_KM * (1 - 0.016718 * math.cos(moment.true_anomaly()))
    return SpaceVector.from_polar(l, 0.0, d)


def sun_position(moment: JulianMoment) -> SpaceVector:
    """Geocentric equatorial position of the Sun."""

    return _to_equatorial(moment, sun_position_equatorial(moment))


def sun_position_horizontal(moment: JulianMoment, lat: float, lng: float) -> SpaceVector:
    """Horizontal position of the Sun for an observer at *lat*/*lng* (radians)."""

    return _to_horizontal(moment, sun_position(moment), lat, lng)


def sun_angular_radius(distance: float) -> float:
    return math.asin(SUN_MEAN_RADIUS_KM / distance)


def moon_position_equatorial(moment: JulianMoment) -> SpaceVector:
    """Ecliptic longitude, latitude and distance of the Moon."""

    t = moment.julian_century
    l0 = frac(0.606433 + 1336.855225 * t)
    l = PI2 * frac(0.374897 + 1325.552410 * t)
    ls = PI2 * frac(0.993133 + 99.997361 * t)
    d = PI2 * frac(0.827361 + 1236.853086 * t)
    f = PI2 * frac(0.259086 + 1342.227825 * t)
    d2 = 2.0 * d
    l2 = 2.0 * l
    f2 = 2.0 * f

    # Perturbations of the longitude, in arc-seconds.
    dl = (
        22640.0 * math.sin(l)
        - 4586.0 * math.sin(l - d2)
        + 2370.0 * math.sin(d2)
        + 769.0 * math.sin(l2)
        - 668.0 * math.sin(ls)
        - 412.0 * math.sin(f2)
        - 212.0 * math.sin(l2 - d2)
        - 206.0 * math.sin(l + ls - d2)
        + 192.0 * math.sin(l + d2)
        - 165.0 * math.sin(ls - d2)
        - 125.0 * math.sin(d)
        - 110.0 * math.sin(l + ls)
        + 148.0 * math.sin(l - ls)
        - 55.0 * math.sin(f2 - d2)
    )

    s = f + (dl + 412.0 * math.sin(f2) + 541.0 * math.sin(ls)) / ARCS
    h = f - d2
    n = (
        -526.0 * math.sin(h)
        + 44.0 * math.sin(l + h)
        - 31.0 * math.sin(-l + h)
        - 23.0 * math.sin(ls + h)
        + 11.0 * math.sin(-ls + h)
        - 25.0 * math.sin(-l2 + f)
        + 21.0 * math.sin(-l + f)
    )

    l_moon = PI2 * frac(l0 + dl / 1296.0e3)
    b_moon = (18520.0 * math.sin(s) + n) / ARCS

    dt = (
        385000.5584
        - 20905.3550 * math.cos(l)
        - 3699.1109 * math.cos(d2 - l)
        - 2955.9676 * math.cos(d2)
        - 569.9251 * math.cos(l2)
    )
    return SpaceVector.from_polar(l_moon, b_moon, dt)


def moon_position(moment: JulianMoment) -> SpaceVector:
    """Geocentric equatorial position of the Moon."""

    return _to_equatorial(moment, moon_position_equatorial(moment))


def moon_position_horizontal(moment: JulianMoment, lat: float, lng: float) -> SpaceVector:
    """Horizontal position of the Moon for an observer at *lat*/*lng* (radians)."""

    return _to_horizontal(moment, moon_position(moment), lat, lng)


def moon_angular_radius(distance: float) -> float:
    return math.asin(MOON_MEAN_RADIUS_KM / distance)
