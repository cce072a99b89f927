"""Sun and Moon positions, event times, phases and illumination."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from . import pegasus
from .definitions import Twilight
from .ephemeris import (
    moon_angular_radius,
    moon_position,
    moon_position_equatorial,
    moon_position_horizontal,
    sun_angular_radius,
    sun_position,
    sun_position_equatorial,
    sun_position_horizontal,
)
from .extmath import (
    PI2,
    apparent_refraction,
    equatorial_to_horizontal,
    parallax,
    readjust_max,
    readjust_min,
    refraction,
)
from .interpolation import QuadraticInterpolation
from .julian import DAYS_PER_CENTURY, JulianMoment
from .params import (
    GeoPosition,
    MoonIlluminationRequest,
    MoonPhaseRequest,
    MoonPositionRequest,
    MoonTimesRequest,
    SunPositionRequest,
    SunTimesRequest,
)
from .results import MoonIllumination, MoonPhase, MoonPosition, MoonTimes, SunPosition, SunTimes

__all__ = [
    "compute_sun_position",
    "compute_moon_position",
    "compute_sun_times",
    "compute_moon_times",
    "compute_moon_phase",
    "compute_moon_illumination",
]

LOGGER = logging.getLogger(__name__)

EXTREMUM_FRAME_HOURS = 2.0
EXTREMUM_DEPTH = 14
SUN_LIGHT_TIME_TAU = 8.32 / (1440.0 * DAYS_PER_CENTURY)  # Light time of the Sun, in centuries.
PHASE_STEP_CENTURIES = 7.0 / DAYS_PER_CENTURY
PHASE_ACCURACY_CENTURIES = (0.5 / 1440.0) / DAYS_PER_CENTURY
MOON_HORIZON_REFRACTION = apparent_refraction(0.0)


@dataclass
class _EventScan:
    """Hour offsets of the events found by :func:`_scan_events`."""

    rise: Optional[float] = None
    set: Optional[float] = None
    noon: Optional[float] = None
    nadir: Optional[float] = None
    always_up: bool = False
    always_down: bool = False
    samples: int = 0


def _azimuth_degrees(phi: float) -> float:
    return math.fmod(math.degrees(phi) + 180.0, 360.0)


def _in_window(hour: float, limit_hours: float) -> bool:
    return 0.0 <= hour < limit_hours


def _scan_events(
    height: Callable[[float], float],
    limit_hours: float,
    extrema: bool,
) -> _EventScan:
    """Step through the window hour by hour and locate height crossings.

    *height* maps an hour offset to the corrected height in radians. When
    *extrema* is set, the first maximum and minimum are recorded as noon and
    nadir candidates as well.
    """

    scan = _EventScan()
    hour = 0.0
    max_hours = math.ceil(limit_hours)

    y_minus = height(hour - 1.0)
    y0 = height(hour)
    y_plus = height(hour + 1.0)
    scan.samples = 3

    if y0 > 0.0:
        scan.always_up = True
    else:
        scan.always_down = True

    while hour <= max_hours:
        qi = QuadraticInterpolation(y_minus, y0, y_plus)
        ye = qi.ye

        if qi.number_of_roots == 1:
            rt = qi.root1 + hour
            if y_minus < 0.0:
                if scan.rise is None and _in_window(rt, limit_hours):
                    scan.rise = rt
                    scan.always_down = False
            elif scan.set is None and _in_window(rt, limit_hours):
                scan.set = rt
                scan.always_up = False
        elif qi.number_of_roots == 2:
            if scan.rise is None:
                rt = hour + (qi.root2 if ye < 0.0 else qi.root1)
                if _in_window(rt, limit_hours):
                    scan.rise = rt
                    scan.always_down = False
            if scan.set is None:
                rt = hour + (qi.root1 if ye < 0.0 else qi.root2)
                if _in_window(rt, limit_hours):
                    scan.set = rt
                    scan.always_up = False

        if extrema and abs(qi.xe) <= 1.0:
            xe_hour = qi.xe + hour
            if xe_hour >= 0.0:
                if qi.is_maximum:
                    if scan.noon is None:
                        scan.noon = xe_hour
                elif scan.nadir is None:
                    scan.nadir = xe_hour

        if scan.rise is not None and scan.set is not None:
            if not extrema or (scan.noon is not None and scan.nadir is not None):
                break

        hour += 1.0
        y_minus = y0
        y0 = y_plus
        y_plus = height(hour + 1.0)
        scan.samples += 1

    return scan


def _twilight_parameters(twilight) -> Tuple[float, Optional[float]]:
    if isinstance(twilight, Twilight):
        return twilight.angle_rad, twilight.position
    return math.radians(twilight), None


def _corrected_sun_height(
    moment: JulianMoment,
    location: GeoPosition,
    angle: float,
    position: Optional[float],
) -> float:
    pos = sun_position_horizontal(moment, location.latitude_rad, location.longitude_rad)

    hc = angle
    if position is None:
        return pos.theta - hc

    hc -= apparent_refraction(hc)
    hc += parallax(location.height, pos.r)
    hc -= position * sun_angular_radius(pos.r)
    return pos.theta - hc


def _corrected_moon_height(moment: JulianMoment, location: GeoPosition) -> float:
    pos = moon_position_horizontal(moment, location.latitude_rad, location.longitude_rad)
    hc = (
        parallax(location.height, pos.r)
        - MOON_HORIZON_REFRACTION
        - moon_angular_radius(pos.r)
    )
    return pos.theta - hc


def compute_sun_position(request: SunPositionRequest) -> SunPosition:
    """Compute the position of the Sun for the request's location and time."""

    moment = request.julian_moment
    location = request.location
    horizontal = sun_position_horizontal(moment, location.latitude_rad, location.longitude_rad)
    h_ref = refraction(horizontal.theta)
    LOGGER.debug(json.dumps({"event": "sun_position", "mjd": moment.mjd}))

    return SunPosition(
        azimuth=_azimuth_degrees(horizontal.phi),
        altitude=math.degrees(horizontal.theta + h_ref),
        true_altitude=math.degrees(horizontal.theta),
        distance=horizontal.r,
    )


def compute_moon_position(request: MoonPositionRequest) -> MoonPosition:
    """Compute the position of the Moon for the request's location and time."""

    moment = request.julian_moment
    phi = request.location.latitude_rad
    lam = request.location.longitude_rad

    mc = moon_position(moment)
    h = moment.greenwich_mean_sidereal_time() + lam - mc.phi
    horizontal = equatorial_to_horizontal(h, mc.theta, mc.r, phi)
    h_ref = refraction(horizontal.theta)

    pa = math.atan2(math.sin(h), math.tan(phi) * math.cos(mc.theta)) - math.sin(mc.theta) * math.cos(h)
    LOGGER.debug(json.dumps({"event": "moon_position", "mjd": moment.mjd}))

    return MoonPosition(
        azimuth=_azimuth_degrees(horizontal.phi),
        altitude=math.degrees(horizontal.theta + h_ref),
        distance=mc.r,
        parallactic_angle=math.degrees(pa),
    )


def compute_sun_times(request: SunTimesRequest) -> SunTimes:
    """Compute rise, set, noon and nadir of the Sun.

    The search starts at the request's time and covers ``request.limit``
    seconds. Events outside this window are reported as ``None``.
    """

    moment = request.julian_moment
    location = request.location
    angle, position = _twilight_parameters(request.twilight)
    limit_hours = request.limit_hours

    def height(hour: float) -> float:
        return _corrected_sun_height(moment.at_hour(hour), location, angle, position)

    scan = _scan_events(height, limit_hours, extrema=True)

    noon = scan.noon
    if noon is not None:
        noon = readjust_max(noon, EXTREMUM_FRAME_HOURS, EXTREMUM_DEPTH, height)
        if not _in_window(noon, limit_hours):
            noon = None

    nadir = scan.nadir
    if nadir is not None:
        nadir = readjust_min(nadir, EXTREMUM_FRAME_HOURS, EXTREMUM_DEPTH, height)
        if not _in_window(nadir, limit_hours):
            nadir = None

    LOGGER.debug(
        json.dumps(
            {
                "event": "sun_times",
                "twilight": getattr(request.twilight, "name", request.twilight),
                "limit_hours": limit_hours,
                "samples": scan.samples,
            }
        )
    )

    return SunTimes(
        rise=_to_instant(moment, scan.rise),
        set=_to_instant(moment, scan.set),
        noon=_to_instant(moment, noon),
        nadir=_to_instant(moment, nadir),
        always_up=scan.always_up,
        always_down=scan.always_down,
    )


def compute_moon_times(request: MoonTimesRequest) -> MoonTimes:
    """Compute moonrise and moonset within the request's search window."""

    moment = request.julian_moment
    location = request.location

    def height(hour: float) -> float:
        return _corrected_moon_height(moment.at_hour(hour), location)

    scan = _scan_events(height, request.limit_hours, extrema=False)

    LOGGER.debug(
        json.dumps(
            {
                "event": "moon_times",
                "limit_hours": request.limit_hours,
                "samples": scan.samples,
            }
        )
    )

    return MoonTimes(
        rise=_to_instant(moment, scan.rise),
        set=_to_instant(moment, scan.set),
        always_up=scan.always_up,
        always_down=scan.always_down,
    )


def compute_moon_phase(request: MoonPhaseRequest) -> MoonPhase:
    """Find the next time the Moon reaches the requested phase."""

    moment = request.julian_moment
    phase = request.phase_rad

    def phase_angle(t: float) -> float:
        sun = sun_position_equatorial(moment.at_julian_century(t - SUN_LIGHT_TIME_TAU))
        moon = moon_position_equatorial(moment.at_julian_century(t))
        diff = moon.phi - sun.phi - phase
        while diff < 0.0:
            diff += PI2
        return math.fmod(diff + math.pi, PI2) - math.pi

    t0 = moment.julian_century
    t1 = t0 + PHASE_STEP_CENTURIES
    d0 = phase_angle(t0)
    d1 = phase_angle(t1)
    steps = 1

    # Skip the +π/-π wrap, which is a decreasing sign change.
    while d0 * d1 > 0.0 or d1 < d0:
        t0 = t1
        d0 = d1
        t1 += PHASE_STEP_CENTURIES
        d1 = phase_angle(t1)
        steps += 1

    t_phase = pegasus.calculate(t0, t1, PHASE_ACCURACY_CENTURIES, phase_angle)
    found = moment.at_julian_century(t_phase)
    distance = moon_position_equatorial(found).r

    LOGGER.debug(
        json.dumps(
            {
                "event": "moon_phase",
                "phase_deg": math.degrees(phase),
                "bracket_steps": steps,
                "distance_km": distance,
            }
        )
    )

    return MoonPhase(time=found.instant, distance=distance)


def compute_moon_illumination(request: MoonIlluminationRequest) -> MoonIllumination:
    """Compute the illuminated fraction and phase angle of the Moon."""

    moment = request.julian_moment
    s = sun_position(moment)
    m = moon_position(moment)

    cos_elongation = float(np.clip(m.dot(s) / (m.r * s.r), -1.0, 1.0))
    phi = math.pi - math.acos(cos_elongation)
    sun_moon = m.cross(s)
    waning = float(np.sign(sun_moon.theta))
    LOGGER.debug(json.dumps({"event": "moon_illumination", "mjd": moment.mjd}))

    return MoonIllumination(
        fraction=(1.0 + math.cos(phi)) / 2.0,
        phase=math.degrees(phi * waning),
        angle=math.degrees(sun_moon.theta),
    )


def _to_instant(moment: JulianMoment, hour: Optional[float]):
    if hour is None:
        return None
    return moment.at_hour(hour).instant
