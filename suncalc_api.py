"""FastAPI application exposing Sun and Moon computations."""

from __future__ import annotations

import json
import logging
import os
import time
from datetime import UTC, datetime, tzinfo
from typing import Annotated, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from models import (
    ErrorResponse,
    HealthResponse,
    MoonIlluminationResponse,
    MoonPhaseQueryParams,
    MoonPhaseResponse,
    MoonPositionResponse,
    MoonTimesQueryParams,
    MoonTimesResponse,
    ObserverQueryParams,
    PhaseName,
    SunPositionResponse,
    SunTimesQueryParams,
    SunTimesResponse,
    TimeQueryParams,
)
from suncalc import (
    ONE_DAY,
    GeoPosition,
    MoonIlluminationRequest,
    MoonPhaseRequest,
    MoonPositionRequest,
    MoonTimesRequest,
    SunCalcError,
    SunPositionRequest,
    SunTimesRequest,
    __version__,
    compute_moon_illumination,
    compute_moon_phase,
    compute_moon_position,
    compute_moon_times,
    compute_sun_position,
    compute_sun_times,
)

logging.basicConfig(
    level=os.environ.get("SUNCALC_LOG_LEVEL", "INFO").upper(), format="%(message)s"
)
LOGGER = logging.getLogger("suncalc-api")

APP_DESCRIPTION = "Positions, rise and set times, phases and illumination of the Sun and Moon"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

app = FastAPI(
    title="SunCalc API",
    description=APP_DESCRIPTION,
    version=__version__,
)


def cors_origins() -> list[str]:
    """Origins listed in ``SUNCALC_CORS_ORIGINS``; empty when unset."""
    raw = os.environ.get("SUNCALC_CORS_ORIGINS", "")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


CORS_ORIGINS = cors_origins()
if CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _format_utc(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _format_local(dt: Optional[datetime], zone: tzinfo) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(zone).isoformat()


def _location(params: ObserverQueryParams) -> GeoPosition:
    return GeoPosition(latitude=params.lat, longitude=params.lon, height=params.elev_m)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


def _log_request(event: str, start_time: float, **fields) -> None:
    duration_ms = (time.perf_counter() - start_time) * 1000.0
    LOGGER.info(json.dumps({"event": event, **fields, "duration_ms": round(duration_ms, 3)}))


def _run(compute, request):
    try:
        return compute(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except SunCalcError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True, version=__version__)


@app.get("/sun/position", response_model=SunPositionResponse, responses=ERROR_RESPONSES)
def sun_position_endpoint(
    params: Annotated[ObserverQueryParams, Query()],
) -> SunPositionResponse:
    start_time = time.perf_counter()
    when = params.instant()
    result = _run(
        compute_sun_position, SunPositionRequest(location=_location(params), time=when)
    )
    _log_request("sun_position", start_time, lat=params.lat, lon=params.lon)
    return SunPositionResponse(
        time=when.isoformat(),
        latitude=params.lat,
        longitude=params.lon,
        azimuth=result.azimuth,
        altitude=result.altitude,
        true_altitude=result.true_altitude,
        distance_km=result.distance,
    )


@app.get("/sun/times", response_model=SunTimesResponse, responses=ERROR_RESPONSES)
def sun_times_endpoint(
    params: Annotated[SunTimesQueryParams, Query()],
) -> SunTimesResponse:
    start_time = time.perf_counter()
    twilight = params.twilight.to_twilight() if params.angle is None else params.angle
    request = SunTimesRequest(
        location=_location(params),
        time=params.instant(),
        twilight=twilight,
        limit=params.limit_days * ONE_DAY,
    )
    result = _run(compute_sun_times, request)
    zone = params.zone

    response = SunTimesResponse(
        twilight=params.twilight.value if params.angle is None else str(params.angle),
        rise_utc=_format_utc(result.rise),
        set_utc=_format_utc(result.set),
        noon_utc=_format_utc(result.noon),
        nadir_utc=_format_utc(result.nadir),
        rise_local=_format_local(result.rise, zone),
        set_local=_format_local(result.set, zone),
        noon_local=_format_local(result.noon, zone),
        nadir_local=_format_local(result.nadir, zone),
        always_up=result.always_up,
        always_down=result.always_down,
    )
    _log_request(
        "sun_times",
        start_time,
        lat=params.lat,
        lon=params.lon,
        twilight=response.twilight,
        limit_days=params.limit_days,
    )
    return response


@app.get("/moon/position", response_model=MoonPositionResponse, responses=ERROR_RESPONSES)
def moon_position_endpoint(
    params: Annotated[ObserverQueryParams, Query()],
) -> MoonPositionResponse:
    start_time = time.perf_counter()
    when = params.instant()
    result = _run(
        compute_moon_position, MoonPositionRequest(location=_location(params), time=when)
    )
    _log_request("moon_position", start_time, lat=params.lat, lon=params.lon)
    return MoonPositionResponse(
        time=when.isoformat(),
        latitude=params.lat,
        longitude=params.lon,
        azimuth=result.azimuth,
        altitude=result.altitude,
        distance_km=result.distance,
        parallactic_angle=result.parallactic_angle,
    )


@app.get("/moon/times", response_model=MoonTimesResponse, responses=ERROR_RESPONSES)
def moon_times_endpoint(
    params: Annotated[MoonTimesQueryParams, Query()],
) -> MoonTimesResponse:
    start_time = time.perf_counter()
    request = MoonTimesRequest(
        location=_location(params),
        time=params.instant(),
        limit=params.limit_days * ONE_DAY,
    )
    result = _run(compute_moon_times, request)
    zone = params.zone
    _log_request(
        "moon_times", start_time, lat=params.lat, lon=params.lon, limit_days=params.limit_days
    )
    return MoonTimesResponse(
        rise_utc=_format_utc(result.rise),
        set_utc=_format_utc(result.set),
        rise_local=_format_local(result.rise, zone),
        set_local=_format_local(result.set, zone),
        always_up=result.always_up,
        always_down=result.always_down,
    )


@app.get("/moon/phase", response_model=MoonPhaseResponse, responses=ERROR_RESPONSES)
def moon_phase_endpoint(
    params: Annotated[MoonPhaseQueryParams, Query()],
) -> MoonPhaseResponse:
    start_time = time.perf_counter()
    phase = params.phase.to_phase() if params.angle is None else params.angle
    result = _run(compute_moon_phase, MoonPhaseRequest(time=params.instant(), phase=phase))
    phase_label = params.phase.value if params.angle is None else str(params.angle)
    _log_request("moon_phase", start_time, phase=phase_label)
    return MoonPhaseResponse(
        phase=phase_label,
        time_utc=_format_utc(result.time),
        time_local=_format_local(result.time, params.zone),
        distance_km=result.distance,
        is_super_moon=result.is_super_moon,
        is_micro_moon=result.is_micro_moon,
    )


@app.get(
    "/moon/illumination", response_model=MoonIlluminationResponse, responses=ERROR_RESPONSES
)
def moon_illumination_endpoint(
    params: Annotated[TimeQueryParams, Query()],
) -> MoonIlluminationResponse:
    start_time = time.perf_counter()
    when = params.instant()
    result = _run(compute_moon_illumination, MoonIlluminationRequest(time=when))
    _log_request("moon_illumination", start_time)
    return MoonIlluminationResponse(
        time=when.isoformat(),
        fraction=result.fraction,
        phase=result.phase,
        angle=result.angle,
        closest_phase=PhaseName(result.closest_phase.name),
    )
