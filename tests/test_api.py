from __future__ import annotations

from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from suncalc import __version__


@pytest.fixture(scope="module")
def api_client() -> Iterable[TestClient]:
    from suncalc_api import app

    with TestClient(app) as client:
        yield client


def test_health_endpoint(api_client: TestClient) -> None:
    response = api_client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert payload["version"] == __version__


def test_validation_error(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun/position",
        params={
            "lat": 95,  # invalid latitude
            "lon": 0,
        },
    )
    assert response.status_code == 422
    payload = response.json()
    assert payload["code"] == "validation_error"
    assert payload["ok"] is False


def test_missing_location(api_client: TestClient) -> None:
    response = api_client.get("/moon/times", params={"lat": 50.0})
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_unknown_timezone(api_client: TestClient) -> None:
    response = api_client.get("/moon/illumination", params={"tz": "Mars/Olympus_Mons"})
    assert response.status_code == 422
    assert response.json()["ok"] is False


def test_unknown_twilight(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun/times", params={"lat": 50.938056, "lon": 6.956944, "twilight": "dusk"}
    )
    assert response.status_code == 422


def test_sun_times(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun/times",
        params={
            "lat": 50.938056,
            "lon": 6.956944,
            "time": "2017-08-10T00:00:00",
            "tz": "Europe/Berlin",
            "twilight": "civil",
            "limit_days": 1,
        },
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert payload["twilight"] == "civil"
    assert payload["rise_utc"].startswith("2017-08-10T03:3")
    assert payload["rise_utc"].endswith("Z")
    assert payload["rise_local"].startswith("2017-08-10T05:3")
    assert payload["rise_local"].endswith("+02:00")
    assert payload["set_utc"].startswith("2017-08-10T19:40")
    assert payload["always_up"] is False
    assert payload["always_down"] is False


def test_sun_times_free_angle(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun/times",
        params={
            "lat": 50.938056,
            "lon": 6.956944,
            "time": "2017-08-10T00:00:00Z",
            "angle": -4.0,
            "limit_days": 1,
        },
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["twilight"] == "-4.0"
    assert payload["rise_utc"].startswith("2017-08-10T03:4")


def test_polar_day(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun/times",
        params={"lat": 82.5, "lon": -62.316667, "time": "2017-08-10T00:00:00Z", "limit_days": 1},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["rise_utc"] is None
    assert payload["set_utc"] is None
    assert payload["always_up"] is True


def test_sun_position(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun/position",
        params={
            "lat": 50.938056,
            "lon": 6.956944,
            "time": "2017-07-12T13:37:00",
            "tz": "Europe/Berlin",
        },
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["azimuth"] == pytest.approx(179.6, abs=0.1)
    assert payload["altitude"] == pytest.approx(61.0, abs=0.1)
    assert payload["time"] == "2017-07-12T13:37:00+02:00"


def test_moon_position(api_client: TestClient) -> None:
    response = api_client.get(
        "/moon/position",
        params={
            "lat": 50.938056,
            "lon": 6.956944,
            "time": "2017-07-12T03:51:00+02:00",
        },
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["azimuth"] == pytest.approx(179.9, abs=0.1)
    assert payload["distance_km"] == pytest.approx(394709.0, abs=500.0)


def test_moon_times(api_client: TestClient) -> None:
    response = api_client.get(
        "/moon/times",
        params={"lat": 50.938056, "lon": 6.956944, "time": "2017-07-12T00:00:00Z"},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["rise_utc"].startswith("2017-07-12T21:2")
    assert payload["set_utc"].startswith("2017-07-12T06:5")


def test_moon_phase(api_client: TestClient) -> None:
    response = api_client.get(
        "/moon/phase", params={"time": "2017-09-01T00:00:00Z", "phase": "full_moon"}
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["phase"] == "full_moon"
    assert payload["time_utc"].startswith("2017-09-06T07:0")
    assert payload["is_super_moon"] is False


def test_moon_illumination(api_client: TestClient) -> None:
    response = api_client.get(
        "/moon/illumination",
        params={"time": "2017-07-09T06:06:00", "tz": "Europe/Berlin"},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["fraction"] == pytest.approx(1.0, abs=0.1)
    assert payload["closest_phase"] == "full_moon"


def test_zone_directory_is_rejected(api_client: TestClient) -> None:
    response = api_client.get("/sun/position", params={"lat": 0, "lon": 0, "tz": "America"})
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


@pytest.mark.parametrize("angle", ["nan", "inf"])
def test_non_finite_phase_angle(api_client: TestClient, angle: str) -> None:
    response = api_client.get("/moon/phase", params={"angle": angle})
    assert response.status_code == 422
    assert response.json()["ok"] is False


def test_zero_length_window(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun/times",
        params={
            "lat": 50.938056,
            "lon": 6.956944,
            "time": "2017-08-10T12:00:00Z",
            "limit_days": 0,
        },
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["rise_utc"] is None
    assert payload["set_utc"] is None


def test_no_cors_origins_by_default(api_client: TestClient, monkeypatch) -> None:
    from suncalc_api import cors_origins

    monkeypatch.delenv("SUNCALC_CORS_ORIGINS", raising=False)
    assert cors_origins() == []

    response = api_client.get("/health", headers={"Origin": "https://example.com"})
    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers


def test_cors_origins_from_environment(monkeypatch) -> None:
    from suncalc_api import cors_origins

    monkeypatch.setenv("SUNCALC_CORS_ORIGINS", "https://a.example, ,https://b.example")
    assert cors_origins() == ["https://a.example", "https://b.example"]
