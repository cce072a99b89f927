from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from suncalc.errors import DateError
from suncalc.timeutil import (
    midnight,
    on_date,
    plus_days,
    resolve_timezone,
    today,
    tomorrow,
    with_timezone,
)


def test_resolve_timezone():
    assert resolve_timezone("UTC") is timezone.utc
    assert resolve_timezone("z") is timezone.utc
    assert resolve_timezone("Europe/Berlin") == ZoneInfo("Europe/Berlin")
    zone = ZoneInfo("Asia/Tokyo")
    assert resolve_timezone(zone) is zone
    assert resolve_timezone(None) is not None


def test_unknown_timezone():
    with pytest.raises(DateError):
        resolve_timezone("Mars/Olympus_Mons")
    with pytest.raises(ValueError):
        resolve_timezone("Nowhere/Else")


def test_zone_directory_is_not_a_timezone():
    with pytest.raises(DateError):
        resolve_timezone("America")


def test_on_date():
    when = on_date(2017, 8, 10, tz="Europe/Berlin")
    assert when.timestamp() == 1502316000
    assert on_date(2017, 8, 10).timestamp() == 1502323200
    assert on_date(2017, 8, 10, 13, 37, 5).second == 5


def test_on_date_rejects_invalid_calendar_date():
    with pytest.raises(DateError):
        on_date(2017, 2, 30)


def test_midnight_keeps_zone():
    when = datetime(2017, 8, 10, 17, 45, 12, 500, tzinfo=ZoneInfo("Asia/Tokyo"))
    start = midnight(when)
    assert start == datetime(2017, 8, 10, tzinfo=ZoneInfo("Asia/Tokyo"))
    assert start.tzinfo is when.tzinfo


def test_plus_days_is_elapsed_time():
    zone = ZoneInfo("Europe/Berlin")
    when = datetime(2017, 3, 25, 12, tzinfo=zone)
    later = plus_days(when, 1)
    assert later.timestamp() - when.timestamp() == 86400
    assert later.hour == 13
    assert plus_days(when, -0.5).timestamp() == when.timestamp() - 43200


def test_with_timezone_keeps_instant():
    when = on_date(2017, 8, 10)
    tokyo = with_timezone(when, "Asia/Tokyo")
    assert tokyo == when
    assert tokyo.hour == 9


def test_today_and_tomorrow():
    start = today("UTC")
    assert start.hour == 0 and start.minute == 0
    next_day = tomorrow("UTC")
    assert next_day - start == timedelta(days=1) or next_day - start == timedelta(days=2)
    assert next_day.date() > datetime.now(timezone.utc).date()
