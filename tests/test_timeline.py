"""Tests for the weekly grid, streak calculation and time-zone policy."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from src.timeline.builder import build_timeline
from src.timeline.calendar import local_date, log_dates, parse_timestamp, sunday_index
from src.timeline.streak import current_streak
from src.timeline.weekly import build_week, week_start

# 2024-06-02 is a Sunday.
SUNDAY = date(2024, 6, 2)
MONDAY = SUNDAY + timedelta(days=1)
TUESDAY = SUNDAY + timedelta(days=2)
WEDNESDAY = SUNDAY + timedelta(days=3)
SATURDAY = SUNDAY + timedelta(days=6)

CHICAGO = ZoneInfo("America/Chicago")


# -- calendar ------------------------------------------------------------------


def test_sunday_index() -> None:
    assert sunday_index(SUNDAY) == 0
    assert sunday_index(MONDAY) == 1
    assert sunday_index(SATURDAY) == 6


def test_parse_timestamp_naive_is_utc() -> None:
    assert parse_timestamp("2024-06-03T10:00:00") == datetime(2024, 6, 3, 10, tzinfo=UTC)


def test_local_date_uses_zone() -> None:
    # 03:00 UTC on Tuesday is still Monday evening in Chicago
    assert local_date("2024-06-04T03:00:00+00:00", CHICAGO) == MONDAY
    assert local_date("2024-06-04T03:00:00+00:00", ZoneInfo("UTC")) == TUESDAY


def test_log_dates_are_distinct() -> None:
    stamps = [
        datetime(2024, 6, 3, 15, tzinfo=UTC),
        datetime(2024, 6, 3, 18, tzinfo=UTC),
        "2024-06-04T15:00:00+00:00",
    ]
    assert log_dates(stamps, CHICAGO) == {MONDAY, TUESDAY}


# -- build_week ----------------------------------------------------------------


@pytest.mark.parametrize("offset", range(7))
def test_week_always_starts_on_sunday(offset: int) -> None:
    today = SUNDAY + timedelta(days=offset)
    assert week_start(today) == SUNDAY


@pytest.mark.parametrize("today", [SUNDAY, WEDNESDAY, SATURDAY, date(2024, 12, 31)])
def test_week_has_seven_consecutive_days(today: date) -> None:
    week = build_week(set(), today)

    assert len(week) == 7
    assert [day.day_index for day in week] == list(range(7))
    for earlier, later in zip(week, week[1:]):
        assert later.date - earlier.date == timedelta(days=1)
    assert week[0].date <= today <= week[-1].date


def test_week_day_names() -> None:
    week = build_week(set(), WEDNESDAY)
    assert [day.day_name for day in week] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert week[0].date == SUNDAY


def test_week_crosses_month_boundary() -> None:
    week = build_week(set(), date(2024, 7, 2))
    assert week[0].date == date(2024, 6, 30)
    assert week[-1].date == date(2024, 7, 6)


def test_week_marks_logged_days() -> None:
    week = build_week({MONDAY, TUESDAY, WEDNESDAY}, WEDNESDAY)
    assert [day.has_log for day in week] == [False, True, True, True, False, False, False]


def test_week_ignores_dates_outside_week() -> None:
    week = build_week({SUNDAY - timedelta(days=1)}, WEDNESDAY)
    assert not any(day.has_log for day in week)


# -- current_streak ------------------------------------------------------------


def test_streak_no_logs() -> None:
    assert current_streak(set(), WEDNESDAY) == 0


def test_streak_through_today() -> None:
    assert current_streak({MONDAY, TUESDAY, WEDNESDAY}, WEDNESDAY) == 3


def test_streak_today_only() -> None:
    assert current_streak({WEDNESDAY}, WEDNESDAY) == 1


def test_streak_yesterday_only_keeps_full_count() -> None:
    # Grace day: not logged yet today, the run ending yesterday still counts
    assert current_streak({TUESDAY}, WEDNESDAY) == 1


def test_streak_ending_yesterday_counts_every_day() -> None:
    assert current_streak({SUNDAY, MONDAY, TUESDAY}, WEDNESDAY) == 3


def test_streak_broken_after_two_days_without_logs() -> None:
    assert current_streak({SUNDAY, MONDAY}, WEDNESDAY) == 0


def test_streak_stops_at_first_gap() -> None:
    dates = {SUNDAY, TUESDAY, WEDNESDAY}
    assert current_streak(dates, WEDNESDAY) == 2


def test_streak_crosses_week_boundary() -> None:
    dates = {SUNDAY - timedelta(days=n) for n in range(10)} | {MONDAY}
    assert current_streak(dates, MONDAY) == 11


# -- build_timeline ------------------------------------------------------------


def _at(day: date, hour: int = 12) -> datetime:
    return datetime(day.year, day.month, day.day, hour, tzinfo=CHICAGO)


def test_timeline_mon_to_wed() -> None:
    logs = [_at(WEDNESDAY), _at(MONDAY), _at(TUESDAY, 8), _at(TUESDAY, 20)]
    result = build_timeline(logs, now=_at(WEDNESDAY, 18), tz=CHICAGO)

    assert [day.has_log for day in result.weekly_data] == [
        False, True, True, True, False, False, False,
    ]
    assert result.current_streak == 3


def test_timeline_order_independent() -> None:
    logs = [_at(MONDAY), _at(TUESDAY), _at(WEDNESDAY)]
    now = _at(WEDNESDAY, 18)
    assert build_timeline(logs, now=now, tz=CHICAGO) == build_timeline(
        list(reversed(logs)), now=now, tz=CHICAGO
    )


def test_timeline_no_logs() -> None:
    result = build_timeline([], now=_at(WEDNESDAY), tz=CHICAGO)
    assert len(result.weekly_data) == 7
    assert not any(day.has_log for day in result.weekly_data)
    assert result.current_streak == 0


def test_timeline_yesterday_only() -> None:
    result = build_timeline([_at(TUESDAY)], now=_at(WEDNESDAY, 9), tz=CHICAGO)
    assert result.current_streak == 1


def test_timeline_now_converted_to_zone() -> None:
    # 02:00 UTC Thursday is Wednesday evening in Chicago
    now = datetime(2024, 6, 6, 2, tzinfo=UTC)
    result = build_timeline([_at(WEDNESDAY)], now=now, tz=CHICAGO)
    assert result.current_streak == 1
    assert result.weekly_data[3].has_log is True


def test_timeline_accepts_iso_strings() -> None:
    result = build_timeline(
        ["2024-06-05T17:00:00+00:00"], now=_at(WEDNESDAY, 18), tz=CHICAGO
    )
    assert result.current_streak == 1


def test_timeline_response_shape() -> None:
    result = build_timeline([_at(MONDAY)], now=_at(WEDNESDAY), tz=CHICAGO)
    body = result.to_response()

    assert set(body) == {"weeklyData", "currentStreak"}
    assert body["weeklyData"][1] == {
        "dayIndex": 1,
        "date": "2024-06-03",
        "dayName": "Mon",
        "hasLog": True,
    }
    assert body["currentStreak"] == 0
