"""Date helpers: zones, local-day bounds and report periods."""

from datetime import UTC, date, datetime

from taskdesk.shared.utils.datetime import (
    calendar_month,
    ensure_utc,
    friday_week,
    iso_week,
    local_day_bounds,
    resolve_zone,
)


def test_resolve_zone_falls_back_to_default() -> None:
    assert resolve_zone("Europe/Berlin").key == "Europe/Berlin"
    assert resolve_zone("Not/AZone").key == "UTC"
    assert resolve_zone(None, "Africa/Nairobi").key == "Africa/Nairobi"
    assert resolve_zone("", "UTC").key == "UTC"


def test_local_day_bounds_cover_the_whole_day() -> None:
    start, end = local_day_bounds(date(2026, 1, 15), UTC)
    assert start == datetime(2026, 1, 15, 0, 0, tzinfo=UTC)
    assert end == datetime(2026, 1, 15, 23, 59, 59, 999999, tzinfo=UTC)


def test_friday_week_runs_friday_to_thursday() -> None:
    # 2026-04-29 is a Wednesday
    assert friday_week(date(2026, 4, 29)) == (date(2026, 4, 24), date(2026, 4, 30))
    # a Friday starts its own week
    assert friday_week(date(2026, 5, 1)) == (date(2026, 5, 1), date(2026, 5, 7))
    # a Thursday closes the previous one
    assert friday_week(date(2026, 4, 30)) == (date(2026, 4, 24), date(2026, 4, 30))


def test_iso_week_runs_monday_to_sunday() -> None:
    assert iso_week(date(2026, 4, 29)) == (date(2026, 4, 27), date(2026, 5, 3))


def test_calendar_month_handles_december_and_february() -> None:
    assert calendar_month(date(2026, 12, 9)) == (date(2026, 12, 1), date(2026, 12, 31))
    assert calendar_month(date(2028, 2, 10)) == (date(2028, 2, 1), date(2028, 2, 29))


def test_ensure_utc_treats_naive_as_utc() -> None:
    naive = datetime(2026, 1, 1, 12, 0)
    assert ensure_utc(naive) == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    assert ensure_utc(None) is None
