import datetime as dt

from metar_alert.compute.staleness import is_stale, report_age, resolve_report_time
from metar_alert.parsers.metar import ReportTime

UTC = dt.timezone.utc


def test_resolve_same_month():
    now = dt.datetime(2024, 3, 5, 14, 0, tzinfo=UTC)
    result = resolve_report_time(ReportTime(day=5, hour=13, minute=0), now)
    assert result == dt.datetime(2024, 3, 5, 13, 0, tzinfo=UTC)


def test_resolve_previous_day():
    now = dt.datetime(2024, 3, 5, 14, 0, tzinfo=UTC)
    result = resolve_report_time(ReportTime(day=4, hour=20, minute=0), now)
    assert result == dt.datetime(2024, 3, 4, 20, 0, tzinfo=UTC)
    assert is_stale(ReportTime(day=4, hour=20, minute=0), now)


def test_resolve_rolls_back_a_month():
    now = dt.datetime(2024, 3, 1, 5, 0, tzinfo=UTC)
    result = resolve_report_time(ReportTime(day=28, hour=10, minute=0), now)
    assert result == dt.datetime(2024, 2, 28, 10, 0, tzinfo=UTC)


def test_resolve_rolls_back_a_year():
    now = dt.datetime(2025, 1, 1, 0, 30, tzinfo=UTC)
    result = resolve_report_time(ReportTime(day=31, hour=23, minute=50), now)
    assert result == dt.datetime(2024, 12, 31, 23, 50, tzinfo=UTC)
    assert not is_stale(ReportTime(day=31, hour=23, minute=50), now)


def test_resolve_invalid_date_is_none():
    now = dt.datetime(2023, 3, 1, 5, 0, tzinfo=UTC)
    assert resolve_report_time(ReportTime(day=30, hour=10, minute=0), now) is None
    assert report_age(ReportTime(day=30, hour=10, minute=0), now) is None


def test_unresolvable_time_is_stale():
    now = dt.datetime(2023, 3, 1, 5, 0, tzinfo=UTC)
    assert is_stale(ReportTime(day=30, hour=10, minute=0), now)


def test_fresh_report_is_not_stale():
    now = dt.datetime(2024, 3, 5, 14, 0, tzinfo=UTC)
    assert report_age(ReportTime(day=5, hour=13, minute=0), now) == dt.timedelta(hours=1)
    assert not is_stale(ReportTime(day=5, hour=13, minute=0), now)


def test_old_report_is_stale():
    now = dt.datetime(2024, 3, 5, 14, 0, tzinfo=UTC)
    assert is_stale(ReportTime(day=5, hour=10, minute=0), now)


def test_exactly_two_hours_is_not_stale():
    now = dt.datetime(2024, 3, 5, 14, 0, tzinfo=UTC)
    assert not is_stale(ReportTime(day=5, hour=12, minute=0), now)
    assert is_stale(ReportTime(day=5, hour=11, minute=59), now)


def test_custom_max_age():
    now = dt.datetime(2024, 3, 5, 14, 0, tzinfo=UTC)
    report_time = ReportTime(day=5, hour=13, minute=0)
    assert is_stale(report_time, now, max_age=dt.timedelta(minutes=30))


def test_naive_reference_is_treated_as_utc():
    now = dt.datetime(2024, 3, 5, 14, 0)
    assert not is_stale(ReportTime(day=5, hour=13, minute=0), now)
