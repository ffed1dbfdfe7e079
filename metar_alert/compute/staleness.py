from __future__ import annotations

import datetime as dt

from metar_alert.parsers.metar import ReportTime

MAX_AGE = dt.timedelta(hours=2)


def as_utc(moment: dt.datetime) -> dt.datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=dt.timezone.utc)
    return moment.astimezone(dt.timezone.utc)


def resolve_report_time(report_time: ReportTime, now: dt.datetime) -> dt.datetime | None:
    now = as_utc(now)
    year = now.year
    month = now.month
    # a day later than today belongs to the previous month
    if report_time.day > now.day:
        month = month - 1 if month > 1 else 12
        year = year - 1 if month == 12 else year
    try:
        return dt.datetime(
            year,
            month,
            report_time.day,
            report_time.hour,
            report_time.minute,
            tzinfo=dt.timezone.utc,
        )
    except ValueError:
        return None


def report_age(report_time: ReportTime, now: dt.datetime) -> dt.timedelta | None:
    observed = resolve_report_time(report_time, now)
    if observed is None:
        return None
    return as_utc(now) - observed


def is_stale(report_time: ReportTime, now: dt.datetime, max_age: dt.timedelta = MAX_AGE) -> bool:
    age = report_age(report_time, now)
    if age is None:
        return True
    return age > max_age
