from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable

from metar_alert.compute.risk_flags import hazard_reason
from metar_alert.compute.staleness import MAX_AGE, as_utc, is_stale
from metar_alert.parsers.metar import DecodedReport, MalformedReportError, decode_metar, split_bulletin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classified:
    report: DecodedReport
    stale: bool
    reason: str | None

    @property
    def hazardous(self) -> bool:
        return self.reason is not None


def classify_report(
    raw: str,
    now: dt.datetime,
    thresholds: dict | None = None,
    max_age: dt.timedelta = MAX_AGE,
) -> Classified:
    report = decode_metar(raw, now)
    stale = is_stale(report.time, now, max_age)
    return Classified(report=report, stale=stale, reason=hazard_reason(report, stale, thresholds))


def classify_bulletin(
    text: str,
    now: dt.datetime,
    thresholds: dict | None = None,
    max_age: dt.timedelta = MAX_AGE,
) -> list[Classified]:
    now = as_utc(now)
    results: list[Classified] = []
    for line_no, raw in enumerate(split_bulletin(text), start=1):
        if not raw.strip():
            logger.debug("Line %d is blank", line_no)
            continue
        try:
            item = classify_report(raw, now, thresholds, max_age)
        except MalformedReportError as exc:
            logger.warning("Skipping line %d: %s", line_no, exc)
            continue
        if item.stale:
            logger.debug("%s is stale: %s", item.report.station, raw)
        elif item.hazardous:
            logger.info("%s %s: %s", item.report.station, item.reason, item.report)
        results.append(item)
    return results


def aggregate(reports: Iterable[DecodedReport]) -> str:
    return "".join(report.raw_text + "\n" for report in reports)


def build_alert(
    text: str,
    now: dt.datetime,
    thresholds: dict | None = None,
    max_age: dt.timedelta = MAX_AGE,
) -> str:
    classified = classify_bulletin(text, now, thresholds, max_age)
    return aggregate(item.report for item in classified if item.hazardous)
