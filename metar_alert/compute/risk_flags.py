from __future__ import annotations

from collections import defaultdict

from metar_alert.parsers.metar import DecodedReport

STRONG_WIND = "STRONG_WIND"
LOW_VIS = "LOW_VIS"
LOW_CEILING = "LOW_CEILING"

DEFAULT_THRESHOLDS = {
    "wind_kt": 30,
    "gust_kt": 45,
    "low_vis_m": 500,
    "low_ceiling_ft": 200,
    "ceiling_gate_vis_m": 8000,
}


def _thresholds(overrides: dict | None) -> dict:
    merged = dict(DEFAULT_THRESHOLDS)
    if overrides:
        merged.update(overrides)
    return merged


def strong_wind(report: DecodedReport, thresholds: dict) -> bool:
    if report.wind_speed_kt > thresholds["wind_kt"]:
        return True
    return report.wind_gust_kt is not None and report.wind_gust_kt > thresholds["gust_kt"]


def low_visibility(report: DecodedReport, thresholds: dict) -> bool:
    return report.visibility_m < thresholds["low_vis_m"]


def low_ceiling(report: DecodedReport, thresholds: dict) -> bool:
    limit = thresholds["low_ceiling_ft"]
    if report.overcast_ceiling_ft is not None and report.overcast_ceiling_ft <= limit:
        return True
    return report.vertical_visibility_ft is not None and report.vertical_visibility_ft <= limit


def hazard_reason(report: DecodedReport, stale: bool, thresholds: dict | None = None) -> str | None:
    if stale:
        return None
    limits = _thresholds(thresholds)
    if strong_wind(report, limits):
        return STRONG_WIND
    if low_visibility(report, limits):
        return LOW_VIS
    if low_ceiling(report, limits):
        # a low layer with good visibility only counts when it is on the ground
        if report.visibility_m < limits["ceiling_gate_vis_m"] or report.overcast_ceiling_ft == 0:
            return LOW_CEILING
    return None


def is_hazardous(report: DecodedReport, stale: bool, thresholds: dict | None = None) -> bool:
    return hazard_reason(report, stale, thresholds) is not None


def flag_counts(flags: list[str]) -> dict:
    counts = defaultdict(int)
    for flag in flags:
        counts[flag] += 1
    return dict(counts)


def summarize_flags(flags: list[str]) -> str:
    if not flags:
        return "NO_HAZARDS"
    counts = flag_counts(flags)
    return ", ".join(f"{flag}={counts[flag]}" for flag in sorted(counts))
