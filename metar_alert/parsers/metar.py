from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)

AUTO_MARKER = "AUTO"
VARIABLE_WIND_LEN = 7
MISSING_WIND = "/////KT"
MISSING_VIS = "////"
UNLIMITED_VIS_M = 9999

CEILING_BANDS = (("OVC000", 0), ("OVC001", 100), ("OVC002", 200), ("OVC003", 300))
VERTICAL_VIS_BANDS = (("VV000", 0), ("VV001", 100), ("VV002", 200), ("VV003", 300))


class MalformedReportError(ValueError):
    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"{reason}: {raw!r}")
        self.raw = raw
        self.reason = reason


@dataclass(frozen=True)
class ReportTime:
    day: int
    hour: int
    minute: int

    @classmethod
    def from_datetime(cls, moment: dt.datetime) -> ReportTime:
        return cls(day=moment.day, hour=moment.hour, minute=moment.minute)


@dataclass(frozen=True)
class MetarTokens:
    station: str
    time: str
    wind: str
    visibility: str
    rest: tuple[str, ...]


@dataclass(frozen=True)
class DecodedReport:
    station: str
    time: ReportTime
    wind_speed_kt: int
    wind_gust_kt: int | None
    visibility_m: int
    overcast_ceiling_ft: int | None
    vertical_visibility_ft: int | None
    raw_text: str


def split_bulletin(text: str) -> Iterator[str]:
    yield from text.split("\n")


def _digits(value: str) -> int | None:
    if not value or not value.isascii() or not value.isdigit():
        return None
    return int(value)


def normalize_tokens(raw: str) -> MetarTokens:
    tokens = raw.split()
    if len(tokens) < 4:
        raise MalformedReportError(raw, f"expected at least 4 groups, got {len(tokens)}")

    # AUTO sits between the time and wind groups
    if tokens[2] == AUTO_MARKER:
        tokens = tokens[:2] + tokens[3:]
        if len(tokens) < 4:
            raise MalformedReportError(raw, "no visibility group after AUTO")

    # dddVddd variable wind direction sits between wind and visibility
    if len(tokens[3]) == VARIABLE_WIND_LEN:
        tokens = tokens[:3] + tokens[4:]
        if len(tokens) < 4:
            raise MalformedReportError(raw, "no visibility group after variable wind")

    return MetarTokens(
        station=tokens[0],
        time=tokens[1],
        wind=tokens[2],
        visibility=tokens[3],
        rest=tuple(tokens[4:]),
    )


def parse_time(token: str, now: dt.datetime) -> ReportTime:
    day = _digits(token[0:2])
    hour = _digits(token[2:4])
    minute = _digits(token[4:6])
    if (
        len(token) < 6
        or day is None
        or hour is None
        or minute is None
        or not 1 <= day <= 31
        or hour > 23
        or minute > 59
    ):
        logger.debug("Unreadable time group %r, using reference time", token)
        return ReportTime.from_datetime(now)
    return ReportTime(day=day, hour=hour, minute=minute)


def parse_wind(token: str) -> tuple[int, int | None]:
    if not token.endswith("KT") or token == MISSING_WIND:
        return 0, None

    speed = _digits(token[3:5])
    if speed is None:
        logger.debug("Unreadable wind speed in %r", token)
        return 0, None

    gust = None
    if token[5:6] == "G":
        gust = _digits(token[6:8])
        if gust is None:
            logger.debug("Unreadable gust in %r", token)
    return speed, gust


def parse_visibility(token: str) -> int:
    if len(token) != 4 or token == MISSING_VIS or token.endswith("SM") or token == "CAVOK":
        return UNLIMITED_VIS_M
    visibility = _digits(token)
    if visibility is None:
        logger.debug("Unreadable visibility %r", token)
        return UNLIMITED_VIS_M
    return visibility


def _first_band(raw: str, bands: tuple[tuple[str, int], ...]) -> int | None:
    for code, height_ft in bands:
        if code in raw:
            return height_ft
    return None


def parse_ceiling(raw: str) -> int | None:
    return _first_band(raw, CEILING_BANDS)


def parse_vertical_visibility(raw: str) -> int | None:
    return _first_band(raw, VERTICAL_VIS_BANDS)


def decode_metar(raw: str, now: dt.datetime) -> DecodedReport:
    tokens = normalize_tokens(raw)
    wind_speed, gust = parse_wind(tokens.wind)
    return DecodedReport(
        station=tokens.station,
        time=parse_time(tokens.time, now),
        wind_speed_kt=wind_speed,
        wind_gust_kt=gust,
        visibility_m=parse_visibility(tokens.visibility),
        overcast_ceiling_ft=parse_ceiling(raw),
        vertical_visibility_ft=parse_vertical_visibility(raw),
        raw_text=raw,
    )
