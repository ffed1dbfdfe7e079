from __future__ import annotations

import datetime as dt
from pathlib import Path

from metar_alert.adapters.base import RawBulletin


class SampleBulletinAdapter:
    def __init__(self, path: Path) -> None:
        self.path = path

    def fetch_bulletin(self, stations: list[str]) -> RawBulletin:
        text = self.path.read_text(encoding="utf-8")
        if stations:
            wanted = set(stations)
            text = "\n".join(
                line for line in text.split("\n") if line[:4] in wanted or not line.strip()
            )
        return RawBulletin(
            source="SAMPLE",
            text=text,
            fetched_at_utc=dt.datetime.now(dt.timezone.utc).isoformat().replace("+00:00", "Z"),
        )
