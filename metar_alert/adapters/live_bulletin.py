from __future__ import annotations

import datetime as dt
import logging

import requests

from metar_alert.adapters.base import RawBulletin

logger = logging.getLogger(__name__)


class LiveBulletinAdapter:
    def __init__(self, url_template: str, timeout_s: float = 10, session: requests.Session | None = None) -> None:
        self.url_template = url_template
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def fetch_bulletin(self, stations: list[str]) -> RawBulletin:
        url = self.url_template.format(ids=",".join(stations))
        logger.info("Fetching METAR for %d stations", len(stations))
        resp = self.session.get(url, timeout=self.timeout_s)
        resp.raise_for_status()
        logger.debug("Received %d bytes from %s", len(resp.content), url)
        return RawBulletin(
            source="LIVE",
            text=resp.text,
            fetched_at_utc=dt.datetime.now(dt.timezone.utc).isoformat().replace("+00:00", "Z"),
        )
