from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass
class RawBulletin:
    source: str
    text: str
    fetched_at_utc: str


class BulletinAdapter(Protocol):
    def fetch_bulletin(self, stations: list[str]) -> RawBulletin: ...


class Notifier(Protocol):
    def send(self, message: str) -> None: ...
