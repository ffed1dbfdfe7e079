from __future__ import annotations

import datetime as dt
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from metar_alert.compute.risk_flags import DEFAULT_THRESHOLDS
from metar_alert.schema_validate import validate_stations
from metar_alert.yaml_loader import load_yaml

ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = ROOT / "data"
SAMPLES_DIR = DATA_DIR / "samples"
DEFAULT_CONFIG = DATA_DIR / "stations.yaml"
DEFAULT_BULLETIN_URL = "https://metar.vatsim.net/{ids}"


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    stations: tuple[str, ...]
    bulletin_url: str = DEFAULT_BULLETIN_URL
    webhook_url: str | None = None
    timeout_s: float = 10
    max_age: dt.timedelta = dt.timedelta(hours=2)
    thresholds: dict = field(default_factory=lambda: dict(DEFAULT_THRESHOLDS))

    def require_webhook(self) -> str:
        if not self.webhook_url:
            raise ConfigError("WEBHOOK_URL is not set")
        return self.webhook_url


def _stations_from_env(value: str) -> tuple[str, ...]:
    return tuple(ident.strip().upper() for ident in value.split(",") if ident.strip())


def load_settings(path: Path = DEFAULT_CONFIG, env: dict | None = None) -> Settings:
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = dict(os.environ)

    data = validate_stations(load_yaml(path.read_text(encoding="utf-8")), str(path))

    stations = tuple(str(ident).upper() for ident in data["stations"])
    if env.get("METAR_STATIONS"):
        stations = _stations_from_env(env["METAR_STATIONS"])
    if not stations:
        raise ConfigError("No stations configured")

    thresholds = dict(DEFAULT_THRESHOLDS)
    thresholds.update(data.get("thresholds") or {})

    return Settings(
        stations=stations,
        bulletin_url=data.get("bulletin_url", DEFAULT_BULLETIN_URL),
        webhook_url=env.get("WEBHOOK_URL") or None,
        timeout_s=float(data.get("timeout_s", 10)),
        max_age=dt.timedelta(hours=float(data.get("max_age_hours", 2))),
        thresholds=thresholds,
    )
