from __future__ import annotations

import argparse
import datetime as dt
import logging
import sys
from pathlib import Path

import requests

from metar_alert.adapters.base import BulletinAdapter, Notifier
from metar_alert.adapters.live_bulletin import LiveBulletinAdapter
from metar_alert.adapters.sample_bulletin import SampleBulletinAdapter
from metar_alert.adapters.webhook import LogNotifier, WebhookNotifier
from metar_alert.compute.risk_flags import summarize_flags
from metar_alert.compute.staleness import as_utc
from metar_alert.config import DEFAULT_CONFIG, SAMPLES_DIR, ConfigError, Settings, load_settings
from metar_alert.pipeline import aggregate, classify_bulletin

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_adapter(mode: str, settings: Settings) -> BulletinAdapter:
    if mode == "live":
        return LiveBulletinAdapter(settings.bulletin_url, timeout_s=settings.timeout_s)
    return SampleBulletinAdapter(SAMPLES_DIR / "bulletin.txt")


def build_notifier(settings: Settings, dry_run: bool) -> Notifier:
    if dry_run:
        return LogNotifier()
    return WebhookNotifier(settings.require_webhook(), timeout_s=settings.timeout_s)


def run(
    settings: Settings,
    adapter: BulletinAdapter,
    notifier: Notifier,
    now: dt.datetime | None = None,
) -> str:
    now = as_utc(now) if now else dt.datetime.now(dt.timezone.utc)
    bulletin = adapter.fetch_bulletin(list(settings.stations))
    classified = classify_bulletin(bulletin.text, now, settings.thresholds, settings.max_age)

    hazardous = [item for item in classified if item.hazardous]
    stale = sum(1 for item in classified if item.stale)
    logger.info(
        "%s bulletin: %d reports, %d stale, %d hazardous (%s)",
        bulletin.source,
        len(classified),
        stale,
        len(hazardous),
        summarize_flags([item.reason for item in hazardous]),
    )

    payload = aggregate(item.report for item in hazardous)
    notifier.send(payload)
    return payload


def _parse_now(value: str) -> dt.datetime:
    try:
        return as_utc(dt.datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO 8601 time: {value}") from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Forward hazardous METAR reports to a webhook")
    parser.add_argument("--mode", default="live", choices=["sample", "live"], help="Bulletin source")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG, help="Station list and thresholds")
    parser.add_argument("--now", type=_parse_now, default=None, help="Reference time (ISO 8601, UTC)")
    parser.add_argument("--dry-run", action="store_true", help="Log the payload instead of posting it")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)
    try:
        settings = load_settings(args.config)
        notifier = build_notifier(settings, args.dry_run)
    except (ConfigError, ValueError, OSError) as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    try:
        payload = run(settings, build_adapter(args.mode, settings), notifier, args.now)
    except (requests.RequestException, OSError) as exc:
        logger.error("Fetch or delivery failed: %s", exc)
        return 1
    if payload:
        print(payload, end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
