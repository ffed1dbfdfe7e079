from __future__ import annotations

import logging

import requests

logger = logging.getLogger(__name__)


class WebhookNotifier:
    def __init__(self, url: str, timeout_s: float = 10, session: requests.Session | None = None) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def send(self, message: str) -> None:
        if not message:
            logger.info("No hazardous reports, webhook not called")
            return
        resp = self.session.post(self.url, json={"content": message}, timeout=self.timeout_s)
        resp.raise_for_status()
        logger.info("Webhook accepted %d bytes (HTTP %d)", len(message), resp.status_code)


class LogNotifier:
    def __init__(self) -> None:
        self.sent: list[str] = []

    def send(self, message: str) -> None:
        self.sent.append(message)
        logger.info("Dry run, payload not sent:\n%s", message or "(empty)")
