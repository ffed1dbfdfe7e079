import logging

import pytest
import requests

from metar_alert.adapters.live_bulletin import LiveBulletinAdapter
from metar_alert.adapters.sample_bulletin import SampleBulletinAdapter
from metar_alert.adapters.webhook import LogNotifier, WebhookNotifier


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200) -> None:
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response: FakeResponse) -> None:
        self.response = response
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(("GET", url, None, timeout))
        return self.response

    def post(self, url, json=None, timeout=None):
        self.calls.append(("POST", url, json, timeout))
        return self.response


def test_live_adapter_builds_station_url():
    session = FakeSession(FakeResponse("RJTT 051300Z 34008KT 9999\nRJAA 051300Z 18010KT 9999\n"))
    adapter = LiveBulletinAdapter("https://metar.vatsim.net/{ids}", timeout_s=5, session=session)
    bulletin = adapter.fetch_bulletin(["RJTT", "RJAA"])
    assert session.calls == [("GET", "https://metar.vatsim.net/RJTT,RJAA", None, 5)]
    assert bulletin.source == "LIVE"
    assert bulletin.text.startswith("RJTT")
    assert bulletin.fetched_at_utc.endswith("Z")


def test_live_adapter_raises_on_http_error():
    adapter = LiveBulletinAdapter("https://example.test/{ids}", session=FakeSession(FakeResponse(status_code=503)))
    with pytest.raises(requests.HTTPError):
        adapter.fetch_bulletin(["RJTT"])


def test_sample_adapter_filters_stations(tmp_path):
    path = tmp_path / "bulletin.txt"
    path.write_text("RJTT 051300Z 34008KT 9999\nRJAA 051300Z 18010KT 9999\n", encoding="utf-8")
    bulletin = SampleBulletinAdapter(path).fetch_bulletin(["RJAA"])
    assert bulletin.source == "SAMPLE"
    assert bulletin.text == "RJAA 051300Z 18010KT 9999\n"


def test_sample_adapter_without_station_filter(tmp_path):
    path = tmp_path / "bulletin.txt"
    path.write_text("RJTT 051300Z 34008KT 9999\n", encoding="utf-8")
    assert SampleBulletinAdapter(path).fetch_bulletin([]).text == "RJTT 051300Z 34008KT 9999\n"


def test_webhook_posts_content():
    session = FakeSession(FakeResponse(status_code=204))
    WebhookNotifier("https://hooks.example.test/abc", timeout_s=3, session=session).send("RJAA ...\n")
    assert session.calls == [("POST", "https://hooks.example.test/abc", {"content": "RJAA ...\n"}, 3)]


def test_webhook_skips_empty_payload():
    session = FakeSession(FakeResponse())
    WebhookNotifier("https://hooks.example.test/abc", session=session).send("")
    assert session.calls == []


def test_webhook_raises_on_rejection():
    notifier = WebhookNotifier("https://hooks.example.test/abc", session=FakeSession(FakeResponse(status_code=400)))
    with pytest.raises(requests.HTTPError):
        notifier.send("RJAA ...\n")


def test_log_notifier_records_payload(caplog):
    notifier = LogNotifier()
    with caplog.at_level(logging.INFO):
        notifier.send("RJAA ...\n")
    assert notifier.sent == ["RJAA ...\n"]
    assert "Dry run" in caplog.text
