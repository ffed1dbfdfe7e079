from __future__ import annotations

from metar_alert.compute.risk_flags import DEFAULT_THRESHOLDS


def _require_keys(item: dict, keys: list[str], label: str) -> None:
    for key in keys:
        if key not in item:
            raise ValueError(f"Missing {key} in {label}")


def validate_stations(data: object, label: str = "stations.yaml") -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {label}")
    _require_keys(data, ["stations"], label)
    if not isinstance(data["stations"], list):
        raise ValueError(f"stations must be a list in {label}")
    for ident in data["stations"]:
        if not isinstance(ident, str) or len(ident) != 4 or not ident.isalnum():
            raise ValueError(f"Bad station identifier {ident!r} in {label}")

    url = data.get("bulletin_url")
    if url is not None and "{ids}" not in str(url):
        raise ValueError(f"bulletin_url must contain {{ids}} in {label}")

    thresholds = data.get("thresholds") or {}
    if not isinstance(thresholds, dict):
        raise ValueError(f"thresholds must be a mapping in {label}")
    for key, value in thresholds.items():
        if key not in DEFAULT_THRESHOLDS:
            raise ValueError(f"Unknown threshold {key} in {label}")
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"Threshold {key} must be an integer in {label}")
    return data
