from __future__ import annotations

from typing import Any


def parse_scalar(value: str) -> Any:
    value = value.strip()
    if not value:
        return ""
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        return [parse_scalar(part) for part in inner.split(",")] if inner else []
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value


class _Reader:
    def __init__(self, text: str) -> None:
        self.lines: list[tuple[int, str]] = []
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            self.lines.append((len(line) - len(line.lstrip(" ")), stripped))
        self.pos = 0

    def peek(self) -> tuple[int, str] | None:
        return self.lines[self.pos] if self.pos < len(self.lines) else None

    def block(self, indent: int) -> Any:
        head = self.peek()
        if head is None or head[0] < indent:
            return {}
        if head[1].startswith("- "):
            return self.sequence(head[0])
        return self.mapping(head[0])

    def sequence(self, indent: int) -> list:
        items = []
        while (head := self.peek()) and head[0] == indent and head[1].startswith("- "):
            self.pos += 1
            items.append(parse_scalar(head[1][2:]))
        return items

    def mapping(self, indent: int) -> dict:
        result: dict[str, Any] = {}
        while (head := self.peek()) and head[0] == indent and not head[1].startswith("- "):
            if ":" not in head[1]:
                raise ValueError(f"Expected 'key: value' at line {self.pos + 1}: {head[1]!r}")
            key, raw_val = head[1].split(":", 1)
            self.pos += 1
            if raw_val.strip():
                result[key.strip()] = parse_scalar(raw_val)
                continue
            nxt = self.peek()
            # list items may sit at the same indent as their key
            if nxt and (nxt[0] > indent or (nxt[0] == indent and nxt[1].startswith("- "))):
                result[key.strip()] = self.block(nxt[0])
            else:
                result[key.strip()] = None
        return result


def load_yaml(text: str) -> Any:
    reader = _Reader(text)
    parsed = reader.block(0)
    if reader.peek() is not None:
        raise ValueError(f"Unexpected indentation near {reader.peek()[1]!r}")
    return parsed
