"""Local key-value storage for the workout list."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol


def default_data_dir() -> Path:
    return Path.home() / ".maplog"


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


def _safe_key(key: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9_-]+", "-", key.strip()).strip("-")
    if not cleaned:
        raise ValueError(f"Invalid storage key {key!r}")
    return cleaned


class FileStorage:
    """Stores each key as ``<base_dir>/<key>.json``."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = base_dir or default_data_dir()

    def path_for(self, key: str) -> Path:
        return self.base_dir / f"{_safe_key(key)}.json"

    def get_item(self, key: str) -> str | None:
        target = self.path_for(key)
        if not target.exists():
            return None
        return target.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        target = self.path_for(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(target)

    def remove_item(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)
