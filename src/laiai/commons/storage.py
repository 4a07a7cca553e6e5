"""
Client-local persisted state.

A tiny key/value store with browser localStorage semantics (string values,
missing key -> None), one JSON document per namespaced key on disk.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from laiai.commons.logging import logger
from laiai.core.settings import settings


@dataclass(frozen=True)
class LocalStorage:
    root: Path

    @classmethod
    def create(cls) -> "LocalStorage":
        return cls(root=Path(settings.LOCAL_STORAGE_DIR).expanduser())

    def _path(self, key: str) -> Path:
        safe = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in key)
        return self.root / f"{safe}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def get_json(self, key: str) -> Any | None:
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            logger.warning("Ignoring unreadable local entry %s: %s", key, exc)
            return None

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, ensure_ascii=False))
