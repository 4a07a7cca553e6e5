from __future__ import annotations

from dataclasses import dataclass

from laiai.commons.storage import LocalStorage

SETTINGS_KEY = "lai_ai_settings_v1"


@dataclass
class ClientSettings:
    """User-toggleable client settings, persisted as one namespaced blob."""

    storage: LocalStorage
    show_quote_ticker: bool = True

    @classmethod
    def load(cls, storage: LocalStorage) -> "ClientSettings":
        s = cls(storage=storage)
        data = storage.get_json(SETTINGS_KEY)
        if isinstance(data, dict) and isinstance(data.get("showQuoteTicker"), bool):
            s.show_quote_ticker = data["showQuoteTicker"]
        return s

    def set_show_quote_ticker(self, value: bool) -> None:
        self.show_quote_ticker = bool(value)
        self.save()

    def save(self) -> None:
        self.storage.set_json(SETTINGS_KEY, {"showQuoteTicker": self.show_quote_ticker})
