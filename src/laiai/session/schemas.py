from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from laiai.commons.ids import new_correlation_token


class SessionState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    SETTLING = "settling"
    ERRORED = "errored"


@dataclass
class Turn:
    """
    One role-tagged message held in memory.

    `id` is the server id, set once the message is durably stored.
    `local_id` is a correlation token minted at creation and used to attach
    that id, so identical texts never get confused.
    """

    role: Literal["user", "model"]
    text: str
    id: str | None = None
    local_id: str = field(default_factory=new_correlation_token)

    def as_history(self) -> dict[str, Any]:
        return {"role": self.role, "parts": [{"text": self.text}]}


@dataclass(frozen=True)
class Attachment:
    name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: str | Path) -> "Attachment":
        p = Path(path)
        mime, _ = mimetypes.guess_type(p.name)
        return cls(name=p.name, mime_type=mime or "application/octet-stream", data=p.read_bytes())

    def as_wire(self) -> dict[str, str]:
        return {
            "name": self.name,
            "mimeType": self.mime_type,
            "data": base64.b64encode(self.data).decode("ascii"),
        }
