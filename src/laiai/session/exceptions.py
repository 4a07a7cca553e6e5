"""
Errors surfaced by the session controller.

Each carries a `kind` and a localized, user-facing message. Every one of them
is recoverable: the controller is back to a state that accepts a retry.
"""

from __future__ import annotations

from typing import Literal

from laiai.commons.exceptions import LaiaiError

SessionErrorKind = Literal[
    "timeout", "configuration", "upstream", "interrupted", "cancelled", "busy", "generic"
]

USER_MESSAGES: dict[str, str] = {
    "timeout": "Hngak khawh a rei deuhdeuh. Tivei hnih in i fel law.",
    "configuration": "API key biafelmiam a um. Administrator ah a hriamhnak petu.",
    "generic": "Biafelmiam a um. Tivei na fel bah law.",
}


class SessionError(LaiaiError):
    kind: SessionErrorKind = "generic"

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.kind, USER_MESSAGES["generic"])


class ChatTimeoutError(SessionError):
    kind = "timeout"


class ChatConfigurationError(SessionError):
    kind = "configuration"


class ChatUpstreamError(SessionError):
    kind = "upstream"


class ChatStreamInterruptedError(SessionError):
    kind = "interrupted"


class ChatCancelledError(SessionError):
    kind = "cancelled"


class SessionBusyError(SessionError):
    kind = "busy"
