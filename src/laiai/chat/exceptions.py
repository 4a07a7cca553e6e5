from __future__ import annotations

from laiai.commons.exceptions import BaseServiceException


class ChatServiceException(BaseServiceException):
    pass


class ConfigurationError(ChatServiceException):
    """Credential missing. Fatal to the request and never retried."""


class ValidationError(ChatServiceException):
    """Malformed request body."""


class UpstreamError(ChatServiceException):
    """The completion service rejected or failed the request."""


class StreamInterruptedError(ChatServiceException):
    """The completion service failed after bytes were already relayed."""


API_KEY_MISSING = "API Key missing"
