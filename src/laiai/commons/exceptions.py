"""
Exception roots.

Everything raised on purpose carries a short `message` (safe to show) and
optional `details` (for logs). Feature exceptions in `<feature>/exceptions.py`
subclass the service or core roots; the API layer maps them to HTTP.
"""

from __future__ import annotations


class LaiaiError(Exception):
    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message} ({self.details})" if self.details else self.message


class BaseServiceException(LaiaiError):
    """Request-level failure: 400 unless a subclass says otherwise."""


class BaseServiceNotFoundException(BaseServiceException):
    pass


class BaseServiceUnProcessableException(BaseServiceException):
    pass


class BaseCoreException(LaiaiError):
    """Infrastructure failure (database): 503."""
