from __future__ import annotations

from laiai.commons.exceptions import BaseCoreException


class ProfileStoreError(BaseCoreException):
    """The profile row could not be written; surfaces as a 5xx."""
