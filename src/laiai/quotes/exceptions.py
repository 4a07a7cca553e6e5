from __future__ import annotations

from laiai.commons.exceptions import BaseServiceException


class QuotesServiceException(BaseServiceException):
    pass


class QuoteGenerationError(QuotesServiceException):
    """The completion call failed or its output was not a quote object."""
