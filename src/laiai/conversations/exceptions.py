from __future__ import annotations

from laiai.commons.exceptions import (
    BaseServiceException,
    BaseServiceNotFoundException,
)


class ConversationsServiceException(BaseServiceException):
    pass


class ConversationNotFoundException(BaseServiceNotFoundException):
    pass


CONVERSATION_NOT_FOUND = "conversation_not_found"
MESSAGE_NOT_FOUND = "message_not_found"
