"""UUIDv7 ids: time-ordered, so they also sort by creation."""

from __future__ import annotations

from uuid import UUID

from uuid6 import uuid7  # type: ignore[import-not-found]


def new_id() -> UUID:
    return uuid7()


def new_correlation_token() -> str:
    # Client-minted; never sent to the store as a primary key.
    return str(uuid7())
