"""
Identity tables.

Both are owned by the external auth provider. This service reads them to
resolve a session token and never writes them.
"""

from __future__ import annotations

import datetime as dt
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import Mapped, mapped_column  # type: ignore[import-not-found]

from laiai.core.db import Base


def _ts(*, nullable: bool = False, server_default: bool = False) -> Mapped:  # type: ignore[type-arg]
    return mapped_column(
        sa.DateTime(timezone=True),
        nullable=nullable,
        server_default=sa.func.now() if server_default else None,
    )


class User(Base):
    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(sa.Uuid(), primary_key=True)
    email: Mapped[str] = mapped_column(sa.Text(), nullable=False, unique=True)
    created_at: Mapped[dt.datetime] = _ts(server_default=True)
    disabled_at: Mapped[dt.datetime | None] = _ts(nullable=True)


class AuthSession(Base):
    __tablename__ = "sessions"

    id: Mapped[UUID] = mapped_column(sa.Uuid(), primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # SHA-256 hex of the opaque token.
    token_hash: Mapped[str] = mapped_column(sa.Text(), nullable=False, unique=True)
    created_at: Mapped[dt.datetime] = _ts(server_default=True)
    expires_at: Mapped[dt.datetime] = _ts()
    revoked_at: Mapped[dt.datetime | None] = _ts(nullable=True)
