"""User ORM model."""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # No unique constraint: duplicate emails are allowed.
    email: Mapped[str] = mapped_column(String(320), nullable=False)

    # Python-side defaults keep microsecond ordering on SQLite too.
    created_at: Mapped[datetime] = mapped_column(default=_utcnow, nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(default=_utcnow, onupdate=_utcnow, nullable=False)
