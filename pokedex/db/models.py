"""SQLAlchemy ORM models for locally persisted user state."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class FavoriteFlag(Base):
    """Favorite flag for one catalog identity.

    Rows are written on every toggle, so a ``False`` row means "explicitly
    unfavorited" while a missing row means "never toggled".
    """

    __tablename__ = "favorite_flags"

    identity: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


__all__ = ["Base", "FavoriteFlag", "utcnow"]
