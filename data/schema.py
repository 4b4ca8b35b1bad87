from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class DBUserPrefs(Base):
    """One row per account: the preference half of the synced snapshot."""

    __tablename__ = "user_prefs"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    subreddits: Mapped[list[str]] = mapped_column(JSON, default=list)
    custom_subs: Mapped[list[str]] = mapped_column(JSON, default=list)
    interests: Mapped[dict[str, int]] = mapped_column(JSON, default=dict)
    settings: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    # reactions / blocked / showLess, only applied by clients that opt in
    extras: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    updated_at: Mapped[datetime] = mapped_column(DateTime)


class DBBookmark(Base):
    __tablename__ = "bookmarks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    item_id: Mapped[str] = mapped_column(String(256))
    position: Mapped[int] = mapped_column(Integer, default=0)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime)

    __table_args__ = (
        Index("ix_bookmarks_user_item", "user_id", "item_id", unique=True),
    )
