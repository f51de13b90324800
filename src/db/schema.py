"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBMatch(Base):
    """
    One row per match. The game itself lives in `snapshot` (the MatchModel minus a few columns pulled out for querying).

    NOTE version is SQLAlchemy's version counter (1 on insert, +1 on every update): a stale flush raises StaleDataError.
    """

    __tablename__ = "matches"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    players: Mapped[list[str]] = mapped_column(JSON)
    status: Mapped[str]
    winner: Mapped[Optional[str]]
    snapshot: Mapped[dict[str, Any]] = mapped_column(JSON)
    version: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)

    __mapper_args__ = {"version_id_col": version}
