"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.chess.square import NUM_SQUARES
from src.core.shared_types import Status


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    current_state: Mapped[str] = mapped_column(String(NUM_SQUARES))
    color_to_move: Mapped[str]
    history_states: Mapped[list[str]] = mapped_column(JSON, default=list)
    moves_uci: Mapped[list[str]] = mapped_column(JSON, default=list)
    status: Mapped[str] = mapped_column(default=Status.IN_PROGRESS.value)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
