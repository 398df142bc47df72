"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    game_id: Mapped[UUID] = mapped_column(primary_key=True)
    admin_color: Mapped[str] = mapped_column(String(10))
    # "1-0" / "0-1" once finished, NULL while the game is still being played
    result: Mapped[Optional[str]] = mapped_column(String(20))
    created_at: Mapped[datetime] = mapped_column(default=utc_now)


class DBMove(Base):
    __tablename__ = "moves"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.game_id"))
    turn: Mapped[int]
    player: Mapped[str] = mapped_column(String(10))
    move_notation: Mapped[str] = mapped_column(String(10))
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
