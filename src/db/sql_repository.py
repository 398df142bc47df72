"""Implementation of (Game)Repository using SQLAlchemy"""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.logging_setup import get_logger
from src.core.models import ActiveGame, GameRecord, MoveRecord
from src.core.shared_types import Color, GameResult
from src.db.schema import DBGame, DBMove

logger = get_logger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def create_game(self, game_id: UUID, admin_color: Color) -> GameRecord:
        """Store a new game, without a result."""
        game_db = DBGame(game_id=game_id, admin_color=str(admin_color))
        self._commit(game_db, action="create_game", game_id=game_id)
        return self._to_game_record(game_db)

    def insert_move(
        self,
        game_id: UUID,
        turn: int,
        move_notation: str,
        player: Color,
        result: Optional[GameResult] = None,
    ) -> MoveRecord:
        """Record a single accepted move. The result of a move that ended the game is stored in the same commit."""
        game_db = self._fetch_game(game_id)
        move_db = DBMove(
            game_id=game_id,
            turn=turn,
            player=str(player),
            move_notation=move_notation,
        )
        records: list[DBGame | DBMove] = [move_db]
        if result is not None:
            game_db.result = str(result)
            records.append(game_db)
        self._commit(*records, action="insert_move", game_id=game_id)
        return self._to_move_record(move_db)

    def finish_game(self, game_id: UUID, result: GameResult) -> GameRecord:
        """Store the final result of a game."""
        game_db = self._fetch_game(game_id)
        game_db.result = str(result)
        self._commit(game_db, action="finish_game", game_id=game_id)
        return self._to_game_record(game_db)

    def get_moves(self, game_id: UUID) -> list[MoveRecord]:
        """All moves of a game, in the order they were made."""
        query = select(DBMove).where(DBMove.game_id == game_id).order_by(DBMove.id)
        return [self._to_move_record(move_db) for move_db in self.db.scalars(query)]

    def get_active_games(self) -> list[ActiveGame]:
        """
        Games without a result.
        ---
        The most recent move of each game (highest id) tells who moved last.
        Games without any move yet are included as well (outer joins).
        """
        latest_move = (
            select(DBMove.game_id, func.max(DBMove.id).label("move_id"))
            .group_by(DBMove.game_id)
            .subquery()
        )
        query = (
            select(DBGame, DBMove.player)
            .outerjoin(latest_move, latest_move.c.game_id == DBGame.game_id)
            .outerjoin(DBMove, DBMove.id == latest_move.c.move_id)
            .where(DBGame.result.is_(None))
            .order_by(DBGame.created_at)
        )
        return [
            ActiveGame(
                game_id=game_db.game_id,
                admin_color=Color(game_db.admin_color),
                created_at=game_db.created_at,
                last_moved=Color(last_player) if last_player else None,
            )
            for game_db, last_player in self.db.execute(query)
        ]

    def game_exists(self, game_id: UUID) -> bool:
        return self.db.get(DBGame, game_id) is not None

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID) -> DBGame:
        game_db = self.db.get(DBGame, game_id)
        if game_db is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_db

    def _commit(self, *records: DBGame | DBMove, action: str, game_id: UUID) -> None:
        """Add + commit, all records or none. On failure the session is rolled back and the error wrapped."""
        try:
            self.db.add_all(records)
            self.db.commit()
            for record in records:
                self.db.refresh(record)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(
                "database_write_failed", action=action, game_id=str(game_id), error=str(exc)
            )
            raise RepositoryError(f"Could not {action.replace('_', ' ')} for {game_id=}") from exc

    def _to_game_record(self, game_db: DBGame) -> GameRecord:
        """Convert SQLAlchemy model to data transfer model."""
        return GameRecord(
            game_id=game_db.game_id,
            admin_color=Color(game_db.admin_color),
            created_at=game_db.created_at,
            result=GameResult(game_db.result) if game_db.result else None,
        )

    def _to_move_record(self, move_db: DBMove) -> MoveRecord:
        return MoveRecord(
            game_id=move_db.game_id,
            turn=move_db.turn,
            move_notation=move_db.move_notation,
            player=Color(move_db.player),
            created_at=move_db.created_at,
        )
