"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            current_state=game.current_state,
            color_to_move=game.color_to_move,
            history_states=game.history_states,
            moves_uci=game.moves_uci,
            status=game.status,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        logger.info("Stored new game %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_db.current_state = game.current_state
        game_db.color_to_move = game.color_to_move
        # assign copies: JSON columns only notice a new object, not an in-place change
        game_db.history_states = list(game.history_states)
        game_db.moves_uci = list(game.moves_uci)
        game_db.status = game.status
        self.db.commit()
        self.db.refresh(game_db)
        logger.debug("Updated game %s", game_id)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        logger.info("Deleted game %s", game_id)
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            current_state=game_db.current_state,
            color_to_move=game_db.color_to_move,
            history_states=list(game_db.history_states),
            moves_uci=list(game_db.moves_uci),
            status=game_db.status,
        )
