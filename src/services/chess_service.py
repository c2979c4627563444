"""Orchestration of communication from API models to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    SelectionResponse,
    SelectSquareRequest,
    StopGameRequest,
)
from src.chess.game import Game
from src.chess.pieces import PieceType as DomainPieceType
from src.chess.square import algebraic_to_index, index_to_algebraic
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color, Status
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for the position tracker."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- Request handling logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Set up a board (standard starting position unless another one is requested)."""

        new_game = Game.new_game(request.starting_position)
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by a frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def select_square(self, request: SelectSquareRequest) -> SelectionResponse:
        """
        A piece is picked up: can it be, and where can it go? (Nothing gets stored.)
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        selectable = game.select(algebraic_to_index(request.square))
        return SelectionResponse(
            game_id=request.game_id,
            square=request.square,
            selectable=selectable,
            destinations=[index_to_algebraic(square) for square in game.destinations],
        )

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves of the side to move."""
        game = Game.from_model(self._fetch_game(request.game_id))
        return LegalMovesResponse(
            game_id=request.game_id,
            color=Color(game.color_to_move.name.lower()),
            legal_moves=[move.to_uci() for move in game.legal_moves()],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """A piece is dropped: make the move if the legality gate accepts it, propagate the error otherwise."""

        game = Game.from_model(self._fetch_game(request.game_id))
        game.make_move(
            from_square=algebraic_to_index(request.from_square),
            to_square=algebraic_to_index(request.to_square),
            piece_type=DomainPieceType[request.piece.name],
        )

        after_move = game.to_model()
        self.repo.update_game(request.game_id, after_move)
        return self._create_game_response(request.game_id, after_move)

    def stop_game(self, request: StopGameRequest) -> GameResponse:
        """Clear the board. The record is kept, but no more moves can be made."""
        game = Game.from_model(self._fetch_game(request.game_id))
        game.stop()

        stopped = game.to_model()
        self.repo.update_game(request.game_id, stopped)
        return self._create_game_response(request.game_id, stopped)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = Game.from_model(model)
        return GameResponse(
            game_id=game_id,
            state=model.current_state,
            placement=game.board.to_placement(),
            starting_state=game.initial_state_string(),
            color_to_move=Color(model.color_to_move),
            move_history=model.moves_uci,
            status=Status(model.status),
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
