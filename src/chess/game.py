"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the authoritative board, whose turn it is and what has been played, and asks the legality gate before it changes anything.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.chess.board import Board
from src.chess.fen import STARTING_PLACEMENT
from src.chess.gate import LegalityGate
from src.chess.moves import Move, generate
from src.chess.pieces import Color, PieceType
from src.chess.square import NUM_SQUARES, Square, algebraic_to_index
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    InvalidBoardStateError,
    NotYourTurnError,
)
from src.core.models import GameModel

logger = logging.getLogger(__name__)


class Status(Enum):
    IN_PROGRESS = auto()
    STOPPED = auto()


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    color_to_move: Color
    history: list[str]  # flat states, the one before every move that was made
    moves: list[Move]
    status: Status = Status.IN_PROGRESS
    gate: LegalityGate = field(default_factory=LegalityGate, repr=False, compare=False)

    @classmethod
    def new_game(cls, starting_position: Optional[str] = None) -> Self:
        """
        Start from the standard position, or from the placement given (a full FEN string is fine, only the placement is read).
        White always moves first.
        """
        board = Board.from_placement(starting_position or STARTING_PLACEMENT)
        return cls(board=board, color_to_move=Color.WHITE, history=[], moves=[])

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        color_name = model.color_to_move.upper()
        if color_name not in Color.__members__:
            raise GameStateError(
                f"Invalid color to move: {model.color_to_move!r}. \nPick one from {','.join([c.name.lower() for c in Color])}"
            )
        status_name = model.status.replace(" ", "_").upper()
        if status_name not in Status.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([s.name.lower() for s in Status])}"
            )
        if len(model.history_states) != len(model.moves_uci):
            raise GameStateError(
                "Every recorded move needs the state it was played from. "
                f"Got {len(model.moves_uci)} moves and {len(model.history_states)} states."
            )

        board = Board.from_flat(model.current_state)
        # UCI does not say which piece moved: look it up in the state the move was played from
        moves = [
            _replay_move(uci, state)
            for uci, state in zip(model.moves_uci, model.history_states)
        ]
        return cls(
            board=board,
            color_to_move=Color[color_name],
            history=list(model.history_states),
            moves=moves,
            status=Status[status_name],
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            current_state=self.state_string(),
            color_to_move=self.color_to_move.name.lower(),
            history_states=list(self.history),
            moves_uci=[move.to_uci() for move in self.moves],
            status=self.status.name.lower().replace("_", " "),
        )

    def state_string(self) -> str:
        return self.board.to_flat()

    def initial_state_string(self) -> str:
        """Before the first move gets played, the starting state equals the current state. Otherwise it is the first recorded one."""
        return self.history[0] if self.history else self.state_string()

    def legal_moves(self) -> list[Move]:
        """Moves of the side to move (pseudo-legal: no check detection)"""
        self._assert_in_progress()
        return generate(self.board, self.color_to_move)

    def select(self, square: int) -> bool:
        """
        Picking up the piece on `square`.
        ----

        The squares it can go to are available as `destinations` afterwards (empty if the selection was rejected).
        """
        self._assert_in_progress()
        return self.gate.can_select(
            self.board,
            self.color_to_move,
            Square.from_index(square),
            self._color_on(square),
        )

    @property
    def destinations(self) -> tuple[int, ...]:
        return self.gate.destinations

    def deselect(self) -> None:
        self.gate.deselect()

    def make_move(self, from_square: int, to_square: int, piece_type: PieceType) -> Move:
        """
        Attempt to drop a piece
        -----

        1. is the game (still) in progress and is it the turn of the piece's owner?
        2. ask the legality gate (it generates the moves again from the current board)
        3. record the state before the move, update the board and the list of moves
        4. hand the turn to the opponent
        """
        self._assert_in_progress()

        moving_color = self._color_on(from_square)
        if moving_color is not None and moving_color != self.color_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.color_to_move.name.lower()} to make a move first."
            )

        move = Move(from_square, to_square, piece_type)
        if not self.gate.can_commit(
            self.board,
            self.color_to_move,
            Square.from_index(from_square),
            Square.from_index(to_square),
            piece_type,
        ):
            raise IllegalMoveError(f"Move not allowed: {move.to_uci()}")

        self.history.append(self.state_string())
        self.board = self.board.move_piece(from_square, to_square)
        self.moves.append(move)
        self.color_to_move = self.color_to_move.opponent
        logger.info("Played %s, %s to move", move.to_uci(), self.color_to_move.name.lower())
        return move

    def stop(self) -> None:
        """Take all pieces off the board. Nothing can be played afterwards."""
        self.gate.deselect()
        self.board = Board.empty()
        self.status = Status.STOPPED

    def _color_on(self, square: int) -> Optional[Color]:
        """Off the board there is nothing to look up: the gate rejects such a square"""
        if not 0 <= square < NUM_SQUARES:
            return None
        return self.board.color_at(square)

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")


def _replay_move(uci: str, state: str) -> Move:
    """Rebuild a recorded move, taking the piece type from the state it was played from"""
    board = Board.from_flat(state)
    piece = board.piece(algebraic_to_index(uci[:2]))
    if piece is None:
        raise InvalidBoardStateError(
            f"Recorded move {uci} starts on an empty square in state {state!r}"
        )
    return Move.from_uci(uci, piece.type)
