"""
Legality gate: the two-phase protocol a board widget goes through when a piece is dragged.
----

1. Selection (picking the piece up): may this piece be picked up at all? If so, which squares may it go to?
   The destinations are kept on the gate so the widget can highlight them.
2. Commit (dropping the piece): is (from, to, piece type) one of the generated moves?
   Moves are generated again from the board handed in, the result of the selection is not trusted.

    IDLE --select ok--> SELECTED --commit (accepted or not) / deselect--> IDLE

"Not legal" is an ordinary answer here, so both phases return a bool and never raise.
"""

import logging
from enum import Enum, auto
from typing import Optional, Protocol

from src.chess.board import Board
from src.chess.moves import Move, generate
from src.chess.pieces import Color, PieceType
from src.chess.square import NUM_SQUARES, index_to_algebraic

logger = logging.getLogger(__name__)


class SquareHolder(Protocol):
    """Anything that knows which square it stands for (a widget cell, a `Square`, ...)"""

    @property
    def square_index(self) -> int: ...


class GateState(Enum):
    IDLE = auto()
    SELECTED = auto()


def legal_destinations(board: Board, color: Color, square: int) -> list[Move]:
    """The generated moves of `color` that start on `square`, in generation order"""
    return [move for move in generate(board, color) if move.from_square == square]


def _holder_index(holder: Optional[SquareHolder]) -> Optional[int]:
    """None if there is no holder or it points outside of the board"""
    if holder is None:
        return None
    index = holder.square_index
    return index if 0 <= index < NUM_SQUARES else None


class LegalityGate:
    """Keeps the outcome of the last selection. A fresh gate (or one that just committed) is IDLE."""

    def __init__(self) -> None:
        self._state = GateState.IDLE
        self._selected_square: Optional[int] = None
        self._moves: tuple[Move, ...] = ()

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def selected_square(self) -> Optional[int]:
        return self._selected_square

    @property
    def moves(self) -> tuple[Move, ...]:
        return self._moves

    @property
    def destinations(self) -> tuple[int, ...]:
        """Squares to highlight for the selected piece"""
        return tuple(move.to_square for move in self._moves)

    def deselect(self) -> None:
        self._state = GateState.IDLE
        self._selected_square = None
        self._moves = ()

    def can_select(
        self,
        board: Board,
        color: Color,
        holder: Optional[SquareHolder],
        piece_color: Optional[Color],
    ) -> bool:
        """
        Phase 1: may the side `color` pick up the piece (of `piece_color`) standing on `holder`?

        Any earlier selection is dropped first, so a rejected selection leaves no destinations behind.
        Selecting your own piece succeeds even if it has nowhere to go (the destinations are then empty).
        """
        self.deselect()

        square = _holder_index(holder)
        if square is None or piece_color is None:
            logger.debug("Selection rejected: nothing to select")
            return False

        if piece_color != color:
            logger.debug(
                "Selection rejected: %s piece on %s while %s is to move",
                piece_color.name.lower(),
                index_to_algebraic(square),
                color.name.lower(),
            )
            return False

        self._moves = tuple(legal_destinations(board, color, square))
        self._selected_square = square
        self._state = GateState.SELECTED
        logger.debug(
            "Selected %s: %d destination(s)", index_to_algebraic(square), len(self._moves)
        )
        return True

    def can_commit(
        self,
        board: Board,
        color: Color,
        source: Optional[SquareHolder],
        target: Optional[SquareHolder],
        piece_type: PieceType,
    ) -> bool:
        """
        Phase 2: is moving a `piece_type` from `source` to `target` one of the moves generated for `color`?

        The piece type has to match as well. A widget that mislabels the piece gets rejected, even if the squares would be fine.
        Either way the gate returns to IDLE.
        """
        from_square = _holder_index(source)
        to_square = _holder_index(target)
        self.deselect()
        if from_square is None or to_square is None:
            logger.debug("Commit rejected: missing source or target square")
            return False

        candidate = Move(from_square, to_square, piece_type)
        accepted = candidate in generate(board, color)
        logger.debug(
            "Commit %s (%s) for %s: %s",
            candidate.to_uci(),
            piece_type.name.lower(),
            color.name.lower(),
            "accepted" if accepted else "rejected",
        )
        return accepted
