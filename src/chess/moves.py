"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the pseudo-legal move set for each piece type.

Pseudo-legal means: consistent with how the piece moves and with what occupies the board. Nobody checks whether the move
leaves your own king attacked, and there is no castling, en passant or promotion.

Only pawns, knights and kings have a movement rule. Bishops, rooks and queens are recognised on the board but have none:
`candidate_moves` raises for them, and `generate_report` lists the squares it had to skip.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.attacks import Bitboard, attacks_for, iter_squares
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import (
    BOARD_DIMENSIONS,
    NUM_SQUARES,
    Square,
    algebraic_to_index,
    index_to_algebraic,
)
from src.core.exceptions import UnsupportedPieceError

logger = logging.getLogger(__name__)


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, index: int) -> Optional[Piece]: ...
    def is_empty(self, index: int) -> bool: ...
    def color_at(self, index: int) -> Optional[Color]: ...
    def occupancy(self, color: Color) -> Bitboard: ...


@dataclass(frozen=True)
class Move:
    """
    basic definition of a move to be made: which piece goes from where to where.

    NOTE: There is no capture flag. A move onto a square held by the opponent is a capture.
    """

    from_square: int
    to_square: int
    piece: PieceType

    @classmethod
    def from_uci(cls, uci: str, piece: PieceType) -> Self:
        """
        Universal Chess Interface: <from_square><to_square>, ex. "e2e4".
        The notation does not say which piece moves, so the caller supplies it.
        """
        return cls(algebraic_to_index(uci[:2]), algebraic_to_index(uci[2:4]), piece)

    def to_uci(self) -> str:
        return f"{index_to_algebraic(self.from_square)}{index_to_algebraic(self.to_square)}"


# White moves UP the board, Black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_START_RANK: dict[Color, int] = {
    Color.WHITE: 1,
    Color.BLACK: BOARD_DIMENSIONS[1] - 2,
}


# --- MOVEMENT RULES ---
def candidate_pawn_moves(square: int, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares in front are empty
    - takes diagonally, but only when an opponent's piece stands there

    Order: push, double push, take towards the a-file, take towards the h-file.
    """
    color = _owner(square, board)
    direction = PAWN_DIRECTION[color]
    start = Square.from_index(square)

    moves: list[Move] = []
    push = Square(start.file, start.rank + direction)
    if push.is_within_bounds() and board.is_empty(push.index):
        moves.append(Move(square, push.index, PieceType.PAWN))

        if start.rank == PAWN_START_RANK[color]:
            double_push = Square(start.file, start.rank + 2 * direction)
            # the square two ranks ahead gets its own check: the single push only says the first one is free
            if double_push.is_within_bounds() and board.is_empty(double_push.index):
                moves.append(Move(square, double_push.index, PieceType.PAWN))

    for df in (-1, 1):
        target = Square(start.file + df, start.rank + direction)
        if not target.is_within_bounds():
            continue
        if board.color_at(target.index) == color.opponent:
            moves.append(Move(square, target.index, PieceType.PAWN))
    return moves


def jumping_moves(square: int, board: Board, piece_type: PieceType) -> list[Move]:
    """
    Knights and kings are never blocked: look up the precomputed destinations and drop the squares your own pieces stand on.
    Squares held by the opponent stay in (those are the captures).
    """
    color = _owner(square, board)
    targets = attacks_for(piece_type, square) & ~board.occupancy(color)
    return [Move(square, to_square, piece_type) for to_square in iter_squares(targets)]


def candidate_knight_moves(square: int, board: Board) -> list[Move]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return jumping_moves(square, board, PieceType.KNIGHT)


def candidate_king_moves(square: int, board: Board) -> list[Move]:
    """The king can move by a single square at the time."""
    return jumping_moves(square, board, PieceType.KING)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[int, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.KING: candidate_king_moves,
}


def is_supported(piece_type: PieceType) -> bool:
    return piece_type in MOVEMENT_RULES


def candidate_moves(square: int, board: Board) -> list[Move]:
    """Moves of the piece on `square`. An empty square has none."""
    piece = board.piece(square)
    if piece is None:
        return []
    if not is_supported(piece.type):
        raise UnsupportedPieceError(
            f"Move generation is not supported for a {piece.type.name.lower()} (on {index_to_algebraic(square)})"
        )
    return MOVEMENT_RULES[piece.type](square, board)


# --- GENERATION FOR A WHOLE SIDE ---
@dataclass(frozen=True)
class GenerationReport:
    """The generated moves + the squares of the pieces that could not generate any because they have no movement rule"""

    moves: tuple[Move, ...]
    unsupported: tuple[int, ...]


def generate_report(board: Board, color: Color) -> GenerationReport:
    """
    Walk the squares a1 -> h8 and collect the moves of every piece of the given color.

    The order is part of the contract: ascending from-square, and per piece the order its movement rule produces.
    """
    moves: list[Move] = []
    unsupported: list[int] = []
    for square in range(NUM_SQUARES):
        piece = board.piece(square)
        if piece is None or piece.color != color:
            continue

        if not is_supported(piece.type):
            unsupported.append(square)
            continue

        moves.extend(MOVEMENT_RULES[piece.type](square, board))

    if unsupported:
        logger.debug(
            "No movement rule for the %s pieces on %s",
            color.name.lower(),
            ", ".join(index_to_algebraic(square) for square in unsupported),
        )
    return GenerationReport(tuple(moves), tuple(unsupported))


def generate(board: Board, color: Color) -> list[Move]:
    """All pseudo-legal moves for the side `color`"""
    return list(generate_report(board, color).moves)


def _owner(square: int, board: Board) -> Color:
    color = board.color_at(square)
    # for the type checker: movement rules are only dispatched for occupied squares
    assert color is not None
    return color
