"""Unit tests for /src/chess/board.py"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.fen import EMPTY_PLACEMENT, STARTING_FEN, STARTING_PLACEMENT
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import InvalidBoardStateError

STARTING_FLAT = "RNBQKBNR" + "P" * 8 + "0" * 32 + "p" * 8 + "rnbqkbnr"
MIDDLE_GAME_PLACEMENT = "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1"


def square(name: str) -> int:
    return Square.from_algebraic(name).index


# -- CREATION LOGIC ---
def test_creating_board_in_starting_position() -> None:
    """Make sure board position is correctly initialized using the standard opening placement"""
    board = Board.from_placement(STARTING_PLACEMENT)

    back_rank = [
        PieceType.ROOK,
        PieceType.KNIGHT,
        PieceType.BISHOP,
        PieceType.QUEEN,
        PieceType.KING,
        PieceType.BISHOP,
        PieceType.KNIGHT,
        PieceType.ROOK,
    ]
    for file, piece_type in enumerate(back_rank):
        assert board.piece(Square(file, 0).index) == Piece(piece_type, Color.WHITE)
        assert board.piece(Square(file, 7).index) == Piece(piece_type, Color.BLACK)

    # pawns on rank index 1 (white) and 6 (black)
    for file in range(8):
        assert board.piece(Square(file, 1).index) == Piece(PieceType.PAWN, Color.WHITE)
        assert board.piece(Square(file, 6).index) == Piece(PieceType.PAWN, Color.BLACK)

    assert board.count_pieces(Color.WHITE) == 16
    assert board.count_pieces(Color.BLACK) == 16
    assert board.to_flat().count("0") == 32
    assert board.to_flat()[8:16] == "P" * 8
    assert board.to_flat()[48:56] == "p" * 8


def test_full_fen_only_reads_placement() -> None:
    """The remaining FEN fields are accepted but ignored"""
    assert Board.from_placement(STARTING_FEN) == Board.from_placement(STARTING_PLACEMENT)


@pytest.mark.parametrize("position", ["", "   ", "\n"])
def test_no_placement_gives_empty_board(position: str) -> None:
    """Nothing to place is not an error: the board is simply empty"""
    board = Board.from_placement(position)
    assert board == Board.empty()
    assert board.to_flat() == "0" * 64


def test_more_than_eight_ranks_are_truncated() -> None:
    """Parsing stops at the 9th rank"""
    board = Board.from_placement("/".join(["8"] * 8 + ["PPPPPPPP"]))
    assert board == Board.empty()


def test_files_past_h_are_dropped() -> None:
    """Pieces that do not fit on the rank get dropped, the rest of the rank is kept"""
    board = Board.from_placement("PPPPPPPPPP/8/8/8/8/8/8/8")
    assert board.locate_color(Color.WHITE) == list(range(56, 64))

    board = Board.from_placement("8K/8/8/8/8/8/8/k7")
    assert board.locate_color(Color.WHITE) == []
    assert board.piece(square("a1")) == Piece(PieceType.KING, Color.BLACK)


def test_unknown_characters_take_up_a_file() -> None:
    """An unknown character places nothing but still moves on to the next file"""
    board = Board.from_placement("xP6/8/8/8/8/8/8/8")
    assert board.piece(square("a8")) is None
    assert board.piece(square("b8")) == Piece(PieceType.PAWN, Color.WHITE)


def test_short_placement() -> None:
    """Ranks that are not mentioned stay empty"""
    board = Board.from_placement("4k3")
    assert board.locate_color(Color.BLACK) == [square("e8")]
    assert board.count_pieces(Color.WHITE) == 0


# -- ENCODING ---
@pytest.mark.parametrize(
    "placement", [STARTING_PLACEMENT, EMPTY_PLACEMENT, MIDDLE_GAME_PLACEMENT]
)
def test_placement_roundtrip(placement: str) -> None:
    assert Board.from_placement(placement).to_placement() == placement


def test_flat_notation_of_starting_position() -> None:
    """One character per square, starting at a1, '0' for an empty square"""
    board = Board.from_placement(STARTING_PLACEMENT)
    assert board.to_flat() == STARTING_FLAT
    assert Board.from_flat(STARTING_FLAT) == board


@pytest.mark.parametrize(
    "placement",
    [
        STARTING_PLACEMENT,
        EMPTY_PLACEMENT,
        MIDDLE_GAME_PLACEMENT,
        "8/8/8/8/8/5p2/4P3/8",
        "7k/8/8/8/8/8/8/K7",
    ],
)
def test_flat_roundtrip(placement: str) -> None:
    """Decoding the encoded board gives the same board back"""
    board = Board.from_placement(placement)
    flat = board.to_flat()
    assert len(flat) == 64
    assert Board.from_flat(flat) == board
    assert Board.from_flat(flat).to_flat() == flat


@pytest.mark.parametrize("flat", ["0" * 63, STARTING_FLAT + "0", "?" * 64])
def test_invalid_flat_state(flat: str) -> None:
    with pytest.raises(InvalidBoardStateError):
        Board.from_flat(flat)


# -- QUERIES ---
def test_occupancy(board_with_pieces: Callable[[dict[str, str]], Board]) -> None:
    """Bit i is set when square i holds a piece of that color"""
    board = board_with_pieces({"a1": "K", "h8": "k", "e4": "P"})
    assert board.occupancy(Color.WHITE) == (1 << 0) | (1 << 28)
    assert board.occupancy(Color.BLACK) == 1 << 63
    assert board.color_at(square("e4")) == Color.WHITE
    assert board.color_at(square("e5")) is None
    assert board.is_empty(square("e5"))


# -- UPDATES ---
def test_move_piece_returns_new_board() -> None:
    """The original snapshot is left untouched"""
    board = Board.from_placement(STARTING_PLACEMENT)
    after = board.move_piece(square("e2"), square("e4"))

    assert after.piece(square("e4")) == Piece(PieceType.PAWN, Color.WHITE)
    assert after.piece(square("e2")) is None
    assert board.piece(square("e2")) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.piece(square("e4")) is None


def test_move_piece_captures(board_with_pieces: Callable[[dict[str, str]], Board]) -> None:
    """Whatever stood on the target square is gone"""
    board = board_with_pieces({"e2": "P", "f3": "p"})
    after = board.move_piece(square("e2"), square("f3"))
    assert after.locate_color(Color.BLACK) == []
    assert after.locate_color(Color.WHITE) == [square("f3")]
