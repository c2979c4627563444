"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Optional, Self


class PieceType(IntEnum):
    """Values match the compact encoding: 0 is reserved for an empty square (represented as `None` on the board)."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# Character used for an empty square in the flat notation
EMPTY_CHAR = "0"


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )


def is_piece_char(character: str) -> bool:
    return character.lower() in FEN_TO_PIECE


def piece_from_char(character: str) -> Optional[Piece]:
    """Flat notation cell: '0' is an empty square, otherwise the usual FEN letter"""
    if character == EMPTY_CHAR:
        return None
    return Piece.from_fen(character)


def piece_to_char(piece: Optional[Piece]) -> str:
    return EMPTY_CHAR if piece is None else piece.to_fen()
