"""
The Board holds the configuration of pieces, one cell per square index (see src/chess/square.py for the indexing).

It is an immutable snapshot: the owner of the authoritative position replaces it with the board returned by `move_piece`.
The board knows how to decode/encode itself in placement notation and flat notation (see src/chess/fen.py).
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.chess.fen import is_valid_flat, placement_field
from src.chess.pieces import (
    Color,
    Piece,
    is_piece_char,
    piece_from_char,
    piece_to_char,
)
from src.chess.square import BOARD_DIMENSIONS, NUM_SQUARES, Square
from src.core.exceptions import InvalidBoardStateError

logger = logging.getLogger(__name__)

Cells = tuple[Optional[Piece], ...]


@dataclass(frozen=True)
class Board:
    cells: Cells

    @classmethod
    def empty(cls) -> Self:
        return cls(tuple([None] * NUM_SQUARES))

    @classmethod
    def from_placement(cls, position: str) -> Self:
        """Construct a board from the placement field of a FEN string (or a complete FEN string: only the first field is read).

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with the rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces. Again, left-to-right reads a1-h1.

        ---
        Parsing is lenient, nothing raises:
        * no placement at all -> empty board
        * more than 8 ranks -> the rest is ignored
        * files running past the h-file are clamped, pieces beyond it are dropped
        * unknown characters take up a file but place nothing
        """
        placement = placement_field(position)
        if not placement:
            logger.debug("No placement found in %r, returning an empty board", position)
            return cls.empty()

        num_files, num_ranks = BOARD_DIMENSIONS
        cells: list[Optional[Piece]] = [None] * NUM_SQUARES
        file = 0
        rank_idx = 0  # FEN is read from the top rank (8th) to the bottom rank (1st)
        for character in placement:
            if character == "/":
                rank_idx += 1
                file = 0
                if rank_idx >= num_ranks:
                    break
                continue

            if character in "12345678":
                # A number denotes the amount of empty squares after each other
                file = min(file + int(character), num_files)
                continue

            if is_piece_char(character) and file < num_files:
                square = Square(file, num_ranks - 1 - rank_idx)
                cells[square.index] = Piece.from_fen(character)

            file = min(file + 1, num_files)
        return cls(tuple(cells))

    def to_placement(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_placement(rank)
            for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_placement(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece(Square(file, rank).index)

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    @classmethod
    def from_flat(cls, flat: str) -> Self:
        """Inverse of `to_flat`. Raises InvalidBoardStateError if the string cannot describe a board."""
        if not is_valid_flat(flat):
            raise InvalidBoardStateError(
                f"Flat state must be {NUM_SQUARES} characters of '0PNBRQKpnbrqk': {flat!r}"
            )
        return cls(tuple(piece_from_char(character) for character in flat))

    def to_flat(self) -> str:
        """One character per square index, starting at a1. '0' for an empty square."""
        return "".join(piece_to_char(piece) for piece in self.cells)

    def piece(self, index: int) -> Optional[Piece]:
        return self.cells[index]

    def is_empty(self, index: int) -> bool:
        return self.cells[index] is None

    def color_at(self, index: int) -> Optional[Color]:
        piece = self.cells[index]
        return piece.color if piece is not None else None

    def occupancy(self, color: Color) -> int:
        """Bitmask of all squares holding a piece of the given color"""
        mask = 0
        for index in self.locate_color(color):
            mask |= 1 << index
        return mask

    def locate_color(self, color: Color) -> list[int]:
        return [
            index
            for index, piece in enumerate(self.cells)
            if piece is not None and piece.color == color
        ]

    def count_pieces(self, color: Color) -> int:
        return len(self.locate_color(color))

    def move_piece(self, from_square: int, to_square: int) -> Self:
        """Return the board after moving whatever stands on `from_square` to `to_square` (capturing anything there)"""
        cells = list(self.cells)
        cells[to_square] = cells[from_square]
        cells[from_square] = None
        return type(self)(tuple(cells))
