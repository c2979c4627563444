"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Squares are indexed 0..63 as `rank * 8 + file`. Rank 0 is White's back rank (rank "1" in algebraic notation), file 0 is the a-file.
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Bitboards below assume it, so this is not meant to be adjusted.
BOARD_DIMENSIONS = (8, 8)
NUM_SQUARES = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_index(cls, index: int) -> Square:
        file_count = BOARD_DIMENSIONS[0]
        return cls(index % file_count, index // file_count)

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        file = ord(sq[0]) - ord("a")
        rank = int(sq[1]) - 1
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{self.rank + 1}"

    @property
    def index(self) -> int:
        return self.rank * BOARD_DIMENSIONS[0] + self.file

    @property
    def square_index(self) -> int:
        """A Square is itself a holder of a square index (see `SquareHolder` in the legality gate)"""
        return self.index

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )


def index_to_algebraic(index: int) -> str:
    return Square.from_index(index).to_algebraic()


def algebraic_to_index(sq: str) -> int:
    return Square.from_algebraic(sq).index
