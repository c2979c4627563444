"""
Helpers around the two string encodings of a board.
----

* Placement notation: the first field of a FEN string. Ranks 8 -> 1 separated by slashes, letters for pieces
  (upper case White, lower case Black) and digits for runs of empty squares.
    ex) rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
* Flat notation: exactly 64 characters, one per square index (a1, b1, ..., h1, a2, ..., h8), same letters, '0' for an empty square.
    ex) the starting position reads RNBQKBNR + PPPPPPPP + 32 * '0' + pppppppp + rnbqkbnr

A full FEN string has more fields (side to move, castling rights, en passant square, move counters).
Those are accepted by the placement decoder but never read.
"""

from src.chess.pieces import EMPTY_CHAR, FEN_TO_PIECE
from src.chess.square import BOARD_DIMENSIONS, NUM_SQUARES

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
STARTING_FEN = f"{STARTING_PLACEMENT} w KQkq - 0 1"
EMPTY_PLACEMENT = "/".join(["8"] * BOARD_DIMENSIONS[1])

FLAT_EMPTY = EMPTY_CHAR
FLAT_ALPHABET = frozenset(
    [FLAT_EMPTY]
    + [char.upper() for char in FEN_TO_PIECE]
    + [char.lower() for char in FEN_TO_PIECE]
)


def placement_field(position: str) -> str:
    """The placement is the first whitespace separated token. Returns an empty string if there is nothing to parse."""
    parts = position.split()
    return parts[0] if parts else ""


def is_valid_placement(placement: str) -> bool:
    """
    Strict check of a placement field: 8 ranks, each summing to 8 files, only known piece letters.

    NOTE: `Board.from_placement` is lenient and does not call this. Use it where a caller wants to reject bad input.
    """
    num_files, num_ranks = BOARD_DIMENSIONS
    rank_fens = placement.split("/")
    if len(rank_fens) != num_ranks:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            if character.isdigit():
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False
    return True


def is_valid_flat(flat: str) -> bool:
    """A flat state is exactly one known character per square"""
    return len(flat) == NUM_SQUARES and all(char in FLAT_ALPHABET for char in flat)
