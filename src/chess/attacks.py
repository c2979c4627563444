"""
Precomputed attack tables for the pieces that jump / step: knights and kings.
----

A bitboard is a 64-bit integer with bit `i` set when square index `i` is part of the set (a1 = bit 0, h8 = bit 63).
Moving a single bit by a fixed offset is a shift (+8 is one rank up, +1 is one file to the right).
A shift that crosses the a/h edge wraps onto the other side of the board, so the result is masked with the files the
piece can never land on for that direction.

The tables depend only on the geometry of the board, never on a position. They are built once when this module is imported
and stored as tuples, so every caller reads the same fully built, immutable table.
"""

from typing import Iterator

from src.chess.pieces import PieceType
from src.chess.square import NUM_SQUARES
from src.core.exceptions import UnsupportedPieceError

Bitboard = int

BOARD_MASK: Bitboard = (1 << NUM_SQUARES) - 1
FILE_A: Bitboard = 0x0101010101010101
FILE_B: Bitboard = FILE_A << 1
FILE_G: Bitboard = FILE_A << 6
FILE_H: Bitboard = FILE_A << 7

NOT_FILE_A: Bitboard = BOARD_MASK & ~FILE_A
NOT_FILE_H: Bitboard = BOARD_MASK & ~FILE_H
NOT_FILE_AB: Bitboard = BOARD_MASK & ~(FILE_A | FILE_B)
NOT_FILE_GH: Bitboard = BOARD_MASK & ~(FILE_G | FILE_H)


def square_bit(square: int) -> Bitboard:
    return 1 << square


def iter_squares(mask: Bitboard) -> Iterator[int]:
    """Yield the indices of the set bits, lowest square first"""
    while mask:
        lowest_bit = mask & -mask
        yield lowest_bit.bit_length() - 1
        mask ^= lowest_bit


def knight_mask(square: int) -> Bitboard:
    """Knights jump 2 ranks + 1 file or 1 rank + 2 files. Landing on the a-file (or a/b-files) means we wrapped around from the h-side."""
    bit = square_bit(square)
    mask = (
        ((bit << 17) & NOT_FILE_A)  # up 2, right 1
        | ((bit << 15) & NOT_FILE_H)  # up 2, left 1
        | ((bit << 10) & NOT_FILE_AB)  # up 1, right 2
        | ((bit << 6) & NOT_FILE_GH)  # up 1, left 2
        | ((bit >> 17) & NOT_FILE_H)  # down 2, left 1
        | ((bit >> 15) & NOT_FILE_A)  # down 2, right 1
        | ((bit >> 10) & NOT_FILE_GH)  # down 1, left 2
        | ((bit >> 6) & NOT_FILE_AB)  # down 1, right 2
    )
    return mask & BOARD_MASK


def king_mask(square: int) -> Bitboard:
    """The king steps a single square in any of the 8 directions"""
    bit = square_bit(square)
    mask = (
        (bit << 8)  # up
        | (bit >> 8)  # down
        | ((bit << 1) & NOT_FILE_A)  # right
        | ((bit >> 1) & NOT_FILE_H)  # left
        | ((bit << 9) & NOT_FILE_A)  # up-right
        | ((bit << 7) & NOT_FILE_H)  # up-left
        | ((bit >> 7) & NOT_FILE_A)  # down-right
        | ((bit >> 9) & NOT_FILE_H)  # down-left
    )
    return mask & BOARD_MASK


def build_knight_attacks() -> tuple[Bitboard, ...]:
    return tuple(knight_mask(square) for square in range(NUM_SQUARES))


def build_king_attacks() -> tuple[Bitboard, ...]:
    return tuple(king_mask(square) for square in range(NUM_SQUARES))


KNIGHT_ATTACKS: tuple[Bitboard, ...] = build_knight_attacks()
KING_ATTACKS: tuple[Bitboard, ...] = build_king_attacks()

ATTACK_TABLES: dict[PieceType, tuple[Bitboard, ...]] = {
    PieceType.KNIGHT: KNIGHT_ATTACKS,
    PieceType.KING: KING_ATTACKS,
}


def attacks_for(piece_type: PieceType, square: int) -> Bitboard:
    """Occupancy independent destination mask. Only knights and kings have a table."""
    table = ATTACK_TABLES.get(piece_type)
    if table is None:
        raise UnsupportedPieceError(
            f"No attack table for {piece_type.name.lower()}. Only knights and kings are precomputed."
        )
    return table[square]
