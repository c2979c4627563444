"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    STOPPED = "stopped"


# --- NOTE The domain layer has its own Color and PieceType (src/chess/pieces.py). Same names, as that reads clearly;
# --- the imports show which versions are used in what part of the code


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
