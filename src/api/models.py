"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.fen import is_valid_placement, placement_field
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PieceType, Status

FlatState = str
SquareName = str


def _is_algebraic_notation(value: str) -> bool:
    """a1 - h8"""
    if len(value) != 2:
        return False
    return value[0] in "abcdefgh" and value[1] in "12345678"


def _validate_square_name(value: str) -> str:
    if not _is_algebraic_notation(value):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_position: Optional[str] = None

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        """The board decoder is lenient, but a client sending a malformed placement most likely made a mistake."""
        if value is None:
            return value

        if not is_valid_placement(placement_field(value)):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a board placement (8 ranks of 8 files, separated by '/')."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class SelectSquareRequest(BaseModel):
    game_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class LegalMovesRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: SquareName
    to_square: SquareName
    piece: PieceType

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class StopGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    state: FlatState
    placement: str
    starting_state: FlatState
    color_to_move: Color
    move_history: list[str]
    status: Status


class SelectionResponse(BaseModel):
    game_id: UUID
    square: SquareName
    selectable: bool
    destinations: list[SquareName]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    color: Color
    legal_moves: list[str]
