"""
Custom exceptions shared across layers.

Everything derives from GameError, so the service (and anything above it) can catch a single top-level type.
"""


class GameError(Exception):
    """Base class of all errors raised by the position tracker"""


class InvalidBoardStateError(GameError):
    """A flat state string that cannot describe a board (wrong length / unknown characters)"""


class UnsupportedPieceError(GameError):
    """Move generation or an attack lookup was requested for a piece type that has no movement rule"""


class IllegalMoveError(GameError):
    """The legality gate rejected the move"""


class NotYourTurnError(GameError):
    """Tried to move a piece of the side that is not to move"""


class GameStateError(GameError):
    """The game cannot perform the request in its current state"""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested game"""


class InvalidRequestError(GameError):
    """Request model validation failed (raised from inside the pydantic validators, propagates as is)"""
