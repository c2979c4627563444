"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.square import Square
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def board_with_pieces() -> Callable[[dict[str, str]], Board]:
    """Call the inner function with {square name: FEN character}, ex. {"e2": "P", "f3": "p"}. All other squares are empty."""

    def _create_board(pieces: dict[str, str]) -> Board:
        cells = list(Board.empty().cells)
        for square_name, fen_char in pieces.items():
            cells[Square.from_algebraic(square_name).index] = Piece.from_fen(fen_char)
        return Board(tuple(cells))

    return _create_board
