"""Generate database sessions"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.schema import Base


def build_session_factory(settings: Settings) -> sessionmaker[Session]:
    """Create the engine for the configured database and make sure all tables exist"""
    connect_args = (
        {"check_same_thread": False}
        if settings.database_url.startswith("sqlite")
        else {}
    )
    engine = create_engine(
        settings.database_url, echo=settings.echo_sql, connect_args=connect_args
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
