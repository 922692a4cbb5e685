"""Generate database sessions for the SQL leaderboard backend"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base

logger = logging.getLogger(__name__)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create the engine, make sure all tables exist and return a session factory bound to it."""
    connect_args = (
        {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    )
    engine = create_engine(database_url, connect_args=connect_args)

    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    logger.info("Leaderboard database ready at %s", engine.url)
    return sessionmaker(bind=engine, autoflush=False)
