"""
Infrastructure — Database connection and session management.
SQLite by default (via SQLModel / SQLAlchemy); DATABASE_URL selects another backend.
"""

import os
from collections.abc import Generator

from sqlmodel import Session, SQLModel, create_engine

from logging_config import get_logger

logger = get_logger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/theme_presets.db")

# SQLite needs check_same_thread=False for multi-threaded access
connect_args = (
    {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)
engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)

logger.info("Database location: %s", DATABASE_URL)


def create_db_and_tables() -> None:
    """Create every SQLModel table that does not exist yet."""
    # Entities must be imported so SQLModel metadata is complete
    import domain.entities  # noqa: F401

    logger.info("Creating tables (if missing)...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables ready.")


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency: yields a DB session and closes it afterwards."""
    with Session(engine) as session:
        yield session
