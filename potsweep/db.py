"""
Database setup for stored Monzo credentials.
Uses SQLAlchemy ORM; SQLite by default.
Loads environment variables from a .env file if present.
"""

import os
from typing import Generator

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

# Load environment variables from .env file
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///potsweep.db")

engine = create_engine(DATABASE_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db_session() -> Generator[Session, None, None]:
    """
    Yields a new SQLAlchemy session. Use with context manager for safety.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables that do not exist yet."""
    # models must be imported so their tables are registered on Base
    from potsweep import models  # noqa: F401

    Base.metadata.create_all(engine)
