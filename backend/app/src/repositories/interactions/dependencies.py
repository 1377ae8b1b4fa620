"""
Database session dependency.

Provides a SQLAlchemy session to the leads routes and closes it once the
request is done.
"""

from src.repositories.interactions.database import SessionLocal
from typing import Generator

from sqlalchemy.orm import Session


def get_db() -> Generator[Session, None, None]:
    """
    Yield a database session and ensure it is closed after use.

    Used as a FastAPI dependency to provide one session per request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
