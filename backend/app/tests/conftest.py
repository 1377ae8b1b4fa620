"""Shared fixtures for the leads test suites."""

import os
import sys
from pathlib import Path

# The database module refuses to import without a URL.
os.environ.setdefault("DATABASE_URL", "sqlite://")

app_dir = Path(__file__).parent.parent
if str(app_dir) not in sys.path:
    sys.path.insert(0, str(app_dir))

from datetime import datetime, timezone  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from src.repositories.interactions.database import Base  # noqa: E402
from src.repositories.interactions.models import leads_model  # noqa: E402,F401


@pytest.fixture()
def now() -> datetime:
    return datetime(2025, 6, 4, 15, 30, tzinfo=timezone.utc)


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
