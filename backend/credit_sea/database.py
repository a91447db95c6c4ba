"""
Credit Sea - Database Configuration

One engine per DATABASE_URL. `make_engine` is also used by the test suite
to build its in-memory SQLite engine with the same connection settings.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import DATABASE_URL


def make_engine(url: str, **kwargs):
    """Build an engine for `url`; SQLite connections may cross worker threads."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, echo=False, **kwargs)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Yield a request-scoped session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create the credit_reports table if it does not exist."""
    from .models import db_models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
