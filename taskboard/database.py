from typing import Any, Dict

from sqlmodel import SQLModel, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from contextlib import contextmanager

from .config import DATABASE_URL

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task, User  # noqa: F401


def engine_options(url: str) -> Dict[str, Any]:
    """Keyword arguments for ``create_engine`` depending on the backend.

    SQLite connections are shared with FastAPI's threadpool; anything else
    gets a fresh pre-pinged connection per session.
    """
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "poolclass": NullPool}


def build_engine(url: str = DATABASE_URL) -> Engine:
    return create_engine(url, echo=False, **engine_options(url))


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_session():
    """Database session for scripts such as ``create_admin.py``."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_tables(bind: Engine = None):
    """Create the users and tasks tables."""
    SQLModel.metadata.create_all(bind=bind or engine)
