from contextlib import contextmanager
from typing import Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .schema import Base

_engines: Dict[str, Engine] = {}


def get_engine(sqlite_path: str) -> Engine:
    """Get (and create tables for) the engine bound to a SQLite file."""
    engine = _engines.get(sqlite_path)
    if engine is None:
        engine = create_engine(f"sqlite:///{sqlite_path}", future=True)
        Base.metadata.create_all(engine)
        _engines[sqlite_path] = engine
    return engine


def get_session(sqlite_path: str) -> Session:
    """Get a SQLAlchemy session (caller must close it)."""
    engine = get_engine(sqlite_path)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)()


@contextmanager
def session_context(sqlite_path: str) -> Generator[Session, None, None]:
    """
    Context manager for SQLAlchemy sessions.

    Rolls back on error and always closes the session. Callers commit
    explicitly.

    Usage:
        with session_context(sqlite_path) as session:
            # use session
            session.commit()
    """
    session = get_session(sqlite_path)
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def dispose_engine(sqlite_path: str) -> None:
    """Drop the cached engine for a path, closing pooled connections."""
    engine = _engines.pop(sqlite_path, None)
    if engine is not None:
        engine.dispose()
