"""SQLAlchemy database setup for ChronoNotes."""

import sys
from functools import cache
from pathlib import Path
from typing import Any, Final

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

#: The default state database name.
DEFAULT_DB_NAME: Final[str] = "state.db"
#: Application directory name used under the platform configuration folder.
APP_DIR_NAME: Final[str] = "ChronoNotes"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


def get_state_db_path() -> Path:
    """
    Get the path to the state database.

    - On Windows, the database is created in the user's
        ``AppData/Local/ChronoNotes`` directory.
    - On macOS, the database is created in the user's
        ``~/Library/Application Support/ChronoNotes`` directory.
    - On Linux, the database is created in the user's
        ``~/.config/ChronoNotes`` directory.
    - If the platform is not supported, raise a ValueError.

    Returns:
        Path to the database file

    """
    if sys.platform not in ["win32", "darwin", "linux"]:
        msg = f"Unsupported platform: {sys.platform}"
        raise ValueError(msg)
    if sys.platform == "win32":
        db_dir = Path.home() / "AppData" / "Local" / APP_DIR_NAME
    elif sys.platform == "darwin":
        db_dir = Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    else:
        db_dir = Path.home() / ".config" / APP_DIR_NAME
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir / DEFAULT_DB_NAME


def create_engine_with_path(db_path: Path | None = None) -> Engine:
    """
    Create SQLAlchemy engine with proper SQLite settings.

    Args:
        db_path: Optional path to database file. If None, uses default path.

    Returns:
        SQLAlchemy engine

    """
    if db_path is None:
        db_path = get_state_db_path()

    db_path.touch(exist_ok=True)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn: Any, _connection_record: Any) -> None:
        """Set SQLite pragmas on connection."""
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    # The model module registers its table on Base.metadata.
    import chrononotes.models.state  # noqa: F401, PLC0415

    Base.metadata.create_all(engine)
    return engine


@cache
def get_session_factory(db_path: Path | None = None) -> sessionmaker[Session]:
    """
    Get the session factory for a state database, creating the engine once.

    Args:
        db_path: Optional path to database file. If None, uses default path.

    Returns:
        A session factory bound to the database

    """
    engine = create_engine_with_path(db_path)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_session(db_path: Path | None = None) -> Session:
    """
    Open a new session on the state database.

    Args:
        db_path: Optional path to database file. If None, uses default path.

    Returns:
        SQLAlchemy session

    """
    return get_session_factory(db_path)()
