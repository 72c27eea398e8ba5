"""Unit tests for database setup."""

import sys
from pathlib import Path

import pytest
from sqlalchemy import inspect, text

from chrononotes.db import (
    Base,
    create_engine_with_path,
    get_session,
    get_session_factory,
    get_state_db_path,
)


class TestBase:
    """Test cases for Base declarative base."""

    def test_base_has_metadata(self):
        """Test Base has metadata attribute."""
        assert Base.metadata is not None


class TestGetStateDbPath:
    """Test cases for get_state_db_path()."""

    @pytest.fixture(autouse=True)
    def fake_home(self, monkeypatch, tmp_path):
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        return tmp_path

    def test_returns_path_on_darwin(self, monkeypatch, fake_home):
        """Test returns correct path on macOS."""
        monkeypatch.setattr(sys, "platform", "darwin")
        db_path = get_state_db_path()
        assert db_path == fake_home / "Library" / "Application Support" / "ChronoNotes" / "state.db"
        assert db_path.parent.is_dir()

    def test_returns_path_on_linux(self, monkeypatch, fake_home):
        """Test returns correct path on Linux."""
        monkeypatch.setattr(sys, "platform", "linux")
        assert get_state_db_path() == fake_home / ".config" / "ChronoNotes" / "state.db"

    def test_returns_path_on_windows(self, monkeypatch, fake_home):
        """Test returns correct path on Windows."""
        monkeypatch.setattr(sys, "platform", "win32")
        db_path = get_state_db_path()
        assert db_path == fake_home / "AppData" / "Local" / "ChronoNotes" / "state.db"

    def test_unsupported_platform(self, monkeypatch):
        """Test unsupported platforms raise ValueError."""
        monkeypatch.setattr(sys, "platform", "sunos5")
        with pytest.raises(ValueError, match="Unsupported platform"):
            get_state_db_path()


class TestCreateEngineWithPath:
    """Test cases for create_engine_with_path()."""

    def test_creates_file_and_table(self, tmp_path):
        """Test the database file and the state table are created."""
        db_path = tmp_path / "state.db"
        engine = create_engine_with_path(db_path)
        try:
            assert db_path.exists()
            assert "state_entries" in inspect(engine).get_table_names()
        finally:
            engine.dispose()

    def test_uses_wal_journal(self, tmp_path):
        """Test connections use write-ahead logging."""
        engine = create_engine_with_path(tmp_path / "state.db")
        try:
            with engine.connect() as conn:
                mode = conn.execute(text("PRAGMA journal_mode")).scalar()
            assert mode == "wal"
        finally:
            engine.dispose()


class TestGetSession:
    """Test cases for get_session_factory() and get_session()."""

    def test_factory_is_cached_per_path(self, tmp_path):
        """Test the same path reuses one factory."""
        db_path = tmp_path / "cached.db"
        assert get_session_factory(db_path) is get_session_factory(db_path)

    def test_session_is_bound(self, tmp_path):
        """Test sessions are bound to the database at the path."""
        db_path = tmp_path / "bound.db"
        session = get_session(db_path)
        try:
            assert str(db_path) in str(session.get_bind().url)
        finally:
            session.close()
