"""Shared pytest fixtures and test helpers for ChronoNotes tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication, QSettings  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from chrononotes.db import create_engine_with_path  # noqa: E402
from chrononotes.models.note import DateType, Note  # noqa: E402
from chrononotes.models.project import Project  # noqa: E402
from chrononotes.services.backends import DatabaseBackend, MemoryBackend  # noqa: E402
from chrononotes.services.project_store import ProjectStore  # noqa: E402
from chrononotes.services.repository import NoteRepository  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for testing PySide6 widgets."""
    QCoreApplication.setOrganizationName("ChronoNotesTests")
    QCoreApplication.setApplicationName("ChronoNotesTests")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def isolated_settings(tmp_path):
    """Point QSettings at a temporary directory."""
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)
    QSettings.setPath(
        QSettings.Format.IniFormat, QSettings.Scope.UserScope, str(tmp_path)
    )
    return tmp_path


@pytest.fixture
def db_session(tmp_path):
    """Create a temporary state database and session for testing."""
    engine = create_engine_with_path(tmp_path / "state.db")
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture
def memory_backend():
    """Create an empty in-memory state backend."""
    return MemoryBackend()


@pytest.fixture
def store(memory_backend):
    """Create a project store over the in-memory backend."""
    return ProjectStore(memory_backend)


@pytest.fixture
def db_store(db_session):
    """Create a project store over the database backend."""
    return ProjectStore(DatabaseBackend(db_session))


@pytest.fixture
def sample_notes():
    """Notes covering each date type, an undated note and some tags."""
    return [
        make_note("n1", title="Trip", date_start="2023-08-15", tags=["Travel"]),
        make_note(
            "n2",
            title="Draft",
            date_type=DateType.APPROX_RANGE,
            date_start="2022-03-01",
            range_margin_days=2,
            tags=["research-draft"],
        ),
        make_note("n3", title="Someday", date_start=None),
        make_note(
            "n4",
            title="Autumn",
            date_type=DateType.BROAD_PERIOD,
            date_start="2023-09-01",
            date_end="2023-11-30",
        ),
    ]


@pytest.fixture
def repository(store, sample_notes):
    """Create a repository for the default project, seeded with sample notes."""
    return NoteRepository(store, Project.default(), fallback_notes=sample_notes)


# Test helper functions (not fixtures, but available for import)


def make_note(note_id, **fields):
    """
    Helper to create a note with defaults.

    Args:
        note_id: Note ID
        **fields: Note fields to override

    Returns:
        The note

    """
    fields.setdefault("date_type", DateType.EXACT)
    return Note(id=note_id, **fields)


@pytest.fixture
def main_window(qapp, isolated_settings, repository):
    """Create a main window on the sample repository."""
    from chrononotes.ui.main_window import MainWindow  # noqa: PLC0415

    window = MainWindow(repository)
    yield window
    window.close()
    window.deleteLater()
