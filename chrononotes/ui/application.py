import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from chrononotes import __version__
from chrononotes.db import get_session
from chrononotes.services.backends import DatabaseBackend
from chrononotes.services.project_store import ProjectStore
from chrononotes.services.repository import NoteRepository, sample_notes

from .main_window import MainWindow

#: Organization name used for QSettings
ORGANIZATION_NAME = "ChronoNotes"
#: Application name
APPLICATION_NAME = "ChronoNotes"


def create_application(db_path: Path | None = None) -> tuple[QApplication, MainWindow]:
    """
    Create the application and its main window.

    The current project and its notes are loaded from the state database;
    the demonstration notes are shown if the project has none yet.

    Keyword Args:
        db_path: State database to use instead of the default one

    Returns:
        The application and the (shown) main window

    """
    QCoreApplication.setOrganizationName(ORGANIZATION_NAME)
    QCoreApplication.setApplicationName(APPLICATION_NAME)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationVersion(__version__)
    QGuiApplication.setApplicationDisplayName(APPLICATION_NAME)

    store = ProjectStore(DatabaseBackend(get_session(db_path)))
    repository = NoteRepository.open_current(store, sample_notes())

    window = MainWindow(repository)
    window.show()
    return app, window
