"""Main application window."""

import logging
from collections.abc import Sequence
from typing import Final

from PySide6.QtCore import QByteArray, QSettings, Qt, QUrl
from PySide6.QtGui import QCloseEvent, QDesktopServices
from PySide6.QtWidgets import (
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QSplitter,
)

from chrononotes import __version__
from chrononotes.exc import DoesNotExist
from chrononotes.models.note import Note
from chrononotes.models.project import Project, ZoomLevel
from chrononotes.services.repository import NoteRepository, sample_notes
from chrononotes.ui.dialogs import ExportDialog, NewProjectDialog
from chrononotes.ui.menus import MainMenu
from chrononotes.ui.note_editor import NoteEditorPanel
from chrononotes.ui.sidebar import Sidebar
from chrononotes.ui.timeline_panel import TimelinePanel

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window: the sidebar on the left, the timeline in the
    middle and the note editor on the right.

    Args:
        repository: Notes of the active project

    """

    #: Window title
    TITLE: Final[str] = "ChronoNotes"
    #: Main window geometry used when none is saved
    MAIN_WINDOW_GEOMETRY: Final[tuple[int, int, int, int]] = (100, 100, 1400, 800)
    #: QSettings key of the saved window geometry
    GEOMETRY_KEY: Final[str] = "window/geometry"

    def __init__(self, repository: NoteRepository) -> None:
        super().__init__()
        #: Notes of the active project
        self.repository = repository
        #: Main window actions
        self.action_service = MainWindowActions(self)
        self.build()
        self.refresh()

    def _setup_main_window(self) -> None:
        """
        Set up the main window.
        """
        self.setGeometry(*self.MAIN_WINDOW_GEOMETRY)
        geometry = QSettings().value(self.GEOMETRY_KEY)
        if isinstance(geometry, QByteArray):
            self.restoreGeometry(geometry)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.sidebar = Sidebar()
        self.sidebar.new_note_requested.connect(self.action_service.new_note)
        self.sidebar.open_project_requested.connect(
            self.action_service.open_project_folder
        )
        self.sidebar.new_project_requested.connect(self.action_service.new_project)
        self.sidebar.export_requested.connect(self.action_service.export_notes)
        self.sidebar.tag_filter_changed.connect(self.set_tag_filter)
        self.sidebar.zoom_changed.connect(self.set_zoom)
        splitter.addWidget(self.sidebar)

        self.timeline_panel = TimelinePanel()
        self.timeline_panel.note_clicked.connect(self.select_note)
        splitter.addWidget(self.timeline_panel)

        self.note_editor = NoteEditorPanel()
        self.note_editor.note_changed.connect(self.action_service.update_note)
        self.note_editor.delete_requested.connect(self.action_service.delete_note)
        self.note_editor.add_attachments_requested.connect(
            self.action_service.add_attachments
        )
        self.note_editor.open_attachment_requested.connect(
            self.action_service.open_attachment
        )
        self.note_editor.remove_attachment_requested.connect(
            self.action_service.remove_attachment
        )
        splitter.addWidget(self.note_editor)

        splitter.setStretchFactor(1, 1)
        splitter.setStretchFactor(2, 1)
        self.setCentralWidget(splitter)
        self.show_message("Ready")

    def _setup_main_menu(self) -> None:
        """Set up the main menu."""
        self.main_menu = MainMenu(self)
        self.main_menu.build()

    def build(self) -> None:
        """
        Build the main window.

        - Setup the main window.
        - Setup the main menu.

        """
        self._setup_main_window()
        self._setup_main_menu()

    # ===============================
    # Display
    # ===============================

    def refresh(self) -> None:
        """
        Redisplay everything from the repository: the window title, the
        sidebar, the timeline and the note editor.
        """
        project = self.repository.project
        self.setWindowTitle(f"{self.TITLE} - {project.label}")
        self.sidebar.set_state(
            project, self.repository.tag_filter, self.repository.zoom
        )
        self.main_menu.view_menu.set_zoom(self.repository.zoom)
        self.refresh_timeline()
        self.note_editor.set_note(self.repository.selected_note)

    def refresh_timeline(self) -> None:
        """Redisplay the timeline."""
        self.timeline_panel.update_groups(
            self.repository.timeline(), self.repository.selected_id
        )

    def show_message(self, message: str, duration: int = 2000) -> None:
        """
        Show a message in the status bar.

        Args:
            message: Message to show

        Keyword Args:
            duration: Duration of the message in milliseconds (default: 2000)

        """
        self.statusBar().showMessage(message, duration)

    def show_warning(self, message: str, title: str = "Warning") -> None:
        """
        Show a warning message.

        Args:
            message: Message to show

        Keyword Args:
            title: Title of the message (default: "Warning")

        """
        QMessageBox.warning(self, title, message)

    def show_error(self, message: str, title: str = "Error") -> None:
        """
        Show an error message.

        Args:
            message: Message to show

        Keyword Args:
            title: Title of the message (default: "Error")

        """
        QMessageBox.warning(self, title, message)

    def show_information(self, message: str, title: str = "Information") -> None:
        """
        Show an information message.

        Args:
            message: Message to show

        Keyword Args:
            title: Title of the message (default: "Information")

        """
        QMessageBox.information(self, title, message)

    def show_about(self) -> None:
        """Show the About box."""
        QMessageBox.about(
            self,
            f"About {self.TITLE}",
            f"<b>{self.TITLE}</b> {__version__}<br><br>"
            "Notes with fuzzy dates, arranged on a timeline.",
        )

    # ===============================
    # View state
    # ===============================

    def select_note(self, note_id: str) -> None:
        """
        Select a note and show it in the editor.

        Args:
            note_id: Note ID

        """
        self.repository.select_note(note_id)
        self.refresh_timeline()
        self.note_editor.set_note(self.repository.selected_note)

    def set_tag_filter(self, tag_filter: str) -> None:
        """
        Filter the timeline by tag.

        Args:
            tag_filter: Filter text

        """
        self.repository.set_tag_filter(tag_filter)
        self.refresh_timeline()

    def set_zoom(self, zoom: ZoomLevel | str) -> None:
        """
        Change the timeline zoom level.

        Args:
            zoom: Zoom level

        """
        self.repository.set_zoom(zoom)
        self.sidebar.set_state(
            self.repository.project, self.repository.tag_filter, self.repository.zoom
        )
        self.main_menu.view_menu.set_zoom(self.repository.zoom)
        self.refresh_timeline()

    def switch_project(self, project: Project, fallback_notes: Sequence[Note]) -> None:
        """
        Make ``project`` the active project and display it.

        Args:
            project: Project to switch to
            fallback_notes: Notes to start with if the project has none saved

        """
        self.repository.switch_project(project, fallback_notes)
        self.refresh()

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        """
        Save the window geometry when the window closes.

        Args:
            event: Close event

        """
        QSettings().setValue(self.GEOMETRY_KEY, self.saveGeometry())
        super().closeEvent(event)


class MainWindowActions:
    """
    Main window actions.  We separate the work from the UI to make the code more
    readable and maintainable.

    Args:
        main_window: Main window instance

    """

    def __init__(self, main_window: MainWindow) -> None:
        """
        Initialize main window actions.
        """
        self.main_window = main_window

    @property
    def repository(self) -> NoteRepository:
        """The main window's repository."""
        return self.main_window.repository

    def new_note(self) -> None:
        """
        Create a note dated today and select it.
        """
        self.repository.create_note()
        self.main_window.refresh()
        self.main_window.note_editor.title_edit.setFocus()
        self.main_window.show_message("Note created")

    def update_note(self, note_id: str, changes: dict) -> None:
        """
        Apply edits from the note editor.

        Args:
            note_id: Note ID
            changes: Changed fields

        """
        self.repository.update_note(note_id, **changes)
        self.main_window.refresh_timeline()

    def delete_note(self, note_id: str) -> None:
        """
        Delete a note after asking the user to confirm.

        Args:
            note_id: Note ID

        """
        note = self.repository.find_note(note_id)
        if note is None:
            return
        reply = QMessageBox.question(
            self.main_window,
            "Delete Note",
            f'Delete "{note.title or "Untitled note"}"? This cannot be undone.',
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        self.repository.delete_note(note_id)
        self.main_window.refresh()
        self.main_window.show_message("Note deleted")

    def add_attachments(self, note_id: str) -> None:
        """
        Ask the user for files and attach them to a note.  Cancelling the
        picker does nothing.

        Args:
            note_id: Note ID

        """
        file_paths, _ = QFileDialog.getOpenFileNames(
            self.main_window, "Attach Files", "", "All Files (*)"
        )
        if not file_paths:
            return
        try:
            self.repository.add_attachments(note_id, file_paths)
        except DoesNotExist as e:
            self.main_window.show_warning(str(e))
            return
        self.main_window.note_editor.set_attachments(self.repository.get_note(note_id))

    def remove_attachment(self, note_id: str, attachment_id: str) -> None:
        """
        Remove an attachment from a note.

        Args:
            note_id: Note ID
            attachment_id: Attachment ID

        """
        try:
            self.repository.remove_attachment(note_id, attachment_id)
        except DoesNotExist as e:
            self.main_window.show_warning(str(e))
            return
        self.main_window.note_editor.set_attachments(self.repository.get_note(note_id))

    def open_attachment(self, note_id: str, attachment_id: str) -> None:
        """
        Open an attachment with the application the desktop associates with it.

        Args:
            note_id: Note ID
            attachment_id: Attachment ID

        """
        note = self.repository.find_note(note_id)
        if note is None:
            return
        attachment = next((a for a in note.attachments if a.id == attachment_id), None)
        if attachment is None:
            return
        if not QDesktopServices.openUrl(QUrl.fromLocalFile(attachment.file_path)):
            logger.error("Could not open attachment %s", attachment.file_path)
            self.main_window.show_error(
                f'Unable to open "{attachment.file_name}".', title="Open Failed"
            )

    def open_project_folder(self) -> None:
        """
        Ask the user for a folder and switch to its project.  Cancelling the
        picker does nothing.
        """
        folder = QFileDialog.getExistingDirectory(
            self.main_window,
            "Open Project Folder",
            self.repository.project.path or "",
        )
        if not folder:
            return
        project = Project.from_path(folder)
        self.main_window.switch_project(project, sample_notes())
        self.main_window.show_message(f"Opened project {project.label}")

    def new_project(self) -> None:
        """
        Show the new project dialog.
        """
        NewProjectDialog(self.main_window).execute()

    def export_notes(self) -> None:
        """
        Show the export dialog.
        """
        ExportDialog(self.main_window).execute()
