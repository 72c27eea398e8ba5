"""Unit tests for the main window and its actions."""

from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QFileDialog, QLabel, QMessageBox

from chrononotes.models.project import Project, ZoomLevel
from chrononotes.ui.application import create_application
from chrononotes.ui.main_window import MainWindow


def card_ids(window):
    """Get the note IDs of the cards on the timeline."""
    return set(window.timeline_panel.cards)


class TestDisplay:
    """Test cases for what the main window shows."""

    def test_initial_state(self, main_window):
        """Test the window shows the default project and its notes."""
        assert main_window.windowTitle() == "ChronoNotes - Default"
        assert main_window.sidebar.project_label.text() == "Default"
        assert card_ids(main_window) == {"n1", "n2", "n3", "n4"}
        assert main_window.note_editor.stack.currentWidget() is (
            main_window.note_editor.placeholder
        )

    def test_select_note(self, main_window):
        """Test clicking a card shows the note in the editor."""
        main_window.timeline_panel.note_clicked.emit("n2")
        assert main_window.repository.selected_id == "n2"
        assert main_window.note_editor.title_edit.text() == "Draft"

    def test_tag_filter(self, main_window):
        """Test typing a tag filter narrows the timeline."""
        main_window.sidebar.tag_filter_edit.setText("TRAV")
        assert main_window.repository.tag_filter == "TRAV"
        assert card_ids(main_window) == {"n1"}

    def test_zoom_from_sidebar(self, main_window):
        """Test the sidebar zoom choice regroups the timeline and the menu."""
        main_window.sidebar.zoom_combo.setCurrentIndex(1)
        assert main_window.repository.zoom == ZoomLevel.MONTHS
        assert main_window.main_menu.view_menu.zoom_actions[ZoomLevel.MONTHS].isChecked()
        headings = [
            label.text()
            for label in main_window.timeline_panel.findChildren(QLabel)
            if label.text() == "2023-08"
        ]
        assert headings == ["2023-08"]

    def test_zoom_from_menu(self, main_window):
        """Test the View menu zoom choice updates the sidebar."""
        main_window.set_zoom(ZoomLevel.MONTHS)
        main_window.main_menu.view_menu.zoom_actions[ZoomLevel.YEARS].trigger()
        assert main_window.repository.zoom == ZoomLevel.YEARS
        assert main_window.sidebar.zoom_combo.currentData() == "years"

    def test_geometry_saved_on_close(self, main_window):
        """Test closing the window remembers its geometry."""
        main_window.close()
        assert QSettings().value(MainWindow.GEOMETRY_KEY) is not None


class TestNoteActions:
    """Test cases for the note actions."""

    def test_new_note(self, main_window):
        """Test a new note is created, selected and shown."""
        main_window.action_service.new_note()
        note = main_window.repository.selected_note
        assert note is not None
        assert len(main_window.repository.notes) == 5
        assert note.id in main_window.timeline_panel.cards
        assert main_window.note_editor.note is note

    def test_edit_updates_note(self, main_window):
        """Test edits in the editor change the note and its card."""
        main_window.select_note("n1")
        main_window.note_editor.title_edit.textEdited.emit("Trip to Y")
        assert main_window.repository.get_note("n1").title == "Trip to Y"
        card = main_window.timeline_panel.cards["n1"]
        assert "Trip to Y" in [label.text() for label in card.findChildren(QLabel)]

    def test_delete_confirmed(self, main_window, monkeypatch):
        """Test a confirmed delete removes the note."""
        monkeypatch.setattr(
            QMessageBox, "question", lambda *args: QMessageBox.StandardButton.Yes
        )
        main_window.select_note("n1")
        main_window.note_editor.delete_button.click()
        assert main_window.repository.find_note("n1") is None
        assert "n1" not in main_window.timeline_panel.cards
        assert main_window.note_editor.note is None

    def test_delete_declined(self, main_window, monkeypatch):
        """Test declining the confirmation keeps the note."""
        monkeypatch.setattr(
            QMessageBox, "question", lambda *args: QMessageBox.StandardButton.No
        )
        main_window.action_service.delete_note("n1")
        assert main_window.repository.find_note("n1") is not None


class TestAttachmentActions:
    """Test cases for the attachment actions."""

    def test_add_attachments(self, main_window, monkeypatch, tmp_path):
        """Test picked files are attached to the note."""
        path = tmp_path / "map.png"
        path.write_bytes(b"")
        monkeypatch.setattr(
            QFileDialog, "getOpenFileNames", lambda *args: ([str(path)], "")
        )
        main_window.select_note("n1")
        main_window.note_editor.add_attachment_button.click()
        note = main_window.repository.get_note("n1")
        assert [a.file_name for a in note.attachments] == ["map.png"]
        assert main_window.note_editor.attachments_list.count() == 1

    def test_add_attachments_cancelled(self, main_window, monkeypatch):
        """Test cancelling the picker attaches nothing."""
        monkeypatch.setattr(QFileDialog, "getOpenFileNames", lambda *args: ([], ""))
        main_window.action_service.add_attachments("n1")
        assert main_window.repository.get_note("n1").attachments == []

    def test_remove_attachment(self, main_window, tmp_path):
        """Test removing an attachment."""
        (attachment,) = main_window.repository.add_attachments(
            "n1", [str(tmp_path / "a.txt")]
        )
        main_window.select_note("n1")
        main_window.action_service.remove_attachment("n1", attachment.id)
        assert main_window.repository.get_note("n1").attachments == []
        assert main_window.note_editor.attachments_list.count() == 0

    def test_open_failure_reported(self, main_window, monkeypatch, tmp_path):
        """Test a file that cannot be opened is reported."""
        (attachment,) = main_window.repository.add_attachments(
            "n1", [str(tmp_path / "a.txt")]
        )
        monkeypatch.setattr(QDesktopServices, "openUrl", lambda url: False)
        errors = []
        monkeypatch.setattr(
            main_window, "show_error", lambda message, **kwargs: errors.append(message)
        )
        main_window.action_service.open_attachment("n1", attachment.id)
        assert errors == ['Unable to open "a.txt".']


class TestProjectActions:
    """Test cases for switching projects."""

    def test_open_project_folder(self, main_window, monkeypatch, tmp_path):
        """Test opening a folder switches to its project."""
        folder = tmp_path / "journal"
        folder.mkdir()
        monkeypatch.setattr(
            QFileDialog, "getExistingDirectory", lambda *args: str(folder)
        )
        main_window.action_service.open_project_folder()
        assert main_window.windowTitle() == "ChronoNotes - journal"
        assert main_window.repository.project.path == str(folder)
        assert card_ids(main_window) == {"1", "2", "3"}

    def test_open_project_cancelled(self, main_window, monkeypatch):
        """Test cancelling the folder picker keeps the project."""
        monkeypatch.setattr(QFileDialog, "getExistingDirectory", lambda *args: "")
        main_window.action_service.open_project_folder()
        assert main_window.repository.project.label == "Default"

    def test_projects_keep_separate_notes(self, main_window, monkeypatch, tmp_path):
        """Test switching back restores the first project's notes."""
        monkeypatch.setattr(
            QFileDialog, "getExistingDirectory", lambda *args: str(tmp_path)
        )
        main_window.set_tag_filter("draft")
        main_window.action_service.open_project_folder()
        assert main_window.repository.tag_filter == ""

        main_window.switch_project(Project.default(), [])
        assert main_window.repository.tag_filter == "draft"
        assert main_window.sidebar.tag_filter_edit.text() == "draft"
        assert card_ids(main_window) == {"n2"}


class TestCreateApplication:
    """Test cases for create_application()."""

    def test_opens_current_project(self, qapp, isolated_settings, tmp_path):
        """Test a fresh state database shows the demonstration notes."""
        try:
            app, window = create_application(db_path=tmp_path / "app.db")
            try:
                assert window.isVisible()
                assert window.windowTitle() == "ChronoNotes - Default"
                assert card_ids(window) == {"1", "2", "3"}
            finally:
                window.close()
                window.deleteLater()
        finally:
            QCoreApplication.setOrganizationName("ChronoNotesTests")
            QCoreApplication.setApplicationName("ChronoNotesTests")
