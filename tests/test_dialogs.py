"""Unit tests for the export and new project dialogs."""

from PySide6.QtWidgets import QFileDialog

from chrononotes.services.repository import ExportScope
from chrononotes.ui.dialogs import ExportDialog, NewProjectDialog


def patch_save_dialog(monkeypatch, file_path):
    """Make the save file picker return ``file_path`` and record that it ran."""
    calls = []

    def get_save_file_name(*args, **kwargs):
        calls.append(args)
        return (file_path, "")

    monkeypatch.setattr(QFileDialog, "getSaveFileName", get_save_file_name)
    return calls


def capture(monkeypatch, main_window, name):
    """Record the messages passed to one of the main window's show_* methods."""
    messages = []
    monkeypatch.setattr(
        main_window, name, lambda message, **kwargs: messages.append(message)
    )
    return messages


class TestExportDialogScope:
    """Test cases for the export scope choice."""

    def test_filtered_disabled_without_subset(self, main_window):
        """Test the filtered choice is disabled when the filter hides nothing."""
        dialog = ExportDialog(main_window)
        dialog.build()
        assert dialog.all_radio.text() == "All notes (4)"
        assert dialog.all_radio.isChecked()
        assert dialog.filtered_radio.text() == "Filtered notes (4 – same as all)"
        assert not dialog.filtered_radio.isEnabled()

    def test_filtered_enabled_with_subset(self, main_window):
        """Test the filtered choice is offered when the filter hides notes."""
        main_window.set_tag_filter("travel")
        dialog = ExportDialog(main_window)
        dialog.build()
        assert dialog.filtered_radio.text() == "Filtered notes (1)"
        assert dialog.filtered_radio.isEnabled()

    def test_starts_on_filtered_with_subset(self, main_window):
        """Test the filtered choice is preselected when the filter hides notes."""
        main_window.set_tag_filter("travel")
        dialog = ExportDialog(main_window)
        assert dialog.scope == ExportScope.FILTERED
        dialog.build()
        assert dialog.filtered_radio.isChecked()
        assert not dialog.all_radio.isChecked()

    def test_starts_on_all_without_subset(self, main_window):
        """Test all notes are preselected when the filter hides nothing."""
        dialog = ExportDialog(main_window)
        assert dialog.scope == ExportScope.ALL

    def test_choosing_scope_updates_preview(self, main_window):
        """Test switching scope changes what the preview shows."""
        main_window.set_tag_filter("travel")
        dialog = ExportDialog(main_window)
        dialog.build()
        preview = dialog.preview.toPlainText()
        assert "Trip" in preview
        assert "Autumn" not in preview
        dialog.all_radio.setChecked(True)
        assert dialog.scope == ExportScope.ALL
        assert "Autumn" in dialog.preview.toPlainText()


class TestExportDialogExport:
    """Test cases for ExportDialog.export()."""

    def test_writes_file(self, main_window, monkeypatch, tmp_path):
        """Test exporting writes the chosen file and reports success."""
        target = tmp_path / "out.md"
        patch_save_dialog(monkeypatch, str(target))
        messages = capture(monkeypatch, main_window, "show_message")
        dialog = ExportDialog(main_window)
        dialog.build()

        assert dialog.export() is True
        text = target.read_text(encoding="utf-8")
        assert text.startswith("# Draft")
        assert text.split("\n---\n")[-1].strip().startswith("# Someday")
        assert "# Trip" in text
        assert messages == ["Export complete."]

    def test_remembers_directory(self, main_window, monkeypatch, tmp_path):
        """Test the next picker starts in the directory exported to."""
        folder = tmp_path / "exports"
        folder.mkdir()
        calls = patch_save_dialog(monkeypatch, str(folder / "notes.md"))
        capture(monkeypatch, main_window, "show_message")
        for _ in range(2):
            dialog = ExportDialog(main_window)
            dialog.build()
            dialog.export()
        assert calls[1][2] == str(folder / "chrononotes-notes.md")

    def test_cancelled_picker(self, main_window, monkeypatch):
        """Test cancelling the picker exports nothing."""
        patch_save_dialog(monkeypatch, "")
        messages = capture(monkeypatch, main_window, "show_message")
        dialog = ExportDialog(main_window)
        dialog.build()
        assert dialog.export() is False
        assert messages == []

    def test_nothing_to_export(self, main_window, monkeypatch):
        """Test an empty project is reported before any picker opens."""
        for note in list(main_window.repository.notes):
            main_window.repository.delete_note(note.id)
        calls = patch_save_dialog(monkeypatch, "/never/used.md")
        info = capture(monkeypatch, main_window, "show_information")
        dialog = ExportDialog(main_window)
        dialog.build()

        assert dialog.export() is False
        assert calls == []
        assert len(info) == 1
        assert "no notes" in info[0].lower()

    def test_write_failure(self, main_window, monkeypatch, tmp_path):
        """Test a write error is reported to the user."""
        patch_save_dialog(monkeypatch, str(tmp_path / "missing" / "out.md"))
        errors = capture(monkeypatch, main_window, "show_error")
        dialog = ExportDialog(main_window)
        dialog.build()
        assert dialog.export() is False
        assert errors == ["Unable to export notes right now."]


class TestNewProjectDialog:
    """Test cases for NewProjectDialog."""

    def test_requires_name(self, main_window, tmp_path):
        """Test a blank name is rejected."""
        dialog = NewProjectDialog(main_window)
        dialog.build()
        dialog.set_parent_path(str(tmp_path))
        dialog.name_edit.setText("   ")
        assert dialog.create_project() is None
        assert dialog.error_label.text() == "Enter a project name."

    def test_requires_parent(self, main_window):
        """Test a missing parent folder is rejected."""
        dialog = NewProjectDialog(main_window)
        dialog.build()
        dialog.set_parent_path(None)
        assert dialog.create_project() is None
        assert dialog.error_label.text() == "Choose a parent folder."
        assert dialog.folder_label.text() == NewProjectDialog.NO_FOLDER_TEXT

    def test_creates_and_switches(self, main_window, monkeypatch, tmp_path):
        """Test success creates the folder and opens an empty project."""
        capture(monkeypatch, main_window, "show_message")
        dialog = NewProjectDialog(main_window)
        dialog.build()
        dialog.set_parent_path(str(tmp_path))
        dialog.name_edit.setText("Diary")

        project = dialog.create_project()

        assert project is not None
        assert (tmp_path / "Diary").is_dir()
        assert main_window.repository.project == project
        assert main_window.repository.notes == []
        assert main_window.windowTitle() == "ChronoNotes - Diary"
        assert not dialog.is_creating

    def test_failure_keeps_dialog_open(self, main_window, tmp_path):
        """Test a folder that cannot be created is reported in the dialog."""
        blocker = tmp_path / "file.txt"
        blocker.write_text("x")
        dialog = NewProjectDialog(main_window)
        dialog.build()
        dialog.set_parent_path(str(blocker))
        dialog.name_edit.setText("Diary")

        assert dialog.create_project() is None
        assert dialog.error_label.text() == "Unable to create that project."
        assert not dialog.is_creating
        assert dialog.create_button.isEnabled()
        assert main_window.repository.project.label == "Default"
