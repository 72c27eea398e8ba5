"""Export notes dialog."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Final, cast

import markdown
from PySide6.QtCore import QSettings
from PySide6.QtWidgets import (
    QButtonGroup,
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QLabel,
    QRadioButton,
    QTextBrowser,
    QVBoxLayout,
)

from chrononotes.exc import ExportFailed, NothingToExport
from chrononotes.services.export_markdown import MarkdownExporter
from chrononotes.services.repository import ExportScope

if TYPE_CHECKING:
    from chrononotes.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


class ExportDialog:
    """
    Export dialog.  This gets opened when the user clicks the "Export..."
    button in the sidebar or the "Export..." item in the File menu.

    The user picks whether to export all notes or only the notes matching the
    tag filter, sees a preview of the result, and on "Export" is asked where
    to save the Markdown file.

    Args:
        main_window: Main window instance

    """

    #: Dialog width
    DIALOG_WIDTH: Final[int] = 560
    #: Dialog height
    DIALOG_HEIGHT: Final[int] = 520
    #: QSettings key of the last directory exported to
    LAST_DIRECTORY_KEY: Final[str] = "export/last_directory"

    def __init__(self, main_window: "MainWindow") -> None:
        """
        Initialize export dialog.
        """
        self.main_window = main_window
        self.repository = main_window.repository
        self.exporter = MarkdownExporter()
        #: The chosen export scope; the filtered notes when the filter hides any
        self.scope = (
            ExportScope.FILTERED
            if self.repository.has_filtered_subset
            else ExportScope.ALL
        )

    def build(self) -> None:
        """
        Build the export dialog.

        This means:

        - Setting the window title and size
        - Adding the scope choice
        - Adding the preview
        - Adding the button box
        """
        self.dialog = QDialog(self.main_window)
        self.dialog.setWindowTitle("Export notes")
        self.dialog.setMinimumSize(self.DIALOG_WIDTH, self.DIALOG_HEIGHT)
        self.layout = QVBoxLayout(self.dialog)
        self.layout.addWidget(QLabel("Save your notes as a Markdown file."))
        self._add_scope_choice()
        self.layout.addWidget(QLabel("Format: Markdown (.md)"))
        self._add_preview()
        self._add_button_box()
        self.update_preview()

    def _add_scope_choice(self) -> None:
        """
        Add the "All notes" and "Filtered notes" radio buttons.  The filtered
        choice is disabled when the tag filter hides nothing, and chosen
        when it hides something.
        """
        total = len(self.repository.notes)
        filtered = len(self.repository.filtered_notes)
        has_subset = self.repository.has_filtered_subset

        self.layout.addWidget(QLabel("Scope:"))
        self.scope_group = QButtonGroup(self.dialog)
        self.all_radio = QRadioButton(f"All notes ({total})", self.dialog)
        self.all_radio.setChecked(self.scope == ExportScope.ALL)
        suffix = "" if has_subset else " – same as all"
        self.filtered_radio = QRadioButton(
            f"Filtered notes ({filtered}{suffix})", self.dialog
        )
        self.filtered_radio.setEnabled(has_subset)
        self.filtered_radio.setChecked(self.scope == ExportScope.FILTERED)
        self.scope_group.addButton(self.all_radio)
        self.scope_group.addButton(self.filtered_radio)
        self.all_radio.toggled.connect(self._on_scope_toggled)
        self.layout.addWidget(self.all_radio)
        self.layout.addWidget(self.filtered_radio)

    def _add_preview(self) -> None:
        """
        Add a read-only view showing the export rendered from Markdown.
        """
        self.layout.addWidget(QLabel("Preview:"))
        self.preview = QTextBrowser(self.dialog)
        self.preview.setOpenExternalLinks(False)
        self.layout.addWidget(self.preview, stretch=1)

    def _add_button_box(self) -> None:
        """
        Add the button box to the dialog.
        """
        self.button_box = QDialogButtonBox(self.dialog)
        self.export_button = self.button_box.addButton(
            "Export", QDialogButtonBox.ButtonRole.AcceptRole
        )
        self.button_box.addButton(QDialogButtonBox.StandardButton.Cancel)
        self.button_box.accepted.connect(self.dialog.accept)
        self.button_box.rejected.connect(self.dialog.reject)
        self.layout.addWidget(self.button_box)

    def _on_scope_toggled(self, all_checked: bool) -> None:
        self.scope = ExportScope.ALL if all_checked else ExportScope.FILTERED
        self.update_preview()

    def update_preview(self) -> None:
        """
        Render the Markdown for the chosen scope into the preview.
        """
        notes = self.repository.notes_for_scope(self.scope)
        if not notes:
            self.preview.setPlainText(str(NothingToExport()))
            return
        text = self.exporter.build(notes)
        try:
            html = markdown.markdown(text, extensions=["sane_lists"])
        except (markdown.MarkdownException, ValueError):
            logger.warning("Could not render export preview", exc_info=True)
            self.preview.setPlainText(text)
            return
        self.preview.setHtml(html)

    def choose_output_path(self) -> str | None:
        """
        Ask the user where to save the export.

        Returns:
            The chosen path, or None if the user cancelled

        """
        settings = QSettings()
        directory = cast(
            "str", settings.value(self.LAST_DIRECTORY_KEY, "", type=str)
        )
        default_path = str(Path(directory) / MarkdownExporter.DEFAULT_FILENAME)
        file_path, _ = QFileDialog.getSaveFileName(
            self.main_window,
            "Export Notes",
            default_path,
            "Markdown Files (*.md);;All Files (*)",
        )
        if not file_path:
            return None
        settings.setValue(self.LAST_DIRECTORY_KEY, str(Path(file_path).parent))
        return file_path

    def export(self) -> bool:
        """
        Export the notes of the chosen scope.

        - If there are no notes, tell the user and stop before asking for a file.
        - If the user cancels the file picker, do nothing.
        - Otherwise write the file and report the outcome.

        Returns:
            True if the file was written

        """
        notes = self.repository.notes_for_scope(self.scope)
        try:
            self.exporter.ensure_exportable(notes)
        except NothingToExport as e:
            self.main_window.show_information(str(e), title="Export")
            return False

        file_path = self.choose_output_path()
        if file_path is None:
            return False

        try:
            self.exporter.export(notes, file_path)
        except ExportFailed:
            logger.exception("Export failed")
            self.main_window.show_error(
                "Unable to export notes right now.", title="Export Failed"
            )
            return False

        self.main_window.show_message("Export complete.", duration=3000)
        return True

    def execute(self) -> None:
        """
        Execute the export dialog.
        """
        self.build()
        if self.dialog.exec():
            self.export()
