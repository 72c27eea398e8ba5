"""Note details editor UI component."""

from typing import Any, Final

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont, QIntValidator
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from chrononotes.models.note import DateType, Note
from chrononotes.ui.rich_text import RichTextField
from chrononotes.utils import parse_tags


class NoteEditorPanel(QWidget):
    """
    Widget for editing the selected note.  When no note is selected a
    placeholder is shown instead of the form.

    Edits are reported through :attr:`note_changed` as they happen; the panel
    never changes the note itself.

    Args:
        parent: Parent widget

    """

    #: Emitted with the note ID and a dict of changed fields
    note_changed = Signal(str, dict)
    #: Emitted with the note ID when the user wants to delete the note
    delete_requested = Signal(str)
    #: Emitted with the note ID when the user wants to attach files
    add_attachments_requested = Signal(str)
    #: Emitted with the note ID and attachment ID to open an attachment
    open_attachment_requested = Signal(str, str)
    #: Emitted with the note ID and attachment ID to remove an attachment
    remove_attachment_requested = Signal(str, str)

    #: Date type choices, in display order
    DATE_TYPES: Final[tuple[tuple[str, str], ...]] = (
        ("Exact date", DateType.EXACT.value),
        ("Approximate range", DateType.APPROX_RANGE.value),
        ("Broad period", DateType.BROAD_PERIOD.value),
    )
    #: Placeholder text for ISO date fields
    DATE_PLACEHOLDER: Final[str] = "YYYY-MM-DD"

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        #: The note being edited
        self.note: Note | None = None
        #: Whether the form is being filled programmatically
        self._loading = False
        self._setup_ui()
        self.set_note(None)

    # ===============================
    # Layout
    # ===============================

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.stack = QStackedWidget(self)
        layout.addWidget(self.stack)

        placeholder = QWidget()
        placeholder_layout = QVBoxLayout(placeholder)
        placeholder_layout.addWidget(self._heading("Note Details"))
        message = QLabel("Select a note to see its contents.")
        message.setStyleSheet("color: #666; font-style: italic;")
        placeholder_layout.addWidget(message)
        placeholder_layout.addStretch()
        self.placeholder = placeholder
        self.stack.addWidget(placeholder)

        form_widget = QWidget()
        form_layout = QVBoxLayout(form_widget)
        form_layout.addWidget(self._heading("Editing Note"))
        form = QFormLayout()
        form_layout.addLayout(form)

        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("Title")
        self.title_edit.textEdited.connect(
            lambda text: self._emit_change(title=text)
        )
        form.addRow("Title:", self.title_edit)

        self.date_type_combo = QComboBox()
        for label, value in self.DATE_TYPES:
            self.date_type_combo.addItem(label, value)
        self.date_type_combo.currentIndexChanged.connect(self._on_date_type_changed)
        form.addRow("Date type:", self.date_type_combo)

        self.date_start_edit = QLineEdit()
        self.date_start_edit.setPlaceholderText(self.DATE_PLACEHOLDER)
        self.date_start_edit.textEdited.connect(
            lambda text: self._emit_change(date_start=text or None)
        )
        self.date_start_label = QLabel("Date:")
        form.addRow(self.date_start_label, self.date_start_edit)

        self.date_end_edit = QLineEdit()
        self.date_end_edit.setPlaceholderText(self.DATE_PLACEHOLDER)
        self.date_end_edit.textEdited.connect(
            lambda text: self._emit_change(date_end=text or None)
        )
        self.date_end_label = QLabel("End date:")
        form.addRow(self.date_end_label, self.date_end_edit)

        self.margin_edit = QLineEdit()
        self.margin_edit.setValidator(QIntValidator(0, 36500, self))
        self.margin_edit.setPlaceholderText("Days")
        self.margin_edit.textEdited.connect(self._on_margin_edited)
        self.margin_label = QLabel("Margin (± days):")
        form.addRow(self.margin_label, self.margin_edit)

        self.tags_edit = QLineEdit()
        self.tags_edit.setPlaceholderText("Comma-separated tags")
        self.tags_edit.textEdited.connect(
            lambda text: self._emit_change(tags=parse_tags(text))
        )
        form.addRow("Tags:", self.tags_edit)

        self.problems_label = QLabel()
        self.problems_label.setStyleSheet("color: #b35c00;")
        self.problems_label.setWordWrap(True)
        form_layout.addWidget(self.problems_label)

        form_layout.addWidget(QLabel("Body:"))
        self.body_field = RichTextField()
        self.body_field.editor.document_changed.connect(
            lambda html: self._emit_change(body=html)
        )
        form_layout.addWidget(self.body_field, stretch=1)

        form_layout.addWidget(QLabel("Attachments:"))
        self.attachments_list = QListWidget()
        self.attachments_list.setMaximumHeight(100)
        self.attachments_list.itemDoubleClicked.connect(self._open_attachment)
        self.attachments_list.itemSelectionChanged.connect(self._update_buttons)
        form_layout.addWidget(self.attachments_list)

        buttons = QHBoxLayout()
        self.add_attachment_button = QPushButton("Attach Files...")
        self.add_attachment_button.clicked.connect(self._request_attachments)
        buttons.addWidget(self.add_attachment_button)
        self.open_attachment_button = QPushButton("Open")
        self.open_attachment_button.clicked.connect(
            lambda: self._open_attachment(self.attachments_list.currentItem())
        )
        buttons.addWidget(self.open_attachment_button)
        self.remove_attachment_button = QPushButton("Remove")
        self.remove_attachment_button.clicked.connect(self._remove_attachment)
        buttons.addWidget(self.remove_attachment_button)
        buttons.addStretch()
        self.delete_button = QPushButton("Delete Note")
        self.delete_button.clicked.connect(self._request_delete)
        buttons.addWidget(self.delete_button)
        form_layout.addLayout(buttons)

        self.form = form_widget
        self.stack.addWidget(form_widget)

    def _heading(self, text: str) -> QLabel:
        label = QLabel(text)
        font = QFont()
        font.setPointSize(14)
        font.setBold(True)
        label.setFont(font)
        return label

    # ===============================
    # Loading
    # ===============================

    def set_note(self, note: Note | None) -> None:
        """
        Show a note in the form, or the placeholder if ``note`` is None.

        Args:
            note: Note to edit

        """
        self.note = note
        if note is None:
            self.stack.setCurrentWidget(self.placeholder)
            return
        self._loading = True
        try:
            self.title_edit.setText(note.title)
            index = self.date_type_combo.findData(str(note.date_type))
            self.date_type_combo.setCurrentIndex(max(index, 0))
            self.date_start_edit.setText(note.date_start or "")
            self.date_end_edit.setText(note.date_end or "")
            self.margin_edit.setText(
                "" if note.range_margin_days is None else str(note.range_margin_days)
            )
            self.tags_edit.setText(", ".join(note.tags))
            self.body_field.editor.load_from(note.body)
            self._update_date_fields()
            self.set_attachments(note)
            self._update_problems()
        finally:
            self._loading = False
        self.stack.setCurrentWidget(self.form)

    def set_attachments(self, note: Note) -> None:
        """
        Refill the attachment list from ``note``.

        Args:
            note: The note being edited

        """
        self.attachments_list.clear()
        for attachment in note.attachments:
            item = QListWidgetItem(attachment.file_name)
            item.setToolTip(attachment.file_path)
            item.setData(Qt.ItemDataRole.UserRole, attachment.id)
            self.attachments_list.addItem(item)
        self._update_buttons()

    # ===============================
    # Edits
    # ===============================

    def _emit_change(self, **changes: Any) -> None:
        if self._loading or self.note is None:
            return
        self.note_changed.emit(self.note.id, changes)
        self._update_problems()

    def _on_date_type_changed(self, index: int) -> None:
        self._update_date_fields()
        self._emit_change(date_type=self.date_type_combo.itemData(index))

    def _on_margin_edited(self, text: str) -> None:
        self._emit_change(range_margin_days=int(text) if text else None)

    def _update_date_fields(self) -> None:
        date_type = self.date_type_combo.currentData()
        is_range = date_type == DateType.APPROX_RANGE
        is_period = date_type == DateType.BROAD_PERIOD
        self.date_start_label.setText(
            "Start date:" if is_period else "Center date:" if is_range else "Date:"
        )
        for widget in (self.date_end_label, self.date_end_edit):
            widget.setVisible(is_period)
        for widget in (self.margin_label, self.margin_edit):
            widget.setVisible(is_range)

    def _update_problems(self) -> None:
        if self.note is None:
            return
        problems = self.note.date_problems()
        self.problems_label.setText("\n".join(problems))
        self.problems_label.setVisible(bool(problems))

    def _update_buttons(self) -> None:
        has_selection = self.attachments_list.currentItem() is not None
        self.open_attachment_button.setEnabled(has_selection)
        self.remove_attachment_button.setEnabled(has_selection)

    def _request_delete(self) -> None:
        if self.note is not None:
            self.delete_requested.emit(self.note.id)

    def _request_attachments(self) -> None:
        if self.note is not None:
            self.add_attachments_requested.emit(self.note.id)

    def _open_attachment(self, item: QListWidgetItem | None) -> None:
        if self.note is None or item is None:
            return
        self.open_attachment_requested.emit(
            self.note.id, item.data(Qt.ItemDataRole.UserRole)
        )

    def _remove_attachment(self) -> None:
        item = self.attachments_list.currentItem()
        if self.note is None or item is None:
            return
        self.remove_attachment_requested.emit(
            self.note.id, item.data(Qt.ItemDataRole.UserRole)
        )
