"""Rich-text editing surface for note bodies."""

from PySide6.QtCore import Signal
from PySide6.QtGui import QFont, QKeySequence, QTextListFormat
from PySide6.QtWidgets import QHBoxLayout, QTextEdit, QToolButton, QVBoxLayout, QWidget


class RichTextEditor(QTextEdit):
    """
    Text edit that exchanges its document as HTML.  It satisfies
    :class:`~chrononotes.services.markdown.RichTextDocument`.
    """

    #: Emitted with the serialized document when the user changes it.
    document_changed = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAcceptRichText(True)
        self.setPlaceholderText("Write the body...")
        #: Whether the document is being replaced programmatically.
        self._loading = False
        self.textChanged.connect(self._on_text_changed)

    def serialize(self) -> str:
        """
        Return the document as HTML, or an empty string if it has no text.
        """
        if self.document().isEmpty():
            return ""
        return self.toHtml()

    def load_from(self, text: str) -> None:
        """
        Replace the document without emitting :attr:`document_changed`.

        Args:
            text: HTML (or plain text) to load

        """
        self._loading = True
        try:
            self.setHtml(text)
        finally:
            self._loading = False

    def _on_text_changed(self) -> None:
        if not self._loading:
            self.document_changed.emit(self.serialize())

    def toggle_bold(self) -> None:
        """Toggle bold on the selection."""
        is_bold = self.fontWeight() > QFont.Weight.Normal.value
        self.setFontWeight(
            QFont.Weight.Normal.value if is_bold else QFont.Weight.Bold.value
        )

    def toggle_italic(self) -> None:
        """Toggle italic on the selection."""
        self.setFontItalic(not self.fontItalic())

    def make_list(self, style: QTextListFormat.Style) -> None:
        """
        Turn the current block into a list item.

        Args:
            style: List style, bulleted or numbered

        """
        cursor = self.textCursor()
        list_format = QTextListFormat()
        list_format.setStyle(style)
        cursor.createList(list_format)


class RichTextToolbar(QWidget):
    """
    Formatting buttons for a :class:`RichTextEditor`.

    Args:
        editor: Editor the buttons act on
        parent: Parent widget

    """

    def __init__(self, editor: RichTextEditor, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.editor = editor
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._add_button(layout, "B", "Bold (Ctrl+B)", editor.toggle_bold, "Ctrl+B")
        self._add_button(layout, "I", "Italic (Ctrl+I)", editor.toggle_italic, "Ctrl+I")
        self._add_button(
            layout,
            "• List",
            "Bulleted list",
            lambda: editor.make_list(QTextListFormat.Style.ListDisc),
        )
        self._add_button(
            layout,
            "1. List",
            "Numbered list",
            lambda: editor.make_list(QTextListFormat.Style.ListDecimal),
        )
        layout.addStretch()

    def _add_button(
        self,
        layout: QHBoxLayout,
        text: str,
        tooltip: str,
        slot,
        shortcut: str | None = None,
    ) -> QToolButton:
        button = QToolButton(self)
        button.setText(text)
        button.setToolTip(tooltip)
        if shortcut:
            button.setShortcut(QKeySequence(shortcut))
        button.clicked.connect(slot)
        layout.addWidget(button)
        return button


class RichTextField(QWidget):
    """
    A :class:`RichTextEditor` with its :class:`RichTextToolbar` above it.

    Args:
        parent: Parent widget

    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        #: The editor.
        self.editor = RichTextEditor(self)
        #: The formatting toolbar.
        self.toolbar = RichTextToolbar(self.editor, self)
        layout.addWidget(self.toolbar)
        layout.addWidget(self.editor)
