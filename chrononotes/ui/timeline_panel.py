"""Timeline panel UI component."""

from collections.abc import Sequence
from typing import Final

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont, QKeyEvent, QMouseEvent
from PySide6.QtWidgets import (
    QFrame,
    QLabel,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from chrononotes.mixins import FuzzyDateMixin
from chrononotes.models.note import Note
from chrononotes.services.markdown import body_preview
from chrononotes.services.timeline import TimelineGroup


class TimelineCard(FuzzyDateMixin, QFrame):
    """
    A clickable card summarizing one note in the timeline.

    Args:
        note: Note to display
        selected: Whether the note is the selected one
        parent: Parent widget

    """

    clicked = Signal(str)  # Emits the note ID

    #: Style of an unselected card
    STYLE: Final[str] = (
        "TimelineCard { border: 1px solid #ddd; border-radius: 6px; "
        "background-color: white; }"
    )
    #: Style of the selected card
    SELECTED_STYLE: Final[str] = (
        "TimelineCard { border: 2px solid #3b6fd8; border-radius: 6px; "
        "background-color: #eef3fd; }"
    )

    def __init__(
        self, note: Note, selected: bool = False, parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.note = note
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setStyleSheet(self.SELECTED_STYLE if selected else self.STYLE)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 8, 10, 8)
        layout.setSpacing(4)

        title = QLabel(note.title.strip() or "Untitled note")
        title_font = QFont()
        title_font.setBold(True)
        title.setFont(title_font)
        layout.addWidget(title)

        summary = QLabel(self.date_summary(note))
        summary.setStyleSheet("color: #666;")
        layout.addWidget(summary)

        preview = body_preview(note.body)
        if preview:
            body = QLabel(preview)
            body.setWordWrap(True)
            layout.addWidget(body)

        if note.tags:
            tags = QLabel("  ".join(f"#{tag}" for tag in note.tags))
            tags.setStyleSheet("color: #3b6fd8; font-size: 9pt;")
            layout.addWidget(tags)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        """Handle mouse press event."""
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(self.note.id)
        super().mousePressEvent(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802
        """Select the note on Enter or Space."""
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter, Qt.Key.Key_Space):
            self.clicked.emit(self.note.id)
            return
        super().keyPressEvent(event)


class TimelinePanel(QWidget):
    """
    Widget displaying the timeline: a heading per group followed by the
    group's note cards.

    Args:
        parent: Parent widget

    """

    note_clicked = Signal(str)  # Emits the note ID when a card is clicked

    #: Text shown when there are no notes to display
    EMPTY_TEXT: Final[str] = "(No notes yet)"

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        #: Cards currently displayed, by note ID
        self.cards: dict[str, TimelineCard] = {}
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        header = QLabel("Timeline")
        header_font = QFont()
        header_font.setPointSize(14)
        header_font.setBold(True)
        header.setFont(header_font)
        layout.addWidget(header)

        hint = QLabel("Click a note to view more details in the panel on the right.")
        hint.setStyleSheet("color: #666;")
        hint.setWordWrap(True)
        layout.addWidget(hint)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setFrameShape(QFrame.Shape.NoFrame)
        content = QWidget()
        self.groups_layout = QVBoxLayout(content)
        self.groups_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self.scroll_area.setWidget(content)
        layout.addWidget(self.scroll_area, stretch=1)

    def _clear(self) -> None:
        while self.groups_layout.count():
            item = self.groups_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self.cards = {}

    def update_groups(
        self, groups: Sequence[TimelineGroup], selected_id: str | None = None
    ) -> None:
        """
        Replace the displayed groups.

        Args:
            groups: Timeline groups to display, in order
            selected_id: ID of the note to highlight

        """
        self._clear()
        if not groups:
            empty = QLabel(self.EMPTY_TEXT)
            empty.setStyleSheet("color: #999; font-style: italic;")
            empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self.groups_layout.addWidget(empty)
            return
        for group in groups:
            heading = QLabel(group.label)
            heading_font = QFont()
            heading_font.setBold(True)
            heading_font.setPointSize(12)
            heading.setFont(heading_font)
            self.groups_layout.addWidget(heading)
            for note in group.notes:
                card = TimelineCard(note, selected=note.id == selected_id)
                card.clicked.connect(self.note_clicked.emit)
                self.groups_layout.addWidget(card)
                self.cards[note.id] = card
