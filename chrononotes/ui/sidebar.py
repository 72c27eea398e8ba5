"""Sidebar UI component."""

from typing import Final

from PySide6.QtCore import Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chrononotes.models.project import Project, ZoomLevel


class Sidebar(QWidget):
    """
    Sidebar with the active project, the note actions and the timeline view
    controls.

    Args:
        parent: Parent widget

    """

    new_note_requested = Signal()
    open_project_requested = Signal()
    new_project_requested = Signal()
    export_requested = Signal()
    tag_filter_changed = Signal(str)
    zoom_changed = Signal(str)  # Emits the ZoomLevel value

    #: Sidebar width
    SIDEBAR_WIDTH: Final[int] = 240
    #: Zoom choices, in display order
    ZOOM_LEVELS: Final[tuple[tuple[str, ZoomLevel], ...]] = (
        ("Years", ZoomLevel.YEARS),
        ("Months", ZoomLevel.MONTHS),
    )

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        #: Whether the controls are being set programmatically
        self._loading = False
        self.setFixedWidth(self.SIDEBAR_WIDTH)
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        caption = QLabel("Project")
        caption.setStyleSheet("color: #666; font-size: 9pt;")
        layout.addWidget(caption)
        self.project_label = QLabel()
        font = QFont()
        font.setBold(True)
        font.setPointSize(12)
        self.project_label.setFont(font)
        self.project_label.setWordWrap(True)
        layout.addWidget(self.project_label)

        project_buttons = QHBoxLayout()
        change_button = QPushButton("Change...")
        change_button.setToolTip("Open a project folder")
        change_button.clicked.connect(self.open_project_requested.emit)
        project_buttons.addWidget(change_button)
        new_project_button = QPushButton("New...")
        new_project_button.setToolTip("Create a new project folder")
        new_project_button.clicked.connect(self.new_project_requested.emit)
        project_buttons.addWidget(new_project_button)
        layout.addLayout(project_buttons)

        new_note_button = QPushButton("New Note")
        new_note_button.clicked.connect(self.new_note_requested.emit)
        layout.addWidget(new_note_button)

        layout.addWidget(QLabel("Filter by tag:"))
        self.tag_filter_edit = QLineEdit()
        self.tag_filter_edit.setPlaceholderText("e.g. travel")
        self.tag_filter_edit.setClearButtonEnabled(True)
        self.tag_filter_edit.textChanged.connect(self._on_tag_filter_changed)
        layout.addWidget(self.tag_filter_edit)

        layout.addWidget(QLabel("Zoom:"))
        self.zoom_combo = QComboBox()
        for label, zoom in self.ZOOM_LEVELS:
            self.zoom_combo.addItem(label, zoom.value)
        self.zoom_combo.currentIndexChanged.connect(self._on_zoom_changed)
        layout.addWidget(self.zoom_combo)

        layout.addStretch()

        export_button = QPushButton("Export...")
        export_button.clicked.connect(self.export_requested.emit)
        layout.addWidget(export_button)

    def set_state(self, project: Project, tag_filter: str, zoom: ZoomLevel) -> None:
        """
        Show the active project and its view state without emitting signals.

        Args:
            project: The active project
            tag_filter: Tag filter text
            zoom: Timeline zoom level

        """
        self._loading = True
        try:
            self.project_label.setText(project.label)
            self.project_label.setToolTip(project.path or "")
            if self.tag_filter_edit.text() != tag_filter:
                self.tag_filter_edit.setText(tag_filter)
            self.zoom_combo.setCurrentIndex(
                max(self.zoom_combo.findData(ZoomLevel(zoom).value), 0)
            )
        finally:
            self._loading = False

    def _on_tag_filter_changed(self, text: str) -> None:
        if not self._loading:
            self.tag_filter_changed.emit(text)

    def _on_zoom_changed(self, index: int) -> None:
        if not self._loading:
            self.zoom_changed.emit(self.zoom_combo.itemData(index))
