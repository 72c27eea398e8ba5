import logging
from typing import TYPE_CHECKING, Final, cast

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from chrononotes.exc import ProjectCreationFailed
from chrononotes.models.project import Project

if TYPE_CHECKING:
    from chrononotes.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


class NewProjectDialog:
    """
    New project dialog.  This gets opened when the user clicks the "New
    Project..." menu item from the File menu or the "New..." button in the
    sidebar.

    The user enters a folder name and picks a parent folder; clicking "Create
    project" creates the folder and switches to its (empty) project.  Problems
    are shown inside the dialog, which stays open until creation succeeds or
    the user cancels.

    Args:
        main_window: Main window instance

    """

    #: Dialog width
    DIALOG_WIDTH: Final[int] = 480
    #: Default project folder name
    DEFAULT_NAME: Final[str] = "chrononotes-project"
    #: QSettings key of the last parent folder used
    LAST_PARENT_KEY: Final[str] = "projects/last_parent"
    #: Text shown when no parent folder is chosen
    NO_FOLDER_TEXT: Final[str] = "No folder selected"

    def __init__(self, main_window: "MainWindow") -> None:
        """
        Initialize new project dialog.
        """
        self.main_window = main_window
        settings = QSettings()
        #: The chosen parent folder
        self.parent_path: str | None = (
            cast("str", settings.value(self.LAST_PARENT_KEY, "", type=str)) or None
        )
        #: Whether a project is being created
        self.is_creating = False

    def build(self) -> None:
        """
        Build the new project dialog.

        This means:

        - Setting the window title
        - Adding the name edit
        - Adding the parent folder chooser
        - Adding the error label
        - Adding the button box
        """
        self.dialog = QDialog(self.main_window)
        self.dialog.setWindowTitle("Create Project")
        self.dialog.setMinimumWidth(self.DIALOG_WIDTH)
        self.layout = QVBoxLayout(self.dialog)
        self.layout.addWidget(QLabel("Pick the folder and name in one step."))
        self._add_name_edit()
        self._add_folder_chooser()
        self._add_error_label()
        self._add_button_box()

    def _add_name_edit(self) -> None:
        """
        Add the project name edit to the dialog.
        """
        self.name_edit = QLineEdit(self.dialog)
        self.name_edit.setText(self.DEFAULT_NAME)
        self.name_edit.setPlaceholderText(self.DEFAULT_NAME)
        self.layout.addWidget(QLabel("Project name:"))
        self.layout.addWidget(self.name_edit)

    def _add_folder_chooser(self) -> None:
        """
        Add the parent folder label and its "Browse..." button.
        """
        self.layout.addWidget(QLabel("Project folder:"))
        row = QHBoxLayout()
        self.folder_label = QLabel(self.parent_path or self.NO_FOLDER_TEXT)
        self.folder_label.setToolTip(self.parent_path or "")
        self.folder_label.setStyleSheet("color: #444;")
        row.addWidget(self.folder_label, stretch=1)
        self.browse_button = QPushButton("Browse...", self.dialog)
        self.browse_button.clicked.connect(self.browse)
        row.addWidget(self.browse_button)
        self.layout.addLayout(row)

    def _add_error_label(self) -> None:
        self.error_label = QLabel(self.dialog)
        self.error_label.setStyleSheet("color: #c0392b;")
        self.error_label.setWordWrap(True)
        self.error_label.hide()
        self.layout.addWidget(self.error_label)

    def _add_button_box(self) -> None:
        """
        Add the button box to the dialog.  Accepting runs
        :meth:`create_project` instead of closing the dialog.
        """
        self.button_box = QDialogButtonBox(self.dialog)
        self.create_button = self.button_box.addButton(
            "Create project", QDialogButtonBox.ButtonRole.AcceptRole
        )
        self.button_box.addButton(QDialogButtonBox.StandardButton.Cancel)
        self.button_box.accepted.connect(self.create_project)
        self.button_box.rejected.connect(self.dialog.reject)
        self.layout.addWidget(self.button_box)

    def set_parent_path(self, path: str | None) -> None:
        """
        Set the parent folder.

        Args:
            path: Folder path, or None

        """
        self.parent_path = path or None
        self.folder_label.setText(self.parent_path or self.NO_FOLDER_TEXT)
        self.folder_label.setToolTip(self.parent_path or "")

    def show_error(self, message: str | None) -> None:
        """
        Show ``message`` inside the dialog, or hide the error if it is None.

        Args:
            message: Error message

        """
        self.error_label.setText(message or "")
        self.error_label.setVisible(bool(message))

    def _set_busy(self, busy: bool) -> None:
        self.is_creating = busy
        for widget in (self.name_edit, self.browse_button, self.button_box):
            widget.setEnabled(not busy)
        self.create_button.setText("Creating..." if busy else "Create project")

    def browse(self) -> None:
        """
        Ask the user for the parent folder.  Cancelling keeps the current one.
        """
        folder = QFileDialog.getExistingDirectory(
            self.dialog, "Choose Parent Folder", self.parent_path or ""
        )
        if folder:
            self.set_parent_path(folder)
            QSettings().setValue(self.LAST_PARENT_KEY, folder)

    def validate(self) -> str | None:
        """
        Check the name and parent folder.

        Returns:
            The problem to show, or None if the project can be created

        """
        if not self.name_edit.text().strip():
            return "Enter a project name."
        if not self.parent_path:
            return "Choose a parent folder."
        return None

    def create_project(self) -> Project | None:
        """
        Create the project folder and switch to it.

        - If creation is already running, do nothing.
        - If the name or parent folder is missing, show why.
        - If the folder cannot be created, show an error and keep the dialog
          open.

        Returns:
            The new project, or None if it was not created

        """
        if self.is_creating:
            return None
        problem = self.validate()
        if problem:
            self.show_error(problem)
            return None
        self.show_error(None)
        self._set_busy(True)
        try:
            project = Project.create_folder(
                cast("str", self.parent_path), self.name_edit.text()
            )
        except ProjectCreationFailed:
            logger.exception("Error creating project")
            self.show_error("Unable to create that project.")
            return None
        finally:
            self._set_busy(False)
        self.main_window.switch_project(project, [])
        self.main_window.show_message(f'Project created: "{project.label}"')
        self.dialog.accept()
        return project

    def execute(self) -> None:
        """
        Execute the new project dialog.
        """
        self.build()
        self.dialog.exec()
