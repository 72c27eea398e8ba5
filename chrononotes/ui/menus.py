from typing import TYPE_CHECKING

from PySide6.QtGui import QAction, QActionGroup, QKeySequence
from PySide6.QtWidgets import QMenu

from chrononotes.models.project import ZoomLevel

if TYPE_CHECKING:
    from chrononotes.ui.main_window import MainWindow


class MainMenu:
    """Main application menu."""

    def __init__(self, main_window: "MainWindow") -> None:
        """
        Initialize main menu.

        Args:
            main_window: Main window instance

        """
        #: Main window instance
        self.main_window = main_window
        #: Menu bar
        self.menu = self.main_window.menuBar()

    def add_menu(self, menu: str) -> QMenu:
        """
        Add a menu to the main menu bar.

        Args:
            menu: title of the menu

        Returns:
            The added menu instance

        """
        return self.menu.addMenu(menu)

    def build(self) -> None:
        """Build the main menu."""
        self.file_menu = FileMenu(self, self.main_window).file_menu
        #: The View menu, kept so the zoom choice can follow the window
        self.view_menu = ViewMenu(self, self.main_window)
        HelpMenu(self, self.main_window)


class FileMenu:
    """
    A "File" menu to be added to the main menu bar with the following actions:

    - New Note
    - New Project...
    - Open Project Folder...
    - Export...
    - Quit

    Args:
        main_menu: Main menu instance
        main_window: Main window instance

    """

    def __init__(self, main_menu: MainMenu, main_window: "MainWindow") -> None:
        #: Main window instance
        self.main_window = main_window
        #: Main menu instance
        self.main_menu = main_menu
        self.populate()

    def populate(self) -> None:
        """
        Add a "File" menu to the main menu bar.
        """
        actions = self.main_window.action_service
        self.file_menu = self.main_menu.add_menu("&File")

        new_note_action = QAction("New &Note", self.file_menu)
        new_note_action.setShortcut(QKeySequence("Ctrl+N"))
        new_note_action.triggered.connect(actions.new_note)
        self.file_menu.addAction(new_note_action)

        self.file_menu.addSeparator()

        new_project_action = QAction("New &Project...", self.file_menu)
        new_project_action.setShortcut(QKeySequence("Ctrl+Shift+N"))
        new_project_action.triggered.connect(actions.new_project)
        self.file_menu.addAction(new_project_action)

        open_action = QAction("&Open Project Folder...", self.file_menu)
        open_action.setShortcut(QKeySequence("Ctrl+O"))
        open_action.triggered.connect(actions.open_project_folder)
        self.file_menu.addAction(open_action)

        self.file_menu.addSeparator()

        export_action = QAction("&Export...", self.file_menu)
        export_action.setShortcut(QKeySequence("Ctrl+E"))
        export_action.triggered.connect(actions.export_notes)
        self.file_menu.addAction(export_action)

        self.file_menu.addSeparator()

        quit_action = QAction("&Quit", self.file_menu)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.main_window.close)
        self.file_menu.addAction(quit_action)


class ViewMenu:
    """
    A "View" menu to be added to the main menu bar with one checkable action
    per timeline zoom level.

    Args:
        main_menu: Main menu instance
        main_window: Main window instance

    """

    def __init__(self, main_menu: MainMenu, main_window: "MainWindow") -> None:
        #: Main window instance
        self.main_window = main_window
        #: Main menu instance
        self.main_menu = main_menu
        #: Zoom actions, by zoom level
        self.zoom_actions: dict[ZoomLevel, QAction] = {}
        self.populate()

    def populate(self) -> None:
        """
        Add a "View" menu with "Group by Years" and "Group by Months".
        """
        self.view_menu = self.main_menu.add_menu("&View")
        group = QActionGroup(self.view_menu)
        group.setExclusive(True)
        for zoom, text, shortcut in (
            (ZoomLevel.YEARS, "Group by &Years", "Ctrl+1"),
            (ZoomLevel.MONTHS, "Group by &Months", "Ctrl+2"),
        ):
            action = QAction(text, self.view_menu)
            action.setCheckable(True)
            action.setShortcut(QKeySequence(shortcut))
            action.triggered.connect(
                lambda _checked=False, z=zoom: self.main_window.set_zoom(z)
            )
            group.addAction(action)
            self.view_menu.addAction(action)
            self.zoom_actions[zoom] = action

    def set_zoom(self, zoom: ZoomLevel) -> None:
        """
        Check the action of ``zoom``.

        Args:
            zoom: Current zoom level

        """
        self.zoom_actions[ZoomLevel(zoom)].setChecked(True)


class HelpMenu:
    """
    A "Help" menu to be added to the main menu bar with the following actions:

    - About ChronoNotes
    """

    def __init__(self, main_menu: MainMenu, main_window: "MainWindow") -> None:
        #: Main window instance
        self.main_window = main_window
        #: Main menu instance
        self.main_menu = main_menu
        self.populate()

    def populate(self) -> None:
        """
        Add a "Help" menu to the main menu bar.
        """
        self.help_menu = self.main_menu.add_menu("&Help")

        about_action = QAction("&About ChronoNotes", self.help_menu)
        about_action.triggered.connect(self.main_window.show_about)
        self.help_menu.addAction(about_action)
