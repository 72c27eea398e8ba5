"""Project-scoped persistence of notes and view state."""

import json
import logging
from collections.abc import Sequence
from typing import Final

from chrononotes.exc import StorageError
from chrononotes.models.note import Note
from chrononotes.models.project import Project, ProjectState, ZoomLevel
from chrononotes.services.backends import StateBackend

logger = logging.getLogger(__name__)


class ProjectStore:
    """
    Keeps each project's notes and view state apart in one key-value backend,
    and remembers which project is current.

    Every value is addressed by ``(project ID, field)``, so one project can
    never read what another project wrote.  The current-project record lives
    in the application scope, which no project ID can equal.

    Reads never fail: anything missing or unreadable is replaced by a default.
    Writes are best effort: failures are logged and otherwise ignored.

    Args:
        backend: Key-value backend to persist to

    """

    #: Scope of application-wide values.
    APP_SCOPE: Final[str] = "app"
    #: Field holding the current project record.
    CURRENT_PROJECT_FIELD: Final[str] = "current_project"
    #: Field holding a project's notes.
    NOTES_FIELD: Final[str] = "notes"
    #: Field holding a project's selected note ID.
    SELECTED_FIELD: Final[str] = "selected_note"
    #: Field holding a project's tag filter.
    TAG_FILTER_FIELD: Final[str] = "tag_filter"
    #: Field holding a project's timeline zoom level.
    ZOOM_FIELD: Final[str] = "zoom_level"

    derive_id = staticmethod(Project.derive_id)
    derive_label = staticmethod(Project.derive_label)

    def __init__(self, backend: StateBackend) -> None:
        #: The key-value backend.
        self.backend = backend

    # ===============================
    # Current project
    # ===============================

    def current_project(self) -> Project:
        """
        Get the current project.

        Returns:
            The saved current project, or the default project if none is saved
            or the saved record is unusable

        """
        raw = self._read(self.APP_SCOPE, self.CURRENT_PROJECT_FIELD)
        if not raw:
            return Project.default()
        try:
            return Project.from_json(json.loads(raw))
        except ValueError:
            logger.debug("Ignoring unreadable current project record: %r", raw)
            return Project.default()

    def set_current_project(self, project: Project) -> None:
        """
        Save the current project.

        Args:
            project: The project to make current

        """
        self._write(
            self.APP_SCOPE, self.CURRENT_PROJECT_FIELD, json.dumps(project.to_json())
        )

    # ===============================
    # Project state
    # ===============================

    def load_state(self, project_id: str, fallback_notes: Sequence[Note]) -> ProjectState:
        """
        Load a project's notes and view state.

        Args:
            project_id: Project ID
            fallback_notes: Notes to use when the project has no readable notes

        Returns:
            The project state

        """
        notes = self._parse_notes(
            self._read(project_id, self.NOTES_FIELD), fallback_notes
        )
        selected_id = self._read(project_id, self.SELECTED_FIELD)
        tag_filter = self._read(project_id, self.TAG_FILTER_FIELD) or ""
        zoom = (
            ZoomLevel.MONTHS
            if self._read(project_id, self.ZOOM_FIELD) == ZoomLevel.MONTHS.value
            else ZoomLevel.YEARS
        )
        return ProjectState(
            notes=notes, selected_id=selected_id, tag_filter=tag_filter, zoom=zoom
        )

    def save_state(self, project_id: str, state: ProjectState) -> None:
        """
        Save a project's notes and view state.

        The selected note key is removed when nothing is selected.

        Args:
            project_id: Project ID
            state: The state to save

        """
        notes = json.dumps([note.to_json() for note in state.notes], ensure_ascii=False)
        self._write(project_id, self.NOTES_FIELD, notes)
        if state.selected_id is not None:
            self._write(project_id, self.SELECTED_FIELD, state.selected_id)
        else:
            self._remove(project_id, self.SELECTED_FIELD)
        self._write(project_id, self.TAG_FILTER_FIELD, state.tag_filter)
        self._write(project_id, self.ZOOM_FIELD, ZoomLevel(state.zoom).value)

    def _parse_notes(self, raw: str | None, fallback: Sequence[Note]) -> list[Note]:
        """
        Parse saved notes.

        Args:
            raw: The saved JSON, or None
            fallback: Notes to use if ``raw`` is missing or is not a list of notes

        Returns:
            The notes

        """
        if not raw:
            return list(fallback)
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                logger.debug("Saved notes are not a list; using fallback notes")
                return list(fallback)
            return [Note.from_json(item) for item in data]
        except (ValueError, TypeError, AttributeError):
            logger.debug("Saved notes are unreadable; using fallback notes", exc_info=True)
            return list(fallback)

    # ===============================
    # Backend access
    # ===============================

    def _read(self, scope: str, field: str) -> str | None:
        try:
            return self.backend.get(scope, field)
        except StorageError:
            logger.debug("Could not read %s/%s", scope, field, exc_info=True)
            return None

    def _write(self, scope: str, field: str, value: str) -> None:
        try:
            self.backend.set(scope, field, value)
        except StorageError as e:
            logger.warning("Could not save %s/%s: %s", scope, field, e)

    def _remove(self, scope: str, field: str) -> None:
        try:
            self.backend.remove(scope, field)
        except StorageError as e:
            logger.warning("Could not remove %s/%s: %s", scope, field, e)
