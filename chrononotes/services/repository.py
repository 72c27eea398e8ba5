"""In-memory note collection of the active project."""

import dataclasses
import logging
from collections.abc import Iterable, Sequence
from enum import StrEnum
from typing import Any

from chrononotes.exc import DoesNotExist
from chrononotes.models.note import Attachment, DateType, Note
from chrononotes.models.project import Project, ProjectState, ZoomLevel
from chrononotes.services.project_store import ProjectStore
from chrononotes.services.timeline import TimelineGroup, TimelineGrouper
from chrononotes.utils import generate_note_id, today_iso

logger = logging.getLogger(__name__)


class ExportScope(StrEnum):
    """Which notes an export covers."""

    ALL = "all"
    FILTERED = "filtered"


def sample_notes() -> list[Note]:
    """
    Build the demonstration notes shown in a project that has no saved notes.

    Returns:
        One note of each date type

    """
    return [
        Note(
            id="1",
            title="First note",
            body="Sketch the early concept for a time-oriented note system.",
            date_type=DateType.EXACT,
            date_start="2024-02-10",
        ),
        Note(
            id="2",
            title="Trip to X",
            body="Outline travel logistics, highlights, and people to meet.",
            date_type=DateType.APPROX_RANGE,
            date_start="2023-08-15",
            range_margin_days=3,
        ),
        Note(
            id="3",
            title="Workshop recap",
            body="Summaries of the design sessions and key follow-ups.",
            date_type=DateType.BROAD_PERIOD,
            date_start="2022-09-01",
            date_end="2022-12-31",
        ),
    ]


class NoteRepository:
    """
    Holds the notes and view state of the active project.

    Every change to the notes, the selection, the tag filter or the zoom level
    is saved to the :class:`ProjectStore` straight away.

    Args:
        store: Store to load from and save to
        project: The active project

    Keyword Args:
        fallback_notes: Notes to start with if the project has none saved

    """

    #: Names of the note fields that :meth:`update_note` accepts.
    NOTE_FIELDS = frozenset(f.name for f in dataclasses.fields(Note)) - {"id"}

    def __init__(
        self,
        store: ProjectStore,
        project: Project,
        fallback_notes: Sequence[Note] = (),
    ) -> None:
        #: The project store.
        self.store = store
        #: The active project.
        self.project = project
        #: The active project's state.
        self.state: ProjectState = store.load_state(project.id, fallback_notes)
        #: Groups notes for the timeline.
        self.grouper = TimelineGrouper()

    @classmethod
    def open_current(
        cls, store: ProjectStore, fallback_notes: Sequence[Note] = ()
    ) -> "NoteRepository":
        """
        Open the repository of the project the store says is current.

        Args:
            store: Project store

        Keyword Args:
            fallback_notes: Notes to start with if the project has none saved

        Returns:
            The repository

        """
        return cls(store, store.current_project(), fallback_notes=fallback_notes)

    # ===============================
    # Queries
    # ===============================

    @staticmethod
    def filter_by_tag(notes: Sequence[Note], query: str) -> Sequence[Note]:
        """
        Keep the notes with a tag containing ``query``, ignoring case.

        Args:
            notes: Notes to filter
            query: Text to look for in tags; blank means no filtering

        Returns:
            ``notes`` itself if ``query`` is blank, otherwise the matching notes
            in their original order

        """
        needle = query.strip().lower()
        if not needle:
            return notes
        return [
            note for note in notes if any(needle in tag.lower() for tag in note.tags)
        ]

    @property
    def notes(self) -> list[Note]:
        """All notes of the active project, in creation order."""
        return self.state.notes

    @property
    def selected_id(self) -> str | None:
        """The ID of the selected note."""
        return self.state.selected_id

    @property
    def tag_filter(self) -> str:
        """The tag filter text."""
        return self.state.tag_filter

    @property
    def zoom(self) -> ZoomLevel:
        """The timeline zoom level."""
        return self.state.zoom

    @property
    def filtered_notes(self) -> Sequence[Note]:
        """The notes matching the tag filter."""
        return self.filter_by_tag(self.notes, self.tag_filter)

    @property
    def has_filtered_subset(self) -> bool:
        """Whether the tag filter hides any notes."""
        return len(self.filtered_notes) != len(self.notes)

    @property
    def selected_note(self) -> Note | None:
        """The selected note, if it still exists."""
        if self.selected_id is None:
            return None
        return self.find_note(self.selected_id)

    def find_note(self, note_id: str) -> Note | None:
        """
        Find a note by ID.

        Args:
            note_id: Note ID

        Returns:
            The note or None if not found

        """
        for note in self.notes:
            if note.id == note_id:
                return note
        return None

    def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Args:
            note_id: Note ID

        Raises:
            DoesNotExist: If there is no such note

        Returns:
            The note

        """
        note = self.find_note(note_id)
        if note is None:
            raise DoesNotExist("Note", note_id)
        return note

    def notes_for_scope(self, scope: ExportScope | str) -> Sequence[Note]:
        """
        Get the notes an export covers.

        Args:
            scope: Export scope

        Returns:
            All notes, or only those matching the tag filter

        """
        if ExportScope(scope) == ExportScope.FILTERED:
            return self.filtered_notes
        return self.notes

    def timeline(self) -> list[TimelineGroup]:
        """
        Group the notes matching the tag filter for the timeline.

        Returns:
            The timeline groups at the current zoom level

        """
        return self.grouper.group(self.filtered_notes, self.zoom)

    # ===============================
    # Mutations
    # ===============================

    def create_note(self) -> Note:
        """
        Create an empty note dated today, add it and select it.

        Returns:
            The new note

        """
        note = Note(
            id=generate_note_id(existing.id for existing in self.notes),
            date_type=DateType.EXACT,
            date_start=today_iso(),
        )
        self.state.notes.append(note)
        self.state.selected_id = note.id
        self.save()
        return note

    def update_note(self, note_id: str, **changes: Any) -> Note | None:
        """
        Change some fields of a note.  The date fields are not validated.

        Args:
            note_id: Note ID
            **changes: New values, by field name

        Raises:
            TypeError: If a field name is not a note field

        Returns:
            The changed note, or None if there is no such note

        """
        unknown = set(changes) - self.NOTE_FIELDS
        if unknown:
            msg = f"Unknown note fields: {', '.join(sorted(unknown))}"
            raise TypeError(msg)
        note = self.find_note(note_id)
        if note is None:
            return None
        for name, value in changes.items():
            setattr(note, name, value)
        self.save()
        return note

    def delete_note(self, note_id: str) -> bool:
        """
        Delete a note.  The selection is cleared if it was the selected note.

        Args:
            note_id: Note ID

        Returns:
            True if a note was deleted

        """
        note = self.find_note(note_id)
        if note is None:
            return False
        self.state.notes.remove(note)
        if self.state.selected_id == note_id:
            self.state.selected_id = None
        self.save()
        return True

    def select_note(self, note_id: str | None) -> None:
        """
        Select a note, or clear the selection.

        Args:
            note_id: Note ID, or None

        """
        self.state.selected_id = note_id
        self.save()

    def set_tag_filter(self, tag_filter: str) -> None:
        """
        Set the tag filter text.

        Args:
            tag_filter: Filter text

        """
        self.state.tag_filter = tag_filter
        self.save()

    def set_zoom(self, zoom: ZoomLevel | str) -> None:
        """
        Set the timeline zoom level.

        Args:
            zoom: Zoom level

        """
        self.state.zoom = ZoomLevel(zoom)
        self.save()

    def add_attachments(self, note_id: str, file_paths: Iterable[str]) -> list[Attachment]:
        """
        Attach files to a note.  Empty paths are skipped.

        Args:
            note_id: Note ID
            file_paths: Paths of the files to attach

        Raises:
            DoesNotExist: If there is no such note

        Returns:
            The new attachments

        """
        note = self.get_note(note_id)
        attachments = [Attachment.from_path(path) for path in file_paths if path]
        if attachments:
            self.update_note(note_id, attachments=[*note.attachments, *attachments])
        return attachments

    def remove_attachment(self, note_id: str, attachment_id: str) -> None:
        """
        Remove an attachment from a note.

        Args:
            note_id: Note ID
            attachment_id: Attachment ID

        Raises:
            DoesNotExist: If there is no such note

        """
        note = self.get_note(note_id)
        self.update_note(
            note_id,
            attachments=[a for a in note.attachments if a.id != attachment_id],
        )

    def switch_project(self, project: Project, fallback_notes: Sequence[Note] = ()) -> None:
        """
        Make ``project`` current and load its state in place of the active one.

        Args:
            project: Project to switch to

        Keyword Args:
            fallback_notes: Notes to start with if the project has none saved

        """
        self.store.set_current_project(project)
        self.project = project
        self.state = self.store.load_state(project.id, fallback_notes)
        logger.info("Switched to project %s (%s)", project.label, project.id)

    def save(self) -> None:
        """Save the active project's state."""
        self.store.save_state(self.project.id, self.state)
