"""Data models for ChronoNotes."""

from chrononotes.models.note import Attachment, DateType, Note
from chrononotes.models.project import Project, ProjectState, ZoomLevel
from chrononotes.models.state import StateEntry

__all__ = [
    "Attachment",
    "DateType",
    "Note",
    "Project",
    "ProjectState",
    "StateEntry",
    "ZoomLevel",
]
