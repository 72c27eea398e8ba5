"""Project model."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Final

from chrononotes.exc import ProjectCreationFailed
from chrononotes.models.note import Note

#: The ID of the project used when no folder has been chosen.
DEFAULT_PROJECT_ID: Final[str] = "default"
#: The label of the default project.
DEFAULT_PROJECT_LABEL: Final[str] = "Default"
#: Prefix of IDs derived from a folder path.
PATH_ID_PREFIX: Final[str] = "path:"


class ZoomLevel(StrEnum):
    """Timeline bucket size."""

    YEARS = "years"
    MONTHS = "months"


@dataclass
class Project:
    """
    Represents a project: an isolated namespace of notes and view state,
    usually tied to a folder on disk.
    """

    #: The project ID.
    id: str
    #: The label shown to the user.
    label: str
    #: The project folder, if any.
    path: str | None = None

    @classmethod
    def default(cls) -> "Project":
        """Return the project used when no folder has been chosen."""
        return cls(id=DEFAULT_PROJECT_ID, label=DEFAULT_PROJECT_LABEL)

    @staticmethod
    def derive_id(path: str | None) -> str:
        """
        Derive a stable project ID from a folder path.  Different paths never
        give the same ID.

        Args:
            path: Project folder path, or None

        Returns:
            ``"default"`` if there is no path, otherwise ``"path:<path>"``

        """
        if not path:
            return DEFAULT_PROJECT_ID
        return f"{PATH_ID_PREFIX}{path}"

    @staticmethod
    def derive_label(path: str | None) -> str:
        """
        Derive a project label from a folder path: the last non-empty path
        segment once trailing separators are stripped.

        Args:
            path: Project folder path, or None

        Returns:
            The label

        """
        if not path:
            return DEFAULT_PROJECT_LABEL
        trimmed = re.sub(r"[\\/]+$", "", path)
        last = re.split(r"[\\/]", trimmed)[-1]
        return last or trimmed.strip() or path.strip()

    @classmethod
    def from_path(cls, path: str | None) -> "Project":
        """
        Build the project for a folder path.

        Args:
            path: Project folder path, or None for the default project

        Returns:
            The project

        """
        if not path:
            return cls.default()
        return cls(id=cls.derive_id(path), label=cls.derive_label(path), path=path)

    @classmethod
    def create_folder(cls, parent: str | Path, name: str) -> "Project":
        """
        Create a project folder named ``name`` under ``parent`` and return its
        project.  An existing folder is reused.

        Args:
            parent: Folder to create the project in
            name: Name of the project folder

        Raises:
            ValueError: If ``name`` is blank
            ProjectCreationFailed: If the folder cannot be created

        Returns:
            The new project

        """
        name = name.strip()
        if not name:
            msg = "Enter a project name."
            raise ValueError(msg)
        target = Path(parent) / name
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProjectCreationFailed(str(target), e) from e
        return cls.from_path(str(target))

    def to_json(self) -> dict[str, str]:
        """
        Serialize project to a JSON-compatible dictionary.

        Returns:
            Dictionary containing project data

        """
        data = {"id": self.id, "label": self.label}
        if self.path:
            data["path"] = self.path
        return data

    @classmethod
    def from_json(cls, data: Any) -> "Project":
        """
        Create a project from saved data.

        Args:
            data: Project data dictionary

        Raises:
            ValueError: If ``data`` is not a mapping or lacks an id or label

        Returns:
            The project

        """
        if not isinstance(data, Mapping):
            msg = "Project record is not a mapping"
            raise ValueError(msg)  # noqa: TRY004
        project_id = data.get("id")
        label = data.get("label")
        if not project_id or not label:
            msg = "Project record needs an id and a label"
            raise ValueError(msg)
        path = data.get("path")
        return cls(id=str(project_id), label=str(label), path=str(path) if path else None)


@dataclass
class ProjectState:
    """The persisted state of one project."""

    #: The project's notes.
    notes: list[Note] = field(default_factory=list)
    #: The ID of the selected note.
    selected_id: str | None = None
    #: The tag filter text.
    tag_filter: str = ""
    #: The timeline zoom level.
    zoom: ZoomLevel = ZoomLevel.YEARS
