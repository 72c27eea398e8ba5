"""Note model."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

from chrononotes.utils import generate_attachment_id, last_path_segment


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    """
    Read an optional string field from saved data.

    Args:
        data: Saved data
        key: Field name

    Raises:
        ValueError: If the field holds something other than a string

    Returns:
        The string, or None if the field is missing or empty

    """
    value = data.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        msg = f"Expected {key} to be a string, got {type(value).__name__}"
        raise ValueError(msg)  # noqa: TRY004
    return value


class DateType(StrEnum):
    """The precision model of a note's date."""

    #: A single calendar day.
    EXACT = "exact"
    #: A calendar day plus a symmetric margin in days.
    APPROX_RANGE = "approx_range"
    #: A calendar day range.
    BROAD_PERIOD = "broad_period"


@dataclass
class Attachment:
    """
    An opaque reference to a file attached to a note.  The file itself is
    never read.
    """

    #: The attachment ID.
    id: str
    #: The display name of the file.
    file_name: str
    #: The path to the file.
    file_path: str

    @classmethod
    def from_path(cls, file_path: str) -> "Attachment":
        """
        Build an attachment for a file path.

        Args:
            file_path: Path to the attached file

        Returns:
            A new attachment with a random ID

        """
        return cls(
            id=generate_attachment_id(),
            file_name=last_path_segment(file_path) or file_path,
            file_path=file_path,
        )

    def to_json(self) -> dict[str, str]:
        """Serialize attachment to a JSON-compatible dictionary."""
        return asdict(self)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Attachment":
        """
        Create an attachment from saved data.

        Args:
            data: Attachment data dictionary

        Returns:
            The attachment

        """
        file_path = str(data.get("file_path", ""))
        return cls(
            id=str(data.get("id", "")),
            file_name=str(data.get("file_name") or last_path_segment(file_path)),
            file_path=file_path,
        )


@dataclass
class Note:
    """
    A note annotated with a fuzzy date.

    The date fields are soft: nothing here enforces that they agree with
    :attr:`date_type`.  Use :meth:`date_problems` to find out whether they do.
    """

    #: The note ID.
    id: str
    #: The note title, may be empty.
    title: str = ""
    #: The serialized rich-text body (HTML).
    body: str = ""
    #: One of the :class:`DateType` values.
    date_type: str = DateType.EXACT
    #: ISO-8601 calendar date the note starts on.
    date_start: str | None = None
    #: ISO-8601 calendar date the note ends on, for broad periods.
    date_end: str | None = None
    #: Margin in days around :attr:`date_start`, for approximate ranges.
    range_margin_days: int | None = None
    #: Tags, in the order they were entered.
    tags: list[str] = field(default_factory=list)
    #: Attached files.
    attachments: list[Attachment] = field(default_factory=list)

    def date_problems(self) -> list[str]:
        """
        List the ways the date fields disagree with :attr:`date_type`.

        Returns:
            Human-readable problems; empty if the date fields are consistent

        """
        problems: list[str] = []
        if self.date_type == DateType.EXACT:
            if not self.date_start:
                problems.append("An exact date needs a day.")
        elif self.date_type == DateType.APPROX_RANGE:
            if not self.date_start:
                problems.append("An approximate range needs a center day.")
            if self.range_margin_days is None:
                problems.append("An approximate range needs a margin in days.")
            elif self.range_margin_days < 0:
                problems.append("The margin in days cannot be negative.")
        elif self.date_type == DateType.BROAD_PERIOD:
            if not self.date_start or not self.date_end:
                problems.append("A period needs both a start and an end.")
            elif self.date_start > self.date_end:
                problems.append("The period ends before it starts.")
        return problems

    def to_json(self) -> dict[str, Any]:
        """
        Serialize note to a JSON-compatible dictionary.

        Returns:
            Dictionary containing note data

        """
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "date_type": str(self.date_type),
            "date_start": self.date_start,
            "date_end": self.date_end,
            "range_margin_days": self.range_margin_days,
            "tags": list(self.tags),
            "attachments": [attachment.to_json() for attachment in self.attachments],
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Note":
        """
        Create a note from saved data.

        Missing fields get their defaults, so notes saved before a field
        existed (attachments, for instance) still load.

        Args:
            data: Note data dictionary

        Raises:
            ValueError: If ``data`` is not a mapping, or a field holds a value
                of the wrong type

        Returns:
            The note

        """
        if not isinstance(data, Mapping):
            msg = f"Expected a note mapping, got {type(data).__name__}"
            raise ValueError(msg)  # noqa: TRY004
        margin = data.get("range_margin_days")
        tags = data.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            msg = f"Expected tags to be a list of strings, got {tags!r}"
            raise ValueError(msg)  # noqa: TRY004
        attachments = data.get("attachments") or []
        if not isinstance(attachments, list):
            msg = f"Expected attachments to be a list, got {attachments!r}"
            raise ValueError(msg)  # noqa: TRY004
        return cls(
            id=str(data.get("id", "")),
            title=_optional_str(data, "title") or "",
            body=_optional_str(data, "body") or "",
            date_type=_optional_str(data, "date_type") or DateType.EXACT,
            date_start=_optional_str(data, "date_start"),
            date_end=_optional_str(data, "date_end"),
            range_margin_days=int(margin) if margin is not None else None,
            tags=list(tags),
            attachments=[Attachment.from_json(item) for item in attachments],
        )
