"""Timeline grouping service."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from chrononotes.mixins import FuzzyDateMixin
from chrononotes.models.note import Note
from chrononotes.models.project import ZoomLevel


@dataclass
class TimelineGroup:
    """A labelled bucket of notes on the timeline."""

    #: The bucket label: a year, a ``YYYY-MM`` month or "No date".
    label: str
    #: The notes in the bucket, in chronological order.
    notes: list[Note] = field(default_factory=list)


class TimelineGrouper(FuzzyDateMixin):
    """Sorts notes chronologically and buckets them by year or month."""

    def bucket_key(self, note: Note, zoom: ZoomLevel | str) -> str:
        """
        Get the bucket label of a note.

        The year and month are cut out of the ISO date string by position; the
        date is not parsed.

        Args:
            note: Note to get the label for
            zoom: Bucket size

        Returns:
            ``"YYYY"``, ``"YYYY-MM"`` or "No date"

        """
        if not note.date_start:
            return self.NO_DATE
        year = note.date_start[0:4]
        if ZoomLevel(zoom) == ZoomLevel.YEARS:
            return year
        return f"{year}-{note.date_start[5:7]}"

    def group(self, notes: Iterable[Note], zoom: ZoomLevel | str) -> list[TimelineGroup]:
        """
        Group notes into timeline buckets.

        Buckets appear in the order their first note appears in the sorted
        notes, so the undated bucket, if any, is last.

        Args:
            notes: Notes to group
            zoom: Bucket size

        Returns:
            Non-empty groups in chronological order

        """
        groups: dict[str, TimelineGroup] = {}
        for note in self.sort_by_date(notes):
            key = self.bucket_key(note, zoom)
            if key not in groups:
                groups[key] = TimelineGroup(label=key)
            groups[key].notes.append(note)
        return list(groups.values())
