from collections.abc import Iterable
from typing import Final

from chrononotes.models.note import DateType, Note


class FuzzyDateMixin:
    """Mixin for fuzzy date summaries and chronological ordering of notes."""

    #: Summary shown for notes without a start date.
    NO_DATE: Final[str] = "No date"

    def date_summary(self, note: Note) -> str:
        """
        Summarize a note's date for display.

        The summary specific to the note's date type is used when the fields
        it needs are present; otherwise any start date is shown generically.

        Args:
            note: Note to summarize

        Returns:
            A summary such as ``"Around: 2023-08-15 (±3 days)"``

        """
        start = note.date_start
        if note.date_type == DateType.EXACT and start:
            return f"Exact: {start}"
        if (
            note.date_type == DateType.APPROX_RANGE
            and start
            and note.range_margin_days is not None
        ):
            return f"Around: {start} (±{note.range_margin_days} days)"
        if note.date_type == DateType.BROAD_PERIOD and start and note.date_end:
            return f"Period: {start} – {note.date_end}"
        if start:
            return f"Date: {start}"
        return self.NO_DATE

    def date_sort_key(self, note: Note) -> tuple[bool, str]:
        """
        Get the chronological sort key of a note.

        Dated notes come first, ordered by their ISO start date as a string.
        Undated notes share one key, so a stable sort keeps their input order.

        Args:
            note: Note to get the key for

        Returns:
            ``(is_undated, date_start)``

        """
        if note.date_start:
            return (False, note.date_start)
        return (True, "")

    def sort_by_date(self, notes: Iterable[Note]) -> list[Note]:
        """
        Sort notes chronologically without modifying the input.

        Args:
            notes: Notes to sort

        Returns:
            A new, sorted list

        """
        return sorted(notes, key=self.date_sort_key)
