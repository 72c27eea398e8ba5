"""Markdown export service for ChronoNotes."""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from chrononotes.exc import ExportFailed, NothingToExport
from chrononotes.mixins import FuzzyDateMixin
from chrononotes.models.note import Note
from chrononotes.services.markdown import HTMLToMarkdown

logger = logging.getLogger(__name__)


class MarkdownExporter(FuzzyDateMixin):
    """
    Exports notes to a single Markdown document.

    Each note becomes a block headed by its title, date summary and tags,
    followed by its body converted to Markdown.  Blocks are ordered
    chronologically, whatever order the notes were given in.

    Keyword Args:
        converter: HTML to Markdown converter for note bodies

    """

    #: Default export file name.
    DEFAULT_FILENAME: Final[str] = "chrononotes-notes.md"
    #: Heading used for notes with a blank title.
    UNTITLED: Final[str] = "Untitled note"
    #: Separator between note blocks.
    SEPARATOR: Final[str] = "\n\n---\n\n"

    def __init__(self, converter: HTMLToMarkdown | None = None) -> None:
        """
        Initialize exporter.
        """
        self.converter = converter or HTMLToMarkdown()

    def render_note(self, note: Note) -> str:
        """
        Render one note as a Markdown block.

        Args:
            note: Note to render

        Returns:
            The Markdown block

        """
        title = note.title.strip() or self.UNTITLED
        tags = ", ".join(note.tags) if note.tags else "No tags"
        return "\n".join(
            [
                f"# {title}",
                f"Date: {self.date_summary(note)}",
                f"Tags: {tags}",
                "",
                self.converter.convert(note.body),
            ]
        )

    def build(self, notes: Sequence[Note]) -> str:
        """
        Build the Markdown document for some notes.

        Args:
            notes: Notes to include

        Returns:
            The Markdown document

        """
        return self.SEPARATOR.join(
            self.render_note(note) for note in self.sort_by_date(notes)
        )

    def ensure_exportable(self, notes: Sequence[Note]) -> None:
        """
        Check that there is something to export.

        Args:
            notes: Notes to export

        Raises:
            NothingToExport: If ``notes`` is empty

        """
        if not notes:
            raise NothingToExport

    def export(self, notes: Sequence[Note], output_path: str | Path) -> Path:
        """
        Export notes to a Markdown file.

        Args:
            notes: Notes to export
            output_path: Path of the file to write; ``.md`` is added if the
                path has no suffix

        Raises:
            NothingToExport: If ``notes`` is empty.  Nothing is written.
            ExportFailed: If the file cannot be written

        Returns:
            The path that was written

        """
        self.ensure_exportable(notes)
        path = Path(output_path)
        if not path.suffix:
            path = path.with_suffix(".md")
        markdown = self.build(notes)
        try:
            path.write_text(markdown, encoding="utf-8")
        except OSError as e:
            raise ExportFailed(str(path), e) from e
        logger.info("Exported %d notes to %s", len(notes), path)
        return path
