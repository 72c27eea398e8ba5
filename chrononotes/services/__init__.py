"""Services package initialization."""

from chrononotes.services.backends import DatabaseBackend, MemoryBackend, StateBackend
from chrononotes.services.export_markdown import MarkdownExporter
from chrononotes.services.markdown import HTMLToMarkdown, RichTextDocument
from chrononotes.services.project_store import ProjectStore
from chrononotes.services.repository import ExportScope, NoteRepository
from chrononotes.services.timeline import TimelineGroup, TimelineGrouper

__all__ = [
    "DatabaseBackend",
    "ExportScope",
    "HTMLToMarkdown",
    "MarkdownExporter",
    "MemoryBackend",
    "NoteRepository",
    "ProjectStore",
    "RichTextDocument",
    "StateBackend",
    "TimelineGroup",
    "TimelineGrouper",
]
