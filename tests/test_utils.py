"""Unit tests for utility functions."""

import re
from datetime import date

from chrononotes.utils import (
    generate_attachment_id,
    generate_note_id,
    last_path_segment,
    parse_tags,
    today_iso,
)


class TestTodayIso:
    """Test cases for today_iso()."""

    def test_formats_given_date(self):
        """Test formatting a given date."""
        assert today_iso(date(2024, 2, 9)) == "2024-02-09"

    def test_defaults_to_today(self):
        """Test the current date is used by default."""
        assert today_iso() == date.today().isoformat()


class TestGenerateNoteId:
    """Test cases for generate_note_id()."""

    def test_uses_timestamp(self):
        """Test the ID is built from the timestamp."""
        assert generate_note_id(now_ms=1700000000000) == "note-1700000000000"

    def test_bumps_timestamp_on_collision(self):
        """Test a taken ID moves the timestamp forward."""
        existing = ["note-100", "note-101"]
        assert generate_note_id(existing, now_ms=100) == "note-102"

    def test_current_time_format(self):
        """Test IDs generated from the clock look like note-<digits>."""
        assert re.fullmatch(r"note-\d+", generate_note_id())


class TestGenerateAttachmentId:
    """Test cases for generate_attachment_id()."""

    def test_ids_are_unique(self):
        """Test two IDs differ."""
        assert generate_attachment_id() != generate_attachment_id()


class TestLastPathSegment:
    """Test cases for last_path_segment()."""

    def test_posix_path(self):
        """Test a slash separated path."""
        assert last_path_segment("/home/me/notes.txt") == "notes.txt"

    def test_windows_path(self):
        """Test a backslash separated path."""
        assert last_path_segment("C:\\Users\\me\\photo.jpg") == "photo.jpg"

    def test_no_separator(self):
        """Test a bare name is returned as is."""
        assert last_path_segment("file.md") == "file.md"

    def test_trailing_separator(self):
        """Test a trailing separator gives an empty segment."""
        assert last_path_segment("/home/me/") == ""


class TestParseTags:
    """Test cases for parse_tags()."""

    def test_trims_and_drops_empty(self):
        """Test tags are trimmed and empty entries dropped."""
        assert parse_tags(" travel, Work,,  ") == ["travel", "Work"]

    def test_keeps_duplicates_and_order(self):
        """Test duplicates are kept in the order entered."""
        assert parse_tags("b, a, b") == ["b", "a", "b"]

    def test_blank(self):
        """Test blank text gives no tags."""
        assert parse_tags("   ") == []

