"""Unit tests for the rich-text editor."""

from PySide6.QtGui import QTextListFormat

from chrononotes.services.markdown import RichTextDocument, html_to_markdown
from chrononotes.ui.rich_text import RichTextEditor, RichTextField


class TestRichTextEditor:
    """Test cases for RichTextEditor."""

    def test_is_rich_text_document(self, qapp):
        """Test the editor can be used wherever a document is expected."""
        assert isinstance(RichTextEditor(), RichTextDocument)

    def test_empty_serializes_to_empty_string(self, qapp):
        """Test an empty editor serializes to an empty string."""
        assert RichTextEditor().serialize() == ""

    def test_load_and_convert(self, qapp):
        """Test loaded HTML comes back out as equivalent Markdown."""
        editor = RichTextEditor()
        editor.load_from("<p>Hello <b>world</b></p><p>Second <i>line</i></p>")
        assert html_to_markdown(editor.serialize()) == "Hello **world**\n\nSecond _line_"

    def test_load_does_not_emit(self, qapp):
        """Test loading a document is not reported as a change."""
        editor = RichTextEditor()
        received = []
        editor.document_changed.connect(received.append)
        editor.load_from("<p>Loaded</p>")
        assert received == []

    def test_typing_emits(self, qapp):
        """Test user edits are reported with the serialized document."""
        editor = RichTextEditor()
        received = []
        editor.document_changed.connect(received.append)
        editor.insertPlainText("typed")
        assert received
        assert html_to_markdown(received[-1]) == "typed"

    def test_toggle_bold(self, qapp):
        """Test making the selection bold."""
        editor = RichTextEditor()
        editor.setPlainText("strong words")
        editor.selectAll()
        editor.toggle_bold()
        assert html_to_markdown(editor.serialize()) == "**strong words**"

    def test_toggle_italic(self, qapp):
        """Test making the selection italic."""
        editor = RichTextEditor()
        editor.setPlainText("aside")
        editor.selectAll()
        editor.toggle_italic()
        assert html_to_markdown(editor.serialize()) == "_aside_"

    def test_numbered_list(self, qapp):
        """Test turning a paragraph into a numbered list."""
        editor = RichTextEditor()
        editor.setPlainText("item")
        editor.make_list(QTextListFormat.Style.ListDecimal)
        assert html_to_markdown(editor.serialize()) == "1. item"

    def test_bulleted_list(self, qapp):
        """Test turning a paragraph into a bulleted list."""
        editor = RichTextEditor()
        editor.setPlainText("item")
        editor.make_list(QTextListFormat.Style.ListDisc)
        assert html_to_markdown(editor.serialize()) == "- item"


class TestRichTextField:
    """Test cases for RichTextField."""

    def test_toolbar_acts_on_editor(self, qapp):
        """Test the toolbar is wired to the field's editor."""
        field = RichTextField()
        assert field.toolbar.editor is field.editor
