"""Rich-text (HTML) to Markdown conversion."""

import logging
import re
from typing import Final, Protocol, runtime_checkable

from selectolax.parser import HTMLParser, Node

logger = logging.getLogger(__name__)


@runtime_checkable
class RichTextDocument(Protocol):
    """
    A formatted document owned by a rich-text editing surface.  It is only
    ever exchanged in its serialized (HTML) form.
    """

    def serialize(self) -> str:
        """Return the document as HTML."""
        ...

    def load_from(self, text: str) -> None:
        """Replace the document with the given HTML."""
        ...


class HTMLToMarkdown:
    """
    Converts the HTML produced by the rich-text editor into flat Markdown.

    Only paragraphs, line breaks, lists, bold, italic and generic blocks are
    understood.  Any other element contributes its text without markup, and
    text is never escaped.  Nested lists are flattened: a list item only knows
    the prefix of its nearest enclosing list.
    """

    #: Tag name selectolax gives to text nodes.
    TEXT_TAG: Final[str] = "-text"
    #: Tags rendered as ``**bold**``.
    BOLD_TAGS: Final[frozenset[str]] = frozenset({"b", "strong"})
    #: Tags rendered as ``_italic_``.
    ITALIC_TAGS: Final[frozenset[str]] = frozenset({"i", "em"})
    #: Tags whose content is followed by a blank line.
    BLOCK_TAGS: Final[frozenset[str]] = frozenset({"div", "section", "article"})
    #: Prefix of unordered list items.
    BULLET: Final[str] = "- "

    #: ``font-weight`` values in a span style that count as bold.
    BOLD_STYLE: Final[re.Pattern[str]] = re.compile(
        r"font-weight\s*:\s*(bold|bolder|[6-9]00)", re.IGNORECASE
    )
    #: ``font-style`` values in a span style that count as italic.
    ITALIC_STYLE: Final[re.Pattern[str]] = re.compile(
        r"font-style\s*:\s*(italic|oblique)", re.IGNORECASE
    )

    def convert(self, html: str) -> str:
        """
        Convert HTML to Markdown.

        If the HTML cannot be traversed, it is returned unchanged.

        Args:
            html: Serialized rich-text document

        Returns:
            Markdown text

        """
        if not html:
            return ""
        try:
            return self._convert(html)
        except Exception:  # noqa: BLE001
            logger.warning("Could not convert note body to Markdown", exc_info=True)
            return html

    def _convert(self, html: str) -> str:
        body = HTMLParser(html).body
        if body is None:
            return ""
        lines: list[str] = []
        for child in body.iter(include_text=True):
            content = self._serialize(child, lines)
            if content.strip():
                lines.append(content.strip())
        return "\n\n".join(lines).strip()

    def _render_children(self, node: Node, lines: list[str], prefix: str) -> str:
        return "".join(
            self._serialize(child, lines, prefix)
            for child in node.iter(include_text=True)
        )

    def _serialize(self, node: Node, lines: list[str], prefix: str = "") -> str:  # noqa: PLR0911
        """
        Serialize one node.

        Block-level content is appended to ``lines``; inline content is
        returned to the caller.

        Args:
            node: Node to serialize
            lines: Output lines collected so far
            prefix: List item prefix supplied by the enclosing list

        Returns:
            The inline text of the node

        """
        tag = node.tag
        if tag == self.TEXT_TAG:
            return node.text(deep=False) or ""
        if tag == "p":
            content = self._render_children(node, lines, prefix).strip()
            if content:
                lines.append(content)
            return ""
        if tag == "br":
            lines.append("")
            return ""
        if tag == "ul":
            for child in node.iter(include_text=True):
                self._serialize(child, lines, self.BULLET)
            return ""
        if tag == "ol":
            for index, child in enumerate(node.iter(include_text=False), start=1):
                self._serialize(child, lines, f"{index}. ")
            return ""
        if tag == "li":
            content = self._render_children(node, lines, prefix).strip()
            if content:
                lines.append(f"{prefix}{content}")
            return ""
        if tag in self.BOLD_TAGS:
            return f"**{self._render_children(node, lines, prefix)}**"
        if tag in self.ITALIC_TAGS:
            return f"_{self._render_children(node, lines, prefix)}_"
        if tag in self.BLOCK_TAGS:
            self._render_children(node, lines, prefix)
            lines.append("")
            return ""
        content = self._render_children(node, lines, prefix)
        if tag == "span":
            return self._apply_span_style(node, content)
        return content

    def _apply_span_style(self, node: Node, content: str) -> str:
        """
        Wrap the content of a styled span the way ``<b>`` and ``<i>`` would be.
        The Qt text editor writes bold and italic text as styled spans.

        Args:
            node: The span node
            content: The rendered children of the span

        Returns:
            The content with any bold or italic markup applied

        """
        style = node.attributes.get("style") or ""
        if self.ITALIC_STYLE.search(style):
            content = f"_{content}_"
        if self.BOLD_STYLE.search(style):
            content = f"**{content}**"
        return content


def html_to_markdown(html: str) -> str:
    """
    Convert a note body to Markdown.

    Args:
        html: Serialized rich-text document

    Returns:
        Markdown text, or ``html`` unchanged if it could not be converted

    """
    return HTMLToMarkdown().convert(html)


def html_to_plain_text(html: str) -> str:
    """
    Get the trimmed text content of a note body.

    Args:
        html: Serialized rich-text document

    Returns:
        Plain text, or ``html`` unchanged if it could not be parsed

    """
    if not html:
        return ""
    try:
        body = HTMLParser(html).body
    except Exception:  # noqa: BLE001
        logger.debug("Could not parse note body", exc_info=True)
        return html
    if body is None:
        return ""
    return body.text(deep=True).strip()


def body_preview(html: str, max_length: int = 160) -> str:
    """
    Get a short plain-text preview of a note body.

    Args:
        html: Serialized rich-text document

    Keyword Args:
        max_length: Maximum number of characters before truncation

    Returns:
        The preview, ending in an ellipsis if it was truncated

    """
    text = html_to_plain_text(html)
    if len(text) <= max_length:
        return text
    return f"{text[:max_length].rstrip()}…"
