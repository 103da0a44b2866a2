"""Markdown header extraction."""

from __future__ import annotations

from markdown_it import MarkdownIt
from markdown_it.token import Token

_parser = MarkdownIt("commonmark")

TEXT_TOKENS = frozenset({"text", "code_inline"})


def _inline_text(token: Token) -> str:
    return "".join(child.content for child in token.children or [] if child.type in TEXT_TOKENS).strip()


def extract_titles(document: str) -> list[str]:
    """Extract the text of every header in a Markdown document.

    Both ATX (``## Title``) and setext (underlined) headers are recognized.
    Inline links and emphasis are reduced to their text.

    Args:
        document: Markdown source

    Returns:
        Unique header texts, in document order
    """
    tokens = _parser.parse(document)
    titles: list[str] = []

    for index, token in enumerate(tokens[:-1]):
        if token.type != "heading_open":
            continue

        text = _inline_text(tokens[index + 1])
        if text and text not in titles:
            titles.append(text)

    return titles
