"""Markdown rendering for post bodies."""

import re

from markdown_it import MarkdownIt

# Posts embed raw HTML snippets, so HTML passthrough stays on.
_md = MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])

_WS_RE = re.compile(r"\s+")

DEFAULT_EXCERPT_WORDS = 40


def render_markdown(content: str | None) -> str:
    """Render markdown content to HTML.

    Returns an empty string if content is None or empty.
    """
    if content:
        return _md.render(content).strip()
    return ""


def excerpt(content: str | None, words: int = DEFAULT_EXCERPT_WORDS) -> str:
    """Return the first paragraph of ``content`` as plain text."""
    if not content:
        return ""

    tokens = _md.parse(content)
    inline = None
    for i, token in enumerate(tokens):
        if token.type == "paragraph_open" and i + 1 < len(tokens):
            inline = tokens[i + 1]
            break
    if inline is None:
        return ""

    pieces = []
    for child in inline.children or []:
        if child.type in ("text", "code_inline"):
            pieces.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            pieces.append(" ")

    plain = _WS_RE.sub(" ", "".join(pieces)).strip()
    parts = plain.split(" ")
    if len(parts) <= words:
        return plain
    return " ".join(parts[:words]) + "…"
