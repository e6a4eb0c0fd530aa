"""Helpers for parsing and writing YAML front matter in Markdown posts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import yaml
from frontmatter import YAMLHandler

from errata.exceptions import FrontmatterParsingError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)

_handler = YAMLHandler()


def split_frontmatter(content: str, *, source: Path | str = "<string>") -> tuple[dict[str, Any], str]:
    """Split Markdown content into front matter metadata and body.

    Args:
        content: Markdown content that may start with a ``---`` block.
        source: Path used in error messages.

    Returns:
        Tuple of (metadata dict, body string). Content without a front matter
        block yields an empty dict and the content unchanged.

    Raises:
        FrontmatterParsingError: If the YAML is malformed or is not a mapping.

    """
    # A UTF-8 BOM would hide the opening delimiter.
    text = content.removeprefix("\ufeff")
    if not _handler.detect(text):
        return {}, content

    try:
        raw_metadata, body = _handler.split(text)
    except ValueError as exc:
        raise FrontmatterParsingError(source, "unterminated front matter block") from exc

    try:
        metadata = _handler.load(raw_metadata)
    except yaml.YAMLError as exc:
        raise FrontmatterParsingError(source, f"invalid YAML: {exc}") from exc

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontmatterParsingError(source, f"front matter must be a mapping, got {type(metadata).__name__}")

    return dict(metadata), body.lstrip("\r\n")


def parse_frontmatter_file(path: Path, *, encoding: str = "utf-8") -> tuple[dict[str, Any], str]:
    """Read a Markdown file and parse its front matter.

    Raises:
        OSError: If the file cannot be read.
        FrontmatterParsingError: If the front matter is invalid.

    """
    content = path.read_text(encoding=encoding)
    return split_frontmatter(content, source=path)


def dump_frontmatter(metadata: Mapping[str, Any], body: str = "") -> str:
    """Serialize metadata and body back into a Markdown document."""
    yaml_text = yaml.safe_dump(
        dict(metadata),
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
        width=1000,
    )
    document = f"---\n{yaml_text}---\n"
    if body:
        document += f"\n{body}"
        if not body.endswith("\n"):
            document += "\n"
    return document
