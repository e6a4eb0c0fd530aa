"""Filename and URL conventions for dated posts.

Posts live in files named ``<YYYY-MM-DD>-<slug>.md``. The date and slug
encoded in the name are the post's identity: they decide where the post is
published (``YYYY/MM/DD/slug/``) and how posts are ordered.
"""

from __future__ import annotations

import re
from datetime import date
from unicodedata import normalize

from errata.exceptions import PostFilenameError

POST_SUFFIXES = (".md", ".markdown")

_FILENAME_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>[A-Za-z0-9_.-]+)(?P<suffix>\.md|\.markdown)$"
)
_SLUG_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def slugify(text: str, max_len: int = 60) -> str:
    """Convert text to a safe URL-friendly slug.

    Examples:
        >>> slugify("Hello World")
        'hello-world'
        >>> slugify("Café")
        'cafe'
        >>> slugify("A" * 100, max_len=20)
        'aaaaaaaaaaaaaaaaaaaa'

    """
    normalized = normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower()

    slug = re.sub(r"[^a-z0-9]+", "-", normalized)
    slug = slug.strip("-")

    if not slug:
        return "post"

    if len(slug) > max_len:
        slug = slug[:max_len].rstrip("-")

    return slug


def _validate_slug(slug: str, source: str) -> None:
    if not _SLUG_RE.match(slug) or not any(ch.isalnum() for ch in slug):
        raise PostFilenameError(source, f"invalid slug '{slug}'")


def parse_post_filename(name: str) -> tuple[date, str]:
    """Split a post filename into its publish date and slug.

    Raises:
        PostFilenameError: If the name does not follow the convention or the
            date is not a real calendar date.

    """
    match = _FILENAME_RE.match(name)
    if match is None:
        raise PostFilenameError(name, "expected '<YYYY-MM-DD>-<slug>.md'")

    try:
        published = date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError as exc:
        raise PostFilenameError(name, f"invalid date: {exc}") from exc

    slug = match["slug"]
    _validate_slug(slug, name)
    return published, slug


def is_post_filename(name: str) -> bool:
    try:
        parse_post_filename(name)
    except PostFilenameError:
        return False
    return True


def post_filename(published: date, slug: str, suffix: str = ".md") -> str:
    """Build the filename for a post published on ``published``."""
    _validate_slug(slug, slug)
    if suffix not in POST_SUFFIXES:
        msg = f"Unsupported post suffix: {suffix}"
        raise ValueError(msg)
    return f"{published.isoformat()}-{slug}{suffix}"


def post_url_path(published: date, slug: str) -> str:
    """Return the site-relative directory a post is published under."""
    return f"{published.year:04d}/{published.month:02d}/{published.day:02d}/{slug}/"
