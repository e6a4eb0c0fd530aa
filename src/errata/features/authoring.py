"""Scaffold new posts with the correct filename and front matter."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from pydantic import ValidationError

from errata.core.loader import format_validation_error
from errata.core.naming import post_filename, slugify
from errata.core.types import Post
from errata.exceptions import PostExistsError, PostValidationError
from errata.markdown.frontmatter import dump_frontmatter

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


def create_post(
    posts_dir: Path,
    title: str,
    *,
    tags: Sequence[str] = (),
    layout: str = "post",
    on: date | None = None,
    slug: str | None = None,
    body: str = "",
) -> Path:
    """Write a new post file and return its path.

    The filename is ``<date>-<slug>.md``; the slug is derived from the title
    unless given. Existing files are never overwritten.

    Raises:
        PostExistsError: If a post with the same filename already exists.
        PostFilenameError: If an explicit slug is not filename-safe.
        PostValidationError: If the title, layout or tags are invalid.

    """
    published = on or date.today()
    # Validates title, layout and tags with the same rules used when loading.
    slug = slug or slugify(title)
    try:
        post = Post(date=published, slug=slug, title=title, layout=layout, tags=list(tags))
    except ValidationError as exc:
        raise PostValidationError(slug, format_validation_error(exc)) from exc

    target = posts_dir / post_filename(post.date, post.slug)
    if target.exists():
        raise PostExistsError(target)

    metadata = {"layout": post.layout, "title": post.title, "tags": list(post.tags)}
    posts_dir.mkdir(parents=True, exist_ok=True)
    with target.open("x", encoding="utf-8") as f:
        f.write(dump_frontmatter(metadata, body))

    logger.info("Created %s", target)
    return target
