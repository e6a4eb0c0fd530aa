"""Load posts from a Jekyll-style ``_posts`` directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from errata.core.naming import POST_SUFFIXES, parse_post_filename
from errata.core.types import CorpusReport, LoadIssue, Post, sort_posts
from errata.exceptions import (
    CorpusNotFoundError,
    DuplicatePostError,
    FrontmatterParsingError,
    MissingFieldError,
    PostError,
    PostValidationError,
)
from errata.markdown.frontmatter import parse_frontmatter_file

logger = logging.getLogger(__name__)

_KNOWN_FIELDS = frozenset({"layout", "title", "tags"})


def format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "post"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def load_post(path: Path, *, default_layout: str = "post") -> Post:
    """Load a single post file.

    Raises:
        PostFilenameError: If the filename does not encode a date and slug.
        FrontmatterParsingError: If the front matter is not valid YAML.
        MissingFieldError: If the front matter has no title.
        PostValidationError: If a field has an invalid value.

    """
    published, slug = parse_post_filename(path.name)
    try:
        metadata, body = parse_frontmatter_file(path)
    except UnicodeDecodeError as exc:
        raise FrontmatterParsingError(path, f"not valid UTF-8: {exc.reason}") from exc

    if "title" not in metadata:
        raise MissingFieldError(path, "title")

    extra: dict[str, Any] = {k: v for k, v in metadata.items() if k not in _KNOWN_FIELDS}
    try:
        return Post(
            date=published,
            slug=slug,
            title=metadata["title"],
            layout=metadata.get("layout") or default_layout,
            tags=metadata.get("tags"),
            body=body,
            source=path,
            extra=extra,
        )
    except ValidationError as exc:
        raise PostValidationError(path, format_validation_error(exc)) from exc


def _candidate_files(directory: Path) -> list[Path]:
    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and not path.name.startswith((".", "_")) and path.suffix in POST_SUFFIXES
    )


def _is_draft(post: Post) -> bool:
    return post.extra.get("published") is False


def load_posts(
    directory: Path,
    *,
    strict: bool = False,
    include_drafts: bool = False,
    default_layout: str = "post",
) -> CorpusReport:
    """Load every post in ``directory``.

    Files that fail to load are recorded as issues and skipped unless
    ``strict`` is set, in which case the first failure is raised.
    """
    if not directory.is_dir():
        raise CorpusNotFoundError(directory)

    posts: list[Post] = []
    issues: list[LoadIssue] = []
    seen_urls: dict[str, Path] = {}

    def _record(error: PostError) -> None:
        if strict:
            raise error
        logger.warning("Skipping %s", error)
        issues.append(LoadIssue(path=error.path, message=error.reason))

    for path in _candidate_files(directory):
        try:
            post = load_post(path, default_layout=default_layout)
        except PostError as exc:
            _record(exc)
            continue

        if _is_draft(post) and not include_drafts:
            logger.debug("Skipping unpublished post %s", path.name)
            continue

        if post.url_path in seen_urls:
            _record(DuplicatePostError(path, post.url_path))
            continue

        seen_urls[post.url_path] = path
        posts.append(post)

    logger.info("Loaded %d posts from %s (%d issues)", len(posts), directory, len(issues))
    return CorpusReport(posts=sort_posts(posts), issues=issues)
