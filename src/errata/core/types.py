"""Core data types for errata."""

from datetime import UTC, date, datetime, time
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from errata.core.naming import post_filename, post_url_path


def format_iso_utc(dt: datetime) -> str:
    """Provides a consistent ISO 8601 format with UTC timezone for templates."""
    return dt.isoformat().replace("+00:00", "Z")


class Post(BaseModel):
    """A single published article.

    Instances are frozen: a post is immutable once loaded.
    """

    model_config = ConfigDict(frozen=True)

    date: date
    slug: str
    title: str
    layout: str = "post"
    tags: tuple[str, ...] = ()
    body: str = ""
    source: Path | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", mode="before")
    @classmethod
    def _single_title(cls, value: Any) -> str:
        if isinstance(value, bool) or isinstance(value, (list, tuple, set, dict)):
            msg = f"title must be a single string, got {type(value).__name__}"
            raise ValueError(msg)
        if value is None:
            msg = "title must not be null"
            raise ValueError(msg)
        title = str(value).strip()
        if not title:
            msg = "title must not be empty"
            raise ValueError(msg)
        return title

    @field_validator("layout", mode="before")
    @classmethod
    def _non_empty_layout(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            msg = "layout must be a non-empty string"
            raise ValueError(msg)
        return value.strip()

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            items: list[Any] = value.split()
        elif isinstance(value, (list, tuple)):
            items = list(value)
        else:
            msg = f"tags must be a list of strings, got {type(value).__name__}"
            raise ValueError(msg)

        tags: list[str] = []
        for item in items:
            # An empty YAML list entry ("- ") loads as None.
            if item is None:
                continue
            if isinstance(item, (bool, list, tuple, dict)):
                msg = f"each tag must be a string, got {type(item).__name__}"
                raise ValueError(msg)
            tag = str(item).strip()
            if tag and tag not in tags:
                tags.append(tag)
        return tuple(tags)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def filename(self) -> str:
        return post_filename(self.date, self.slug)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url_path(self) -> str:
        return post_url_path(self.date, self.slug)

    @property
    def published(self) -> datetime:
        return datetime.combine(self.date, time.min, tzinfo=UTC)

    def has_tag(self, tag: str) -> bool:
        wanted = tag.casefold()
        return any(t.casefold() == wanted for t in self.tags)


def sort_posts(posts: list[Post]) -> list[Post]:
    """Sort newest first; posts sharing a date are ordered by slug."""
    by_slug = sorted(posts, key=lambda p: p.slug)
    return sorted(by_slug, key=lambda p: p.date, reverse=True)


class TagPage(BaseModel):
    name: str
    slug: str
    posts: list[Post] = Field(default_factory=list)

    @property
    def url_path(self) -> str:
        return f"tags/{self.slug}/"


class LoadIssue(BaseModel):
    """A problem found while loading a post corpus."""

    path: str
    message: str


class CorpusReport(BaseModel):
    posts: list[Post] = Field(default_factory=list)
    issues: list[LoadIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


class Site(BaseModel):
    title: str
    url: str
    description: str = ""
    author: str = ""
    updated: datetime
    posts: list[Post] = Field(default_factory=list)

    @classmethod
    def from_posts(
        cls,
        posts: list[Post],
        *,
        title: str,
        url: str,
        description: str = "",
        author: str = "",
    ) -> "Site":
        """Factory to create a Site from a list of posts."""
        ordered = sort_posts(posts)
        if not ordered:
            updated = datetime.now(UTC)
        else:
            updated = ordered[0].published
        return cls(
            title=title,
            url=url.rstrip("/"),
            description=description,
            author=author,
            updated=updated,
            posts=ordered,
        )

    def absolute_url(self, path: str) -> str:
        return f"{self.url}/{path.lstrip('/')}"
