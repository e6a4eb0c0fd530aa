"""Centralized exceptions for errata."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ErrataError(Exception):
    """Base exception for all errata errors."""


class PostError(ErrataError):
    """Base class for problems with a single post file."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class PostFilenameError(PostError):
    """Raised when a filename does not follow ``<YYYY-MM-DD>-<slug>.md``."""


class FrontmatterParsingError(PostError):
    """Raised when YAML front matter is invalid."""


class MissingFieldError(PostError):
    """Raised when a required front matter field is absent."""

    def __init__(self, path: Path | str, field: str) -> None:
        self.field = field
        super().__init__(path, f"missing required front matter field '{field}'")


class PostValidationError(PostError):
    """Raised when front matter values fail validation."""


class DuplicatePostError(PostError):
    """Raised when two posts resolve to the same URL."""

    def __init__(self, path: Path | str, url_path: str) -> None:
        self.url_path = url_path
        super().__init__(path, f"duplicate post URL '{url_path}'")


class PostExistsError(PostError):
    """Raised when scaffolding a post would overwrite an existing file."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(path, "post already exists")


class RenderError(PostError):
    """Raised when a template fails while rendering a page."""


class CorpusNotFoundError(ErrataError):
    """Raised when the posts directory does not exist."""

    def __init__(self, path: Path | str) -> None:
        self.path = str(path)
        super().__init__(f"Posts directory not found: '{self.path}'")


class ConfigLoadError(ErrataError):
    """Raised when a configuration file cannot be loaded or parsed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to load or parse config at '{self.path}': {reason}")


class LayoutNotFoundError(ErrataError):
    """Raised when a post names a layout with no matching template."""

    def __init__(self, layout: str) -> None:
        self.layout = layout
        super().__init__(f"No template found for layout '{layout}'")


class UnsafePathError(ErrataError):
    """Raised when an output path would escape the output directory."""

    def __init__(self, path: Path | str) -> None:
        self.path = str(path)
        super().__init__(f"Refusing to write outside the output directory: '{self.path}'")


class EmptyTopicListError(ErrataError):
    """Raised when topic rotation is asked to choose from nothing."""

    def __init__(self) -> None:
        super().__init__("No topics configured for rotation.")
