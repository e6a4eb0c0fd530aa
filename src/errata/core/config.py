import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from errata.core.loader import format_validation_error
from errata.exceptions import ConfigLoadError

CONFIG_FILENAME = ".errata.toml"

DEFAULT_TOPICS = [
    "nextjs",
    "javascript",
    "react",
    "python",
    "java",
    "spring",
    "vue",
    "redux",
    "main",
]


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), dict(value))
        else:
            destination[key] = value
    return destination


class SiteSettings(BaseModel):
    """Site-wide metadata used by templates and the feed."""

    title: str = Field(default="Errata", description="Site title")
    url: str = Field(default="http://localhost:4000", description="Absolute base URL of the site")
    description: str = Field(default="Notes on programming errors and how to fix them")
    author: str = Field(default="", description="Default author name for the feed")

    @property
    def base_url(self) -> str:
        return self.url.rstrip("/")


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to the 'site_root' unless absolute.
    site_root defaults to current working directory.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the site (defaults to current working directory)",
    )

    posts_dir: Path = Field(default=Path("_posts"), description="Posts directory")
    output_dir: Path = Field(default=Path("_site"), description="Generated site directory")
    templates_dir: Path | None = Field(default=None, description="Custom templates directory")

    @property
    def abs_posts_dir(self) -> Path:
        return self._resolve(self.posts_dir)

    @property
    def abs_output_dir(self) -> Path:
        return self._resolve(self.output_dir)

    @property
    def abs_templates_dir(self) -> Path | None:
        if self.templates_dir is None:
            return None
        return self._resolve(self.templates_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class BuildSettings(BaseModel):
    strict: bool = Field(default=False, description="Abort on the first invalid post")
    drafts: bool = Field(default=False, description="Include posts marked 'published: false'")
    default_layout: str = Field(default="post", description="Layout for posts without one")


class FeedSettings(BaseModel):
    limit: int = Field(default=20, ge=1, description="Number of posts in the Atom feed")
    filename: str = Field(default="atom.xml", description="Feed path inside the output directory")


class RotationSettings(BaseModel):
    topics: list[str] = Field(default_factory=lambda: list(DEFAULT_TOPICS))
    catch_all: str = Field(default="main", description="Topic that selects every post")


class ErrataConfig(BaseSettings):
    """Root configuration for errata.

    Supports environment variable overrides with the pattern:
    ERRATA_SECTION__KEY (e.g., ERRATA_SITE__TITLE)
    """

    site: SiteSettings = Field(default_factory=SiteSettings)
    paths: PathsSettings = Field(default_factory=PathsSettings)
    build: BuildSettings = Field(default_factory=BuildSettings)
    feed: FeedSettings = Field(default_factory=FeedSettings)
    rotation: RotationSettings = Field(default_factory=RotationSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="ERRATA_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> "ErrataConfig":
        """Loads configuration from .errata.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (ERRATA_SECTION__KEY)
        2. Config file (.errata.toml)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            try:
                with config_file.open("rb") as f:
                    file_settings = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigLoadError(config_file, str(e)) from e

        # pydantic-settings gives __init__ arguments precedence over the
        # environment, so env values are read first and merged on top.
        try:
            env_settings = cls().model_dump(exclude_unset=True)
        except ValidationError as e:
            raise ConfigLoadError("environment", format_validation_error(e)) from e
        merged_config = _deep_merge(file_settings, env_settings)

        paths = merged_config.setdefault("paths", {})
        if not isinstance(paths, dict):
            raise ConfigLoadError(config_file, f"'paths' must be a table, got {type(paths).__name__}")
        paths["site_root"] = root_path

        try:
            return cls.model_validate(merged_config)
        except ValidationError as e:
            raise ConfigLoadError(config_file, format_validation_error(e)) from e
