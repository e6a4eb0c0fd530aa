"""Static site builder: posts in, HTML pages and an Atom feed out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import TemplateError

from errata.core.loader import load_posts
from errata.core.rendering import render_markdown
from errata.core.taxonomy import tag_pages
from errata.core.types import LoadIssue, Post, Site
from errata.engine.template_loader import TemplateLoader
from errata.exceptions import LayoutNotFoundError, RenderError, UnsafePathError
from errata.features.rotation import posts_for_topic
from errata.infra.sinks import AtomSink, HtmlSiteSink

if TYPE_CHECKING:
    from errata.core.config import ErrataConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BuildResult:
    output_dir: Path
    posts: list[Post] = field(default_factory=list)
    issues: list[LoadIssue] = field(default_factory=list)
    pages_written: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


def relative_root(url_path: str) -> str:
    """Return the relative prefix leading from ``url_path`` back to the site root."""
    depth = len([part for part in url_path.split("/") if part])
    return "../" * depth if depth else "./"


class SiteBuilder:
    """Renders a list of posts into a static site."""

    def __init__(self, config: ErrataConfig, templates: TemplateLoader | None = None) -> None:
        self.config = config
        self.templates = templates or TemplateLoader(config.paths.abs_templates_dir)
        self.sink = HtmlSiteSink(config.paths.abs_output_dir)

    def make_site(self, posts: list[Post]) -> Site:
        settings = self.config.site
        return Site.from_posts(
            posts,
            title=settings.title,
            url=settings.base_url,
            description=settings.description,
            author=settings.author,
        )

    def _context(self, site: Site, url_path: str) -> dict[str, object]:
        return {
            "site": site,
            "root": relative_root(url_path),
            "feed_path": self.config.feed.filename,
        }

    def render_post(self, site: Site, post: Post) -> str:
        return self.templates.render_layout(
            post.layout,
            post=post,
            content=render_markdown(post.body),
            **self._context(site, post.url_path),
        )

    def _check_output_dir(self) -> None:
        """Refuse to clean a directory that holds the site sources."""
        output_dir = self.sink.output_dir.resolve()
        paths = self.config.paths
        if paths.site_root.resolve().is_relative_to(output_dir) or paths.abs_posts_dir.resolve().is_relative_to(
            output_dir
        ):
            raise UnsafePathError(output_dir)

    def _render_page(self, template_name: str, **context: object) -> str:
        try:
            return self.templates.render_template(template_name, **context)
        except TemplateError as exc:
            raise RenderError(template_name, str(exc)) from exc

    def build(self, posts: list[Post], *, strict: bool = False) -> BuildResult:
        """Write every page for ``posts``, replacing the previous output.

        Every page is rendered before the output directory is cleaned, so a
        failing template leaves the previous site in place.
        """
        self._check_output_dir()
        site = self.make_site(posts)
        result = BuildResult(output_dir=self.sink.output_dir)
        rendered: list[tuple[str, str]] = []

        for post in site.posts:
            source = str(post.source or post.filename)
            try:
                html = self.render_post(site, post)
            except LayoutNotFoundError as exc:
                if strict:
                    raise
                logger.warning("Skipping %s: %s", post.filename, exc)
                result.issues.append(LoadIssue(path=source, message=str(exc)))
                continue
            except TemplateError as exc:
                error = RenderError(source, f"layout '{post.layout}' failed to render: {exc}")
                if strict:
                    raise error from exc
                logger.warning("Skipping %s: %s", post.filename, error.reason)
                result.issues.append(LoadIssue(path=source, message=error.reason))
                continue
            rendered.append((post.url_path, html))
            result.posts.append(post)

        # Index and tag pages only link to posts that were actually written.
        site = self.make_site(result.posts)
        pages = tag_pages(site.posts)

        index_html = self._render_page("index.html", posts=site.posts, tags=pages, **self._context(site, ""))
        rendered.append(("", index_html))
        for page in pages:
            html = self._render_page("tag.html", tag=page, **self._context(site, page.url_path))
            rendered.append((page.url_path, html))

        self.sink.clean()
        result.pages_written.extend(self.sink.write_page(url_path, html) for url_path, html in rendered)

        feed_file = self.sink.resolve(self.config.feed.filename)
        atom = AtomSink(feed_file, limit=self.config.feed.limit, feed_path=self.config.feed.filename)
        result.pages_written.append(atom.publish(site))

        logger.info(
            "Built %d posts, %d tag pages into %s",
            len(result.posts),
            len(pages),
            self.sink.output_dir,
        )
        return result


def build_site(config: ErrataConfig, *, topic: str | None = None, strict: bool | None = None) -> BuildResult:
    """Load the corpus described by ``config`` and publish it.

    Args:
        config: Loaded configuration.
        topic: Only publish posts carrying this tag. The rotation catch-all
            topic publishes everything.
        strict: Overrides ``config.build.strict`` when given.

    """
    strict = config.build.strict if strict is None else strict
    report = load_posts(
        config.paths.abs_posts_dir,
        strict=strict,
        include_drafts=config.build.drafts,
        default_layout=config.build.default_layout,
    )

    posts = report.posts
    if topic is not None:
        posts = posts_for_topic(posts, topic, catch_all=config.rotation.catch_all)
        logger.info("Topic '%s' selects %d of %d posts", topic, len(posts), len(report.posts))

    result = SiteBuilder(config).build(posts, strict=strict)
    result.issues[:0] = report.issues
    return result
