"""Jinja2 template loader for site layouts.

Provides centralized template loading with custom filters for page rendering.
"""

from importlib.resources import files
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape

from errata.core.naming import slugify
from errata.core.rendering import excerpt, render_markdown
from errata.engine import filters
from errata.exceptions import LayoutNotFoundError

LAYOUT_SUFFIX = ".html"


class TemplateLoader:
    """Loads and renders Jinja2 templates for site pages.

    Supports:
    - Template inheritance (base templates)
    - Custom filters (date formatting, slugify, markdown)
    - Configurable template directory
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize TemplateLoader.

        Args:
            template_dir: Path to template directory. Defaults to the templates
                shipped in the ``errata`` package.

        """
        if template_dir is None:
            template_dir = Path(str(files("errata").joinpath("templates")))

        self.template_dir = template_dir

        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._register_filters()

    def _register_filters(self) -> None:
        """Register custom Jinja2 filters."""
        self.env.filters["format_date"] = filters.format_date
        self.env.filters["isoformat"] = filters.isoformat
        self.env.filters["truncate_words"] = filters.truncate_words
        self.env.filters["slugify"] = slugify
        self.env.filters["markdown"] = render_markdown
        self.env.filters["excerpt"] = excerpt

    def load_template(self, template_name: str) -> Template:
        """Load a template by name.

        Raises:
            TemplateNotFound: If template does not exist

        """
        return self.env.get_template(template_name)

    def render_template(self, template_name: str, **context: Any) -> str:
        """Load and render a template with context."""
        template = self.load_template(template_name)
        return template.render(**context)

    def has_layout(self, layout: str) -> bool:
        try:
            self.load_template(f"{layout}{LAYOUT_SUFFIX}")
        except TemplateNotFound:
            return False
        return True

    def render_layout(self, layout: str, **context: Any) -> str:
        """Render the template for a post layout.

        Raises:
            LayoutNotFoundError: If no ``<layout>.html`` template exists.

        """
        try:
            template = self.load_template(f"{layout}{LAYOUT_SUFFIX}")
        except TemplateNotFound as exc:
            raise LayoutNotFoundError(layout) from exc
        return template.render(**context)
