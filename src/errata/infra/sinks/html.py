"""HTML output sink writing rendered pages under the output directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from errata.exceptions import UnsafePathError

logger = logging.getLogger(__name__)


class HtmlSiteSink:
    """Writes rendered pages to a static site directory.

    Pages are addressed by site-relative paths. A path ending in ``/`` is
    written as ``index.html`` inside that directory.
    """

    def __init__(self, output_dir: Path) -> None:
        """Initialize the HTML sink.

        Args:
            output_dir: Directory where the site will be written

        """
        self.output_dir = Path(output_dir)

    def clean(self) -> None:
        """Remove everything previously generated in the output directory."""
        if not self.output_dir.exists():
            self.output_dir.mkdir(parents=True)
            return

        for child in self.output_dir.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
        logger.debug("Cleaned %s", self.output_dir)

    def resolve(self, rel_path: str) -> Path:
        """Map a site-relative path to a file inside the output directory.

        Raises:
            UnsafePathError: If the path would land outside the output directory.

        """
        if rel_path == "" or rel_path.endswith("/"):
            rel_path = f"{rel_path}index.html"

        root = self.output_dir.resolve()
        target = (root / rel_path.lstrip("/")).resolve()
        if not target.is_relative_to(root) or target == root:
            raise UnsafePathError(rel_path)
        return target

    def write_page(self, rel_path: str, content: str) -> Path:
        """Write one page and return the file it was written to."""
        target = self.resolve(rel_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target
