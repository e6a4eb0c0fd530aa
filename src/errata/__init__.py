"""errata - a static site generator for dated Markdown posts with YAML front matter."""

__all__ = ["__version__"]
__version__ = "0.1.0"
