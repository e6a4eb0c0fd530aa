"""Atom feed serialization and output sink."""

from __future__ import annotations

from pathlib import Path
from xml.etree.ElementTree import Element, SubElement, tostring

from errata.core.rendering import excerpt, render_markdown
from errata.core.types import Site, format_iso_utc

ATOM_NS = "http://www.w3.org/2005/Atom"


def feed_to_xml_string(site: Site, *, limit: int | None = None, feed_path: str = "atom.xml") -> str:
    """Serialize a Site to an Atom XML string, newest posts first."""
    root = Element("feed", attrib={"xmlns": ATOM_NS})
    SubElement(root, "id").text = site.absolute_url("")
    SubElement(root, "title").text = site.title
    if site.description:
        SubElement(root, "subtitle").text = site.description
    SubElement(root, "updated").text = format_iso_utc(site.updated)
    SubElement(root, "link", attrib={"href": site.absolute_url(feed_path), "rel": "self"})
    SubElement(root, "link", attrib={"href": site.absolute_url(""), "rel": "alternate"})

    if site.author:
        author_el = SubElement(root, "author")
        SubElement(author_el, "name").text = site.author

    posts = site.posts if limit is None else site.posts[:limit]
    for post in posts:
        url = site.absolute_url(post.url_path)
        entry_el = SubElement(root, "entry")
        SubElement(entry_el, "id").text = url
        SubElement(entry_el, "title").text = post.title
        SubElement(entry_el, "updated").text = format_iso_utc(post.published)
        SubElement(entry_el, "published").text = format_iso_utc(post.published)
        SubElement(entry_el, "link", attrib={"href": url, "rel": "alternate"})

        for tag in post.tags:
            SubElement(entry_el, "category", attrib={"term": tag})

        summary = excerpt(post.body)
        if summary:
            SubElement(entry_el, "summary").text = summary

        content_el = SubElement(entry_el, "content", attrib={"type": "html"})
        content_el.text = render_markdown(post.body)

    return "<?xml version='1.0' encoding='UTF-8'?>\n" + tostring(root, encoding="unicode")


class AtomSink:
    """A sink for writing Atom feeds to XML files."""

    def __init__(self, output_path: Path, *, limit: int | None = None, feed_path: str = "atom.xml") -> None:
        self.output_path = Path(output_path)
        self.limit = limit
        self.feed_path = feed_path

    def publish(self, site: Site) -> Path:
        """Renders the site feed to XML and writes it to the output path."""
        xml_content = feed_to_xml_string(site, limit=self.limit, feed_path=self.feed_path)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(xml_content, encoding="utf-8")
        return self.output_path
