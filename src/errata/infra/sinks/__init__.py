"""Output sinks for errata."""

from errata.infra.sinks.atom import AtomSink, feed_to_xml_string
from errata.infra.sinks.html import HtmlSiteSink

__all__ = ["AtomSink", "HtmlSiteSink", "feed_to_xml_string"]
