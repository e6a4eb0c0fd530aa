"""Tests for front matter splitting and writing."""

import pytest
import yaml

from errata.exceptions import FrontmatterParsingError
from errata.markdown.frontmatter import dump_frontmatter, parse_frontmatter_file, split_frontmatter


def test_split_returns_metadata_and_body():
    content = "---\nlayout: post\ntitle: Hello\ntags: [a, b]\n---\n\nBody text.\n"
    metadata, body = split_frontmatter(content)
    assert metadata == {"layout": "post", "title": "Hello", "tags": ["a", "b"]}
    assert body.startswith("Body text.")


def test_content_without_frontmatter_is_untouched():
    content = "# Just markdown\n"
    assert split_frontmatter(content) == ({}, content)


def test_empty_block_is_empty_metadata():
    metadata, body = split_frontmatter("---\n---\nBody\n")
    assert metadata == {}
    assert body.startswith("Body")


def test_horizontal_rules_in_body_are_kept():
    content = "---\ntitle: Rules\n---\nAbove\n\n---\n\nBelow\n"
    metadata, body = split_frontmatter(content)
    assert metadata == {"title": "Rules"}
    assert "Above" in body
    assert "Below" in body


def test_byte_order_mark_is_ignored():
    metadata, _ = split_frontmatter("\ufeff---\ntitle: BOM\n---\nBody\n")
    assert metadata == {"title": "BOM"}


def test_malformed_yaml_raises_with_source():
    with pytest.raises(FrontmatterParsingError) as excinfo:
        split_frontmatter("---\ntitle: [unclosed\n---\nBody\n", source="broken.md")
    assert excinfo.value.path == "broken.md"
    assert "invalid YAML" in excinfo.value.reason


def test_non_mapping_metadata_raises():
    with pytest.raises(FrontmatterParsingError, match="mapping"):
        split_frontmatter("---\n- just\n- a list\n---\nBody\n")


def test_parse_file(tmp_path):
    path = tmp_path / "2023-01-01-file.md"
    path.write_text("---\ntitle: From file\n---\nHello\n", encoding="utf-8")
    metadata, body = parse_frontmatter_file(path)
    assert metadata["title"] == "From file"
    assert body.strip() == "Hello"


def test_dump_keeps_key_order_and_unicode():
    document = dump_frontmatter({"layout": "post", "title": "Café errors", "tags": ["vue"]}, "Body")
    assert document.startswith("---\nlayout: post\ntitle: Café errors\n")
    header = document.split("---\n")[1]
    assert yaml.safe_load(header) == {"layout": "post", "title": "Café errors", "tags": ["vue"]}
    assert document.endswith("\nBody\n")


def test_dump_then_split_recovers_metadata():
    metadata = {"layout": "post", "title": "TypeError: x is not a function", "tags": ["javascript"]}
    parsed, body = split_frontmatter(dump_frontmatter(metadata, "Text"))
    assert parsed == metadata
    assert body == "Text\n"
