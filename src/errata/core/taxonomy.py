from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from errata.core.naming import slugify
from errata.core.types import TagPage

if TYPE_CHECKING:
    from errata.core.types import Post

logger = logging.getLogger(__name__)


def build_tag_index(posts: list[Post]) -> dict[str, list[Post]]:
    """Group posts by tag, keeping the incoming post order within each tag."""
    index: dict[str, list[Post]] = {}
    for post in posts:
        for tag in post.tags:
            index.setdefault(tag, []).append(post)
    return {tag: index[tag] for tag in sorted(index, key=lambda t: (t.casefold(), t))}


def tag_pages(posts: list[Post]) -> list[TagPage]:
    """Build one page per tag slug.

    Tags that slugify identically ("Spring Boot" and "spring-boot") share a
    page named after the first spelling seen.
    """
    pages: dict[str, TagPage] = {}
    for tag, tagged in build_tag_index(posts).items():
        slug = slugify(tag)
        page = pages.get(slug)
        if page is None:
            pages[slug] = TagPage(name=tag, slug=slug, posts=list(tagged))
            continue

        logger.debug("Merging tag '%s' into page '%s'", tag, page.name)
        seen = {id(post) for post in page.posts}
        page.posts.extend(post for post in tagged if id(post) not in seen)
        order = {id(post): i for i, post in enumerate(posts)}
        page.posts.sort(key=lambda p: order[id(p)])
    return list(pages.values())


def filter_by_tag(posts: list[Post], tag: str) -> list[Post]:
    return [post for post in posts if post.has_tag(tag)]
