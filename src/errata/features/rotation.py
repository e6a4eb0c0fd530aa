"""Topic rotation: publish one randomly chosen slice of the corpus per run."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from errata.core.taxonomy import filter_by_tag
from errata.exceptions import EmptyTopicListError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from errata.core.types import Post

logger = logging.getLogger(__name__)


def pick_topic(topics: Sequence[str], *, rng: random.Random | None = None) -> str:
    """Choose one topic uniformly at random.

    Raises:
        EmptyTopicListError: If ``topics`` is empty.

    """
    if not topics:
        raise EmptyTopicListError
    chooser = rng or random.Random()
    topic = chooser.choice(list(topics))
    logger.info("Selected topic '%s'", topic)
    return topic


def posts_for_topic(posts: list[Post], topic: str, *, catch_all: str = "main") -> list[Post]:
    """Return the posts published for ``topic``; the catch-all topic selects all."""
    if topic.casefold() == catch_all.casefold():
        return list(posts)
    return filter_by_tag(posts, topic)
