import random
from datetime import date

import pytest

from errata.core.types import Post
from errata.exceptions import EmptyTopicListError
from errata.features.rotation import pick_topic, posts_for_topic

POSTS = [
    Post(date=date(2023, 1, 3), slug="a", title="A", tags=["react"]),
    Post(date=date(2023, 1, 2), slug="b", title="B", tags=["python"]),
    Post(date=date(2023, 1, 1), slug="c", title="C", tags=["React", "redux"]),
]


def test_pick_topic_is_reproducible_with_seeded_rng():
    topics = ["nextjs", "react", "python", "main"]
    first = pick_topic(topics, rng=random.Random(42))
    second = pick_topic(topics, rng=random.Random(42))
    assert first == second
    assert first in topics


def test_pick_topic_eventually_covers_every_topic():
    rng = random.Random(0)
    topics = ["a", "b", "c"]
    assert {pick_topic(topics, rng=rng) for _ in range(200)} == set(topics)


def test_pick_topic_requires_topics():
    with pytest.raises(EmptyTopicListError):
        pick_topic([])


def test_posts_for_topic_filters_by_tag():
    assert [p.slug for p in posts_for_topic(POSTS, "react")] == ["a", "c"]


def test_catch_all_topic_selects_everything():
    assert posts_for_topic(POSTS, "main") == POSTS
    assert posts_for_topic(POSTS, "all", catch_all="all") == POSTS
