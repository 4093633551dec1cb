"""Tag index — maps each tag to its posts, newest first."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from src.common.models import Post, TagIndex


def post_sort_key(post: Post) -> tuple[int, str]:
    """Descending publication date, ascending identifier on ties."""
    return (-post.date.toordinal(), post.post_id)


def build_tag_index(posts: Iterable[Post]) -> TagIndex:
    """Build the tag index for a set of parsed posts.

    Args:
        posts: Successfully parsed posts

    Returns:
        TagIndex keyed by tag (sorted), each value ordered by post_sort_key
    """
    grouped: dict[str, list[Post]] = defaultdict(list)
    for post in posts:
        for tag in post.tags:
            grouped[tag].append(post)

    return TagIndex(
        entries={
            tag: [p.post_id for p in sorted(grouped[tag], key=post_sort_key)]
            for tag in sorted(grouped)
        }
    )
