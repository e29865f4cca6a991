# folio/app/utils/filters.py
"""
In-memory filtering for the public blog listing.

The listing works on the already-fetched published posts (newest first) so
the same predicates serve the page, the featured strip and the facets.
"""
import math
from typing import Iterable, List, Optional, Sequence, TypeVar

from folio.app.models.post import Post

T = TypeVar("T")

FEATURED_LIMIT = 3
TAG_FACET_LIMIT = 20


def matches_category(post: Post, category: Optional[str]) -> bool:
    if not category:
        return True
    return (post.category or "").lower() == category.lower()


def matches_tag(post: Post, tag: Optional[str]) -> bool:
    if not tag:
        return True
    wanted = tag.lower()
    return any(t.lower() == wanted for t in post.tags or [])


def matches_search(post: Post, search: Optional[str]) -> bool:
    """Case-insensitive substring match over the text fields and tags."""
    if not search:
        return True
    needle = search.lower()
    haystacks = (post.title, post.description, post.content, post.excerpt)
    if any(needle in (text or "").lower() for text in haystacks):
        return True
    return any(needle in t.lower() for t in post.tags or [])


def filter_posts(
    posts: Iterable[Post],
    category: Optional[str] = None,
    tag: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Post]:
    return [
        p for p in posts
        if matches_category(p, category) and matches_tag(p, tag) and matches_search(p, search)
    ]


def paginate(items: Sequence[T], page: int, limit: int) -> List[T]:
    start = (page - 1) * limit
    return list(items[start:start + limit])


def total_pages(count: int, limit: int) -> int:
    return math.ceil(count / limit)


def distinct(values: Iterable[T]) -> List[T]:
    """Unique values in order of first appearance."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def featured(posts: Iterable[Post], limit: int = FEATURED_LIMIT) -> List[Post]:
    return [p for p in posts if p.is_featured][:limit]


def categories(posts: Iterable[Post]) -> List[str]:
    return distinct(p.category for p in posts)


def tag_facets(posts: Iterable[Post], limit: int = TAG_FACET_LIMIT) -> List[str]:
    return distinct(t for p in posts for t in p.tags or [])[:limit]
