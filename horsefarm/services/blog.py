"""Blog post helpers that work on any post collection, live or fallback."""

from __future__ import annotations

import math
import re
from typing import Iterable, List

from ..models.content import BlogPost

WORDS_PER_MINUTE = 200

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(html: str) -> str:
    return _TAG_RE.sub("", html or "")


def read_time_minutes(html: str) -> int:
    words = len(strip_html(html).split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def category_slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


def posts_in_category(posts: Iterable[BlogPost], slug: str) -> List[BlogPost]:
    return [post for post in posts if category_slug(post.category) == slug]


def search_posts(posts: Iterable[BlogPost], query: str) -> List[BlogPost]:
    needle = query.strip().lower()
    if not needle:
        return list(posts)
    return [
        post
        for post in posts
        if needle in post.title.lower()
        or needle in post.excerpt.lower()
        or needle in post.content.lower()
        or any(needle in tag.lower() for tag in post.tags)
    ]


def related_posts(posts: Iterable[BlogPost], current: BlogPost, limit: int = 3) -> List[BlogPost]:
    """Same category scores 10, each shared tag 3; ties keep input order."""

    scored = []
    for post in posts:
        if post.id == current.id:
            continue
        score = 10 if post.category == current.category else 0
        score += 3 * len(set(post.tags) & set(current.tags))
        scored.append((post, score))
    scored.sort(key=lambda item: item[1], reverse=True)
    return [post for post, _ in scored[:limit]]
