"""WordPress (WPGraphQL) blog adapter with mock-post fallback."""

from __future__ import annotations

from typing import Callable, List, Optional, TypeVar

import requests

from ..config import WordPressSettings
from ..exceptions import SourceError
from ..models.content import BlogCategory, BlogPost
from ..services.blog import posts_in_category, related_posts, search_posts
from ..utils.logging import get_logger
from . import fallback
from .mappers import map_wp_category, map_wp_post
from .result import NOT_CONFIGURED, SourceResult
from .wordpress_client import WordPressClient

LOGGER = get_logger("sources.wordpress")

NOT_FOUND = "not_found"

T = TypeVar("T")


class WordPressSource:
    def __init__(self, settings: WordPressSettings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self._client: Optional[WordPressClient] = None
        if settings.configured:
            self._client = WordPressClient(settings, session=session)
            LOGGER.info("wordpress_source mode=live api_url=%s", settings.api_url)
        else:
            LOGGER.info("wordpress_source mode=mock reason=%s", NOT_CONFIGURED)

    @property
    def configured(self) -> bool:
        return self._client is not None

    def fetch_all(self) -> SourceResult[List[BlogPost]]:
        result = self._call(
            "fetch_all",
            lambda client: [map_wp_post(node) for node in client.posts()],
            lambda: list(fallback.mock_posts()),
        )
        if not result.is_fallback:
            LOGGER.info("wordpress_fetch_all count=%s", len(result.data))
        return result

    def fetch_one(self, slug: str) -> SourceResult[Optional[BlogPost]]:
        result = self._call(
            "fetch_one",
            lambda client: _map_optional(client.post(slug)),
            lambda: fallback.mock_post(slug),
        )
        if not result.is_fallback and result.data is None:
            LOGGER.info("wordpress_post_not_found slug=%s trying=mock", slug)
            return SourceResult.fallback(fallback.mock_post(slug), NOT_FOUND)
        return result

    def search(self, query: str) -> SourceResult[List[BlogPost]]:
        result = self.fetch_all()
        return SourceResult(data=search_posts(result.data, query), origin=result.origin, reason=result.reason)

    def categories(self) -> SourceResult[List[BlogCategory]]:
        return self._call(
            "categories",
            lambda client: [map_wp_category(node) for node in client.categories()],
            lambda: list(fallback.mock_categories()),
        )

    def by_category(self, category_slug: str) -> SourceResult[List[BlogPost]]:
        result = self.fetch_all()
        return SourceResult(
            data=posts_in_category(result.data, category_slug),
            origin=result.origin,
            reason=result.reason,
        )

    def related(self, post: BlogPost, limit: int = 3) -> SourceResult[List[BlogPost]]:
        result = self.fetch_all()
        return SourceResult(data=related_posts(result.data, post, limit), origin=result.origin, reason=result.reason)

    def _call(
        self,
        op: str,
        live: Callable[[WordPressClient], T],
        mock: Callable[[], T],
    ) -> SourceResult[T]:
        if self._client is None:
            LOGGER.info("wordpress_not_configured op=%s using=mock", op)
            return SourceResult.fallback(mock(), NOT_CONFIGURED)
        try:
            return SourceResult.live(live(self._client))
        except SourceError as exc:
            LOGGER.error("wordpress_request_failed op=%s reason=%s error=%s", op, exc.reason, exc)
            return SourceResult.fallback(mock(), exc.reason)


def _map_optional(node) -> Optional[BlogPost]:
    return map_wp_post(node) if node else None
