"""WPGraphQL transport: one POST per query, errors raised as source exceptions."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from ..config import WordPressSettings
from ..exceptions import GraphQLError, MalformedPayloadError, SourceHTTPError, SourceTransportError

_POST_FIELDS = """
      id
      databaseId
      title
      slug
      date
      excerpt
      content
      featuredImage { node { sourceUrl altText } }
      author { node { name avatar { url } } }
      categories { edges { node { id databaseId name slug } } }
      tags { edges { node { name slug } } }
"""

GET_ALL_POSTS = (
    """
query GetAllPosts($first: Int = 100) {
  posts(first: $first, where: { status: PUBLISH }) {
    edges {
      node {"""
    + _POST_FIELDS
    + """      }
    }
  }
}
"""
)

GET_POST_BY_SLUG = (
    """
query GetPostBySlug($slug: ID!) {
  post(id: $slug, idType: SLUG) {"""
    + _POST_FIELDS
    + """  }
}
"""
)

GET_ALL_CATEGORIES = """
query GetAllCategories($first: Int = 100) {
  categories(first: $first) {
    edges {
      node { id databaseId name slug description count }
    }
  }
}
"""


class WordPressClient:
    def __init__(self, settings: WordPressSettings, session: Optional[requests.Session] = None):
        if not settings.configured:
            raise RuntimeError("WordPress GraphQL endpoint is not configured")
        self.settings = settings
        self.url = settings.api_url
        self.session = session or requests.Session()

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a query and return its ``data`` object."""

        body = {"query": query, "variables": variables or {}}
        try:
            r = self.session.post(
                self.url,
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self.settings.timeout,
            )
        except requests.RequestException as exc:
            raise SourceTransportError(f"POST {self.url} failed: {exc}") from exc
        try:
            r.raise_for_status()
        except requests.HTTPError as exc:
            raise SourceHTTPError(r.status_code, r.reason or "") from exc
        try:
            payload = r.json()
        except ValueError as exc:
            raise MalformedPayloadError(f"POST {self.url} returned non-JSON body") from exc
        if not isinstance(payload, dict):
            raise MalformedPayloadError("GraphQL response is not an object")

        errors = payload.get("errors")
        if errors:
            raise GraphQLError(_error_messages(errors))
        data = payload.get("data")
        if not isinstance(data, dict):
            raise MalformedPayloadError("No data returned from WordPress GraphQL API")
        return data

    def posts(self) -> List[Dict[str, Any]]:
        data = self.execute(GET_ALL_POSTS, {"first": self.settings.page_size})
        return [edge["node"] for edge in _edges(data.get("posts"))]

    def post(self, slug: str) -> Optional[Dict[str, Any]]:
        data = self.execute(GET_POST_BY_SLUG, {"slug": slug})
        node = data.get("post")
        if node is not None and not isinstance(node, dict):
            raise MalformedPayloadError("post is not an object")
        return node

    def categories(self) -> List[Dict[str, Any]]:
        data = self.execute(GET_ALL_CATEGORIES, {"first": self.settings.page_size})
        return [edge["node"] for edge in _edges(data.get("categories"))]


def _edges(connection: Any) -> List[Dict[str, Any]]:
    if not isinstance(connection, dict) or not isinstance(connection.get("edges"), list):
        raise MalformedPayloadError("connection has no 'edges' array")
    edges = connection["edges"]
    if not all(isinstance(edge, dict) and isinstance(edge.get("node"), dict) for edge in edges):
        raise MalformedPayloadError("edge without a node")
    return edges


def _error_messages(errors: Any) -> List[str]:
    if not isinstance(errors, list):
        return [str(errors)]
    return [str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors]
