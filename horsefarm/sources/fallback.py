"""Bundled mock datasets served whenever a live source is unavailable.

Also the only home of the static editorial content (service areas, FAQs),
which has no live source.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from ..models.content import FAQ, BlogCategory, BlogPost, ServiceArea
from ..models.property import Agent, Property
from ..utils.io import load_json

DEFAULT_AGENT_ID = "1"


@lru_cache(maxsize=1)
def _agents() -> Dict[str, Agent]:
    return {row["id"]: Agent.model_validate(row) for row in load_json("agents.json")}


def default_agent() -> Agent:
    return _agents()[DEFAULT_AGENT_ID]


@lru_cache(maxsize=1)
def mock_properties() -> Tuple[Property, ...]:
    agents = _agents()
    items = []
    for row in load_json("properties.json"):
        data = {k: v for k, v in row.items() if k != "agent_id"}
        data["listing_agent"] = agents.get(row.get("agent_id") or DEFAULT_AGENT_ID, default_agent())
        items.append(Property.model_validate(data))
    return tuple(items)


def mock_property(id_or_mls: str) -> Optional[Property]:
    """Look up a mock listing by its id or its MLS number."""

    for prop in mock_properties():
        if prop.id == id_or_mls or prop.mls_number == id_or_mls:
            return prop
    return None


@lru_cache(maxsize=1)
def mock_posts() -> Tuple[BlogPost, ...]:
    return tuple(BlogPost.model_validate(row) for row in load_json("posts.json"))


def mock_post(slug: str) -> Optional[BlogPost]:
    return next((post for post in mock_posts() if post.slug == slug), None)


@lru_cache(maxsize=1)
def mock_categories() -> Tuple[BlogCategory, ...]:
    return tuple(BlogCategory.model_validate(row) for row in load_json("categories.json"))


@lru_cache(maxsize=1)
def service_areas() -> Tuple[ServiceArea, ...]:
    return tuple(ServiceArea.model_validate(row) for row in load_json("areas.json"))


def service_area(slug: str) -> Optional[ServiceArea]:
    return next((area for area in service_areas() if area.slug == slug), None)


def service_area_slugs() -> List[str]:
    return [area.slug for area in service_areas()]


@lru_cache(maxsize=1)
def faqs() -> Tuple[FAQ, ...]:
    return tuple(FAQ.model_validate(row) for row in load_json("faqs.json"))
