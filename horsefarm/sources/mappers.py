"""Map raw RESO listing records and WPGraphQL nodes onto the domain models."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..exceptions import MalformedPayloadError
from ..models.content import BlogAuthor, BlogCategory, BlogPost
from ..models.property import Agent, Coordinates, Property
from ..services.amenities import extract_amenities
from ..services.blog import read_time_minutes, strip_html
from ..utils.coerce import to_bool, to_float, to_int, to_str, to_str_list

PLACEHOLDER_IMAGE = "/images/properties/placeholder.jpg"
DEFAULT_AGENT_PHOTO = "/images/team/default-agent.jpg"
DEFAULT_POST_IMAGE = "/images/blog/default.jpg"
DEFAULT_AVATAR = "/images/default-avatar.jpg"
UNCATEGORIZED = "Uncategorized"
MAX_FEATURES = 10

PROPERTY_TYPE_MAP: Dict[str, str] = {
    "Farm": "farm",
    "Farm/Ranch": "farm",
    "Ranch": "ranch",
    "Residential": "estate",
    "Single Family": "estate",
    "Land": "land",
    "Lots/Land": "land",
}

# domain type -> RESO PropertyType used in $filter
RESO_PROPERTY_TYPE: Dict[str, str] = {
    "farm": "Farm",
    "ranch": "Ranch",
    "estate": "Residential",
    "land": "Land",
}

STATUS_MAP: Dict[str, str] = {
    "Active": "active",
    "Active Under Contract": "pending",
    "Pending": "pending",
    "Closed": "sold",
    "Sold": "sold",
}

_FEATURE_FIELDS = ("InteriorFeatures", "ExteriorFeatures", "PoolFeatures", "View")


# ---------------------------------------------------------------------------
# MLS listings
# ---------------------------------------------------------------------------


def map_property_type(listing: Mapping[str, Any]) -> str:
    return (
        PROPERTY_TYPE_MAP.get(to_str(listing.get("PropertyType")))
        or PROPERTY_TYPE_MAP.get(to_str(listing.get("PropertySubType")))
        or "farm"
    )


def map_status(listing: Mapping[str, Any]) -> str:
    return STATUS_MAP.get(to_str(listing.get("StandardStatus")), "active")


def listing_address(listing: Mapping[str, Any]) -> str:
    parts = [to_str(listing.get(k)).strip() for k in ("StreetNumber", "StreetName", "StreetSuffix")]
    return " ".join(p for p in parts if p) or "Address Not Available"


def listing_title(listing: Mapping[str, Any]) -> str:
    """Headline built from the horse facilities, size and town of a listing."""

    city = to_str(listing.get("City")).strip()
    stalls = to_int(listing.get("HorseStalls")) or 0
    acres = to_float(listing.get("LotSizeAcres")) or 0.0
    living_area = to_float(listing.get("LivingArea")) or 0.0

    parts: List[str] = []
    if stalls > 0:
        parts.append(f"{stalls}-Stall")
    elif acres >= 5:
        parts.append(f"{int(math.floor(acres + 0.5))}-Acre")
    if to_bool(listing.get("HorseIndoorArena")):
        parts.append("Indoor Arena")

    if to_str(listing.get("PropertyType")) == "Land" or to_int(listing.get("BedroomsTotal")) == 0:
        parts.append("Horse Property")
    elif living_area > 5000:
        parts.append("Equestrian Estate")
    else:
        parts.append("Horse Farm")

    if city:
        parts.append(f"in {city}")
    return " ".join(parts) or f"Horse Property in {city or 'NC'}"


def listing_images(listing: Mapping[str, Any]) -> List[str]:
    media = listing.get("Media")
    if not isinstance(media, list):
        return [PLACEHOLDER_IMAGE]
    items = [m for m in media if isinstance(m, Mapping) and to_str(m.get("MediaURL"))]
    items.sort(key=lambda m: to_int(m.get("Order")) if to_int(m.get("Order")) is not None else math.inf)
    urls = [to_str(m["MediaURL"]) for m in items]
    return urls or [PLACEHOLDER_IMAGE]


def listing_features(listing: Mapping[str, Any]) -> List[str]:
    features: List[str] = []
    for key in _FEATURE_FIELDS:
        features.extend(to_str_list(listing.get(key)))
    return features[:MAX_FEATURES]


def listing_agent(listing: Mapping[str, Any], default_agent: Agent) -> Agent:
    name = to_str(listing.get("ListAgentFullName")).strip()
    if not name:
        return default_agent
    return Agent(
        id=to_str(listing.get("ListAgentKey")) or "mls-agent",
        name=name,
        title="REALTOR",
        phone=to_str(listing.get("ListAgentDirectPhone")),
        email=to_str(listing.get("ListAgentEmail")),
        photo=DEFAULT_AGENT_PHOTO,
        bio="",
        specialties=["Equestrian Properties"],
        license_number=to_str(listing.get("ListAgentMlsId")),
    )


def listing_coordinates(listing: Mapping[str, Any]) -> Optional[Coordinates]:
    lat = to_float(listing.get("Latitude"))
    lng = to_float(listing.get("Longitude"))
    if not lat or not lng:
        return None
    return Coordinates(lat=lat, lng=lng)


def parse_list_date(value: Any, today: Optional[date] = None) -> date:
    text = to_str(value).strip()
    if text:
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass
    return today or date.today()


def map_listing(listing: Mapping[str, Any], default_agent: Agent) -> Property:
    """Convert one RESO ``Property`` record into a :class:`Property`.

    Raises :class:`MalformedPayloadError` when the record has no key or the
    mapped values fail validation.
    """

    if not isinstance(listing, Mapping):
        raise MalformedPayloadError("listing record is not an object")
    key = to_str(listing.get("ListingKey")).strip()
    if not key:
        raise MalformedPayloadError("listing record has no ListingKey")

    bathrooms = to_float(listing.get("BathroomsTotalDecimal")) or to_float(listing.get("BathroomsTotalInteger"))
    try:
        return Property(
            id=key,
            mls_number=to_str(listing.get("ListingId")) or key,
            title=listing_title(listing),
            address=listing_address(listing),
            city=to_str(listing.get("City")).strip() or "Unknown",
            state=to_str(listing.get("StateOrProvince")) or "NC",
            zip_code=to_str(listing.get("PostalCode")),
            price=max(to_int(listing.get("ListPrice")) or 0, 0),
            acreage=max(to_float(listing.get("LotSizeAcres")) or 0.0, 0.0),
            bedrooms=to_int(listing.get("BedroomsTotal")) or 0,
            bathrooms=bathrooms or 0,
            square_feet=to_int(listing.get("LivingArea")) or 0,
            year_built=to_int(listing.get("YearBuilt")) or 0,
            description=to_str(listing.get("PublicRemarks")) or "No description available.",
            images=listing_images(listing),
            features=listing_features(listing),
            equestrian_amenities=extract_amenities(listing),
            listing_agent=listing_agent(listing, default_agent),
            status=map_status(listing),
            list_date=parse_list_date(listing.get("ListingContractDate")),
            property_type=map_property_type(listing),
            coordinates=listing_coordinates(listing),
        )
    except ValidationError as exc:
        raise MalformedPayloadError(f"listing {key} failed validation: {exc}") from exc


# ---------------------------------------------------------------------------
# WordPress
# ---------------------------------------------------------------------------


def _node(value: Any) -> Dict[str, Any]:
    if isinstance(value, Mapping) and isinstance(value.get("node"), Mapping):
        return dict(value["node"])
    return {}


def _edge_nodes(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, Mapping) or not isinstance(value.get("edges"), list):
        return []
    return [_node(edge) for edge in value["edges"] if _node(edge)]


def map_wp_post(node: Mapping[str, Any]) -> BlogPost:
    content = to_str(node.get("content"))
    excerpt = strip_html(to_str(node.get("excerpt"))).strip()
    categories = _edge_nodes(node.get("categories"))
    author = _node(node.get("author"))
    avatar = author.get("avatar") if isinstance(author.get("avatar"), Mapping) else {}
    published = to_str(node.get("date"))

    try:
        return BlogPost(
            id=to_str(node.get("databaseId") or node.get("id")),
            slug=to_str(node.get("slug")),
            title=to_str(node.get("title")),
            excerpt=excerpt,
            content=content,
            featured_image=to_str(_node(node.get("featuredImage")).get("sourceUrl")) or DEFAULT_POST_IMAGE,
            author=BlogAuthor(
                name=to_str(author.get("name")) or "Carolina Horse Farm Realty",
                avatar=to_str(avatar.get("url")) or DEFAULT_AVATAR,
            ),
            category=(to_str(categories[0].get("name")) if categories else "") or UNCATEGORIZED,
            tags=[to_str(tag.get("name")) for tag in _edge_nodes(node.get("tags")) if tag.get("name")],
            published_at=published or datetime.now(),
            read_time=read_time_minutes(content or to_str(node.get("excerpt"))),
        )
    except ValidationError as exc:
        raise MalformedPayloadError(f"post {node.get('slug')!r} failed validation: {exc}") from exc


def map_wp_category(node: Mapping[str, Any]) -> BlogCategory:
    try:
        return BlogCategory(
            id=to_str(node.get("id")),
            database_id=to_int(node.get("databaseId")) or 0,
            name=to_str(node.get("name")),
            slug=to_str(node.get("slug")),
            description=to_str(node.get("description")),
            count=to_int(node.get("count")) or 0,
        )
    except ValidationError as exc:
        raise MalformedPayloadError(f"category {node.get('slug')!r} failed validation: {exc}") from exc
