from datetime import date

import pytest

from horsefarm.exceptions import MalformedPayloadError
from horsefarm.models.property import Agent
from horsefarm.sources.mappers import (
    PLACEHOLDER_IMAGE,
    listing_title,
    map_listing,
    map_wp_category,
    map_wp_post,
    parse_list_date,
)

DEFAULT_AGENT = Agent(id="1", name="Lara Murphy", title="Broker / Owner")


def test_map_listing_core_fields(reso_listing):
    prop = map_listing(reso_listing, DEFAULT_AGENT)
    assert prop.id == "CAR4100123"
    assert prop.mls_number == "4100123"
    assert prop.address == "812 Hunting Country Rd"
    assert prop.status == "pending"
    assert prop.property_type == "farm"
    assert prop.bathrooms == 3.5
    assert prop.list_date == date(2024, 4, 2)
    assert prop.images == ["https://img.test/1.jpg", "https://img.test/2.jpg"]
    assert prop.features == ["Fireplace", "Vaulted Ceilings", "Covered Porch", "Mountain(s)"]
    assert prop.coordinates is not None and prop.coordinates.lat == 35.21
    assert prop.listing_agent == DEFAULT_AGENT


def test_map_listing_runs_amenity_extraction(reso_listing):
    amenities = map_listing(reso_listing, DEFAULT_AGENT).equestrian_amenities
    assert amenities.stalls == 8
    assert amenities.has_tack_room
    assert amenities.has_outdoor_arena
    assert amenities.pastures == 3
    assert amenities.fencing_type == ["Post & Rail"]
    assert amenities.additional_structures == ["Hay Barn", "Run-in Shed"]


def test_unknown_type_and_status_map_to_defaults():
    prop = map_listing({"ListingKey": "X1", "PropertyType": "Commercial", "StandardStatus": "Withdrawn"}, DEFAULT_AGENT)
    assert prop.property_type == "farm"
    assert prop.status == "active"


def test_subtype_is_tried_after_type():
    prop = map_listing({"ListingKey": "X2", "PropertyType": "Other", "PropertySubType": "Lots/Land"}, DEFAULT_AGENT)
    assert prop.property_type == "land"


def test_sparse_listing_gets_documented_defaults():
    prop = map_listing({"ListingKey": "X3"}, DEFAULT_AGENT)
    assert prop.mls_number == "X3"
    assert prop.address == "Address Not Available"
    assert prop.city == "Unknown"
    assert prop.state == "NC"
    assert prop.description == "No description available."
    assert prop.images == [PLACEHOLDER_IMAGE]
    assert prop.coordinates is None
    assert prop.list_date == date.today()


def test_listing_agent_from_mls_fields():
    prop = map_listing(
        {"ListingKey": "X4", "ListAgentFullName": "Sam Rivera", "ListAgentKey": "AG9", "ListAgentMlsId": "NC-77"},
        DEFAULT_AGENT,
    )
    assert prop.listing_agent.name == "Sam Rivera"
    assert prop.listing_agent.id == "AG9"
    assert prop.listing_agent.title == "REALTOR"
    assert prop.listing_agent.license_number == "NC-77"


def test_features_are_limited_to_ten():
    listing = {"ListingKey": "X5", "InteriorFeatures": [f"I{i}" for i in range(8)], "ExteriorFeatures": [f"E{i}" for i in range(8)]}
    assert len(map_listing(listing, DEFAULT_AGENT).features) == 10


def test_missing_listing_key_is_malformed():
    with pytest.raises(MalformedPayloadError):
        map_listing({"ListPrice": 100}, DEFAULT_AGENT)


@pytest.mark.parametrize(
    "listing, title",
    [
        ({"HorseStalls": 10, "HorseIndoorArena": True, "BedroomsTotal": 4, "City": "Tryon"}, "10-Stall Indoor Arena Horse Farm in Tryon"),
        ({"LotSizeAcres": 22.5, "BedroomsTotal": 5, "LivingArea": 6200, "City": "Waxhaw"}, "23-Acre Equestrian Estate in Waxhaw"),
        ({"LotSizeAcres": 3, "PropertyType": "Land", "City": "Columbus"}, "Horse Property in Columbus"),
        ({"BedroomsTotal": 0}, "Horse Property"),
    ],
)
def test_listing_title(listing, title):
    assert listing_title(listing) == title


def test_parse_list_date_accepts_timestamps_and_defaults():
    assert parse_list_date("2024-05-01T12:30:00Z") == date(2024, 5, 1)
    assert parse_list_date("not a date", today=date(2020, 1, 1)) == date(2020, 1, 1)
    assert parse_list_date(None, today=date(2020, 1, 1)) == date(2020, 1, 1)


def _wp_node(**overrides):
    node = {
        "id": "cG9zdDox",
        "databaseId": 41,
        "title": "Pasture Rotation 101",
        "slug": "pasture-rotation-101",
        "date": "2024-06-01T09:00:00",
        "excerpt": "<p>Keep your <strong>grass</strong> healthy.</p>",
        "content": "<p>" + " ".join(["word"] * 401) + "</p>",
        "featuredImage": {"node": {"sourceUrl": "https://img.test/pasture.jpg"}},
        "author": {"node": {"name": "Lara Murphy", "avatar": {"url": "https://img.test/lara.jpg"}}},
        "categories": {"edges": [{"node": {"name": "Property Care", "slug": "property-care"}}]},
        "tags": {"edges": [{"node": {"name": "Pastures"}}, {"node": {"name": "Maintenance"}}]},
    }
    node.update(overrides)
    return node


def test_map_wp_post():
    post = map_wp_post(_wp_node())
    assert post.id == "41"
    assert post.excerpt == "Keep your grass healthy."
    assert post.category == "Property Care"
    assert post.tags == ["Pastures", "Maintenance"]
    assert post.read_time == 3
    assert post.featured_image == "https://img.test/pasture.jpg"


def test_map_wp_post_defaults():
    post = map_wp_post(
        _wp_node(content=None, excerpt="Short note", featuredImage=None, categories={"edges": []}, tags=None, author={"node": {"name": "Staff"}})
    )
    assert post.category == "Uncategorized"
    assert post.tags == []
    assert post.read_time == 1
    assert post.featured_image == "/images/blog/default.jpg"
    assert post.author.avatar == "/images/default-avatar.jpg"


def test_map_wp_category():
    category = map_wp_category({"id": "dGVybTo1", "databaseId": 5, "name": "Buying Guide", "slug": "buying-guide", "count": 4})
    assert category.database_id == 5
    assert category.count == 4
    assert category.description == ""


def test_non_object_listing_is_malformed():
    with pytest.raises(MalformedPayloadError):
        map_listing(None, DEFAULT_AGENT)


def test_unnamed_first_category_is_uncategorized():
    post = map_wp_post(_wp_node(categories={"edges": [{"node": {"name": None, "slug": "x"}}]}))
    assert post.category == "Uncategorized"
