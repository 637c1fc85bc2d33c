import json
from datetime import date
from typing import Any, List, Optional

import pytest
import requests

from horsefarm.config import CRMSettings, MLSSettings, Settings, WordPressSettings
from horsefarm.models.property import Agent, EquestrianAmenities, Property

MLS_URL = "https://mls.test/v2"
WP_URL = "https://blog.test/graphql"
CRM_URL = "https://hooks.test/lead"

_REASONS = {200: "OK", 400: "Bad Request", 401: "Unauthorized", 404: "Not Found", 500: "Internal Server Error", 503: "Service Unavailable"}


def make_response(status: int = 200, body: Any = None, text: Optional[str] = None, url: str = "https://fake.test") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = _REASONS.get(status, "")
    resp.url = url
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = "application/json"
    resp._content = (text if text is not None else json.dumps(body if body is not None else {})).encode("utf-8")
    return resp


class FakeSession:
    """Stands in for ``requests.Session``: records calls and replays queued responses or errors."""

    def __init__(self, responses: Optional[List[Any]] = None) -> None:
        self.responses = list(responses or [])
        self.calls: List[dict] = []

    def queue(self, *responses: Any) -> "FakeSession":
        self.responses.extend(responses)
        return self

    def _next(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"unexpected {method} {url}")
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        return self._next("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> requests.Response:
        return self._next("POST", url, **kwargs)


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def mls_settings() -> MLSSettings:
    return MLSSettings(api_url=MLS_URL, api_key="test-key", page_size=50)


@pytest.fixture
def wp_settings() -> WordPressSettings:
    return WordPressSettings(api_url=WP_URL, page_size=20)


@pytest.fixture
def crm_settings() -> CRMSettings:
    return CRMSettings(webhook_url=CRM_URL)


@pytest.fixture
def live_settings(mls_settings, wp_settings, crm_settings) -> Settings:
    return Settings(mls=mls_settings, wordpress=wp_settings, crm=crm_settings)


@pytest.fixture
def reso_listing() -> dict:
    return {
        "ListingKey": "CAR4100123",
        "ListingId": "4100123",
        "ListPrice": 1450000,
        "PropertyType": "Farm",
        "StandardStatus": "Active Under Contract",
        "StreetNumber": "812",
        "StreetName": "Hunting Country",
        "StreetSuffix": "Rd",
        "City": "Tryon",
        "StateOrProvince": "NC",
        "PostalCode": "28782",
        "BedroomsTotal": 4,
        "BathroomsTotalInteger": 3,
        "BathroomsTotalDecimal": 3.5,
        "LivingArea": 3900,
        "LotSizeAcres": 22.4,
        "YearBuilt": 1998,
        "PublicRemarks": "Gated farm with 8 stalls, tack room, riding ring and 3 pastures behind post and rail fencing. Hay barn and run-in shed.",
        "ListingContractDate": "2024-04-02",
        "InteriorFeatures": ["Fireplace", "Vaulted Ceilings"],
        "ExteriorFeatures": ["Covered Porch"],
        "View": ["Mountain(s)"],
        "Media": [
            {"MediaKey": "m2", "MediaURL": "https://img.test/2.jpg", "Order": 2},
            {"MediaKey": "m1", "MediaURL": "https://img.test/1.jpg", "Order": 1},
        ],
        "Latitude": 35.21,
        "Longitude": -82.24,
    }


def build_property(
    pid: str = "p1",
    price: int = 500000,
    acreage: float = 10,
    city: str = "Waxhaw",
    property_type: str = "farm",
    list_date: date = date(2024, 1, 1),
    **amenities: Any,
) -> Property:
    return Property(
        id=pid,
        mls_number=f"MLS-{pid}",
        title=f"Listing {pid}",
        address="1 Farm Rd",
        city=city,
        state="NC",
        price=price,
        acreage=acreage,
        equestrian_amenities=EquestrianAmenities(**amenities),
        listing_agent=Agent(id="1", name="Lara Murphy"),
        list_date=list_date,
        property_type=property_type,
    )
