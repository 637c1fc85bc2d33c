import requests
from conftest import CRM_URL, FakeSession, make_response
from fastapi.testclient import TestClient

from horsefarm.api import create_app
from horsefarm.config import Settings
from horsefarm.services.leads import RETRY_MESSAGE, THANK_YOU_MESSAGE

client = TestClient(create_app(Settings(), session=FakeSession()))

CONTACT = {
    "form": {"first_name": "Jane", "last_name": "Rider", "email": "jane@example.com", "message": "Hi"},
    "page_url": "https://site.test/contact",
}


def _live_client(live_settings, *responses):
    session = FakeSession(list(responses))
    return TestClient(create_app(live_settings, session=session)), session


def test_health():
    assert client.get("/api/health").json() == {"status": "ok"}


def test_properties_endpoint_serves_mock_listings():
    resp = client.get("/api/properties")
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["origin"] == "fallback"
    assert payload["reason"] == "not_configured"
    assert payload["total"] == len(payload["items"]) == 6


def test_properties_filters_and_sort():
    resp = client.get("/api/properties", params={"min_stalls": 8, "city": "WAXHAW", "sort": "price-low"})
    assert [p["id"] for p in resp.json()["items"]] == ["1"]
    resp = client.get("/api/properties", params={"property_type": "farm", "sort": "newest"})
    assert [p["id"] for p in resp.json()["items"]] == ["4", "2"]


def test_properties_rejects_bad_params():
    assert client.get("/api/properties", params={"sort": "cheapest"}).status_code == 422
    assert client.get("/api/properties", params={"min_price": -1}).status_code == 422


def test_featured():
    payload = client.get("/api/properties/featured", params={"limit": 3}).json()
    assert [p["id"] for p in payload["items"]] == ["3", "1", "5"]
    assert client.get("/api/properties/featured", params={"limit": 0}).status_code == 422


def test_facets():
    payload = client.get("/api/properties/facets").json()
    assert payload["cities"][0] == "Matthews"
    assert payload["price_range"] == {"min": 690000, "max": 4500000}
    assert payload["acreage_range"] == {"min": 8, "max": 62}


def test_property_detail_includes_score():
    payload = client.get("/api/properties/MLS-2024-003").json()
    assert payload["property"]["id"] == "3"
    assert payload["score"]["total"] == 194
    assert {f["key"] for f in payload["score"]["factors"]} >= {"stalls", "acreage"}


def test_property_not_found():
    assert client.get("/api/properties/NOPE").status_code == 404


def test_posts_and_filters():
    assert client.get("/api/posts").json()["total"] == 5
    assert [p["id"] for p in client.get("/api/posts", params={"category": "property-features"}).json()["items"]] == ["3", "5"]
    assert [p["id"] for p in client.get("/api/posts", params={"q": "horse safety"}).json()["items"]] == ["3"]


def test_post_detail_related_and_404():
    assert client.get("/api/posts/indoor-arena-considerations").json()["post"]["id"] == "5"
    related = client.get("/api/posts/indoor-arena-considerations/related").json()
    assert [p["id"] for p in related["items"]] == ["3", "4", "1"]
    assert client.get("/api/posts/missing").status_code == 404
    assert client.get("/api/posts/missing/related").status_code == 404


def test_categories_areas_faqs():
    assert client.get("/api/categories").json()["total"] == 4
    areas = client.get("/api/areas").json()
    assert len(areas) == 10
    assert client.get("/api/areas/tryon").json()["name"]
    assert client.get("/api/areas/atlantis").status_code == 404
    assert len(client.get("/api/faqs").json()) == 6


def test_lead_without_webhook_is_502():
    resp = client.post("/api/leads/contact", json=CONTACT)
    assert resp.status_code == 502
    assert resp.json()["detail"] == RETRY_MESSAGE


def test_lead_validation_error():
    body = {"form": dict(CONTACT["form"], email="nope")}
    assert client.post("/api/leads/contact", json=body).status_code == 422


def test_lead_forwarded(live_settings):
    live, session = _live_client(live_settings, make_response(200, {"ok": True}))
    resp = live.post("/api/leads/contact", json=CONTACT)
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "message": THANK_YOU_MESSAGE}
    assert session.calls[0]["url"] == CRM_URL
    assert session.calls[0]["json"]["pageUrl"] == "https://site.test/contact"


def test_valuation_lead_failure(live_settings):
    live, _ = _live_client(live_settings, requests.ConnectionError("down"))
    body = {"form": {"first_name": "Sam", "last_name": "Hill", "email": "sam@example.com", "property_address": "55 Stable Ln"}}
    resp = live.post("/api/leads/valuation", json=body)
    assert resp.status_code == 502


def test_live_outage_is_reported_in_envelope(live_settings):
    live, _ = _live_client(live_settings, make_response(503))
    payload = live.get("/api/properties").json()
    assert payload["origin"] == "fallback"
    assert payload["reason"] == "http_error"
    assert payload["total"] == 6


def test_sources_status():
    payload = client.get("/api/sources/status").json()
    assert payload["mls"]["configured"] is False
    assert payload["wordpress"]["configured"] is False
    assert payload["crm"] == {"configured": False}


def test_sitemap_xml():
    resp = client.get("/sitemap.xml")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/xml")
    assert "<loc>https://carolinahorsefarmrealty.com/properties/1</loc>" in resp.text
    assert "<loc>https://carolinahorsefarmrealty.com/areas/tryon</loc>" in resp.text


def test_robots_txt():
    resp = client.get("/robots.txt")
    assert resp.headers["content-type"].startswith("text/plain")
    assert "Disallow: /api/" in resp.text
    assert resp.text.rstrip().endswith("Sitemap: https://carolinahorsefarmrealty.com/sitemap.xml")
