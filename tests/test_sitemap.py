from datetime import date
from xml.etree import ElementTree as ET

import requests
from conftest import FakeSession, make_response

from horsefarm.config import MLSSettings, SiteSettings, WordPressSettings
from horsefarm.services.sitemap import SITEMAP_NS, SitemapEntry, build_sitemap, render_sitemap_xml, robots_txt
from horsefarm.sources import fallback
from horsefarm.sources.mls import MLSListingSource
from horsefarm.sources.wordpress import WordPressSource

SITE = SiteSettings(base_url="https://farms.test/")
TODAY = date(2024, 7, 4)


def _locs(entries):
    return [e.loc for e in entries]


def test_sitemap_enumerates_every_entity_from_mock_data():
    entries = build_sitemap(
        MLSListingSource(MLSSettings(api_key="")),
        WordPressSource(WordPressSettings()),
        fallback.service_areas(),
        SITE,
        today=TODAY,
    )
    locs = _locs(entries)
    assert locs[:7] == [
        "https://farms.test",
        "https://farms.test/properties",
        "https://farms.test/about",
        "https://farms.test/contact",
        "https://farms.test/blog",
        "https://farms.test/areas",
        "https://farms.test/estimate",
    ]
    for prop in fallback.mock_properties():
        assert f"https://farms.test/properties/{prop.id}" in locs
    for slug in fallback.service_area_slugs():
        assert f"https://farms.test/areas/{slug}" in locs
    for post in fallback.mock_posts():
        assert f"https://farms.test/blog/{post.slug}" in locs
    assert len(entries) == 7 + 6 + 10 + 5


def test_entry_metadata():
    entries = build_sitemap(MLSListingSource(MLSSettings(api_key="")), WordPressSource(WordPressSettings()), [], SITE, today=TODAY)
    by_loc = {e.loc: e for e in entries}
    assert by_loc["https://farms.test"] == SitemapEntry("https://farms.test", TODAY, "weekly", 1.0)
    assert by_loc["https://farms.test/properties/1"] == SitemapEntry("https://farms.test/properties/1", date(2024, 1, 15), "weekly", 0.8)
    post = by_loc["https://farms.test/blog/indoor-arena-considerations"]
    assert (post.lastmod, post.changefreq, post.priority) == (date(2024, 9, 15), "monthly", 0.6)


def test_wordpress_outage_keeps_property_urls(mls_settings, wp_settings, reso_listing):
    listings = MLSListingSource(mls_settings, session=FakeSession([make_response(200, {"value": [reso_listing]})]))
    posts = WordPressSource(wp_settings, session=FakeSession([requests.ConnectionError("down")]))
    locs = _locs(build_sitemap(listings, posts, [], SITE, today=TODAY))
    assert "https://farms.test/properties/CAR4100123" in locs
    assert "https://farms.test/blog/essential-guide-to-buying-horse-property" in locs


def test_render_xml():
    xml = render_sitemap_xml([SitemapEntry("https://farms.test/areas/tryon", TODAY, "monthly", 0.7)])
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    root = ET.fromstring(xml.split("\n", 1)[1])
    url = root.find(f"{{{SITEMAP_NS}}}url")
    assert url.find(f"{{{SITEMAP_NS}}}loc").text == "https://farms.test/areas/tryon"
    assert url.find(f"{{{SITEMAP_NS}}}lastmod").text == "2024-07-04"
    assert url.find(f"{{{SITEMAP_NS}}}priority").text == "0.7"


def test_robots():
    assert robots_txt(SITE) == (
        "User-agent: *\nAllow: /\nDisallow: /api/\nDisallow: /_next/\n\nSitemap: https://farms.test/sitemap.xml\n"
    )
