"""Sitemap and robots.txt generation."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional
from xml.etree import ElementTree as ET

from ..config import SiteSettings
from ..models.content import BlogPost, ServiceArea
from ..models.property import Property
from ..utils.logging import get_logger

LOGGER = get_logger("services.sitemap")

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# path, changefreq, priority
STATIC_PAGES = (
    ("/", "weekly", 1.0),
    ("/properties", "daily", 0.9),
    ("/about", "monthly", 0.8),
    ("/contact", "monthly", 0.8),
    ("/blog", "weekly", 0.7),
    ("/areas", "monthly", 0.7),
    ("/estimate", "monthly", 0.7),
)

DISALLOWED_PATHS = ("/api/", "/_next/")


@dataclass(frozen=True)
class SitemapEntry:
    loc: str
    lastmod: Optional[date]
    changefreq: str
    priority: float


def static_entries(site: SiteSettings, today: date) -> List[SitemapEntry]:
    return [SitemapEntry(site.url(path), today, freq, prio) for path, freq, prio in STATIC_PAGES]


def property_entries(site: SiteSettings, properties: Iterable[Property]) -> List[SitemapEntry]:
    return [SitemapEntry(site.url(f"/properties/{p.id}"), p.list_date, "weekly", 0.8) for p in properties]


def area_entries(site: SiteSettings, areas: Iterable[ServiceArea], today: date) -> List[SitemapEntry]:
    return [SitemapEntry(site.url(f"/areas/{a.slug}"), today, "monthly", 0.7) for a in areas]


def post_entries(site: SiteSettings, posts: Iterable[BlogPost]) -> List[SitemapEntry]:
    return [
        SitemapEntry(site.url(f"/blog/{post.slug}"), post.published_at.date(), "monthly", 0.6)
        for post in posts
    ]


def build_sitemap(listings, posts, areas: Iterable[ServiceArea], site: SiteSettings, today: Optional[date] = None) -> List[SitemapEntry]:
    """Collect every public URL.

    ``listings`` and ``posts`` are the MLS and WordPress adapters. Both are
    fetched at the same time; neither raises, so an outage on one side only
    means that side is served from its mock data.
    """

    today = today or date.today()
    with ThreadPoolExecutor(max_workers=2) as executor:
        listing_future = executor.submit(listings.fetch_all)
        post_future = executor.submit(posts.fetch_all)
        listing_result = listing_future.result()
        post_result = post_future.result()

    entries = static_entries(site, today)
    entries += property_entries(site, listing_result.data)
    entries += area_entries(site, areas, today)
    entries += post_entries(site, post_result.data)
    LOGGER.info(
        "sitemap_built urls=%s listings=%s posts=%s",
        len(entries),
        listing_result.origin,
        post_result.origin,
    )
    return entries


def render_sitemap_xml(entries: Iterable[SitemapEntry]) -> str:
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = entry.loc
        if entry.lastmod is not None:
            ET.SubElement(url, "lastmod").text = entry.lastmod.isoformat()
        ET.SubElement(url, "changefreq").text = entry.changefreq
        ET.SubElement(url, "priority").text = f"{entry.priority:.1f}"
    body = ET.tostring(urlset, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body


def robots_txt(site: SiteSettings) -> str:
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in DISALLOWED_PATHS]
    lines += ["", f"Sitemap: {site.url('/sitemap.xml')}", ""]
    return "\n".join(lines)
