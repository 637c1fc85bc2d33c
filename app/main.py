"""Streamlit site for Carolina Horse Farm Realty."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import sys

import streamlit as st
from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

load_dotenv(dotenv_path=ROOT_DIR / ".env", override=False)

from app.components.cards import render_post_card, render_property_card
from app.components.charts import render_score_chart
from app.components.forms import render_contact_form, render_valuation_form
from app.components.tables import render_amenities_table, render_details_table, render_listings_table
from app.site_client import SiteClient
from horsefarm.models.property import PROPERTY_TYPES

st.set_page_config(page_title="Carolina Horse Farm Realty", layout="wide", page_icon="🐎")

PAGES = ("Home", "Properties", "Areas", "Blog", "Contact", "Home Valuation")

SORT_LABELS = {
    "newest": "Newest",
    "price-high": "Price: high to low",
    "price-low": "Price: low to high",
    "acreage": "Most acreage",
}

FALLBACK_NOTE = "Showing sample listings while the live MLS feed is unavailable."


@st.cache_resource(show_spinner=False)
def get_site_client() -> SiteClient:
    return SiteClient()


def load_styles() -> None:
    css_path = Path(__file__).resolve().parent / "assets" / "styles.css"
    if css_path.exists():
        st.markdown(f"<style>{css_path.read_text()}</style>", unsafe_allow_html=True)


def navigate_to(**params: str) -> None:
    st.query_params = params


def navigate_home() -> None:
    st.query_params = {}


def _param(name: str) -> Optional[str]:
    value = st.query_params.get(name)
    if isinstance(value, list):
        return value[0] if value else None
    return value


def render_property_grid(items, columns: int = 3) -> None:
    cols = st.columns(columns)
    for idx, prop in enumerate(items):
        with cols[idx % columns]:
            render_property_card(prop, on_click=lambda pid=prop["id"]: navigate_to(property_id=pid), key=prop["id"])


def render_home_page(client: SiteClient) -> None:
    st.title("Carolina Horse Farm Realty")
    st.markdown("Horse farms, equestrian estates and land for horses across the Carolinas.")
    st.subheader("Featured properties")
    render_property_grid(client.featured(6))

    st.subheader("Frequently asked questions")
    for faq in client.faqs():
        with st.expander(faq["question"]):
            st.write(faq["answer"])


def _filter_sidebar(facets: Dict) -> Dict:
    st.sidebar.header("Search")
    cities = [""] + list(facets.get("cities") or [])
    filters: Dict = {
        "city": st.sidebar.selectbox("City", cities, format_func=lambda c: c or "Any") or None,
        "property_type": st.sidebar.selectbox("Type", ["", *PROPERTY_TYPES], format_func=lambda t: t.title() or "Any") or None,
        "min_stalls": st.sidebar.number_input("Min stalls", min_value=0, value=0, step=1) or None,
        "has_indoor_arena": st.sidebar.checkbox("Indoor arena") or None,
        "has_outdoor_arena": st.sidebar.checkbox("Outdoor arena") or None,
    }
    prices = facets.get("price_range")
    if prices:
        low, high = st.sidebar.slider(
            "Price",
            min_value=int(prices["min"]),
            max_value=int(prices["max"]),
            value=(int(prices["min"]), int(prices["max"])),
            step=25000,
        )
        filters.update(min_price=low, max_price=high)
    acres = facets.get("acreage_range")
    if acres:
        low, high = st.sidebar.slider(
            "Acreage",
            min_value=float(acres["min"]),
            max_value=float(acres["max"]),
            value=(float(acres["min"]), float(acres["max"])),
        )
        filters.update(min_acreage=low, max_acreage=high)
    return filters


def render_listing_page(client: SiteClient) -> None:
    st.title("Horse Properties for Sale")
    filters = _filter_sidebar(client.facets())
    sort_col, view_col = st.columns([2, 1])
    sort = sort_col.selectbox("Sort by", list(SORT_LABELS), format_func=SORT_LABELS.get)
    view = view_col.radio("View", ["Cards", "Table"], horizontal=True)
    result = client.list_properties(filters, sort)

    if result.get("origin") == "fallback":
        st.caption(FALLBACK_NOTE)
    st.caption(f"{result.get('total', 0)} properties")
    if not result.get("items"):
        st.warning("No properties match these filters.")
        return
    if view == "Table":
        render_listings_table(result["items"])
    else:
        render_property_grid(result["items"])


def render_detail_page(client: SiteClient, property_id: str) -> None:
    st.button("← Back to listings", on_click=navigate_home)
    detail = client.get_property(property_id)
    if detail is None:
        st.error("We couldn't find that property.")
        return
    prop = detail["property"]
    score = detail["score"]

    header_col, price_col = st.columns([3, 1])
    with header_col:
        st.markdown(f"## {prop['title']}")
        st.caption(f"{prop['address']}, {prop['city']}, {prop['state']} {prop.get('zip_code', '')}")
    with price_col:
        st.metric("Price", f"${prop['price']:,.0f}")
        st.metric("Equestrian score", score["total"])

    images = prop.get("images") or []
    if images:
        st.image(images, width=320)

    st.write(prop.get("description", ""))

    detail_col, chart_col = st.columns([1, 1])
    with detail_col:
        st.subheader("Property details")
        render_details_table(prop)
        st.subheader("Equestrian amenities")
        render_amenities_table(prop.get("equestrian_amenities") or {})
    with chart_col:
        st.plotly_chart(render_score_chart(score.get("factors", []), score["total"]), use_container_width=True)
        if prop.get("features"):
            st.subheader("Features")
            st.markdown("\n".join(f"- {feature}" for feature in prop["features"]))
        agent = prop.get("listing_agent") or {}
        st.subheader("Listing agent")
        st.markdown(f"**{agent.get('name', '')}** · {agent.get('title', '')}")
        st.caption(f"{agent.get('phone', '')} · {agent.get('email', '')}")


def render_areas_page(client: SiteClient) -> None:
    st.title("Areas We Serve")
    for area in client.areas():
        with st.expander(f"{area['name']} · {area['county']}"):
            st.write(area["description"])
            st.markdown("**Highlights**")
            st.markdown("\n".join(f"- {item}" for item in area["highlights"]))
            st.markdown("**Nearby**")
            st.markdown("\n".join(f"- {item}" for item in area["nearby_attractions"]))


def render_blog_page(client: SiteClient) -> None:
    st.title("Equestrian Living Blog")
    categories = client.categories()
    query = st.text_input("Search articles", "").strip()
    slugs = [""] + [c["slug"] for c in categories]
    names = {c["slug"]: c["name"] for c in categories}
    category = st.selectbox("Category", slugs, format_func=lambda s: names.get(s, "All"))
    posts = client.list_posts(q=query or None, category=category or None)
    if not posts:
        st.info("No articles found.")
    for post in posts:
        render_post_card(post, on_click=lambda slug=post["slug"]: navigate_to(post=slug))


def render_post_page(client: SiteClient, slug: str) -> None:
    st.button("← Back to blog", on_click=navigate_home)
    post = client.get_post(slug)
    if post is None:
        st.error("We couldn't find that article.")
        return
    st.markdown(f"## {post['title']}")
    st.caption(f"{post['author']['name']} · {str(post['published_at'])[:10]} · {post['read_time']} min read")
    st.markdown(post.get("content", ""), unsafe_allow_html=True)
    if post.get("tags"):
        st.caption("Tags: " + ", ".join(post["tags"]))

    related = client.related_posts(slug)
    if related:
        st.subheader("Related articles")
        for item in related:
            render_post_card(item, on_click=lambda s=item["slug"]: navigate_to(post=s))


def render_contact_page(client: SiteClient) -> None:
    st.title("Contact Us")
    render_contact_form(client)


def render_valuation_page(client: SiteClient) -> None:
    st.title("What's Your Horse Property Worth?")
    st.write("Tell us about your farm and we'll prepare a complimentary market valuation.")
    render_valuation_form(client)


load_styles()
client = get_site_client()
property_id = _param("property_id")
post_slug = _param("post")

if property_id:
    render_detail_page(client, property_id)
elif post_slug:
    render_post_page(client, post_slug)
else:
    page = st.sidebar.radio("Navigate", PAGES)
    if page == "Properties":
        render_listing_page(client)
    elif page == "Areas":
        render_areas_page(client)
    elif page == "Blog":
        render_blog_page(client)
    elif page == "Contact":
        render_contact_page(client)
    elif page == "Home Valuation":
        render_valuation_page(client)
    else:
        render_home_page(client)
