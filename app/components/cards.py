"""Streamlit components for listing and blog cards."""

from __future__ import annotations

from typing import Callable, Dict, Optional

import streamlit as st

STATUS_LABELS = {"active": "Active", "pending": "Pending", "sold": "Sold"}


def status_pill(status: Optional[str]) -> str:
    label = (status or "active").lower()
    return f"status-pill status-{label}"


def amenity_chips(amenities: Dict) -> str:
    chips = []
    if amenities.get("stalls"):
        chips.append(f"{amenities['stalls']} stalls")
    if amenities.get("has_indoor_arena"):
        chips.append("Indoor arena")
    if amenities.get("has_outdoor_arena"):
        chips.append("Outdoor arena")
    if amenities.get("pastures"):
        chips.append(f"{amenities['pastures']} pastures")
    return " · ".join(chips) or "Land ready for horses"


def render_property_card(
    property_data: Dict,
    on_click: Callable[[], None],
    key: Optional[str] = None,
) -> None:
    key = key or property_data.get("id")
    status = property_data.get("status") or "active"
    amenities = property_data.get("equestrian_amenities") or {}
    images = property_data.get("images") or []

    card_html = f"""
        <div class="property-card">
            <div class="property-card__header">
                <span class="{status_pill(status)}">{STATUS_LABELS.get(status, status.title())}</span>
                <span class="property-card__type">{(property_data.get('property_type') or 'farm').title()}</span>
            </div>
            <h3>{property_data.get('title')}</h3>
            <p class="property-card__meta">{property_data.get('city')}, {property_data.get('state')} · {property_data.get('acreage') or 0:g} acres</p>
            <p class="property-card__amenities">{amenity_chips(amenities)}</p>
            <p class="property-card__value">${float(property_data.get('price') or 0):,.0f}</p>
        </div>
    """
    with st.container():
        if images:
            st.image(images[0], use_container_width=True)
        st.markdown(card_html, unsafe_allow_html=True)
        st.button("View property", key=f"open-{key}", on_click=on_click)


def render_post_card(post: Dict, on_click: Callable[[], None]) -> None:
    published = str(post.get("published_at") or "")[:10]
    with st.container():
        st.markdown(f"#### {post.get('title')}")
        st.caption(f"{post.get('category')} · {published} · {post.get('read_time')} min read")
        st.write(post.get("excerpt") or "")
        st.button("Read more", key=f"post-{post.get('slug')}", on_click=on_click)
