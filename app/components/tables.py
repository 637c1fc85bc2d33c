"""Tabular components for listing details and amenities."""

from __future__ import annotations

from typing import List, Optional

import pandas as pd
import streamlit as st


def _fmt_flag(value: Optional[bool]) -> str:
    return "Yes" if value else "No"


def _fmt_number(value: Optional[float], suffix: str = "") -> str:
    if not value:
        return "—"
    return f"{value:,.0f}{suffix}"


def _fmt_list(values: Optional[List[str]]) -> str:
    return ", ".join(values) if values else "—"


def render_details_table(prop: dict) -> None:
    data = [
        {"Detail": "Price", "Value": f"${prop.get('price') or 0:,.0f}"},
        {"Detail": "Acreage", "Value": f"{prop.get('acreage') or 0:g} acres"},
        {"Detail": "Bedrooms", "Value": _fmt_number(prop.get("bedrooms"))},
        {"Detail": "Bathrooms", "Value": f"{prop.get('bathrooms') or 0:g}"},
        {"Detail": "Living Area", "Value": _fmt_number(prop.get("square_feet"), " sqft")},
        {"Detail": "Year Built", "Value": str(prop.get("year_built") or "—")},
        {"Detail": "MLS #", "Value": prop.get("mls_number") or "—"},
        {"Detail": "Listed", "Value": str(prop.get("list_date") or "—")},
    ]
    st.dataframe(pd.DataFrame(data), hide_index=True, width="stretch")


def render_amenities_table(amenities: dict) -> None:
    data = [
        {"Amenity": "Stalls", "Value": str(amenities.get("stalls") or 0)},
        {"Amenity": "Indoor Arena", "Value": _fmt_flag(amenities.get("has_indoor_arena"))},
        {"Amenity": "Outdoor Arena", "Value": _fmt_flag(amenities.get("has_outdoor_arena"))},
        {"Amenity": "Pastures", "Value": str(amenities.get("pastures") or 0)},
        {"Amenity": "Pasture Acreage", "Value": _fmt_number(amenities.get("pasture_acreage"), " ac")},
        {"Amenity": "Tack Room", "Value": _fmt_flag(amenities.get("has_tack_room"))},
        {"Amenity": "Feed Room", "Value": _fmt_flag(amenities.get("has_feed_room"))},
        {"Amenity": "Wash Rack", "Value": _fmt_flag(amenities.get("has_wash_rack"))},
        {"Amenity": "Round Pen", "Value": _fmt_flag(amenities.get("has_round_pen"))},
        {"Amenity": "Fencing", "Value": _fmt_list(amenities.get("fencing_type"))},
        {"Amenity": "Water", "Value": _fmt_list(amenities.get("water_source"))},
        {"Amenity": "Barn Size", "Value": _fmt_number(amenities.get("barn_square_feet"), " sqft")},
        {"Amenity": "Other Structures", "Value": _fmt_list(amenities.get("additional_structures"))},
    ]
    st.dataframe(pd.DataFrame(data), hide_index=True, width="stretch")


def render_listings_table(items: List[dict]) -> None:
    if not items:
        st.info("No properties match these filters.")
        return
    df = pd.DataFrame(
        [
            {
                "Title": item.get("title"),
                "City": item.get("city"),
                "Price": item.get("price"),
                "Acres": item.get("acreage"),
                "Stalls": (item.get("equestrian_amenities") or {}).get("stalls", 0),
                "Status": item.get("status"),
            }
            for item in items
        ]
    )
    df["Price"] = df["Price"].apply(lambda x: f"${x:,.0f}")
    st.dataframe(df, hide_index=True, width="stretch")
