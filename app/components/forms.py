"""Lead capture forms for the contact and estimate pages."""

from __future__ import annotations

import streamlit as st
from pydantic import ValidationError

from horsefarm.models.forms import ContactForm, ValuationForm
from horsefarm.models.property import PROPERTY_TYPES

INTEREST_OPTIONS = {
    "": "Select an option",
    "buying": "Buying a horse property",
    "selling": "Selling a horse property",
    "both": "Buying and selling",
    "browsing": "Just browsing",
}


def _show_result(result: dict) -> None:
    if result.get("ok"):
        st.success(result.get("message"))
    else:
        st.error(result.get("message"))


def _show_errors(exc: ValidationError) -> None:
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()))
        st.error(f"{field}: {err.get('msg')}")


def render_contact_form(client, page_url: str = "/contact") -> None:
    with st.form("contact-form", clear_on_submit=False):
        col1, col2 = st.columns(2)
        first_name = col1.text_input("First name *")
        last_name = col2.text_input("Last name *")
        email = col1.text_input("Email *")
        phone = col2.text_input("Phone")
        interest = st.selectbox("I'm interested in", list(INTEREST_OPTIONS), format_func=INTEREST_OPTIONS.get)
        preferred = st.radio("Preferred contact", ["email", "phone"], horizontal=True)
        message = st.text_area("Message")
        submitted = st.form_submit_button("Send message")

    if not submitted:
        return
    try:
        form = ContactForm(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            property_interest=interest,
            preferred_contact=preferred,
            message=message,
        )
    except ValidationError as exc:
        _show_errors(exc)
        return
    with st.spinner("Sending..."):
        _show_result(client.submit_contact(form, page_url))


def render_valuation_form(client, page_url: str = "/estimate") -> None:
    with st.form("valuation-form", clear_on_submit=False):
        st.markdown("**Your details**")
        col1, col2 = st.columns(2)
        first_name = col1.text_input("First name *")
        last_name = col2.text_input("Last name *")
        email = col1.text_input("Email *")
        phone = col2.text_input("Phone")

        st.markdown("**Property details**")
        address = st.text_input("Property address *")
        col3, col4, col5 = st.columns(3)
        city = col3.text_input("City")
        state = col4.text_input("State", value="NC")
        zip_code = col5.text_input("ZIP")
        col6, col7, col8 = st.columns(3)
        acreage = col6.text_input("Acreage")
        property_type = col7.selectbox("Property type", ["", *PROPERTY_TYPES])
        stalls = col8.text_input("Number of stalls")
        col9, col10 = st.columns(2)
        has_arena = col9.selectbox("Arena", ["", "indoor", "outdoor", "both", "none"])
        has_barns = col10.selectbox("Barns", ["", "yes", "no"])
        details = st.text_area("Anything else we should know?")
        submitted = st.form_submit_button("Request valuation")

    if not submitted:
        return
    try:
        form = ValuationForm(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            property_address=address,
            city=city,
            state=state,
            zip_code=zip_code,
            acreage=acreage,
            property_type=property_type,
            number_of_stalls=stalls,
            has_arena=has_arena,
            has_barns=has_barns,
            additional_details=details,
        )
    except ValidationError as exc:
        _show_errors(exc)
        return
    with st.spinner("Sending..."):
        _show_result(client.submit_valuation(form, page_url))
