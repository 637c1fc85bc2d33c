"""Lead form schemas and their CRM webhook field layout."""

from __future__ import annotations

from typing import ClassVar, Dict, Literal

from pydantic import BaseModel, Field


class LeadForm(BaseModel):
    form_name: ClassVar[str] = "Website Form"

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str = ""

    def contact_fields(self) -> Dict[str, str]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "fullName": f"{self.first_name} {self.last_name}".strip(),
            "email": self.email,
            "phone": self.phone,
        }

    def form_fields(self) -> Dict[str, str]:
        return {}


class ContactForm(LeadForm):
    form_name: ClassVar[str] = "Contact Page Form"

    property_interest: Literal["", "buying", "selling", "both", "browsing"] = ""
    preferred_contact: Literal["email", "phone"] = "email"
    message: str = ""

    def form_fields(self) -> Dict[str, str]:
        return {
            "propertyInterest": self.property_interest,
            "preferredContact": self.preferred_contact,
            "message": self.message,
        }


class ValuationForm(LeadForm):
    form_name: ClassVar[str] = "Property Valuation Request"

    property_address: str = Field(..., min_length=1)
    city: str = ""
    state: str = "NC"
    zip_code: str = ""
    acreage: str = ""
    property_type: str = ""
    number_of_stalls: str = ""
    has_arena: str = ""
    has_barns: str = ""
    additional_details: str = ""

    def form_fields(self) -> Dict[str, str]:
        return {
            "propertyAddress": self.property_address,
            "city": self.city,
            "state": self.state,
            "zipCode": self.zip_code,
            "acreage": self.acreage,
            "propertyType": self.property_type,
            "numberOfStalls": self.number_of_stalls,
            "hasArena": self.has_arena,
            "hasBarns": self.has_barns,
            "additionalDetails": self.additional_details,
        }


class LeadSubmission(BaseModel):
    """Body accepted by the lead endpoints: the form plus the page it came from."""

    page_url: str = ""


class ContactSubmission(LeadSubmission):
    form: ContactForm


class ValuationSubmission(LeadSubmission):
    form: ValuationForm


class SubmissionResponse(BaseModel):
    ok: bool
    message: str
