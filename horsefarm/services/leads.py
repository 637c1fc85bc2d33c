"""Forward website lead forms to the CRM webhook."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from ..config import CRMSettings
from ..exceptions import SubmissionError
from ..models.forms import LeadForm
from ..utils.logging import get_logger

LOGGER = get_logger("services.leads")

RETRY_MESSAGE = "There was a problem submitting your request. Please try again or call us directly."
THANK_YOU_MESSAGE = "Thank you! We'll be in touch within 24 hours."


def build_payload(
    form: LeadForm,
    page_url: str,
    form_source: str,
    submitted_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Flat camelCase object the CRM automation expects."""

    when = submitted_at or datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "formName": form.form_name,
        "formSource": form_source,
        "submittedAt": when.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
        "pageUrl": page_url,
    }
    payload.update(form.contact_fields())
    payload.update(form.form_fields())
    return payload


class LeadSubmitter:
    def __init__(self, settings: CRMSettings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    def submit(self, form: LeadForm, page_url: str = "") -> Dict[str, Any]:
        """POST one submission; returns the payload that was sent.

        Exactly one attempt is made. Any failure raises :class:`SubmissionError`.
        """

        if not self.settings.configured:
            LOGGER.error("lead_not_sent form=%s reason=not_configured", form.form_name)
            raise SubmissionError("CRM webhook URL is not configured")

        payload = build_payload(form, page_url, self.settings.form_source)
        try:
            r = self.session.post(
                self.settings.webhook_url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.settings.timeout,
            )
            r.raise_for_status()
        except requests.HTTPError as exc:
            LOGGER.error("lead_not_sent form=%s status=%s", form.form_name, r.status_code)
            raise SubmissionError(f"CRM webhook returned HTTP {r.status_code}") from exc
        except requests.RequestException as exc:
            LOGGER.error("lead_not_sent form=%s error=%s", form.form_name, exc)
            raise SubmissionError(f"CRM webhook unreachable: {exc}") from exc

        LOGGER.info("lead_sent form=%s page=%s", form.form_name, page_url or "-")
        return payload
