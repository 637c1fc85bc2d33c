"""Thin HTTP client for the MLS Grid RESO Web API (OData)."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

import requests

from ..config import MLSSettings
from ..exceptions import MalformedPayloadError, SourceHTTPError, SourceTransportError

PROPERTY_RESOURCE = "/Property"

ORDER_NEWEST = "ModificationTimestamp desc"
ORDER_PRICE_DESC = "ListPrice desc"


def odata_literal(value: Union[str, int, float]) -> str:
    """Render a value as an OData literal; strings are quoted with ``'`` doubled."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return "'" + str(value).replace("'", "''") + "'"


def eq(field: str, value: Union[str, int, float]) -> str:
    return f"{field} eq {odata_literal(value)}"


def and_join(clauses: Iterable[str]) -> str:
    return " and ".join(clause for clause in clauses if clause)


class MLSGridClient:
    def __init__(self, settings: MLSSettings, session: Optional[requests.Session] = None):
        if not settings.configured:
            raise RuntimeError("MLS Grid credentials are not configured")
        self.settings = settings
        self.base = settings.api_url.rstrip("/")
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Accept": "application/json",
        }

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        url = f"{self.base}{path}"
        try:
            r = self.session.get(url, params=params, headers=self._headers(), timeout=self.settings.timeout)
        except requests.RequestException as exc:
            raise SourceTransportError(f"GET {url} failed: {exc}") from exc
        try:
            r.raise_for_status()
        except requests.HTTPError as exc:
            raise SourceHTTPError(r.status_code, _error_message(r)) from exc
        try:
            payload = r.json()
        except ValueError as exc:
            raise MalformedPayloadError(f"GET {url} returned non-JSON body") from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("value"), list):
            raise MalformedPayloadError(f"GET {url} response has no 'value' array")
        if not all(isinstance(row, dict) for row in payload["value"]):
            raise MalformedPayloadError(f"GET {url} response has a non-object record")
        return payload

    def query(
        self,
        odata_filter: str = "",
        orderby: str = ORDER_NEWEST,
        top: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Single page of ``Property`` records; no ``@odata.nextLink`` following."""

        params = {"$top": str(top or self.settings.page_size)}
        if odata_filter:
            params["$filter"] = odata_filter
        if orderby:
            params["$orderby"] = orderby
        return self._get(PROPERTY_RESOURCE, params=params)["value"]

    def probe(self) -> Dict[str, Any]:
        """Smallest possible request, used to check credentials and reachability."""

        return self._get(PROPERTY_RESOURCE, params={"$top": "1"})


def _error_message(r: requests.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.reason or ""
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message") or r.reason or "")
    return r.reason or ""
