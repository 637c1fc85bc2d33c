"""MLS listings adapter.

Every public method returns a :class:`SourceResult`. Missing credentials and
any transport, HTTP or payload failure degrade to the bundled mock listings,
so callers never see an exception from this module.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import requests

from ..config import MLSSettings
from ..exceptions import SourceError
from ..models.property import Property, PropertyFilters, SortOption
from ..services.filters import normalise_city, search_properties
from ..services.scoring import DEFAULT_FEATURED_LIMIT, select_featured
from ..utils.logging import get_logger
from . import fallback
from .mappers import RESO_PROPERTY_TYPE, map_listing
from .mls_client import ORDER_NEWEST, ORDER_PRICE_DESC, MLSGridClient, and_join, eq, odata_literal
from .result import NOT_CONFIGURED, SourceResult

LOGGER = get_logger("sources.mls")

NOT_FOUND = "not_found"

T = TypeVar("T")

_SORT_ORDERBY: Dict[str, str] = {
    "price-high": "ListPrice desc",
    "price-low": "ListPrice asc",
    "newest": "ListingContractDate desc",
    "acreage": "LotSizeAcres desc",
}


def search_filter(filters: PropertyFilters, state: str) -> str:
    """OData ``$filter`` for the predicates the MLS can evaluate server-side.

    Stall counts and arena flags have no standard RESO field and are applied
    after mapping instead.
    """

    clauses = [eq("StandardStatus", "Active"), eq("StateOrProvince", state)]
    if filters.min_price is not None:
        clauses.append(f"ListPrice ge {odata_literal(filters.min_price)}")
    if filters.max_price is not None:
        clauses.append(f"ListPrice le {odata_literal(filters.max_price)}")
    if filters.min_acreage is not None:
        clauses.append(f"LotSizeAcres ge {odata_literal(float(filters.min_acreage))}")
    if filters.max_acreage is not None:
        clauses.append(f"LotSizeAcres le {odata_literal(float(filters.max_acreage))}")
    city = normalise_city(filters.city)
    if city:
        clauses.append(eq("tolower(City)", city))
    if filters.property_type:
        clauses.append(eq("PropertyType", RESO_PROPERTY_TYPE[filters.property_type]))
    return and_join(clauses)


class MLSListingSource:
    def __init__(self, settings: MLSSettings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self._client: Optional[MLSGridClient] = None
        if settings.configured:
            self._client = MLSGridClient(settings, session=session)
            LOGGER.info("mls_source mode=live api_url=%s", settings.api_url)
        else:
            LOGGER.info("mls_source mode=mock reason=%s", NOT_CONFIGURED)

    @property
    def configured(self) -> bool:
        return self._client is not None

    # ------------------------------------------------------------------
    # Operations
    def fetch_all(self) -> SourceResult[List[Property]]:
        def live(client: MLSGridClient) -> List[Property]:
            rows = client.query(self._active_filter(), orderby=ORDER_NEWEST)
            return self._map(rows)

        result = self._call("fetch_all", live, lambda: list(fallback.mock_properties()))
        if not result.is_fallback:
            LOGGER.info("mls_fetch_all count=%s", len(result.data))
        return result

    def fetch_one(self, listing_id: str) -> SourceResult[Optional[Property]]:
        """Look up by ``ListingKey`` or ``ListingId``; the mock set answers misses."""

        def live(client: MLSGridClient) -> List[Dict[str, Any]]:
            where = f"{eq('ListingKey', listing_id)} or {eq('ListingId', listing_id)}"
            return client.query(where, orderby="", top=1)

        result = self._call("fetch_one", live, lambda: [])
        if result.is_fallback:
            return SourceResult.fallback(fallback.mock_property(listing_id), result.reason)
        if not result.data:
            LOGGER.info("mls_listing_not_found id=%s trying=mock", listing_id)
            return SourceResult.fallback(fallback.mock_property(listing_id), NOT_FOUND)
        try:
            prop = map_listing(result.data[0], fallback.default_agent())
        except SourceError as exc:
            LOGGER.error("mls_request_failed op=fetch_one reason=%s error=%s", exc.reason, exc)
            return SourceResult.fallback(fallback.mock_property(listing_id), exc.reason)
        return SourceResult.live(prop)

    def search(self, filters: PropertyFilters, sort: Optional[SortOption] = None) -> SourceResult[List[Property]]:
        def live(client: MLSGridClient) -> List[Property]:
            orderby = _SORT_ORDERBY.get(sort or "", ORDER_NEWEST)
            rows = client.query(search_filter(filters, self.settings.state), orderby=orderby)
            return self._map(rows)

        result = self._call("search", live, lambda: list(fallback.mock_properties()))
        # Re-applied on live data too: stalls and arenas are never filtered server-side.
        found = search_properties(result.data, filters, sort)
        LOGGER.info("mls_search origin=%s count=%s", result.origin, len(found))
        return SourceResult(data=found, origin=result.origin, reason=result.reason)

    def featured(self, limit: int = DEFAULT_FEATURED_LIMIT) -> SourceResult[List[Property]]:
        def live(client: MLSGridClient) -> List[Property]:
            rows = client.query(self._active_filter(), orderby=ORDER_PRICE_DESC, top=max(limit, 1) * 2)
            return self._map(rows)

        result = self._call("featured", live, lambda: list(fallback.mock_properties()))
        return SourceResult(data=select_featured(result.data, limit), origin=result.origin, reason=result.reason)

    def status(self) -> Dict[str, Any]:
        """Configuration and connectivity report for the admin status route."""

        report: Dict[str, Any] = {
            "configured": self.configured,
            "connected": False,
            "api_url": self.settings.api_url,
            "has_api_key": bool(self.settings.api_key),
            "listings_count": None,
        }
        if self._client is None:
            report["message"] = "MLS Grid API key not configured. Set MLS_GRID_API_KEY in your environment."
            return report
        try:
            payload = self._client.probe()
        except SourceError as exc:
            LOGGER.error("mls_probe_failed reason=%s error=%s", exc.reason, exc)
            report["message"] = f"Failed to connect to MLS Grid: {exc}"
            return report
        report["connected"] = True
        report["listings_count"] = payload.get("@odata.count")
        report["message"] = "Successfully connected to MLS Grid API"
        return report

    # ------------------------------------------------------------------
    def _active_filter(self) -> str:
        return and_join([eq("StandardStatus", "Active"), eq("StateOrProvince", self.settings.state)])

    def _map(self, rows: Iterable[Dict[str, Any]]) -> List[Property]:
        agent = fallback.default_agent()
        return [map_listing(row, agent) for row in rows]

    def _call(
        self,
        op: str,
        live: Callable[[MLSGridClient], T],
        mock: Callable[[], T],
    ) -> SourceResult[T]:
        if self._client is None:
            LOGGER.info("mls_not_configured op=%s using=mock", op)
            return SourceResult.fallback(mock(), NOT_CONFIGURED)
        try:
            return SourceResult.live(live(self._client))
        except SourceError as exc:
            LOGGER.error("mls_request_failed op=%s reason=%s error=%s", op, exc.reason, exc)
            return SourceResult.fallback(mock(), exc.reason)
