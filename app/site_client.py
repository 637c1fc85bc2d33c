"""Helper client used by the Streamlit site to talk to the API or fall back to local adapters."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import requests
from fastapi.encoders import jsonable_encoder
from requests import Response

from horsefarm.config import Settings
from horsefarm.exceptions import SubmissionError
from horsefarm.models.forms import ContactForm, LeadForm, ValuationForm
from horsefarm.models.property import PropertyFilters
from horsefarm.services.blog import posts_in_category, search_posts
from horsefarm.services.filters import acreage_range, available_cities, price_range
from horsefarm.services.leads import RETRY_MESSAGE, THANK_YOU_MESSAGE, LeadSubmitter
from horsefarm.services.scoring import score_breakdown
from horsefarm.sources import fallback
from horsefarm.sources.mls import MLSListingSource
from horsefarm.sources.wordpress import WordPressSource


class SiteClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("API_BASE_URL", "http://localhost:8000")).rstrip("/")
        self.session = session or requests.Session()
        self.settings = settings
        self.mls: Optional[MLSListingSource] = None
        self.wordpress: Optional[WordPressSource] = None
        self.leads: Optional[LeadSubmitter] = None
        self.use_api = self._ping_api()
        if not self.use_api:
            self._enable_local_mode()

    def _ping_api(self) -> bool:
        try:
            resp = self.session.get(f"{self.base_url}/api/health", timeout=2)
            return resp.status_code == 200
        except requests.RequestException:
            return False

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """GET from the API; ``None`` means switch to local mode and retry there."""

        if not self.use_api:
            return None
        try:
            resp = self.session.get(f"{self.base_url}{path}", params=params, timeout=10)
            self._raise_for_status(resp)
            return resp.json()
        except requests.RequestException:
            self._enable_local_mode()
            return None

    # ------------------------------------------------------------------
    # Listings
    def list_properties(self, filters: Optional[Dict[str, Any]] = None, sort: Optional[str] = None) -> Dict:
        params = {k: v for k, v in (filters or {}).items() if v not in (None, "", False)}
        if sort:
            params["sort"] = sort
        data = self._get("/api/properties", params=params)
        if data is not None:
            return data
        result = self.mls.search(PropertyFilters(**(filters or {})), sort)
        return jsonable_encoder({"items": result.data, "total": len(result.data), "origin": result.origin, "reason": result.reason})

    def featured(self, limit: int = 6) -> List[Dict]:
        data = self._get("/api/properties/featured", params={"limit": limit})
        if data is not None:
            return data["items"]
        return jsonable_encoder(self.mls.featured(limit).data)

    def facets(self) -> Dict:
        data = self._get("/api/properties/facets")
        if data is not None:
            return data
        props = self.mls.fetch_all().data
        prices = price_range(props)
        acres = acreage_range(props)
        return {
            "cities": available_cities(props),
            "price_range": {"min": prices[0], "max": prices[1]} if prices else None,
            "acreage_range": {"min": acres[0], "max": acres[1]} if acres else None,
        }

    def get_property(self, property_id: str) -> Optional[Dict]:
        if self.use_api:
            try:
                resp = self.session.get(f"{self.base_url}/api/properties/{property_id}", timeout=10)
                if resp.status_code == 404:
                    return None
                self._raise_for_status(resp)
                return resp.json()
            except requests.RequestException:
                self._enable_local_mode()
        result = self.mls.fetch_one(property_id)
        if result.data is None:
            return None
        return jsonable_encoder(
            {"property": result.data, "score": score_breakdown(result.data), "origin": result.origin, "reason": result.reason}
        )

    # ------------------------------------------------------------------
    # Blog and static content
    def list_posts(self, q: Optional[str] = None, category: Optional[str] = None) -> List[Dict]:
        params = {k: v for k, v in {"q": q, "category": category}.items() if v}
        data = self._get("/api/posts", params=params)
        if data is not None:
            return data["items"]
        posts = self.wordpress.fetch_all().data
        if q:
            posts = search_posts(posts, q)
        if category:
            posts = posts_in_category(posts, category)
        return jsonable_encoder(posts)

    def get_post(self, slug: str) -> Optional[Dict]:
        if self.use_api:
            try:
                resp = self.session.get(f"{self.base_url}/api/posts/{slug}", timeout=10)
                if resp.status_code == 404:
                    return None
                self._raise_for_status(resp)
                return resp.json()["post"]
            except requests.RequestException:
                self._enable_local_mode()
        post = self.wordpress.fetch_one(slug).data
        return jsonable_encoder(post) if post is not None else None

    def related_posts(self, slug: str, limit: int = 3) -> List[Dict]:
        data = self._get(f"/api/posts/{slug}/related", params={"limit": limit})
        if data is not None:
            return data["items"]
        current = self.wordpress.fetch_one(slug).data
        if current is None:
            return []
        return jsonable_encoder(self.wordpress.related(current, limit).data)

    def categories(self) -> List[Dict]:
        data = self._get("/api/categories")
        if data is not None:
            return data["items"]
        return jsonable_encoder(self.wordpress.categories().data)

    def areas(self) -> List[Dict]:
        data = self._get("/api/areas")
        if data is not None:
            return data
        return jsonable_encoder(list(fallback.service_areas()))

    def faqs(self) -> List[Dict]:
        data = self._get("/api/faqs")
        if data is not None:
            return data
        return jsonable_encoder(list(fallback.faqs()))

    # ------------------------------------------------------------------
    # Leads
    def submit_contact(self, form: ContactForm, page_url: str = "") -> Dict:
        return self._submit("/api/leads/contact", form, page_url)

    def submit_valuation(self, form: ValuationForm, page_url: str = "") -> Dict:
        return self._submit("/api/leads/valuation", form, page_url)

    def _submit(self, path: str, form: LeadForm, page_url: str) -> Dict:
        if self.use_api:
            body = {"form": form.model_dump(), "page_url": page_url}
            try:
                resp = self.session.post(f"{self.base_url}{path}", json=body, timeout=20)
                if resp.status_code == 502:
                    return {"ok": False, "message": resp.json().get("detail", RETRY_MESSAGE)}
                self._raise_for_status(resp)
                return resp.json()
            except requests.RequestException:
                self._enable_local_mode()
        try:
            self.leads.submit(form, page_url)
        except SubmissionError:
            return {"ok": False, "message": RETRY_MESSAGE}
        return {"ok": True, "message": THANK_YOU_MESSAGE}

    # ------------------------------------------------------------------
    def _enable_local_mode(self) -> None:
        if self.mls is None:
            settings = self.settings or Settings.from_env()
            self.mls = MLSListingSource(settings.mls)
            self.wordpress = WordPressSource(settings.wordpress)
            self.leads = LeadSubmitter(settings.crm)
        self.use_api = False

    def _raise_for_status(self, response: Response) -> None:
        try:
            response.raise_for_status()
        except requests.RequestException:
            self._enable_local_mode()
            raise
