from typing import Any, Optional

import math
import os

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request, Response
from fastapi.encoders import jsonable_encoder

from .config import Settings
from .exceptions import SubmissionError
from .models.forms import ContactSubmission, SubmissionResponse, ValuationSubmission
from .models.property import PropertyFilters, PropertyType, SortOption
from .services.blog import posts_in_category, search_posts
from .services.filters import acreage_range, available_cities, price_range
from .services.leads import RETRY_MESSAGE, THANK_YOU_MESSAGE, LeadSubmitter
from .services.scoring import score_breakdown
from .services.sitemap import build_sitemap, render_sitemap_xml, robots_txt
from .sources import fallback
from .sources.mls import MLSListingSource
from .sources.wordpress import WordPressSource
from .utils.logging import configure_logging, get_logger

LOGGER = get_logger("api")

router = APIRouter(prefix="/api")
site_router = APIRouter()


def _sanitize(value: Any) -> Any:
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, dict):
        return {k: _sanitize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_sanitize(item) for item in value]
    return value


def _envelope(result, **extra) -> dict:
    payload = {"origin": result.origin, "reason": result.reason}
    payload.update(extra)
    return _sanitize(jsonable_encoder(payload))


def _mls(request: Request) -> MLSListingSource:
    return request.app.state.mls


def _wordpress(request: Request) -> WordPressSource:
    return request.app.state.wordpress


# ----------------------------------------------------------------------
# Service
@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/sources/status")
def sources_status(request: Request):
    settings: Settings = request.app.state.settings
    return {
        "mls": _mls(request).status(),
        "wordpress": {"configured": _wordpress(request).configured, "api_url": settings.wordpress.api_url},
        "crm": {"configured": settings.crm.configured},
    }


# ----------------------------------------------------------------------
# Listings
@router.get("/properties")
def list_props(
    request: Request,
    min_price: Optional[int] = Query(None, ge=0),
    max_price: Optional[int] = Query(None, ge=0),
    min_acreage: Optional[float] = Query(None, ge=0),
    max_acreage: Optional[float] = Query(None, ge=0),
    min_stalls: Optional[int] = Query(None, ge=0),
    city: Optional[str] = Query(None),
    has_indoor_arena: Optional[bool] = Query(None),
    has_outdoor_arena: Optional[bool] = Query(None),
    property_type: Optional[PropertyType] = Query(None),
    sort: Optional[SortOption] = Query(None),
):
    filters = PropertyFilters(
        min_price=min_price,
        max_price=max_price,
        min_acreage=min_acreage,
        max_acreage=max_acreage,
        min_stalls=min_stalls,
        city=city,
        has_indoor_arena=has_indoor_arena,
        has_outdoor_arena=has_outdoor_arena,
        property_type=property_type,
    )
    result = _mls(request).search(filters, sort)
    return _envelope(result, items=result.data, total=len(result.data))


@router.get("/properties/featured")
def featured_props(request: Request, limit: int = Query(6, ge=1, le=24)):
    result = _mls(request).featured(limit)
    return _envelope(result, items=result.data, total=len(result.data))


@router.get("/properties/facets")
def property_facets(request: Request):
    result = _mls(request).fetch_all()
    prices = price_range(result.data)
    acres = acreage_range(result.data)
    return _envelope(
        result,
        cities=available_cities(result.data),
        price_range={"min": prices[0], "max": prices[1]} if prices else None,
        acreage_range={"min": acres[0], "max": acres[1]} if acres else None,
    )


@router.get("/properties/{property_id}")
def get_prop(request: Request, property_id: str):
    result = _mls(request).fetch_one(property_id)
    if result.data is None:
        raise HTTPException(404, detail=f"Property {property_id} not found")
    return _envelope(result, property=result.data, score=score_breakdown(result.data))


# ----------------------------------------------------------------------
# Blog
@router.get("/posts")
def list_posts(request: Request, q: Optional[str] = Query(None), category: Optional[str] = Query(None)):
    result = _wordpress(request).fetch_all()
    posts = result.data
    if q:
        posts = search_posts(posts, q)
    if category:
        posts = posts_in_category(posts, category)
    return _envelope(result, items=posts, total=len(posts))


@router.get("/posts/{slug}")
def get_post(request: Request, slug: str):
    result = _wordpress(request).fetch_one(slug)
    if result.data is None:
        raise HTTPException(404, detail=f"Post {slug} not found")
    return _envelope(result, post=result.data)


@router.get("/posts/{slug}/related")
def get_related_posts(request: Request, slug: str, limit: int = Query(3, ge=1, le=12)):
    source = _wordpress(request)
    current = source.fetch_one(slug)
    if current.data is None:
        raise HTTPException(404, detail=f"Post {slug} not found")
    result = source.related(current.data, limit)
    return _envelope(result, items=result.data, total=len(result.data))


@router.get("/categories")
def list_categories(request: Request):
    result = _wordpress(request).categories()
    return _envelope(result, items=result.data, total=len(result.data))


# ----------------------------------------------------------------------
# Static content
@router.get("/areas")
def list_areas():
    return jsonable_encoder(list(fallback.service_areas()))


@router.get("/areas/{slug}")
def get_area(slug: str):
    area = fallback.service_area(slug)
    if area is None:
        raise HTTPException(404, detail=f"Service area {slug} not found")
    return jsonable_encoder(area)


@router.get("/faqs")
def list_faqs():
    return jsonable_encoder(list(fallback.faqs()))


# ----------------------------------------------------------------------
# Leads
@router.post("/leads/contact", response_model=SubmissionResponse)
def submit_contact(request: Request, body: ContactSubmission):
    return _submit(request, body.form, body.page_url)


@router.post("/leads/valuation", response_model=SubmissionResponse)
def submit_valuation(request: Request, body: ValuationSubmission):
    return _submit(request, body.form, body.page_url)


def _submit(request: Request, form, page_url: str) -> SubmissionResponse:
    try:
        request.app.state.leads.submit(form, page_url)
    except SubmissionError as exc:
        LOGGER.error("lead_submission_failed form=%s error=%s", form.form_name, exc)
        raise HTTPException(502, detail=RETRY_MESSAGE) from exc
    return SubmissionResponse(ok=True, message=THANK_YOU_MESSAGE)


# ----------------------------------------------------------------------
# Crawlers
@site_router.get("/sitemap.xml")
def sitemap(request: Request):
    state = request.app.state
    entries = build_sitemap(state.mls, state.wordpress, fallback.service_areas(), state.settings.site)
    return Response(content=render_sitemap_xml(entries), media_type="application/xml")


@site_router.get("/robots.txt")
def robots(request: Request):
    return Response(content=robots_txt(request.app.state.settings.site), media_type="text/plain")


def create_app(settings: Optional[Settings] = None, session=None) -> FastAPI:
    """Build the API with its adapters wired from ``settings``.

    ``session`` is handed to every outbound HTTP adapter; tests pass a fake.
    """

    settings = settings or Settings.from_env()
    configure_logging(level=settings.log_level)

    app = FastAPI(title="Carolina Horse Farm Realty API")
    app.state.settings = settings
    app.state.mls = MLSListingSource(settings.mls, session=session)
    app.state.wordpress = WordPressSource(settings.wordpress, session=session)
    app.state.leads = LeadSubmitter(settings.crm, session=session)
    app.include_router(router)
    app.include_router(site_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("horsefarm.api:app", host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))
