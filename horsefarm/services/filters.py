"""In-memory listing search: predicate filters, sort orders and facets."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.property import Property, PropertyFilters, SortOption

Predicate = Callable[[Property], bool]


def normalise_city(city: Optional[str]) -> str:
    return " ".join((city or "").split()).lower()


def filter_predicates(filters: PropertyFilters) -> List[Predicate]:
    """One predicate per filter field that is set; booleans only restrict when true."""

    preds: List[Predicate] = []
    if filters.min_price is not None:
        preds.append(lambda p: p.price >= filters.min_price)
    if filters.max_price is not None:
        preds.append(lambda p: p.price <= filters.max_price)
    if filters.min_acreage is not None:
        preds.append(lambda p: p.acreage >= filters.min_acreage)
    if filters.max_acreage is not None:
        preds.append(lambda p: p.acreage <= filters.max_acreage)
    if filters.min_stalls is not None:
        preds.append(lambda p: p.equestrian_amenities.stalls >= filters.min_stalls)
    if filters.city and filters.city.strip():
        city = normalise_city(filters.city)
        preds.append(lambda p: normalise_city(p.city) == city)
    if filters.has_indoor_arena:
        preds.append(lambda p: p.equestrian_amenities.has_indoor_arena)
    if filters.has_outdoor_arena:
        preds.append(lambda p: p.equestrian_amenities.has_outdoor_arena)
    if filters.property_type:
        preds.append(lambda p: p.property_type == filters.property_type)
    return preds


def apply_filters(properties: Iterable[Property], filters: Optional[PropertyFilters]) -> List[Property]:
    if filters is None:
        return list(properties)
    preds = filter_predicates(filters)
    return [prop for prop in properties if all(pred(prop) for pred in preds)]


_SORT_KEYS: Dict[str, Tuple[Callable[[Property], object], bool]] = {
    "price-high": (lambda p: p.price, True),
    "price-low": (lambda p: p.price, False),
    "newest": (lambda p: p.list_date, True),
    "acreage": (lambda p: p.acreage, True),
}


def sort_properties(properties: Iterable[Property], sort: Optional[SortOption]) -> List[Property]:
    """Stable single-key sort; ``None`` keeps the input order."""

    items = list(properties)
    if not sort:
        return items
    try:
        key, descending = _SORT_KEYS[sort]
    except KeyError:
        raise ValueError(f"Unknown sort option: {sort}") from None
    return sorted(items, key=key, reverse=descending)


def search_properties(
    properties: Iterable[Property],
    filters: Optional[PropertyFilters] = None,
    sort: Optional[SortOption] = None,
) -> List[Property]:
    return sort_properties(apply_filters(properties, filters), sort)


# ---------------------------------------------------------------------------
# Facets for search widgets
# ---------------------------------------------------------------------------


def available_cities(properties: Iterable[Property]) -> List[str]:
    return sorted({prop.city for prop in properties if prop.city})


def price_range(properties: Sequence[Property]) -> Optional[Tuple[int, int]]:
    prices = [prop.price for prop in properties if prop.price > 0]
    if not prices:
        return None
    return min(prices), max(prices)


def acreage_range(properties: Sequence[Property]) -> Optional[Tuple[float, float]]:
    acreages = [prop.acreage for prop in properties if prop.acreage > 0]
    if not acreages:
        return None
    return min(acreages), max(acreages)
