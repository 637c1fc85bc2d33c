"""Equestrian desirability scoring used to pick featured listings."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.property import Property

FactorKey = str


@dataclass(frozen=True)
class FactorAttribution:
    """Points a single factor contributed to a property's desirability score."""

    name: str
    key: FactorKey
    value: float
    points: int
    cap: Optional[int]


@dataclass(frozen=True)
class DesirabilityScore:
    total: int
    factors: List[FactorAttribution]


# ---------------------------------------------------------------------------
# Scoring configuration
# ---------------------------------------------------------------------------

# key -> (label, points per unit, cap)
FACTOR_WEIGHTS: Dict[FactorKey, Tuple[str, int, Optional[int]]] = {
    "stalls": ("Stalls", 2, 50),
    "indoor_arena": ("Indoor Arena", 25, None),
    "outdoor_arena": ("Outdoor Arena", 20, None),
    "tack_room": ("Tack Room", 5, None),
    "feed_room": ("Feed Room", 5, None),
    "wash_rack": ("Wash Rack", 5, None),
    "round_pen": ("Round Pen", 5, None),
    "pastures": ("Pastures", 3, 30),
    "acreage": ("Acreage", 1, 50),
    "fencing": ("Fencing Variety", 10, None),
    "structures": ("Additional Structures", 3, None),
}

DEFAULT_FEATURED_LIMIT = 6

_FACTOR_VALUES: Dict[FactorKey, Callable[[Property], float]] = {
    "stalls": lambda p: p.equestrian_amenities.stalls,
    "indoor_arena": lambda p: int(p.equestrian_amenities.has_indoor_arena),
    "outdoor_arena": lambda p: int(p.equestrian_amenities.has_outdoor_arena),
    "tack_room": lambda p: int(p.equestrian_amenities.has_tack_room),
    "feed_room": lambda p: int(p.equestrian_amenities.has_feed_room),
    "wash_rack": lambda p: int(p.equestrian_amenities.has_wash_rack),
    "round_pen": lambda p: int(p.equestrian_amenities.has_round_pen),
    "pastures": lambda p: p.equestrian_amenities.pastures,
    "acreage": lambda p: p.acreage,
    "fencing": lambda p: int(len(_distinct(p.equestrian_amenities.fencing_type)) >= 2),
    "structures": lambda p: len(_distinct(p.equestrian_amenities.additional_structures)),
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_breakdown(prop: Property) -> DesirabilityScore:
    factors: List[FactorAttribution] = []
    for key, (label, per_unit, cap) in FACTOR_WEIGHTS.items():
        value = float(_FACTOR_VALUES[key](prop))
        points = _points(value, per_unit, cap)
        factors.append(FactorAttribution(name=label, key=key, value=value, points=points, cap=cap))
    return DesirabilityScore(total=sum(f.points for f in factors), factors=factors)


def score_property(prop: Property) -> int:
    return score_breakdown(prop).total


def rank_properties(properties: Iterable[Property]) -> List[Tuple[Property, int]]:
    """Pair each property with its score, best first; equal scores keep input order."""

    scored = [(prop, score_property(prop)) for prop in properties]
    return sorted(scored, key=lambda item: item[1], reverse=True)


def select_featured(properties: Sequence[Property], limit: int = DEFAULT_FEATURED_LIMIT) -> List[Property]:
    if limit <= 0:
        return []
    return [prop for prop, _ in rank_properties(properties)[:limit]]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _points(value: float, per_unit: int, cap: Optional[int]) -> int:
    if value <= 0 or math.isnan(value):
        return 0
    points = int(math.floor(value)) * per_unit
    if cap is not None:
        points = min(points, cap)
    return points


def _distinct(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for value in values:
        key = value.strip().lower()
        if key and key not in seen:
            seen.append(key)
    return seen
