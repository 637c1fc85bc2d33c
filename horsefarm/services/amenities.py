"""Equestrian amenity extraction from RESO listing records.

Structured ``Horse*`` custom fields are trusted as-is. Any field they leave
empty is filled by scanning the listing's free text with the ordered rule
table below. How matches combine depends on the field's type:

* counts (``int``): the first rule that matches supplies the value
* flags (``bool``): true if any rule matches
* labels (``list``): every matching rule appends its label once
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Pattern, Tuple

from ..models.property import EquestrianAmenities
from ..utils.coerce import to_bool, to_float, to_int, to_str, to_str_list


@dataclass(frozen=True)
class ExtractionRule:
    field: str
    pattern: Pattern[str]
    transform: Callable[[re.Match], Any]


def _count(match: re.Match) -> int:
    return int(match.group(1))


def _present(match: re.Match) -> bool:
    return True


def _label(label: str) -> Callable[[re.Match], str]:
    return lambda match: label


def _rule(field: str, pattern: str, transform: Callable[[re.Match], Any] = _present) -> ExtractionRule:
    return ExtractionRule(field=field, pattern=re.compile(pattern, re.IGNORECASE), transform=transform)


RULES: Tuple[ExtractionRule, ...] = (
    _rule("stalls", r"(\d+)[\s-]*(?:horse[\s-]*)?stalls?\b", _count),
    _rule("has_indoor_arena", r"indoor\s*(?:riding\s*)?arena"),
    _rule("has_outdoor_arena", r"outdoor\s*(?:riding\s*)?arena"),
    _rule("has_outdoor_arena", r"riding\s*ring"),
    _rule("has_tack_room", r"tack\s*room"),
    _rule("has_feed_room", r"feed\s*room"),
    _rule("has_wash_rack", r"wash\s*(?:rack|stall)"),
    _rule("has_round_pen", r"round\s*pen"),
    _rule("pastures", r"(\d+)[\s-]*pastures?\b", _count),
    _rule("fencing_type", r"board\s*fenc", _label("Board")),
    _rule("fencing_type", r"vinyl\s*fenc", _label("Vinyl")),
    _rule("fencing_type", r"electric\s*fenc", _label("Electric")),
    _rule("fencing_type", r"wire\s*fenc", _label("Wire")),
    _rule("fencing_type", r"post\s*(?:and\s*|&\s*)?rail", _label("Post & Rail")),
    _rule("additional_structures", r"hay\s*barn", _label("Hay Barn")),
    _rule("additional_structures", r"equipment\s*(?:barn|shed)", _label("Equipment Storage")),
    _rule("additional_structures", r"run.?in\s*shed", _label("Run-in Shed")),
    _rule("additional_structures", r"groom(?:['’]?s)?\s*(?:quarters|apartment|suite|room)", _label("Groom's Quarters")),
    _rule("additional_structures", r"guest\s*(?:house|cottage)", _label("Guest House")),
)


def structured_amenities(listing: Mapping[str, Any]) -> Dict[str, Any]:
    """Read the structured amenity fields, leaving out absent or unparseable ones."""

    fencing = to_str_list(listing.get("HorseFencing")) or to_str_list(listing.get("Fencing"))
    values: Dict[str, Any] = {
        "stalls": to_int(listing.get("HorseStalls")),
        "has_indoor_arena": to_bool(listing.get("HorseIndoorArena")),
        "has_outdoor_arena": to_bool(listing.get("HorseOutdoorArena")),
        "pastures": to_int(listing.get("HorsePastures")),
        "pasture_acreage": to_float(listing.get("HorsePastureAcreage")),
        "has_tack_room": to_bool(listing.get("HorseTackRoom")),
        "has_feed_room": to_bool(listing.get("HorseFeedRoom")),
        "has_wash_rack": to_bool(listing.get("HorseWashRack")),
        "has_round_pen": to_bool(listing.get("HorseRoundPen")),
        "fencing_type": fencing,
        "water_source": to_str_list(listing.get("WaterSource")),
        "barn_square_feet": to_int(listing.get("HorseBarnSqFt")),
        "additional_structures": to_str_list(listing.get("HorseStructures")),
    }
    return {key: value for key, value in values.items() if _is_set(value)}


def remarks_text(listing: Mapping[str, Any]) -> str:
    remarks = to_str(listing.get("PublicRemarks"))
    extra = to_str(listing.get("HorseAmenities"))
    return f"{remarks} {extra}".lower()


def apply_rules(text: str, fields: Iterable[str], rules: Iterable[ExtractionRule] = RULES) -> Dict[str, Any]:
    """Run the rule table over ``text`` for the requested fields only."""

    wanted = set(fields)
    defaults = EquestrianAmenities()
    found: Dict[str, Any] = {}
    for rule in rules:
        if rule.field not in wanted:
            continue
        current = found.get(rule.field, getattr(defaults, rule.field))
        if isinstance(current, bool):
            if current:
                continue
        elif isinstance(current, int) and current:
            continue
        match = rule.pattern.search(text)
        if match is None:
            continue
        value = rule.transform(match)
        if isinstance(current, list):
            if value not in current:
                found[rule.field] = current + [value]
        else:
            found[rule.field] = value
    return found


def extract_amenities(listing: Mapping[str, Any]) -> EquestrianAmenities:
    """Build a complete ``EquestrianAmenities`` for a raw RESO listing record."""

    values = structured_amenities(listing)
    inferable = {rule.field for rule in RULES} - set(values)
    if inferable:
        values.update(apply_rules(remarks_text(listing), inferable))
    return EquestrianAmenities(**values)


def _is_set(value: Optional[Any]) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value > 0
    if isinstance(value, list):
        return bool(value)
    return True


__all__ = ["ExtractionRule", "RULES", "apply_rules", "extract_amenities", "remarks_text", "structured_amenities"]
