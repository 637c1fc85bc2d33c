from typing import Any, List, Optional

_TRUE_STRINGS = {"true", "yes", "y", "1", "t"}
_FALSE_STRINGS = {"false", "no", "n", "0", "f", ""}


def _blank(v) -> bool:
    return v is None or v == "" or str(v).strip().lower() in ("null", "none", "nan")


def to_int(v) -> Optional[int]:
    try:
        if _blank(v) or isinstance(v, bool):
            return None
        return int(float(str(v).replace(",", "")))
    except (TypeError, ValueError, OverflowError):
        return None


def to_float(v) -> Optional[float]:
    try:
        if _blank(v) or isinstance(v, bool):
            return None
        result = float(str(v).replace(",", ""))
    except (TypeError, ValueError):
        return None
    if result != result or result in (float("inf"), float("-inf")):
        return None
    return result


def to_bool(v) -> Optional[bool]:
    if v is None:
        return None
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v != 0
    text = str(v).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    return None


def to_str(v) -> str:
    return "" if v is None else str(v)


def to_str_list(v: Any) -> List[str]:
    """Accepts a list of strings or a comma-separated string."""
    if v is None:
        return []
    if isinstance(v, str):
        items = v.split(",")
    elif isinstance(v, (list, tuple)):
        items = v
    else:
        return []
    out: List[str] = []
    for item in items:
        text = to_str(item).strip()
        if text and text not in out:
            out.append(text)
    return out
