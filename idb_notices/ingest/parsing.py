# idb_notices/ingest/parsing.py
import math
import re
from datetime import date, datetime
from typing import Any, Optional

# leading "a<sep>b<sep>c" date, anything after (a time, a timezone) is ignored
_NUMERIC_DATE = re.compile(r"^\s*(\d{1,4})\s*[./-]\s*(\d{1,2})\s*[./-]\s*(\d{1,4})(?!\d)")
_NON_NUMERIC = re.compile(r"[^\d.]")

# textual dates the grid sometimes shows instead of numeric ones
_FALLBACK_FORMATS = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d-%b-%Y",
    "%A, %B %d, %Y",
)


def _year(token: str) -> Optional[int]:
    if len(token) == 4:
        return int(token)
    if len(token) == 2:
        return 2000 + int(token)
    return None


def _build(y: Optional[int], m: int, d: int) -> Optional[str]:
    if y is None:
        return None
    try:
        return date(y, m, d).isoformat()
    except ValueError:
        return None


def _parse_numeric(a: str, b: str, c: str) -> Optional[str]:
    first = int(a)
    if len(a) == 4:
        if 1900 <= first <= 2100:
            return _build(first, int(b), int(c))
        return None

    year = _year(c)
    second = int(b)
    if first > 12:
        return _build(year, second, first)   # D/M/Y
    if second > 12:
        return _build(year, first, second)   # M/D/Y
    return _build(year, second, first)       # ambiguous -> D/M/Y


def to_iso(raw: Any) -> Optional[str]:
    """
    Parse a grid date into "YYYY-MM-DD".

    Numeric dates accept ".", "/" or "-" separators. A leading 4-digit year
    means Y/M/D; otherwise whichever token is > 12 is the day and ambiguous
    dates are read day-first (DD/MM/YYYY, as the IDB portal shows them).
    Returns None instead of raising.
    """
    if raw is None:
        return None
    text = " ".join(str(raw).split())
    if not text:
        return None

    m = _NUMERIC_DATE.match(text)
    if m:
        iso = _parse_numeric(*m.groups())
        if iso:
            return iso

    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue
    return None


def to_num(v: Any) -> Optional[float]:
    """'USD 1,200.50' -> 1200.5; anything unparseable -> None."""
    if v is None:
        return None
    stripped = _NON_NUMERIC.sub("", str(v))
    if not stripped:
        return None
    try:
        n = float(stripped)
    except ValueError:
        return None
    return n if math.isfinite(n) else None
