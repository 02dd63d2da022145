# idb_notices/ingest/utils.py
import re
from typing import Iterable, Mapping, Optional

_WS = re.compile(r"\s+")


def clean_text(s: Optional[str]) -> str:
    """Trim and collapse whitespace (incl. nbsp / newlines) to single spaces."""
    if s is None:
        return ""
    return _WS.sub(" ", str(s).replace("\xa0", " ")).strip()


def header_pick(row: Mapping[str, str], aliases: Iterable[str]) -> str:
    """
    Return the first non-empty value whose header matches one of `aliases`.
    Headers are compared case-insensitively after whitespace cleanup, and the
    alias order wins over the column order of the row.
    """
    lookup = {}
    for key, value in row.items():
        norm = clean_text(key).lower()
        if norm not in lookup or not clean_text(lookup[norm]):
            lookup[norm] = value

    for alias in aliases:
        value = clean_text(lookup.get(clean_text(alias).lower()))
        if value:
            return value
    return ""


def safe_source_url(source_url: str, list_url: str) -> str:
    """
    Ensures the url is something a reader can open.
    If it looks broken (javascript:, #, about:blank), returns list_url instead.
    """
    if not source_url:
        return list_url

    u = source_url.strip().lower()
    if u.startswith("javascript:") or u == "#" or u == "about:blank":
        return list_url

    return source_url.strip()
