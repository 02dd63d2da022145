# idb_notices/ingest/normalize.py
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from idb_notices.core.settings import Settings, settings as default_settings
from idb_notices.ingest.base import CanonicalNotice, RawRow
from idb_notices.ingest.identity import fingerprint, stable_id
from idb_notices.ingest.parsing import to_iso, to_num
from idb_notices.ingest.taxonomy import (
    classify_category,
    classify_type,
    infer_sectors,
    map_country_to_iso2,
)
from idb_notices.ingest.utils import header_pick, safe_source_url

logger = logging.getLogger(__name__)

UNTITLED = "(untitled)"

# ------------------------------------------------------------------------------
# Column aliases: logical field -> grid headers, in priority order.
# Matching is case-insensitive; extend here when the report renames a column.
# ------------------------------------------------------------------------------
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "title": ("Notice Title", "Title", "Notice Name"),
    "url": ("URL", "Link", "Notice URL", "Notice Link"),
    "country": ("Country", "Country Name", "Beneficiary Country"),
    "notice_type": ("Notice Type", "Type", "Type of Notice"),
    "category": ("Category", "Procurement Category", "Procurement Type"),
    "method": ("Method", "Procurement Method", "Selection Method"),
    "publication_date": ("Publication Date", "Posted", "Published", "Date Published"),
    "deadline": ("Deadline", "Closing Date", "Due Date", "Submission Deadline"),
    "currency": ("Currency",),
    "budget": ("Budget", "Estimate", "Estimated Amount", "Amount"),
    "buyer": ("Buyer", "Executing Agency", "Agency"),
    "project_id": ("Project ID", "Project Number", "Project"),
    "project_name": ("Project Name", "Project Title"),
    "city": ("City", "Location"),
}


def _pick(row: RawRow, field: str) -> str:
    return header_pick(row, FIELD_ALIASES[field])


def _or_none(s: str) -> Optional[str]:
    return s or None


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_row(
    row: RawRow,
    settings: Settings = default_settings,
    seen_at: Optional[str] = None,
) -> Optional[CanonicalNotice]:
    """
    Map one scraped grid row onto the canonical notice.

    Returns None for rows that have neither a title nor a URL. Parsing and
    classification never raise; unknown values come back as None (or as the
    raw text for notice type / category).
    """
    title = _pick(row, "title")
    url = safe_source_url(_pick(row, "url"), "")
    if not title and not url:
        return None

    title_safe = title or UNTITLED
    url_final = url or settings.PAGE_URL
    if not url_final:
        return None

    country_name = _pick(row, "country")
    type_text = _pick(row, "notice_type")
    # the report often has no category column; the notice type carries it
    category_text = _pick(row, "category") or type_text
    deadline = to_iso(_pick(row, "deadline"))
    fallback_other = settings.CLASSIFY_FALLBACK_OTHER

    notice = CanonicalNotice(
        id=f"{settings.SOURCE}:{stable_id(url, title_safe)}",
        source=settings.SOURCE,
        title=title_safe,
        url=url_final,
        project_id=_or_none(_pick(row, "project_id")),
        project_name=_or_none(_pick(row, "project_name")),
        buyer=_or_none(_pick(row, "buyer")),
        country_name=_or_none(country_name),
        country=map_country_to_iso2(country_name),
        city=_or_none(_pick(row, "city")),
        sector=infer_sectors(title_safe),
        category=classify_category(category_text, fallback_other),
        notice_type=classify_type(type_text, fallback_other),
        method=_or_none(_pick(row, "method")),
        currency=_or_none(_pick(row, "currency")),
        budget_estimate=to_num(_pick(row, "budget") or None),
        publication_date=to_iso(_pick(row, "publication_date")),
        deadline=deadline,
        last_seen_at=seen_at or utc_now_iso(),
    )
    notice.hash = fingerprint(notice.title, notice.country_name, notice.deadline, notice.url)
    return notice


def normalize_rows(
    rows: Iterable[RawRow],
    settings: Settings = default_settings,
    seen_at: Optional[str] = None,
) -> List[CanonicalNotice]:
    """Normalize a scrape; one timestamp for the whole run, rejects dropped."""
    seen_at = seen_at or utc_now_iso()
    out: List[CanonicalNotice] = []
    dropped = 0
    for row in rows:
        notice = normalize_row(row, settings, seen_at)
        if notice is None:
            dropped += 1
            continue
        out.append(notice)
    if dropped:
        logger.info("Dropped %s rows with no title and no url", dropped)
    return out


def dedupe_by_id_hash(notices: Iterable[CanonicalNotice]) -> List[CanonicalNotice]:
    """Keep the first notice per (id, hash); input order is preserved."""
    seen: Dict[Tuple[str, str], CanonicalNotice] = {}
    for n in notices:
        key = (n.id, n.hash)
        if key not in seen:
            seen[key] = n
    return list(seen.values())
