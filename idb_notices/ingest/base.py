# idb_notices/ingest/base.py

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# one scraped grid row: header label -> cell text (keys vary per scrape)
RawRow = Dict[str, str]


@dataclass
class CanonicalNotice:
    # ------------------------------------------------------------------
    # Source / identity
    # ------------------------------------------------------------------
    id: str                          # e.g. "IDB:AR-L1234-P001"
    source: str                      # e.g. "IDB"
    title: str                       # "(untitled)" when the grid had none
    url: str                         # notice URL, else the listing page

    # ------------------------------------------------------------------
    # Project / buyer
    # ------------------------------------------------------------------
    project_id: Optional[str] = None
    project_name: Optional[str] = None
    buyer: Optional[str] = None

    # ------------------------------------------------------------------
    # Location
    # ------------------------------------------------------------------
    country_name: Optional[str] = None   # as shown in the grid
    country: Optional[str] = None        # ISO alpha-2, None when unknown
    city: Optional[str] = None

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------
    sector: List[str] = field(default_factory=lambda: ["Other"])
    category: Optional[str] = None
    notice_type: Optional[str] = None
    method: Optional[str] = None

    # ------------------------------------------------------------------
    # Money / dates (dates are ISO YYYY-MM-DD)
    # ------------------------------------------------------------------
    currency: Optional[str] = None
    budget_estimate: Optional[float] = None
    publication_date: Optional[str] = None
    deadline: Optional[str] = None

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------
    documents: List[str] = field(default_factory=list)
    language: List[str] = field(default_factory=lambda: ["en"])
    last_seen_at: str = ""
    hash: str = ""

    @property
    def notice_id(self) -> str:
        return self.id.split(":", 1)[-1]

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape written to notices.json (camelCase keys)."""
        return {
            "id": self.id,
            "source": self.source,
            "noticeId": self.notice_id,
            "projectId": self.project_id,
            "projectName": self.project_name,
            "title": self.title,
            "countryName": self.country_name,
            "country": self.country,
            "sector": list(self.sector),
            "category": self.category,
            "method": self.method,
            "noticeType": self.notice_type,
            "currency": self.currency,
            "budgetEstimate": self.budget_estimate,
            "publicationDate": self.publication_date,
            "deadline": self.deadline,
            "buyer": self.buyer,
            "city": self.city,
            "language": list(self.language),
            "url": self.url,
            "documents": list(self.documents),
            "lastSeenAt": self.last_seen_at,
            "hash": self.hash,
        }
