# idb_notices/ingest/taxonomy.py
"""
Keyword classifiers for IDB notices.

Every rule list is priority ordered: the first pattern that matches wins.
Keep new rules as data here rather than adding branches to the callers.
"""
import re
from typing import List, Optional, Pattern, Sequence, Tuple

Rule = Tuple[Pattern[str], str]


def _rules(pairs: Sequence[Tuple[str, str]]) -> List[Rule]:
    return [(re.compile(pattern, re.IGNORECASE), label) for pattern, label in pairs]


# ------------------------------------------------------------
# Rule tables
# ------------------------------------------------------------

SECTOR_RULES = _rules([
    (r"energy|power|electri(c|f)", "Energy"),
    (r"road|rail|transport|bridge|highway", "Transport"),
    (r"water|waste|sanitation", "Water"),
    (r"\bict\b|digital", "ICT"),
])
DEFAULT_SECTOR = "Other"

NOTICE_TYPE_RULES = _rules([
    (r"expression of interest|\breoi\b", "REOI"),
    (r"invitation to bid|\brfb\b|\bitb\b", "RFB/ITB"),
    (r"request for proposals?|\brfp\b", "RFP"),
    (r"general procurement notice|\bgpn\b", "GPN"),
    (r"award", "Award"),
])

CATEGORY_RULES = _rules([
    (r"works", "Works"),
    (r"goods|supply", "Goods"),
    (r"consult", "Consulting"),
])

# borrowing member countries the portal lists (exact names only)
COUNTRY_ISO2 = {
    "Argentina": "AR",
    "Bahamas": "BS",
    "Barbados": "BB",
    "Belize": "BZ",
    "Bolivia": "BO",
    "Brazil": "BR",
    "Chile": "CL",
    "Colombia": "CO",
    "Costa Rica": "CR",
    "Dominican Republic": "DO",
    "Ecuador": "EC",
    "El Salvador": "SV",
    "Guatemala": "GT",
    "Guyana": "GY",
    "Haiti": "HT",
    "Honduras": "HN",
    "Jamaica": "JM",
    "Mexico": "MX",
    "Nicaragua": "NI",
    "Panama": "PA",
    "Paraguay": "PY",
    "Peru": "PE",
    "Suriname": "SR",
    "Trinidad and Tobago": "TT",
    "Uruguay": "UY",
}


# ------------------------------------------------------------
# Classifiers
# ------------------------------------------------------------

def _first_match(text: str, rules: List[Rule]) -> Optional[str]:
    for pattern, label in rules:
        if pattern.search(text):
            return label
    return None


def _classify(text: Optional[str], rules: List[Rule], fallback_other: bool) -> Optional[str]:
    raw = " ".join((text or "").split())
    if not raw:
        return "Other" if fallback_other else None
    label = _first_match(raw, rules)
    if label:
        return label
    # keep what the source said rather than flattening it to "Other"
    return "Other" if fallback_other else raw


def infer_sectors(title: Optional[str]) -> List[str]:
    return [_first_match(title or "", SECTOR_RULES) or DEFAULT_SECTOR]


def classify_type(text: Optional[str], fallback_other: bool = False) -> Optional[str]:
    return _classify(text, NOTICE_TYPE_RULES, fallback_other)


def classify_category(text: Optional[str], fallback_other: bool = False) -> Optional[str]:
    return _classify(text, CATEGORY_RULES, fallback_other)


def map_country_to_iso2(name: Optional[str]) -> Optional[str]:
    return COUNTRY_ISO2.get((name or "").strip())
