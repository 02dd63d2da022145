# idb_notices/ingest/identity.py
import hashlib
import json
import re
from typing import Optional
from urllib.parse import urlsplit

MAX_SLUG_LEN = 80
HASH_SLUG_LEN = 16

_SLUG_UNSAFE = re.compile(r"[^A-Za-z0-9\-_.]")


def sha256_hex(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8", errors="ignore")).hexdigest()


def stable_id(url: Optional[str], title: Optional[str]) -> str:
    """
    Deterministic notice slug.

    Uses the last path segment of the notice URL (or its query string),
    sanitized and capped at 80 chars. URLs that don't parse, or that sanitize
    down to nothing, fall back to a short sha256 of the URL; rows with no URL
    hash the title.

    Two URLs that end in the same path segment collapse to the same slug.
    """
    if url:
        try:
            parts = urlsplit(url)
        except ValueError:
            return sha256_hex(url)[:HASH_SLUG_LEN]
        if not parts.scheme or not parts.netloc:
            return sha256_hex(url)[:HASH_SLUG_LEN]

        segments = [s for s in parts.path.split("/") if s]
        last = (segments[-1] if segments else "") or parts.query or url
        slug = _SLUG_UNSAFE.sub("", last)[:MAX_SLUG_LEN]
        return slug or sha256_hex(url)[:HASH_SLUG_LEN]

    return sha256_hex(title or "")[:HASH_SLUG_LEN]


def fingerprint(*fields: Optional[str]) -> str:
    """Change-detection hash over the salient fields (order matters)."""
    # JSON keeps field boundaries intact when a value contains the separator
    encoded = json.dumps(["" if f is None else str(f) for f in fields], ensure_ascii=False)
    return sha256_hex(encoded)
