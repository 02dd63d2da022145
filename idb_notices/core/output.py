# idb_notices/core/output.py
import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from idb_notices.ingest.base import CanonicalNotice

logger = logging.getLogger(__name__)

PRIMARY_NAME = "notices.json"


def snapshot_name(day: date) -> str:
    return f"notices-{day.isoformat()}.json"


def write_notices(
    notices: Iterable[CanonicalNotice],
    out_dir: Union[str, Path],
    today: Optional[date] = None,
) -> Tuple[Path, Path]:
    """
    Write the whole notice set to notices.json and to a dated snapshot
    (notices-YYYY-MM-DD.json). Both files are overwritten.
    Returns (primary_path, snapshot_path).
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    today = today or datetime.now(timezone.utc).date()

    payload = json.dumps([n.to_dict() for n in notices], indent=2, ensure_ascii=False)

    primary = out_dir / PRIMARY_NAME
    snapshot = out_dir / snapshot_name(today)
    for path in (primary, snapshot):
        path.write_text(payload, encoding="utf-8")
        logger.info("Wrote %s", path)
    return primary, snapshot
