# idb_notices/ingest/powerbi/table.py
import logging
from pathlib import Path
from typing import List, Union

from playwright.async_api import Frame, Locator

from idb_notices.ingest.base import RawRow
from idb_notices.ingest.powerbi.frames import nudge_render, walk_surfaces
from idb_notices.ingest.utils import clean_text

logger = logging.getLogger(__name__)

HEADER_SELECTOR = '[role="columnheader"]'
ROW_SELECTOR = '[role="row"]'
CELL_SELECTOR = '[role="cell"], [role="gridcell"]'


# ------------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------------

async def _text(loc: Locator) -> str:
    try:
        return clean_text(await loc.inner_text())
    except Exception:
        return ""


async def _texts(loc: Locator) -> List[str]:
    try:
        items = await loc.all()
    except Exception:
        return []
    return [await _text(item) for item in items]


async def _shot(frame: Frame, debug_dir: Path, name: str) -> None:
    """Full-page screenshot for a candidate that parsed nothing. Best effort."""
    try:
        debug_dir.mkdir(parents=True, exist_ok=True)
        path = debug_dir / f"{name}.png"
        await frame.page.screenshot(path=str(path), full_page=True)
        logger.info("Saved screenshot: %s", path)
    except Exception as exc:
        logger.debug("screenshot %s failed: %s", name, exc)


def _assemble(headers: List[str], values: List[str]) -> RawRow:
    row: RawRow = {}
    for idx, header in enumerate(headers):
        row[header or f"col_{idx}"] = values[idx] if idx < len(values) else ""
    return row


# ------------------------------------------------------------------------------------
# Parser
# ------------------------------------------------------------------------------------

async def parse_frame(frame: Frame) -> List[RawRow]:
    """Read one surface's ARIA grid into header-keyed rows."""
    headers = await _texts(frame.locator(HEADER_SELECTOR))
    if not headers:
        # virtualized grids sometimes drop columnheader; use the first row
        headers = await _texts(frame.locator(ROW_SELECTOR).first.locator(CELL_SELECTOR))

    try:
        row_locs = await frame.locator(ROW_SELECTOR).all()
    except Exception:
        return []

    rows: List[RawRow] = []
    for row_loc in row_locs[1:]:  # first row is the header row
        values = await _texts(row_loc.locator(CELL_SELECTOR))
        if not values or not any(values):
            continue
        rows.append(_assemble(headers, values))
    return rows


async def parse_accessible_table(root: Frame, debug_dir: Union[str, Path] = "debug") -> List[RawRow]:
    """
    Try the embed frame and its nested frames in order; return the rows of
    the first one that yields any. Returns [] when none do (the caller
    decides whether to retry).
    """
    debug_dir = Path(debug_dir)
    for i, frame in enumerate(walk_surfaces(root)):
        await nudge_render(frame)
        try:
            rows = await parse_frame(frame)
        except Exception as exc:
            logger.debug("parse failed on frame %s: %s", i, exc)
            rows = []

        if rows:
            logger.info("Parsed %s rows from frame %s (%s)", len(rows), i, frame.url)
            return rows

        await _shot(frame, debug_dir, f"fallback-grid-{i}")

    return []
