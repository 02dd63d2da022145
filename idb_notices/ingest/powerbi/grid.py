# idb_notices/ingest/powerbi/grid.py
import asyncio
import enum
import logging
import time

from playwright.async_api import Frame

from idb_notices.ingest.powerbi.frames import walk_surfaces

logger = logging.getLogger(__name__)

GRID_SELECTORS = (
    '[role="grid"]',
    '[role="table"]',
    '[aria-label*="table" i]',
)


class GridState(enum.Enum):
    READY = "ready"
    TIMED_OUT = "timed_out"


async def _grid_count(root: Frame) -> int:
    count = 0
    for frame in walk_surfaces(root):
        for selector in GRID_SELECTORS:
            try:
                count += await frame.locator(selector).count()
            except Exception as exc:
                # frames detach while the report re-renders; try again next poll
                logger.debug("grid probe %s failed: %s", selector, exc)
    return count


async def wait_for_grid(root: Frame, timeout_ms: int, poll_interval_ms: int = 500) -> GridState:
    """
    Poll until any grid/table role shows up in the embed (or a child frame).
    Never returns TIMED_OUT before `timeout_ms` has elapsed.
    """
    start = time.monotonic()
    polls = 0
    while (time.monotonic() - start) * 1000 < timeout_ms:
        polls += 1
        count = await _grid_count(root)
        if count > 0:
            logger.info("Grid ready after %s polls (%s matches)", polls, count)
            return GridState.READY
        await asyncio.sleep(poll_interval_ms / 1000)

    logger.warning("Grid not visible after %sms (%s polls)", timeout_ms, polls)
    return GridState.TIMED_OUT
