# idb_notices/ingest/powerbi/extractor.py
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from playwright.async_api import Frame, Page

from idb_notices.core.errors import EmbedNotFoundError, GridNotReadyError, NoDataExtractedError
from idb_notices.core.settings import Settings, settings as default_settings
from idb_notices.ingest.base import RawRow
from idb_notices.ingest.powerbi.frames import find_embed_frame
from idb_notices.ingest.powerbi.grid import GridState, wait_for_grid
from idb_notices.ingest.powerbi.table import parse_accessible_table

logger = logging.getLogger(__name__)


class PowerBIExtractor:
    """
    Pulls raw grid rows out of the embedded Power BI report on a loaded page.

    Locating the embed happens once and is fatal when it fails. The
    wait-for-grid + parse cycle is retried up to ``settings.RETRIES`` times
    with a linear backoff (attempt * RETRY_BASE_DELAY_MS) in between.
    """

    def __init__(
        self,
        settings: Settings = default_settings,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        find_frame: Callable[[Page, str], Awaitable[Optional[Frame]]] = find_embed_frame,
        wait_grid: Callable[..., Awaitable[GridState]] = wait_for_grid,
        parse_table: Callable[..., Awaitable[List[RawRow]]] = parse_accessible_table,
    ):
        self.settings = settings
        self._sleep = sleep
        self._find_frame = find_frame
        self._wait_grid = wait_grid
        self._parse_table = parse_table

    def backoff_seconds(self, attempt: int) -> float:
        return attempt * self.settings.RETRY_BASE_DELAY_MS / 1000

    async def locate(self, page: Page) -> Frame:
        frame = await self._find_frame(page, self.settings.EMBED_MATCH)
        if frame is None:
            raise EmbedNotFoundError("Power BI iframe not found (embed may be slow)")
        return frame

    async def extract(self, page: Page) -> List[RawRow]:
        frame = await self.locate(page)
        retries = max(1, self.settings.RETRIES)

        for attempt in range(1, retries + 1):
            logger.info("Extraction attempt %s/%s", attempt, retries)
            state = await self._wait_grid(
                frame,
                self.settings.GRID_WAIT_TIMEOUT_MS,
                self.settings.GRID_POLL_INTERVAL_MS,
            )
            if state is not GridState.READY:
                if attempt == retries:
                    raise GridNotReadyError("Power BI grid not visible after waiting")
                await self._sleep(self.backoff_seconds(attempt))
                continue

            rows = await self._parse_table(frame, self.settings.DEBUG_DIR)
            if rows:
                return rows

            logger.warning("Attempt %s: grid visible but no rows parsed", attempt)
            if attempt < retries:
                await self._sleep(self.backoff_seconds(attempt))

        raise NoDataExtractedError(f"No rows extracted after {retries} attempts")
