# idb_notices/ingest/runner.py
import asyncio
import logging
from pathlib import Path
from typing import List, Tuple

from playwright.async_api import Page, async_playwright

from idb_notices.core.output import write_notices
from idb_notices.core.settings import Settings, settings as default_settings
from idb_notices.ingest.base import CanonicalNotice
from idb_notices.ingest.normalize import dedupe_by_id_hash, normalize_rows
from idb_notices.ingest.powerbi import PowerBIExtractor

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------

async def load_page(page: Page, settings: Settings) -> None:
    """Open the notices page and give the Power BI embed time to mount."""
    logger.info("Navigating to %s", settings.PAGE_URL)
    await page.goto(settings.PAGE_URL, wait_until="domcontentloaded", timeout=settings.NAV_TIMEOUT_MS)
    await asyncio.sleep(settings.PAGE_LOAD_WAIT_MS / 1000)


async def scrape_notices(page: Page, settings: Settings = default_settings) -> List[CanonicalNotice]:
    """Loaded page -> raw grid rows -> normalized, deduplicated notices."""
    raw_rows = await PowerBIExtractor(settings).extract(page)
    logger.info("Extracted %s raw rows", len(raw_rows))
    notices = dedupe_by_id_hash(normalize_rows(raw_rows, settings))
    logger.info("Normalized to %s notices", len(notices))
    return notices


# ------------------------------------------------------------------------------
# Main entrypoint
# ------------------------------------------------------------------------------

async def run_once(settings: Settings = default_settings) -> Tuple[List[CanonicalNotice], Tuple[Path, Path]]:
    """
    One full export: launch Chromium, scrape the embed, write notices.json
    plus the dated snapshot. Any ExtractionError propagates to the caller.
    """
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=settings.HEADLESS)
        try:
            context = await browser.new_context(locale=settings.LOCALE, user_agent=settings.USER_AGENT)
            page = await context.new_page()
            await load_page(page, settings)
            notices = await scrape_notices(page, settings)
        finally:
            await browser.close()

    paths = write_notices(notices, settings.OUT_DIR)
    return notices, paths


if __name__ == "__main__":
    asyncio.run(run_once())
