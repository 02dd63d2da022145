# idb_notices/core/scheduler.py
import asyncio
import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from idb_notices.core.errors import ExtractionError
from idb_notices.core.settings import Settings, settings as default_settings
from idb_notices.ingest.runner import run_once

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------------------
# Job: scrape the embed and rewrite the notice files
# --------------------------------------------------------------------------------------

async def job_export(settings: Settings = default_settings) -> Optional[int]:
    """
    Scheduled export. A failed run is logged and the previous files stay in
    place; the next trigger tries again.
    """
    logger.info("[job_export] starting")
    try:
        notices, (primary, _) = await run_once(settings)
    except ExtractionError as exc:
        logger.error("[job_export] failed: %s", exc)
        return None
    logger.info("[job_export] done. %s notices -> %s", len(notices), primary)
    return len(notices)


def build_scheduler(settings: Settings = default_settings) -> AsyncIOScheduler:
    """Register the daily export job (EXPORT_HOUR in TIMEZONE)."""
    scheduler = AsyncIOScheduler(timezone=settings.TIMEZONE)
    scheduler.add_job(
        job_export,
        CronTrigger(hour=settings.EXPORT_HOUR, minute=0),
        kwargs={"settings": settings},
        name="idb_notices_export",
    )
    return scheduler


async def run_forever(settings: Settings = default_settings) -> None:
    scheduler = build_scheduler(settings)
    scheduler.start()
    logger.info("[scheduler] started; export runs daily at %02d:00 %s", settings.EXPORT_HOUR, settings.TIMEZONE)
    try:
        # keep the loop alive forever
        while True:
            await asyncio.sleep(3600)
    finally:
        scheduler.shutdown(wait=False)
