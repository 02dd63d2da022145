# idb_notices/ingest/powerbi/frames.py
import logging
from typing import List, Optional

from playwright.async_api import Frame, Page

logger = logging.getLogger(__name__)

# Power BI re-nests its visuals; two levels below the embed is as deep as it goes
MAX_SURFACE_DEPTH = 2


def embed_selector(embed_match: str) -> str:
    return f'iframe[src*="{embed_match}"]'


async def find_embed_frame(page: Page, embed_match: str) -> Optional[Frame]:
    """
    Find the embedded report frame.

    1. the <iframe src*=embed_match> element's content frame
    2. else the first attached frame whose url contains embed_match
    Returns None when neither turns anything up.
    """
    frame = None
    try:
        handle = await page.query_selector(embed_selector(embed_match))
        if handle is not None:
            frame = await handle.content_frame()
    except Exception as exc:
        # the element can detach while the report re-mounts; scan frames instead
        logger.debug("iframe lookup failed: %s", exc)
        frame = None

    if frame is not None:
        logger.info("Found embed via iframe element: %s", frame.url)
        return frame

    for frame in page.frames:
        if embed_match in (frame.url or ""):
            logger.info("Found embed via frame scan: %s", frame.url)
            return frame

    return None


def walk_surfaces(root: Frame, max_depth: int = MAX_SURFACE_DEPTH) -> List[Frame]:
    """Root first, then child frames breadth-first, at most `max_depth` levels down."""
    surfaces: List[Frame] = []
    seen = set()
    level = [root]
    for depth in range(max_depth + 1):
        next_level: List[Frame] = []
        for frame in level:
            if frame is None or id(frame) in seen:
                continue
            seen.add(id(frame))
            surfaces.append(frame)
            if depth < max_depth:
                next_level.extend(frame.child_frames)
        level = next_level
    return surfaces


async def nudge_render(frame: Frame) -> None:
    """Scroll the frame so a virtualized grid mounts its rows."""
    try:
        await frame.evaluate("() => window.scrollTo(0, 0)")
        await frame.wait_for_timeout(300)
        await frame.evaluate("() => window.scrollBy(0, 800)")
        await frame.wait_for_timeout(600)
    except Exception as exc:
        logger.debug("nudge_render failed on %s: %s", frame.url, exc)
