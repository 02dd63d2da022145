# idb_notices/__main__.py
"""
CLI:
    python -m idb_notices                      # one export, exit 0/1
    python -m idb_notices --retries 5 --headful
    python -m idb_notices --schedule           # daily export at EXPORT_HOUR
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from idb_notices.core.scheduler import run_forever
from idb_notices.core.settings import Settings, settings as default_settings
from idb_notices.ingest.runner import run_once

logger = logging.getLogger("idb_notices")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idb_notices",
        description="Export IDB procurement notices from the Power BI embed to JSON.",
    )
    parser.add_argument("--out-dir", type=Path, help="where notices.json is written")
    parser.add_argument("--debug-dir", type=Path, help="where fallback screenshots go")
    parser.add_argument("--retries", type=int, help="whole-attempt budget")
    parser.add_argument("--headful", action="store_true", help="show the browser window")
    parser.add_argument("--schedule", action="store_true", help="keep running and export daily")
    return parser


def settings_from_args(args: argparse.Namespace, base: Settings = default_settings) -> Settings:
    overrides = {}
    if args.out_dir is not None:
        overrides["OUT_DIR"] = args.out_dir
    if args.debug_dir is not None:
        overrides["DEBUG_DIR"] = args.debug_dir
    if args.retries is not None:
        overrides["RETRIES"] = args.retries
    if args.headful:
        overrides["HEADLESS"] = False
    return base.model_copy(update=overrides)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [idb_notices] %(levelname)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(settings.LOG_LEVEL)

    if args.schedule:
        try:
            asyncio.run(run_forever(settings))
        except KeyboardInterrupt:
            pass
        return 0

    try:
        notices, (primary, _) = asyncio.run(run_once(settings))
    except Exception as exc:
        logger.error("Export failed: %s", exc, exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(f"OK: {len(notices)} notices → {primary}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
