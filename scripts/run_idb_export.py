"""Kick off one notices export manually."""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from idb_notices.__main__ import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
