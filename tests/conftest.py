import pytest

from idb_notices.core.settings import Settings


@pytest.fixture
def fast_settings(tmp_path):
    """Settings with waits shrunk to milliseconds and dirs under tmp_path."""
    return Settings(
        PAGE_LOAD_WAIT_MS=0,
        GRID_WAIT_TIMEOUT_MS=200,
        GRID_POLL_INTERVAL_MS=10,
        RETRIES=3,
        RETRY_BASE_DELAY_MS=10,
        OUT_DIR=tmp_path / "data",
        DEBUG_DIR=tmp_path / "debug",
    )
