from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    # ------------------------------------------------------------------
    # Target page / embed
    # ------------------------------------------------------------------
    PAGE_URL: str = "https://projectprocurement.iadb.org/en/procurement-notices"
    EMBED_MATCH: str = "app.powerbi.com"  # substring of the Power BI iframe src
    SOURCE: str = "IDB"                   # id prefix, e.g. "IDB:<slug>"

    # ------------------------------------------------------------------
    # Browser session
    # ------------------------------------------------------------------
    HEADLESS: bool = True
    LOCALE: str = "en-US"
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )
    NAV_TIMEOUT_MS: int = 60000

    # ------------------------------------------------------------------
    # Waits / retries (bump these on a slow machine)
    # ------------------------------------------------------------------
    PAGE_LOAD_WAIT_MS: int = 8000       # settle time after goto
    GRID_WAIT_TIMEOUT_MS: int = 35000   # wait until a grid appears
    GRID_POLL_INTERVAL_MS: int = 500
    RETRIES: int = 3                    # whole-attempt budget
    RETRY_BASE_DELAY_MS: int = 1500     # backoff = attempt * base

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    OUT_DIR: Path = Path("data")
    DEBUG_DIR: Path = Path("debug")

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------
    # older exports bucketed unknown notice types/categories as "Other";
    # default keeps the source text instead
    CLASSIFY_FALLBACK_OTHER: bool = False

    # ------------------------------------------------------------------
    # Logging / scheduler
    # ------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"
    EXPORT_HOUR: int = 6
    TIMEZONE: str = "UTC"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # ignore any unrecognized vars instead of erroring
    )


# create global settings instance
settings = Settings()
