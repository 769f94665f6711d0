# storefront_search/config/settings.py

"""Central configuration for the storefront_search client."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the storefront_search client."""

    # --- Endpoints (shared with the storefront's runtime config) ---
    SMART_SEARCH_URL: str = os.getenv("NUXT_PUBLIC_SMART_SEARCH_URL", "")
    SMART_SEARCH_TOKEN: str = os.getenv("NUXT_PUBLIC_SMART_SEARCH_TOKEN", "")
    WORDPRESS_URL: str = os.getenv("NUXT_PUBLIC_WORDPRESS_URL", "")

    # --- Transport ---
    REQUEST_DELAY: float = 1.0          # Base backoff between retries (secs)
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    MAX_RETRIES: int = 3                # Attempts on transient failures
    RETRYABLE_STATUS_CODES: list[int] = [429, 500, 502, 503, 504]

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Smart Search ---
    DEFAULT_SEARCH_LIMIT: int = 10      # find() limit when none is given
    RESULTS_LIMIT: int = 20             # Limit used by the search logic
    PRODUCT_FILTER: str = "post_type:product"
    CATEGORY_FIELD: str = "product_cat.name"
    SEMANTIC_SEARCH_BIAS: int = 10
    SEMANTIC_SEARCH_FIELDS: list[str] = ["post_title", "post_content"]
    CONTEXT_FIELD: str = "post_content"
    CONTEXT_MIN_SCORE: float = 0.8

    # --- Filtering ---
    CLIENT_SIDE_PRICE_FILTER: bool = (
        os.getenv("STOREFRONT_CLIENT_SIDE_PRICE_FILTER", "0") == "1"
    )

    # --- Logging ---
    # Threshold for the per-run log file; the console always shows WARNING+
    LOG_LEVEL: str = os.getenv("STOREFRONT_LOG_LEVEL", "DEBUG")

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Activities (value -> search label) ---
    ACTIVITY_LABELS: dict[str, str] = {
        "coding": "Coding",
        "running": "Running",
        "rock-climbing": "Rock Climbing",
    }
