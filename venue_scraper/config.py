import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise EnvironmentError(f"{name} must be an integer, got {raw!r}") from None


# Comma-separated list of listing URLs; empty means DEFAULT_SITE_URLS
SITE_URLS = [u.strip() for u in os.getenv("VENUE_SCRAPER_SITES", "").split(",") if u.strip()]

WORKERS = max(1, min(_int_env("VENUE_SCRAPER_WORKERS", 5), 16))
TIMEOUT_S = _int_env("VENUE_SCRAPER_TIMEOUT_S", 30)
USER_AGENT = os.getenv(
    "VENUE_SCRAPER_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/117.0.0.0 Safari/537.36",
)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
