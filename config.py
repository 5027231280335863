import os

from dotenv import load_dotenv

from bot.services.site import DEFAULT_BASE_URL, SiteConfig

load_dotenv()


def _bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


BOT_TOKEN = os.getenv("BOT_TOKEN", "")
ADMIN_IDS = [int(x) for x in os.getenv("ADMIN_IDS", "").split(",") if x.strip()]
DB_PATH = os.getenv("DB_PATH", os.path.join(os.path.dirname(__file__), "bot_data.db"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CATALOG_REFRESH_HOURS = int(os.getenv("CATALOG_REFRESH_HOURS", "6"))

SITE = SiteConfig(
    base_url=os.getenv("SITE_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
    timezone=os.getenv("SITE_TIMEZONE", "Europe/Moscow"),
    request_timeout=float(os.getenv("REQUEST_TIMEOUT", "5")),
    exclude_empty_days=_bool("SCHEDULE_EXCLUDE_EMPTY_DAYS", False),
    exclude_empty_weekends=_bool("SCHEDULE_EXCLUDE_EMPTY_WEEKENDS", True),
)
