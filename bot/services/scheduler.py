import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from bot.services.links import CatalogHolder

logger = logging.getLogger(__name__)


async def refresh_catalog(holder: CatalogHolder):
    """Періодично перечитує списки груп, викладачів і аудиторій."""
    previous = holder.catalog
    catalog = await holder.refresh()
    for kind, entries in catalog.entries.items():
        if not entries and previous.entries.get(kind):
            logger.warning("Catalog for %s became empty after refresh", kind.value)


def setup_scheduler(holder: CatalogHolder, refresh_hours: int = 6, timezone: str = "Europe/Moscow") -> AsyncIOScheduler:
    scheduler = AsyncIOScheduler(timezone=timezone)

    # Оновлення каталогу джерел
    scheduler.add_job(refresh_catalog, "interval", hours=refresh_hours, args=[holder])

    return scheduler
