import asyncio
import logging
from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage
from config import BOT_TOKEN, LOG_LEVEL, SITE, CATALOG_REFRESH_HOURS
from bot.database.db import init_db
from bot.handlers import start, settings, schedule, status, admin, errors
from bot.services.links import CatalogHolder
from bot.services.scheduler import setup_scheduler

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def main():
    if not BOT_TOKEN:
        logger.critical("BOT_TOKEN is not set")
        return

    # Ініціалізація бази даних
    await init_db()
    logger.info("Database initialized")

    # Каталог груп / викладачів / аудиторій
    catalog = CatalogHolder(SITE)
    await catalog.refresh()

    # Бот та диспетчер
    bot = Bot(token=BOT_TOKEN)
    dp = Dispatcher(storage=MemoryStorage(), catalog=catalog, site=SITE)

    # Реєстрація handlers
    dp.include_router(start.router)
    dp.include_router(settings.router)
    dp.include_router(schedule.router)
    dp.include_router(status.router)
    dp.include_router(admin.router)
    dp.include_router(errors.router)

    # Запуск планувальника
    scheduler = setup_scheduler(catalog, CATALOG_REFRESH_HOURS, SITE.timezone)
    scheduler.start()
    logger.info("Scheduler started")

    logger.info("Bot started polling...")
    try:
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        scheduler.shutdown()
        await bot.session.close()


if __name__ == "__main__":
    asyncio.run(main())
