import logging

from aiogram import Router, F
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.types import Message, CallbackQuery

from bot.database.queries import get_user, upsert_user
from bot.keyboards import kinds_keyboard, sources_keyboard, parse_source_data
from bot.services.links import CatalogHolder
from bot.services.models import SourceKind
from bot.services.parser import fetch_schedule
from bot.services.render import schedule_message
from bot.services.site import SiteConfig

logger = logging.getLogger(__name__)

router = Router()

MAX_MESSAGE_LENGTH = 4096


async def send_schedule(message: Message, kind: SourceKind | None, source: str,
                        catalog: CatalogHolder, site: SiteConfig, show_errors: bool = False):
    """Надсилає розклад: спершу заглушка, потім редагуємо її готовим текстом."""
    if kind is None or not source:
        await message.answer("Не указан источник расписания. Используйте /settings и выберите источник.")
        return

    placeholder = await message.answer("Получаю информацию...")
    result = await fetch_schedule(catalog.catalog, kind, source, site)
    text = schedule_message(
        result,
        exclude_empty_weekends=site.exclude_empty_weekends,
        exclude_empty_days=site.exclude_empty_days,
        tz=site.timezone,
    )

    if len(text) > MAX_MESSAGE_LENGTH:
        logger.warning("message is too long (%d), can't send it! source: %s (%s)",
                       len(text), source, message.chat.id)
        await placeholder.edit_text("Не могу отправить расписание, слишком длинный текст сообщения!")
        return

    try:
        await placeholder.edit_text(text, parse_mode="MarkdownV2")
    except TelegramBadRequest as e:
        logger.error("can not send schedule: %s (%s)", e.message, message.chat.id)
        details = f":\n\n{e.message}" if show_errors else ""
        await placeholder.edit_text(f"Не могу отправить расписание (ошибка телеграма){details}")


@router.message(F.text == "📅 Моё расписание")
@router.message(Command("myschedule"))
async def cmd_myschedule(message: Message, catalog: CatalogHolder, site: SiteConfig):
    await upsert_user(message.from_user.id, username=message.from_user.username or "")
    user = await get_user(message.from_user.id)
    kind = SourceKind(user["source_kind"]) if user.get("source_kind") else None
    await send_schedule(message, kind, user.get("source") or "", catalog, site,
                        bool(user.get("show_errors")))


@router.message(F.text == "🔎 Другое расписание")
@router.message(Command("schedule"))
async def cmd_schedule(message: Message):
    await upsert_user(message.from_user.id, username=message.from_user.username or "")
    await message.answer("Выберите источник расписания:", reply_markup=kinds_keyboard("getkind:"))


@router.callback_query(F.data.startswith("getkind:"))
async def cb_get_kind(callback: CallbackQuery, catalog: CatalogHolder):
    param = callback.data.split(":", 1)[1]
    if param:
        kind = SourceKind(param)
        markup = sources_keyboard(catalog.catalog.names(kind), kind, "get:", back="getkind:")
    else:
        markup = kinds_keyboard("getkind:")
    await callback.answer()
    await callback.message.edit_text("Выберите источник расписания:", reply_markup=markup)


@router.callback_query(F.data.startswith("get:"))
async def cb_get_source(callback: CallbackQuery, catalog: CatalogHolder, site: SiteConfig):
    kind, source = parse_source_data(callback.data, "get:")
    await callback.answer()
    await callback.message.delete()
    user = await get_user(callback.from_user.id) or {}
    await send_schedule(callback.message, kind, source, catalog, site, bool(user.get("show_errors")))
