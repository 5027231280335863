from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message, CallbackQuery

from bot.database.queries import get_user, upsert_user
from bot.handlers.schedule import send_schedule
from bot.keyboards import SETTINGS_KEYBOARD, debug_keyboard, kinds_keyboard, sources_keyboard, parse_source_data
from bot.services.links import CatalogHolder
from bot.services.models import SourceKind
from bot.services.render import escape_markdown
from bot.services.site import SiteConfig

router = Router()

SETTINGS_TEXT = "⚙️ Настройки"
DEBUG_TEXT = (
    "Режим отладки позволяет отслеживать ошибки. "
    "Возможно, в будущем будет больше того, на что влияет эта настройка :)"
)


@router.message(F.text == "⚙️ Настройки")
@router.message(Command("settings"))
async def cmd_settings(message: Message):
    await upsert_user(message.from_user.id, username=message.from_user.username or "")
    await message.answer(SETTINGS_TEXT, reply_markup=SETTINGS_KEYBOARD)


@router.callback_query(F.data == "settings:")
async def cb_settings(callback: CallbackQuery):
    await callback.answer()
    await callback.message.edit_text(SETTINGS_TEXT, reply_markup=SETTINGS_KEYBOARD)


# ─── Режим відладки ────────────────────────────────────────────────────────────

@router.callback_query(F.data.startswith("settings:debug:"))
async def cb_debug_mode(callback: CallbackQuery):
    param = callback.data.split(":")[2]
    await upsert_user(callback.from_user.id)
    user = await get_user(callback.from_user.id)
    show_errors = bool(user.get("show_errors"))
    if param:
        show_errors = param == "enable"
        await upsert_user(callback.from_user.id, show_errors=int(show_errors))
    await callback.answer()
    await callback.message.edit_text(DEBUG_TEXT, reply_markup=debug_keyboard(show_errors))


# ─── Джерело розкладу ─────────────────────────────────────────────────────────

@router.callback_query(F.data.startswith("settings:kind:"))
async def cb_set_source_kind(callback: CallbackQuery, catalog: CatalogHolder):
    param = callback.data.split(":")[2]
    if param:
        kind = SourceKind(param)
        markup = sources_keyboard(catalog.catalog.names(kind), kind, "ss:", back="settings:kind:")
    else:
        markup = kinds_keyboard("settings:kind:", back="settings:")
    await callback.answer()
    await callback.message.edit_text("Выберите источник расписания:", reply_markup=markup)


@router.callback_query(F.data.startswith("ss:"))
async def cb_save_source(callback: CallbackQuery, catalog: CatalogHolder, site: SiteConfig):
    await upsert_user(callback.from_user.id)
    user = await get_user(callback.from_user.id)
    first_time = not user.get("source")
    kind, source = parse_source_data(callback.data, "ss:")
    await callback.answer()

    if kind is not None and source:
        await upsert_user(callback.from_user.id, source_kind=kind.value, source=source)
        status = "*Источник расписания изменён\\!*"
        # Перший вибір — одразу показуємо розклад
        if first_time:
            await send_schedule(callback.message, kind, source, catalog, site, bool(user.get("show_errors")))
    else:
        status = "*Что\\-то пошло не так\\!*"

    await callback.message.edit_text(
        f"{status}\n\n{escape_markdown(SETTINGS_TEXT)}",
        parse_mode="MarkdownV2",
        reply_markup=SETTINGS_KEYBOARD,
    )
