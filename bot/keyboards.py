from aiogram.types import ReplyKeyboardMarkup, KeyboardButton, InlineKeyboardMarkup, InlineKeyboardButton
from aiogram.utils.keyboard import InlineKeyboardBuilder

from bot.services.models import SourceKind

MAIN_MENU = ReplyKeyboardMarkup(
    keyboard=[
        [KeyboardButton(text="📅 Моё расписание"), KeyboardButton(text="🔎 Другое расписание")],
        [KeyboardButton(text="📶 Статус сайта"), KeyboardButton(text="⚙️ Настройки")],
    ],
    resize_keyboard=True,
)

KIND_LABELS = {
    SourceKind.GROUP: "Группы",
    SourceKind.LECTURER: "Преподаватели",
    SourceKind.ROOM: "Аудитории",
}

SETTINGS_KEYBOARD = InlineKeyboardMarkup(inline_keyboard=[
    [InlineKeyboardButton(text="Источник расписания", callback_data="settings:kind:")],
    [InlineKeyboardButton(text="Режим отладки", callback_data="settings:debug:")],
])


def debug_keyboard(enabled: bool) -> InlineKeyboardMarkup:
    if enabled:
        toggle = InlineKeyboardButton(text="✅ Отладка включена", callback_data="settings:debug:disable")
    else:
        toggle = InlineKeyboardButton(text="❌ Отладка отключена", callback_data="settings:debug:enable")
    return InlineKeyboardMarkup(inline_keyboard=[
        [toggle],
        [InlineKeyboardButton(text="⬅️ Назад", callback_data="settings:")],
    ])


def kinds_keyboard(prefix: str, back: str | None = None) -> InlineKeyboardMarkup:
    """Вибір типу джерела. prefix — 'settings:kind:' або 'getkind:'."""
    rows = [
        [InlineKeyboardButton(text=label, callback_data=f"{prefix}{kind.value}")]
        for kind, label in KIND_LABELS.items()
    ]
    if back is not None:
        rows.append([InlineKeyboardButton(text="⬅️ Назад", callback_data=back)])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def sources_keyboard(names: list[str], kind: SourceKind, prefix: str, back: str,
                     buttons_per_row: int = 3) -> InlineKeyboardMarkup:
    """Кнопки джерел; callback_data = '<prefix><k>.<назва>' (назва вже обрізана до 28 символів)."""
    builder = InlineKeyboardBuilder()
    for name in names:
        builder.button(text=name, callback_data=f"{prefix}{kind.short}.{name}")
    builder.adjust(buttons_per_row)
    builder.row(InlineKeyboardButton(text="⬅️ Назад", callback_data=back))
    return builder.as_markup()


def parse_source_data(data: str, prefix: str) -> tuple[SourceKind | None, str]:
    """'ss:g.ИС-21' → (SourceKind.GROUP, 'ИС-21')."""
    payload = data[len(prefix):]
    code, _, name = payload.partition(".")
    return SourceKind.from_short(code), name
