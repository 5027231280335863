import asyncio
import logging
import re

from aiogram import Router, F, types
from aiogram.exceptions import TelegramAPIError, TelegramForbiddenError

from bot.database.queries import get_all_users, delete_user
from config import ADMIN_IDS

logger = logging.getLogger(__name__)

router = Router()

SEND_MODES = ("only", "except", "preview")
MODE_RE = re.compile(r"mode\s*=\s*(\w+)")
IDS_RE = re.compile(r"ids\s*=\s*([^;]+)")

# Формат:
#   /ann текст\nще рядок
#   <b>жирний</b>
#   |end|
#   mode = only; ids = 1184488381, 123456
# mode=only — тільки ids (без ids — усім), except — усім, крім ids, preview — лише собі.


def parse_announcement(text: str) -> tuple[str, str, list[int]] | None:
    """Повертає (текст, режим, ids) або None, якщо формат неправильний."""
    body = text.replace("/ann", "", 1).strip()
    message, _, params = body.partition("|end|")
    message = message.strip().replace("\\n", "\n")
    params = params.strip()
    if not message or not params:
        return None

    mode_match = MODE_RE.search(params)
    mode = mode_match.group(1) if mode_match else ""

    ids = []
    ids_match = IDS_RE.search(params)
    if ids_match:
        ids = [int(x) for x in ids_match.group(1).split(",") if x.strip().lstrip("-").isdigit()]
    return message, mode, ids


async def resolve_targets(mode: str, ids: list[int], admin_id: int) -> list[int]:
    if mode == "preview":
        return [admin_id]
    all_ids = [u["user_id"] for u in await get_all_users()]
    if mode == "only":
        return ids or all_ids
    return [uid for uid in all_ids if uid not in ids]


@router.message(F.text.startswith("/ann") | F.caption.startswith("/ann"))
async def cmd_announcement(message: types.Message):
    if message.from_user.id not in ADMIN_IDS:
        return

    parsed = parse_announcement(message.text or message.caption or "")
    if parsed is None:
        await message.answer("Неверный формат! Нет текста, тега |end| или параметра mode=...")
        return
    text, mode, ids = parsed
    if mode not in SEND_MODES:
        await message.answer(
            "Неверный режим отправки!\n"
            "only - только ids\n"
            "except - всем кроме ids\n"
            "preview - посмотреть итоговое сообщение"
        )
        return

    photo_id = message.photo[-1].file_id if message.photo else None
    targets = await resolve_targets(mode, ids, message.chat.id)
    logger.info("sending ann to: %s", ", ".join(map(str, targets)))

    sent_count = 0
    for user_id in targets:
        try:
            if photo_id:
                await message.bot.send_photo(chat_id=user_id, photo=photo_id, caption=text, parse_mode="HTML")
            else:
                await message.bot.send_message(chat_id=user_id, text=text, parse_mode="HTML")
            sent_count += 1
            # Невелика затримка щоб не ловити FloodWait
            await asyncio.sleep(0.05)
        except TelegramForbiddenError as e:
            logger.warning("failed to send ann to %s: %s", user_id, e.message)
            await delete_user(user_id, reason="blocked the bot")
        except TelegramAPIError as e:
            logger.warning("failed to send ann to %s: %s", user_id, e.message)

    logger.info("/ann done: %d/%d", sent_count, len(targets))
    await message.answer(f"Готово ({sent_count}/{len(targets)})")
