import logging

from aiogram import Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import ErrorEvent

from bot.database.queries import get_user

logger = logging.getLogger(__name__)

router = Router()

# Помилки, на які не варто відповідати користувачу
HARMLESS_ERRORS = (
    "message is not modified",
    "message to delete not found",
    "message can't be deleted",
)


@router.errors()
async def on_error(event: ErrorEvent):
    error = event.exception
    callback = event.update.callback_query
    message = event.update.message

    if isinstance(error, TelegramBadRequest) and any(s in error.message for s in HARMLESS_ERRORS):
        if callback:
            try:
                await callback.answer()
            except TelegramBadRequest:
                pass
        return True

    logger.error("Update %s failed: %s", event.update.update_id, error, exc_info=error)

    user_obj = callback.from_user if callback else (message.from_user if message else None)
    user = await get_user(user_obj.id) if user_obj else None
    answer = "Произошла ошибка"
    if user and user.get("show_errors"):
        answer += f":\n\n{error}"
    else:
        answer += "\n\n(для подробностей включите \"Режим отладки\" в настройках)"

    try:
        if callback:
            await callback.answer()
            if callback.message:
                await callback.message.edit_text(answer)
        elif message:
            await message.answer(answer)
    except TelegramBadRequest as e:
        logger.warning("could not report error to user: %s", e.message)
    return True
