from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message

from bot.services.fetch import aprobe_status
from bot.services.render import status_message
from bot.services.site import SiteConfig

router = Router()


@router.message(F.text == "📶 Статус сайта")
@router.message(Command("status"))
async def cmd_status(message: Message, site: SiteConfig):
    placeholder = await message.answer("_Соединение с сайтом\\.\\.\\._", parse_mode="MarkdownV2")
    probe = await aprobe_status(site.index_url, site.request_timeout)
    await placeholder.edit_text(status_message(probe), parse_mode="MarkdownV2")
