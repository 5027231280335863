from aiogram import Router
from aiogram.filters import CommandStart, Command
from aiogram.types import Message

from bot.database.queries import upsert_user
from bot.keyboards import MAIN_MENU

router = Router()


@router.message(CommandStart())
async def cmd_start(message: Message):
    await upsert_user(message.from_user.id, username=message.from_user.username or "")
    await message.answer(
        "Привет, это бот для просмотра расписания КИТиС!\n"
        "Для начала выбери источник расписания с помощью команды /settings и кнопки "
        "\"Источник расписания\", а после этого используй команду /myschedule, "
        "чтобы посмотреть своё расписание!\n\n"
        "Вот все команды бота:\n"
        "/settings - настройки бота\n"
        "/myschedule - ваше расписание\n"
        "/schedule - чужое расписание\n"
        "/status - статус сайта\n"
        "/help - помощь с ботом",
        reply_markup=MAIN_MENU,
    )


@router.message(Command("help"))
async def cmd_help(message: Message):
    await message.answer(
        "/settings - команда для настройки бота. Например, с помощью кнопки \"Источник расписания\" "
        "можно выбрать источник по умолчанию для команды /myschedule\n\n"
        "/myschedule - посмотреть ваше расписание, установленное в настройках\n\n"
        "/schedule - посмотреть любое расписание, для этого вызовите команду и выберите нужный "
        "источник, это не сохранится в настройках\n\n"
        "/status - проверить статус работы сайта с расписанием: код статуса и время ответа сервера\n\n"
        "/help - посмотреть помощь по боту"
    )
