import re
from datetime import datetime
from typing import Optional

import pytz

from bot.services.models import Lesson, ProbeResult, Schedule, ScheduleResult, SourceKind
from bot.services.site import WEEKEND_NAMES

MARKDOWN_SPECIAL_RE = re.compile(r"([\[\]()~`>#+\-=|{}.!])")
SEPARATOR = "--------------------------"
REMOTE_ROOM = "Дистант"

HEADS = {
    SourceKind.GROUP: "группы",
    SourceKind.LECTURER: "преподавателя",
    SourceKind.ROOM: "аудитории",
}

LESSON_FORMATS = {
    SourceKind.GROUP: "__{number} пара__ - _{bells}_ - {name}{subgroup} - _{room}_",
    SourceKind.LECTURER: "__{number} пара__ - _{bells}_ - *{group}*{subgroup} - {name} - _{room}_",
    SourceKind.ROOM: "__{number} пара__ - _{bells}_ - *{lecturer}* - {group}{subgroup} - _{name}_",
}

INVALID_SOURCE_TEXT = (
    "Указан неверный источник расписания! (возможно он устарел)\n"
    "Используйте /settings и обновите его!"
)
UNAVAILABLE_TEXT = "Не удалось получить данные расписания, попробуйте позже!"


def escape_markdown(text: str) -> str:
    """Екранує всі спецсимволи MarkdownV2, крім * і _ (ними ми самі розмічаємо текст)."""
    return MARKDOWN_SPECIAL_RE.sub(r"\\\1", text)


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length or max_length <= 0:
        return text
    return text[:max(max_length, 3) - 3] + "..."


def format_lesson(kind, lesson: Lesson, max_name_length: int = 80) -> str:
    pattern = LESSON_FORMATS.get(kind, "")
    return pattern.format(
        number=lesson.number if lesson.number is not None else "-",
        bells=lesson.bells,
        name=truncate(lesson.name, max_name_length),
        room=lesson.room or REMOTE_ROOM,
        lecturer=lesson.lecturer,
        group=lesson.group,
        subgroup=f" ({lesson.subgroup})" if lesson.subgroup else "",
    )


def format_updated(last_modified: Optional[int], tz: str) -> str:
    if last_modified is None:
        return "_Обновлено: неизвестно_"
    dt = datetime.fromtimestamp(last_modified, pytz.timezone(tz))
    return dt.strftime("_Обновлено: %d.%m.%y в %H:%M_")


def _skip_day(day, exclude_empty_weekends: bool, exclude_empty_days: bool) -> bool:
    if day.lessons:
        return False
    return exclude_empty_days or (exclude_empty_weekends and day.weekday in WEEKEND_NAMES)


def format_schedule(
    schedule: Schedule,
    max_name_length: int = 80,
    exclude_empty_weekends: bool = True,
    exclude_empty_days: bool = False,
    tz: str = "Europe/Moscow",
) -> str:
    """Текст розкладу до екранування."""
    head = HEADS.get(schedule.source_kind, "...")
    msg = f"Расписание {head} *{schedule.source}*\n{SEPARATOR}\n"
    for day in schedule.days:
        if _skip_day(day, exclude_empty_weekends, exclude_empty_days):
            continue
        msg += f"\n{day.date} - *{day.weekday or ''}*\n\n"
        for lesson in day.lessons:
            msg += format_lesson(schedule.source_kind, lesson, max_name_length) + "\n"
        msg += f"\n{SEPARATOR}\n"
    msg += format_updated(schedule.last_modified, tz)
    return msg


def schedule_message(
    result: ScheduleResult,
    max_name_length: int = 80,
    exclude_empty_weekends: bool = True,
    exclude_empty_days: bool = False,
    tz: str = "Europe/Moscow",
) -> str:
    if result.status == "error":
        return escape_markdown(INVALID_SOURCE_TEXT)
    if not result.ok:
        return escape_markdown(UNAVAILABLE_TEXT)
    text = format_schedule(result.schedule, max_name_length, exclude_empty_weekends, exclude_empty_days, tz)
    return escape_markdown(text)


def status_message(probe: ProbeResult) -> str:
    if probe.status == -1:
        return escape_markdown(
            f"*Не удаётся установить соединение с сайтом!*\n\nТекст ошибки:\n_{probe.text}_"
        )
    return escape_markdown(f"Статус: *{probe.status}*\nОтклик: *{probe.elapsed} мс.*")
