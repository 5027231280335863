from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from bot.services.models import SourceKind


def _frozen(d: dict) -> Mapping:
    return MappingProxyType(dict(d))


DEFAULT_BASE_URL = "http://94.72.18.202:8083"

WEEKDAYS = {
    "Пн": "Понедельник", "Вт": "Вторник", "Ср": "Среда",
    "Чт": "Четверг", "Пт": "Пятница", "Сб": "Суббота", "Вс": "Воскресенье",
}

WEEKEND_NAMES = ("Суббота", "Воскресенье")

SOURCE_LABELS = {
    "Группа": SourceKind.GROUP,
    "Преподаватель": SourceKind.LECTURER,
    "Аудитория": SourceKind.ROOM,
}

# Час пар у звичайні дні
BELLS = {
    1: "8:30-10:00",
    2: "10:10-11:40",
    3: "12:10-13:40",
    4: "13:50-15:20",
    5: "15:30-17:00",
    6: "17:10-18:40",
    7: "18:50-20:20",
}

# У понеділок інша сітка дзвінків
BELLS_MONDAY = {
    1: "8:30-9:00 / 15:20-15:50",
    2: "9:10-10:30",
    3: "10:40-12:00",
    4: "12:20-13:40",
    5: "13:50-15:10",
    6: "16:00-17:20",
    7: "17:30-18:50",
}

INDEX_PAGES = {
    SourceKind.GROUP: "cg.htm",
    SourceKind.LECTURER: "cp.htm",
    SourceKind.ROOM: "ca.htm",
}


@dataclass(frozen=True)
class SiteConfig:
    """Незмінна конфігурація сайту розкладу, передається в кожен сервіс."""

    base_url: str = DEFAULT_BASE_URL
    index_pages: Mapping = field(default_factory=lambda: _frozen(INDEX_PAGES))
    weekdays: Mapping = field(default_factory=lambda: _frozen(WEEKDAYS))
    source_labels: Mapping = field(default_factory=lambda: _frozen(SOURCE_LABELS))
    bells: Mapping = field(default_factory=lambda: _frozen(BELLS))
    bells_monday: Mapping = field(default_factory=lambda: _frozen(BELLS_MONDAY))
    first_weekday: str = "Пн"
    timezone: str = "Europe/Moscow"
    request_timeout: float = 5.0
    exclude_empty_days: bool = False
    exclude_empty_weekends: bool = True

    @property
    def index_url(self) -> str:
        return f"{self.base_url}/index.htm"

    def catalog_url(self, kind: SourceKind) -> str:
        return f"{self.base_url}/{self.index_pages[kind]}"
