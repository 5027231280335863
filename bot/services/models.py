from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SourceKind(str, Enum):
    GROUP = "group"
    LECTURER = "lecturer"
    ROOM = "room"

    @property
    def short(self) -> str:
        """Однолітерний код для callback_data (g / l / r)."""
        return self.value[0]

    @classmethod
    def from_short(cls, code: str) -> Optional["SourceKind"]:
        for kind in cls:
            if kind.short == code:
                return kind
        return None


@dataclass(frozen=True)
class SourceEntry:
    name: str
    url: str


@dataclass(frozen=True)
class Lesson:
    number: Optional[int]  # None — пара без номера
    bells: str
    subgroup: int = 0
    name: str = ""
    room: str = ""
    lecturer: str = ""
    group: str = ""


@dataclass(frozen=True)
class Day:
    date: str
    weekday: Optional[str]
    lessons: tuple = ()


@dataclass(frozen=True)
class Schedule:
    source_kind: object  # SourceKind або сирий підпис з заголовка
    source: str
    last_modified: Optional[int]  # unix timestamp, None — невідомо
    days: tuple = ()

    @property
    def found(self) -> bool:
        return bool(self.source)


@dataclass(frozen=True)
class ScheduleResult:
    status: str  # "ok" | "error" | "unavailable"
    message: str = ""
    schedule: Optional[Schedule] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@dataclass(frozen=True)
class ProbeResult:
    status: int  # HTTP код або -1
    text: str
    elapsed: int  # мс


@dataclass
class LinkCatalog:
    """Каталог джерел: SourceKind → {назва: SourceEntry}."""

    entries: dict = field(default_factory=dict)

    def names(self, kind: SourceKind) -> list[str]:
        return list(self.entries.get(kind, {}))

    def get(self, kind: SourceKind, name: str) -> Optional[SourceEntry]:
        return self.entries.get(kind, {}).get(name)

    def count(self, kind: SourceKind) -> int:
        return len(self.entries.get(kind, {}))
