import logging
import re
from dataclasses import dataclass, replace
from datetime import datetime
from functools import reduce
from typing import Optional

import pytz
from bs4 import BeautifulSoup

from bot.services.bells import resolve_bells
from bot.services.fetch import afetch_html
from bot.services.models import Day, LinkCatalog, Lesson, Schedule, ScheduleResult, SourceKind
from bot.services.site import SiteConfig

logger = logging.getLogger(__name__)

LAST_MODIFIED_FORMAT = "Обновлено: %d.%m.%Y в %H:%M."
TITLE_RE = re.compile(r"([^:]+): ([^$]+)")
SUBGROUP_SUFFIX_RE = re.compile(r"\s*\(\d+\)\s*$")
SLOT_CLASSES = ("z1", "z2", "z3")


def parse_last_modified(text: str, tz: str) -> Optional[int]:
    """'Обновлено: 02.09.2024 в 14:35.' → unix timestamp, або None."""
    try:
        dt = datetime.strptime(text.strip(), LAST_MODIFIED_FORMAT)
    except ValueError:
        return None
    return int(pytz.timezone(tz).localize(dt).timestamp())


def parse_title(text: str) -> tuple[str, str]:
    m = TITLE_RE.search(text)
    if not m:
        return "", ""
    return m.group(1).strip(), m.group(2).strip()


# ─── Розкладка слотів z1/z2/z3 за типом джерела ───────────────────────────────

def _group_fields(z1: str, z2: str, z3: str) -> dict:
    return {"name": z1, "room": z2, "lecturer": z3}


def _lecturer_fields(z1: str, z2: str, z3: str) -> dict:
    return {"group": z1, "room": z2, "name": z3}


def _room_fields(z1: str, z2: str, z3: str) -> dict:
    return {"group": z1, "name": z2, "lecturer": z3}


SLOT_MAPPERS = {
    SourceKind.GROUP: _group_fields,
    SourceKind.LECTURER: _lecturer_fields,
    SourceKind.ROOM: _room_fields,
}


def _slots(td) -> tuple[str, str, str]:
    children = td.find_all(recursive=False)
    return tuple(
        ", ".join(el.get_text() for el in children if z in el.get("class", []))
        for z in SLOT_CLASSES
    )


def _lesson_number(text: str) -> Optional[int]:
    first = text.strip()[:1]
    return int(first) if "0" <= first <= "9" else None


# ─── Прохід по рядках таблиці ─────────────────────────────────────────────────

@dataclass(frozen=True)
class _ScanState:
    days: tuple = ()
    current: Optional[Day] = None
    weekday_token: str = ""


def _is_day_header(text: str) -> bool:
    return ":" not in text and len(text) > 1


def _lessons_from_row(tds, offset: int, weekday_token: str, kind, site: SiteConfig) -> list:
    number = _lesson_number(tds[offset].get_text())
    bells = resolve_bells(number, weekday_token, site)
    cells = tds[offset + 1:]
    mapper = SLOT_MAPPERS.get(kind)

    lessons = []
    for i, td in enumerate(cells):
        if not td.get_text().strip():
            continue
        fields = mapper(*_slots(td)) if mapper else {}
        if "name" in fields:
            fields["name"] = SUBGROUP_SUFFIX_RE.sub("", fields["name"])
        subgroup = i + 1 if len(cells) > 1 else 0
        lessons.append(Lesson(number=number, bells=bells, subgroup=subgroup, **fields))
    return lessons


def _scan_row(state: _ScanState, tr, kind, site: SiteConfig) -> _ScanState:
    tds = tr.find_all("td")
    if not tds:
        return state

    first = tds[0].get_text().strip()
    if _is_day_header(first):
        parts = [p.strip() for p in first.split("\n") if p.strip()]
        date = parts[0] if parts else ""
        token = parts[1] if len(parts) > 1 else ""
        days = state.days + (state.current,) if state.current is not None else state.days
        state = _ScanState(days=days, current=Day(date=date, weekday=site.weekdays.get(token)), weekday_token=token)
        offset = 1
    elif len(tds) >= 2:
        offset = 0
    else:
        return state

    if state.current is None or len(tds) < offset + 2:
        return state

    lessons = _lessons_from_row(tds, offset, state.weekday_token, kind, site)
    if not lessons:
        return state
    current = replace(state.current, lessons=state.current.lessons + tuple(lessons))
    return replace(state, current=current)


def parse_schedule(html: str, site: SiteConfig, kind_hint: Optional[SourceKind] = None) -> Schedule:
    """Розбирає сторінку розкладу однієї групи / викладача / аудиторії."""
    soup = BeautifulSoup(html, "html.parser")
    for br in soup.find_all("br"):
        br.replace_with("\n")

    h1 = soup.find("h1")
    label, source = parse_title(h1.get_text() if h1 else "")
    kind = site.source_labels.get(label) or kind_hint or label

    ref = soup.select_one("div.ref")
    last_modified = parse_last_modified(ref.get_text() if ref else "", site.timezone)

    table = soup.select_one("table.inf")
    rows = table.find_all("tr")[2:] if table else []
    state = reduce(lambda st, tr: _scan_row(st, tr, kind, site), rows, _ScanState())
    days = state.days + (state.current,) if state.current is not None else state.days

    return Schedule(source_kind=kind, source=source, last_modified=last_modified, days=days)


async def fetch_schedule(catalog: LinkCatalog, kind: SourceKind, name: str, site: SiteConfig) -> ScheduleResult:
    entry = catalog.get(kind, name)
    if entry is None:
        return ScheduleResult("error", "Invalid source kind or source")

    html = await afetch_html(entry.url, site.request_timeout)
    if not html:
        return ScheduleResult("unavailable", "Failed to fetch HTML")

    schedule = parse_schedule(html, site, kind_hint=kind)
    if not schedule.found:
        logger.warning("Schedule page for %s %r has no recognizable title", kind.value, name)
        return ScheduleResult("not_found", "Source not found on page", schedule)
    return ScheduleResult("ok", schedule=schedule)
