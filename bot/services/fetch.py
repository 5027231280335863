import asyncio
import logging
import time

import requests

from bot.services.models import ProbeResult

logger = logging.getLogger(__name__)

HEADERS = {"User-Agent": "Mozilla/5.0"}
CP1251_MARKER = "charset=windows-1251"


def decode_html(raw: bytes) -> str:
    """Декодує сторінку: спершу UTF-8, а якщо сторінка оголошує windows-1251 — перекодовує."""
    html = raw.decode("utf-8", errors="replace")
    if CP1251_MARKER in html:
        html = raw.decode("cp1251", errors="replace")
    return html


def fetch_html(url: str, timeout: float = 5.0) -> str:
    """Завантажує сторінку. Порожній рядок означає, що сайт недоступний."""
    try:
        response = requests.get(url, headers=HEADERS, timeout=timeout)
    except requests.RequestException as e:
        logger.debug("fetch %s failed: %s", url, e)
        return ""
    return decode_html(response.content)


def probe_status(url: str, timeout: float = 5.0) -> ProbeResult:
    start = time.monotonic()
    try:
        # stream=True — не чекаємо тіла, тільки заголовки
        with requests.get(url, headers=HEADERS, timeout=timeout, stream=True) as response:
            elapsed = int((time.monotonic() - start) * 1000)
            return ProbeResult(response.status_code, response.reason or "", elapsed)
    except requests.RequestException as e:
        elapsed = int((time.monotonic() - start) * 1000)
        logger.debug("probe %s failed: %s", url, e)
        return ProbeResult(-1, str(e) or e.__class__.__name__, elapsed)


async def afetch_html(url: str, timeout: float = 5.0) -> str:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, fetch_html, url, timeout)


async def aprobe_status(url: str, timeout: float = 5.0) -> ProbeResult:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, probe_status, url, timeout)
