import asyncio
import logging

from bs4 import BeautifulSoup

from bot.services.fetch import afetch_html
from bot.services.models import LinkCatalog, SourceEntry, SourceKind
from bot.services.site import SiteConfig

logger = logging.getLogger(__name__)

# Довжина назви в UTF-16 одиницях, як рахує Telegram
MAX_NAME_LENGTH = 28


def _truncate_name(name: str, limit: int = MAX_NAME_LENGTH) -> str:
    # Розрізана сурогатна пара відкидається
    return name.encode("utf-16-le")[:limit * 2].decode("utf-16-le", "ignore")


def parse_links(html: str, base_url: str) -> dict:
    """Список джерел зі сторінки-покажчика: {назва: SourceEntry}."""
    soup = BeautifulSoup(html, "html.parser")
    table = soup.select_one("table.inf")
    if not table:
        return {}

    links = {}
    for tr in table.find_all("tr")[1:]:
        a = tr.select_one("a.z0")
        if not a:
            continue
        name = _truncate_name(a.get_text().strip())
        href = (a.get("href") or "").strip()
        if not name or not href:
            continue
        links[name] = SourceEntry(name=name, url=f"{base_url}/{href}")
    return links


async def _fetch_links(kind: SourceKind, site: SiteConfig) -> dict:
    html = await afetch_html(site.catalog_url(kind), site.request_timeout)
    if not html:
        logger.warning("Catalog page for %s is unavailable", kind.value)
        return {}
    return parse_links(html, site.base_url)


async def build_catalog(site: SiteConfig) -> LinkCatalog:
    kinds = list(SourceKind)
    results = await asyncio.gather(*(_fetch_links(kind, site) for kind in kinds))
    return LinkCatalog(entries=dict(zip(kinds, results)))


class CatalogHolder:
    """Тримає поточний каталог; оновлення підміняє його цілком."""

    def __init__(self, site: SiteConfig):
        self.site = site
        self.catalog = LinkCatalog()

    async def refresh(self) -> LinkCatalog:
        catalog = await build_catalog(self.site)
        self.catalog = catalog
        logger.info(
            "Catalog refreshed: %s",
            ", ".join(f"{kind.value}={catalog.count(kind)}" for kind in SourceKind),
        )
        return catalog
