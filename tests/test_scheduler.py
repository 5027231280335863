"""Tests for bot/services/scheduler.py – periodic catalog refresh."""
import logging

from bot.services import links
from bot.services.links import CatalogHolder
from bot.services.models import LinkCatalog, SourceEntry, SourceKind
from bot.services.scheduler import refresh_catalog, setup_scheduler
from bot.services.site import SiteConfig

SITE = SiteConfig(base_url="http://example.test")


def test_setup_registers_refresh_job():
    holder = CatalogHolder(SITE)
    scheduler = setup_scheduler(holder, refresh_hours=2)
    jobs = scheduler.get_jobs()
    assert len(jobs) == 1
    assert jobs[0].func is refresh_catalog
    assert jobs[0].args == (holder,)


async def test_refresh_warns_when_kind_disappears(monkeypatch, caplog):
    async def nothing(url, timeout=5.0):
        return ""
    monkeypatch.setattr(links, "afetch_html", nothing)

    holder = CatalogHolder(SITE)
    holder.catalog = LinkCatalog(entries={
        SourceKind.GROUP: {"ИС-21": SourceEntry("ИС-21", "http://example.test/cg1.htm")},
    })
    with caplog.at_level(logging.WARNING, logger="bot.services.scheduler"):
        await refresh_catalog(holder)

    assert holder.catalog.count(SourceKind.GROUP) == 0
    assert "group became empty" in caplog.text
