"""Tests for bot/services/fetch.py – page decoding and site probing."""
import requests

from bot.services.fetch import decode_html, fetch_html, probe_status, aprobe_status, afetch_html


class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200, reason: str = "OK"):
        self.content = content
        self.status_code = status_code
        self.reason = reason

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def refuse(*args, **kwargs):
    raise requests.ConnectionError("Connection refused")


class TestDecodeHtml:
    def test_utf8_default(self):
        raw = '<meta charset="utf-8"><h1>Группа: ИС-21</h1>'.encode("utf-8")
        assert "Группа: ИС-21" in decode_html(raw)

    def test_cp1251_marker(self):
        raw = '<meta content="text/html; charset=windows-1251"><h1>Группа: ИС-21</h1>'.encode("cp1251")
        assert "Группа: ИС-21" in decode_html(raw)

    def test_cp1251_without_marker_stays_utf8(self):
        raw = "<h1>Группа</h1>".encode("cp1251")
        assert "Группа" not in decode_html(raw)


class TestFetchHtml:
    def test_success(self, monkeypatch):
        body = '<meta charset=windows-1251"><h1>Аудитория: 101</h1>'.encode("cp1251")
        monkeypatch.setattr(requests, "get", lambda *a, **kw: FakeResponse(body))
        assert "Аудитория: 101" in fetch_html("http://example.test/a1.htm")

    def test_timeout_passed(self, monkeypatch):
        seen = {}

        def fake_get(url, **kwargs):
            seen.update(kwargs)
            return FakeResponse(b"ok")
        monkeypatch.setattr(requests, "get", fake_get)
        fetch_html("http://example.test/", timeout=2.5)
        assert seen["timeout"] == 2.5

    def test_failure_gives_empty_text(self, monkeypatch):
        monkeypatch.setattr(requests, "get", refuse)
        assert fetch_html("http://example.test/") == ""

    async def test_async_wrapper(self, monkeypatch):
        monkeypatch.setattr(requests, "get", refuse)
        assert await afetch_html("http://example.test/") == ""


class TestProbeStatus:
    def test_ok(self, monkeypatch):
        monkeypatch.setattr(requests, "get", lambda *a, **kw: FakeResponse(status_code=200, reason="OK"))
        result = probe_status("http://example.test/index.htm")
        assert result.status == 200
        assert result.text == "OK"
        assert result.elapsed >= 0

    def test_http_error_status_reported(self, monkeypatch):
        monkeypatch.setattr(requests, "get", lambda *a, **kw: FakeResponse(status_code=503, reason="Service Unavailable"))
        assert probe_status("http://example.test/index.htm").status == 503

    def test_unreachable(self, monkeypatch):
        monkeypatch.setattr(requests, "get", refuse)
        result = probe_status("http://example.test/index.htm")
        assert result.status == -1
        assert result.elapsed >= 0
        assert result.text

    async def test_async_unreachable(self, monkeypatch):
        monkeypatch.setattr(requests, "get", refuse)
        result = await aprobe_status("http://example.test/index.htm")
        assert result.status == -1
