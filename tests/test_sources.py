"""Unit tests for csstokens.sources (network calls are monkeypatched)."""

import importlib
import sys

import pytest
import requests

from csstokens import sources


class FakeResponse:
    def __init__(self, text, content_type="text/css", status=200):
        self.text = text
        self.headers = {"Content-Type": content_type}
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")


@pytest.fixture
def fake_web(monkeypatch):
    """Route requests.get to an in-memory dict of url -> FakeResponse."""
    pages = {}

    def fake_get(url, timeout=None):
        if url not in pages:
            raise requests.ConnectionError(f"no route to {url}")
        return pages[url]

    monkeypatch.setattr(sources.requests, "get", fake_get)
    return pages


class TestIsUrl:
    """Tests for telling URLs from paths."""

    def test_urls(self):
        assert sources.is_url("https://example.com/site.css")
        assert sources.is_url("http://example.com")

    def test_paths(self):
        assert not sources.is_url("styles/site.css")
        assert not sources.is_url("C:/styles/site.css")


class TestDiscoverStylesheets:
    """Tests for finding CSS in an HTML page."""

    def test_link_and_inline_style(self, sample_html_page):
        found = sources.discover_stylesheets(sample_html_page, "https://example.com/about/")
        assert found[0] == ("url", "https://example.com/css/site.css")
        assert found[1][0] == "inline"
        assert ".hero" in found[1][1]
        assert len(found) == 2

    def test_import_in_style_block(self):
        html = "<style>@import url('theme.css');</style>"
        found = sources.discover_stylesheets(html, "https://example.com/")
        assert ("url", "https://example.com/theme.css") in found


class TestReadStylesheet:
    """Tests for reading from a path or URL."""

    def test_local_file(self, temp_css_file, sample_css):
        assert sources.read_stylesheet(str(temp_css_file)) == sample_css

    def test_missing_local_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            sources.read_stylesheet(str(tmp_path / "missing.css"))

    def test_css_url(self, fake_web):
        fake_web["https://example.com/site.css"] = FakeResponse("a{color:#111}")
        assert sources.read_stylesheet("https://example.com/site.css") == "a{color:#111}"

    def test_html_url_combines_sources(self, fake_web, sample_html_page):
        fake_web["https://example.com/"] = FakeResponse(sample_html_page, "text/html; charset=utf-8")
        fake_web["https://example.com/css/site.css"] = FakeResponse("body{color:#111}")
        text = sources.read_stylesheet("https://example.com/")
        assert "/* Source: https://example.com/css/site.css */\nbody{color:#111}" in text
        assert ".hero { color: #0066cc; padding: 24px; }" in text
        assert text.index("site.css") < text.index(".hero")

    def test_failed_stylesheet_is_skipped(self, fake_web, sample_html_page, capsys):
        fake_web["https://example.com/"] = FakeResponse(sample_html_page, "text/html")
        text = sources.read_stylesheet("https://example.com/")
        assert ".hero" in text
        assert "Warning: Could not fetch https://example.com/css/site.css" in capsys.readouterr().out

    def test_unreachable_url(self, fake_web, capsys):
        assert sources.read_stylesheet("https://example.com/gone.css") is None
        assert "Warning" in capsys.readouterr().out

    def test_http_error(self, fake_web):
        fake_web["https://example.com/404.css"] = FakeResponse("not found", status=404)
        assert sources.read_stylesheet("https://example.com/404.css") is None

    def test_html_without_css(self, fake_web):
        fake_web["https://example.com/"] = FakeResponse("<!DOCTYPE html><html><body></body></html>", "")
        assert sources.read_stylesheet("https://example.com/") is None


class TestMissingDependency:
    """The library raises on a missing dependency instead of exiting."""

    def test_import_error_propagates(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "bs4", None)
        try:
            with pytest.raises(ImportError):
                importlib.reload(sources)
        finally:
            monkeypatch.undo()
            importlib.reload(sources)
