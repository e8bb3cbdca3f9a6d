"""Read a stylesheet from a local path or from a URL (CSS or an HTML page)."""

import re
from pathlib import Path
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup


IMPORT_URL_RE = re.compile(r'@import\s+url\(["\']?([^"\')]+)["\']?\)')


def is_url(source):
    return urlparse(str(source)).scheme in ("http", "https")


def fetch_url(url, timeout=30):
    """Fetch a URL; returns ``(text, content_type)`` or ``None`` on failure."""
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        return resp.text, resp.headers.get("Content-Type", "")
    except requests.RequestException as e:
        print(f"  Warning: Could not fetch {url}: {e}")
        return None


def looks_like_html(text, content_type=""):
    if "html" in content_type.lower():
        return True
    head = text.lstrip()[:200].lower()
    return head.startswith("<!doctype html") or head.startswith("<html")


def discover_stylesheets(html, page_url):
    """Linked stylesheet URLs plus inline ``<style>`` text, in document order.

    Returns a list of ``(kind, value)`` where kind is ``"url"`` or ``"inline"``.
    """
    soup = BeautifulSoup(html, "html.parser")
    found = []

    for tag in soup.find_all(["link", "style"]):
        if tag.name == "link":
            rel = [r.lower() for r in tag.get("rel", [])]
            href = tag.get("href")
            if "stylesheet" in rel and href:
                found.append(("url", urljoin(page_url, href)))
            continue
        text = tag.string or ""
        for match in IMPORT_URL_RE.finditer(text):
            found.append(("url", urljoin(page_url, match.group(1))))
        if text.strip():
            found.append(("inline", text))

    return found


def download_css(page_url, stylesheets):
    """Fetch every discovered stylesheet and concatenate them with source banners."""
    combined = []
    urls = [value for kind, value in stylesheets if kind == "url"]
    fetched = 0
    for kind, value in stylesheets:
        if kind == "inline":
            combined.append(f"/* Source: {page_url} <style> */\n{value}")
            continue
        fetched += 1
        print(f"  [{fetched}/{len(urls)}] Downloading: {value}")
        result = fetch_url(value)
        if result:
            combined.append(f"/* Source: {value} */\n{result[0]}")
    return "\n\n".join(combined)


def read_stylesheet(source):
    """Return the stylesheet text for a file path or an http(s) URL.

    Returns ``None`` when a URL cannot be fetched or an HTML page yields no
    CSS. A missing local file raises :class:`FileNotFoundError`.
    """
    if not is_url(source):
        return Path(source).read_text(encoding="utf-8", errors="replace")

    result = fetch_url(source)
    if result is None:
        return None
    text, content_type = result
    if not looks_like_html(text, content_type):
        return text

    print(f"Fetching page: {source}")
    stylesheets = discover_stylesheets(text, source)
    if not stylesheets:
        print("No CSS found on the page")
        return None
    return download_css(source, stylesheets) or None
