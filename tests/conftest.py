"""Test configuration and fixtures."""

from datetime import datetime, timezone
from pathlib import Path

import pytest
import requests

from config.settings import FeedSettings


class FakeResponse:
    """Just enough of requests.Response for fetch_text()."""

    def __init__(self, url, text="", status_code=200, encoding="utf-8"):
        self.url = url
        self.text = text
        self.status_code = status_code
        self.encoding = encoding
        self.closed = False

    def iter_content(self, chunk_size=1):
        body = self.text.encode(self.encoding or "utf-8") if isinstance(self.text, str) else self.text
        for start in range(0, len(body), chunk_size):
            yield body[start:start + chunk_size]

    def close(self):
        self.closed = True

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error for url: {self.url}", response=self)


class FakeSession:
    """
    Session stand-in serving canned pages.

    `pages` maps URL -> body text, raw bytes without a charset, (status, body)
    tuple, or an exception instance to raise.
    """

    def __init__(self, pages):
        self.pages = pages
        self.requested = []
        self.responses = []
        self.closed = False

    def get(self, url, timeout=None, allow_redirects=True, stream=False):
        self.requested.append(url)
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        if page is None:
            response = FakeResponse(url, "Not Found", 404)
        elif isinstance(page, tuple):
            status, body = page
            response = FakeResponse(url, body, status)
        elif isinstance(page, bytes):
            # no charset announced by the server
            response = FakeResponse(url, page, encoding=None)
        else:
            response = FakeResponse(url, page)
        self.responses.append(response)
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def now():
    """Fixed reference time for window and ordering checks."""
    return datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings(tmp_path: Path):
    """Settings pointing at example.com and writing into a temp directory."""
    return FeedSettings(
        sitemap_url="https://www.example.com/sitemap.xml",
        site_link="https://www.example.com",
        post_url_pattern=r"^https://www\.example\.com/post/",
        publication_name="Example News",
        channel_description="Example News & Views",
        rss_language="en-US",
        news_language="en",
        feed_self_url="https://feeds.example.com/rss.xml",
        max_rss_items=50,
        news_window_hours=48,
        request_timeout=5,
        concurrency=2,
        batch_delay=0,
        max_images_per_page=3,
        output_dir=tmp_path,
    )


@pytest.fixture
def fake_session_factory():
    return FakeSession


@pytest.fixture
def article_html():
    """A post page carrying every metadata signal."""
    return """<!DOCTYPE html>
<html>
<head>
  <title>Page Title | Example</title>
  <meta property="og:title" content="Rates &amp; Bonds: what changed">
  <meta name="description" content="Meta description text.">
  <meta property="og:description" content="OG description text.">
  <meta property="article:published_time" content="2026-10-18T02:00:00Z">
  <meta property="article:modified_time" content="2026-10-18T05:30:00+00:00">
  <meta property="og:image:secure_url" content="https://cdn.example.com/cover-secure.jpg">
  <meta property="og:image" content="/img/cover.jpg">
</head>
<body>
  <h1>Heading Title</h1>
  <article>
    <p>First paragraph.</p>
    <img src="/img/one.jpg">
    <img src="https://cdn.example.com/two.jpg">
    <img src="/img/one.jpg">
    <img data-src="lazy/three.jpg">
    <img srcset="/img/four-320.jpg 320w, /img/four-640.jpg 640w">
    <img src="data:image/png;base64,AAAA">
  </article>
</body>
</html>"""


@pytest.fixture
def sitemap_xml():
    return """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://www.example.com/post/a</loc><lastmod>2026-10-18</lastmod></url>
  <url><loc>https://www.example.com/post/b</loc></url>
  <url><loc>https://www.example.com/about</loc></url>
  <url><loc>https://www.example.com/post/a</loc></url>
</urlset>"""
