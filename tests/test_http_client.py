"""Tests for the HTTP helpers."""

from types import SimpleNamespace

import pytest
import requests
import scraper.http_client as http_client
from scraper.http_client import create_session, fetch_text

URL = "https://www.example.com/post/a"


def test_create_session_headers_and_no_retries():
    """Test the session carries the user agent and never retries."""
    session = create_session("feedsmith-test", pool_size=4)

    assert session.headers['User-Agent'] == "feedsmith-test"
    adapter = session.get_adapter("https://www.example.com")
    assert adapter.max_retries.total == 0
    session.close()


def test_fetch_text_returns_body(fake_session_factory):
    """Test a 200 response is decoded and the response is closed."""
    session = fake_session_factory({URL: "<p>Olá</p>"})

    assert fetch_text(session, URL, timeout=5) == "<p>Olá</p>"
    assert session.responses[0].closed


def test_fetch_text_raises_on_http_error(fake_session_factory):
    """Test a non-2xx status raises HTTPError."""
    session = fake_session_factory({URL: (503, "busy")})

    with pytest.raises(requests.exceptions.HTTPError):
        fetch_text(session, URL, timeout=5)


def test_fetch_text_reads_utf8_without_charset(fake_session_factory):
    """Test bodies without a declared charset are read as UTF-8 first."""
    session = fake_session_factory({URL: "Ação".encode("utf-8")})

    assert fetch_text(session, URL, timeout=5) == "Ação"


def test_fetch_text_falls_back_to_cp1252(fake_session_factory):
    """Test non-UTF-8 bodies without a charset still decode."""
    session = fake_session_factory({URL: "Ação".encode("cp1252")})

    assert fetch_text(session, URL, timeout=5) == "Ação"


def test_fetch_text_enforces_overall_deadline(fake_session_factory, monkeypatch):
    """Test a body trickling in past the timeout is cut off as a timeout."""
    clock = iter([0.0, 1.0, 2.0, 30.0])
    monkeypatch.setattr(http_client, "time", SimpleNamespace(monotonic=lambda: next(clock)))
    session = fake_session_factory({URL: "x" * (http_client.CHUNK_SIZE * 4)})

    with pytest.raises(requests.exceptions.Timeout):
        fetch_text(session, URL, timeout=15)
    assert session.responses[0].closed
