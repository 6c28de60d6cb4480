"""Sitemap download and post URL extraction."""

import re
import time
import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional, Pattern, Union
import requests
from scraper.http_client import create_session, fetch_text
from scraper.models import SitemapEntry
from utils.logger import get_logger, timed_operation, log_milestone

logger = get_logger(__name__)


class SitemapError(Exception):
    """The sitemap could not be downloaded or parsed."""


def _localname(tag: str) -> str:
    return tag.split("}", 1)[-1] if "}" in tag else tag


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    for child in element:
        if _localname(child.tag) == name:
            text = (child.text or "").strip()
            return text or None
    return None


def parse_sitemap(xml_text: Union[str, bytes]) -> List[SitemapEntry]:
    """
    Parse a sitemap document into its <url> entries.

    Namespaced and un-namespaced documents are both accepted. A sitemap
    index yields no entries: nested sitemaps are not followed.

    Args:
        xml_text: Raw sitemap XML

    Returns:
        List of SitemapEntry in document order

    Raises:
        SitemapError: If the document is not well-formed XML
    """
    if isinstance(xml_text, str):
        # the XML declaration must be the very first thing in the document
        xml_text = xml_text.lstrip('\ufeff \t\r\n')

    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise SitemapError(f"Malformed sitemap XML: {e}")

    kind = _localname(root.tag)
    if kind == "sitemapindex":
        logger.warning("Sitemap is a sitemap index; nested sitemaps are not followed")
        return []
    if kind != "urlset":
        logger.warning(f"Unexpected sitemap root element <{kind}>, no entries read")
        return []

    entries = []
    for url_el in root:
        if _localname(url_el.tag) != "url":
            continue
        loc = _child_text(url_el, "loc")
        if loc:
            entries.append(SitemapEntry(loc=loc, lastmod=_child_text(url_el, "lastmod")))

    return entries


def filter_post_urls(entries: Iterable[SitemapEntry], pattern: Union[str, Pattern]) -> List[str]:
    """
    Keep absolute http(s) URLs that match the post pattern, without duplicates.

    Args:
        entries: Sitemap entries
        pattern: Regular expression (searched against the full URL)

    Returns:
        Unique matching URLs in first-seen order
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    seen = set()
    urls = []
    for entry in entries:
        url = entry.loc
        if not url.startswith(('http://', 'https://')):
            logger.debug(f"Skipping non-absolute sitemap location: {url}")
            continue
        if not regex.search(url) or url in seen:
            continue
        seen.add(url)
        urls.append(url)

    return urls


@timed_operation("Sitemap download")
def fetch_post_urls(
    sitemap_url: str,
    post_url_pattern: str,
    session: Optional[requests.Session] = None,
    timeout: float = 15
) -> List[str]:
    """
    Download the sitemap and return the unique post URLs it lists.

    Args:
        sitemap_url: URL of the sitemap.xml
        post_url_pattern: Regular expression selecting post URLs
        session: Optional requests session (a new one is created if None)
        timeout: Request timeout in seconds

    Returns:
        List of unique absolute post URLs

    Raises:
        SitemapError: If the sitemap cannot be fetched or parsed
    """
    logger.info(f"Fetching sitemap: {sitemap_url}")

    own_session = session is None
    if own_session:
        session = create_session()

    try:
        start_time = time.time()
        xml_text = fetch_text(session, sitemap_url, timeout)
        log_milestone("Downloaded sitemap", time.time() - start_time, "↓")
    except requests.exceptions.RequestException as e:
        raise SitemapError(f"GET {sitemap_url} failed: {e}")
    finally:
        if own_session:
            session.close()

    entries = parse_sitemap(xml_text)
    urls = filter_post_urls(entries, post_url_pattern)

    logger.info(f"Sitemap listed {len(entries)} URLs, {len(urls)} unique posts")
    return urls
