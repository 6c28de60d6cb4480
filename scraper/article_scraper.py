"""Article metadata scraping: title, description, dates and images of a post page."""

import json
from typing import Any, Iterator, List, Optional
from urllib.parse import urljoin
import requests
from bs4 import BeautifulSoup
from config.settings import FeedSettings
from scraper.http_client import fetch_text
from scraper.models import ArticleRecord, ScrapeResult, ScrapeStatus
from utils.dates import parse_timestamp
from utils.logger import get_logger
from utils.text import collapse_whitespace, truncate_words

logger = get_logger(__name__)

PRIMARY_IMAGE_META = (
    ('property', 'og:image:secure_url'),
    ('property', 'og:image'),
    ('name', 'twitter:image'),
)


def _meta_content(soup: BeautifulSoup, key: str) -> Optional[str]:
    """Content of <meta property=key> or <meta name=key>, whichever comes first."""
    for attr in ('property', 'name'):
        tag = soup.find('meta', attrs={attr: key})
        if tag and tag.get('content'):
            content = collapse_whitespace(tag['content'])
            if content:
                return content
    return None


def _first_text(soup: BeautifulSoup, tag_name: str) -> Optional[str]:
    tag = soup.find(tag_name)
    if tag is None:
        return None
    text = collapse_whitespace(tag.get_text(' '))
    return text or None


def _absolute_url(base_url: str, ref: Optional[str]) -> Optional[str]:
    """Resolve ref against the page URL; None for data: URIs and other non-http(s) schemes."""
    if not ref:
        return None
    ref = ref.strip()
    if not ref or ref.startswith('data:'):
        return None
    absolute = urljoin(base_url, ref)
    if not absolute.startswith(('http://', 'https://')):
        return None
    return absolute


def _iter_json_ld(soup: BeautifulSoup) -> Iterator[dict]:
    """Yield every JSON-LD object on the page, flattening lists and @graph."""
    for script in soup.find_all('script', attrs={'type': 'application/ld+json'}):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except ValueError:
            logger.debug("Skipping malformed JSON-LD block")
            continue

        stack: List[Any] = [data]
        while stack:
            node = stack.pop(0)
            if isinstance(node, list):
                stack[0:0] = node
            elif isinstance(node, dict):
                yield node
                graph = node.get('@graph')
                if isinstance(graph, list):
                    stack[0:0] = graph


def _json_ld_value(soup: BeautifulSoup, key: str) -> Optional[str]:
    for node in _iter_json_ld(soup):
        value = node.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _img_ref(img) -> Optional[str]:
    ref = img.get('src') or img.get('data-src')
    if ref:
        return ref
    srcset = img.get('srcset') or img.get('data-srcset')
    if srcset:
        first = srcset.split(',')[0].strip()
        return first.split(' ')[0] if first else None
    return None


def _content_images(soup: BeautifulSoup, base_url: str) -> List[str]:
    """Absolute, unique image URLs inside the article body, in document order."""
    container = soup.find('article') or soup.find('main') or soup.body or soup

    images = []
    seen = set()
    for img in container.find_all('img'):
        url = _absolute_url(base_url, _img_ref(img))
        if url and url not in seen:
            seen.add(url)
            images.append(url)
    return images


def _resolve_title(soup: BeautifulSoup, url: str) -> str:
    return (
        _meta_content(soup, 'og:title')
        or _first_text(soup, 'h1')
        or _first_text(soup, 'title')
        or url
    )


def _resolve_description(soup: BeautifulSoup, max_length: int) -> Optional[str]:
    meta = _meta_content(soup, 'description') or _meta_content(soup, 'og:description')
    if meta:
        return meta

    container = soup.find('article') or soup.find('main') or soup
    for p in container.find_all('p'):
        text = collapse_whitespace(p.get_text(' '))
        if text:
            return truncate_words(text, max_length)
    return None


def _resolve_published(soup: BeautifulSoup):
    candidates = (
        _meta_content(soup, 'article:published_time'),
        _json_ld_value(soup, 'datePublished'),
        _time_datetime(soup),
    )
    return _first_timestamp(candidates)


def _resolve_modified(soup: BeautifulSoup):
    candidates = (
        _meta_content(soup, 'article:modified_time'),
        _json_ld_value(soup, 'dateModified'),
        _meta_content(soup, 'og:updated_time'),
    )
    return _first_timestamp(candidates)


def _time_datetime(soup: BeautifulSoup) -> Optional[str]:
    tag = soup.find('time', attrs={'datetime': True})
    return tag['datetime'].strip() if tag else None


def _first_timestamp(candidates):
    for value in candidates:
        parsed = parse_timestamp(value)
        if parsed is not None:
            return parsed
    return None


def _resolve_primary_image(soup: BeautifulSoup, url: str, content_images: List[str]) -> Optional[str]:
    for attr, key in PRIMARY_IMAGE_META:
        tag = soup.find('meta', attrs={attr: key})
        image = _absolute_url(url, tag.get('content')) if tag else None
        if image:
            return image

    link = soup.find('link', rel='image_src')
    image = _absolute_url(url, link.get('href')) if link else None
    if image:
        return image

    return content_images[0] if content_images else None


def parse_article(
    url: str,
    html: str,
    max_images: int = 10,
    description_max_length: int = 220
) -> ArticleRecord:
    """
    Extract article metadata from a page's HTML.

    Each field takes the first non-empty signal:
    - title: og:title, first <h1>, <title>, the URL itself
    - description: meta description, og:description, first paragraph (truncated)
    - published: article:published_time, JSON-LD datePublished, <time datetime>
    - modified: article:modified_time, JSON-LD dateModified, og:updated_time
    - primary image: og:image:secure_url, og:image, twitter:image,
      <link rel="image_src">, first content image

    Args:
        url: Page URL, used to resolve relative references
        html: Page HTML
        max_images: Maximum number of secondary images kept
        description_max_length: Length cap for paragraph-derived descriptions

    Returns:
        ArticleRecord for the page
    """
    soup = BeautifulSoup(html, 'html.parser')

    content_images = _content_images(soup, url)

    return ArticleRecord(
        url=url,
        title=_resolve_title(soup, url),
        description=_resolve_description(soup, description_max_length),
        published_at=_resolve_published(soup),
        modified_at=_resolve_modified(soup),
        primary_image=_resolve_primary_image(soup, url, content_images),
        images=tuple(content_images[:max_images]),
    )


class ArticleScraper:
    """Fetches post pages and turns them into ArticleRecords without ever raising."""

    def __init__(self, settings: FeedSettings, session: requests.Session):
        self.settings = settings
        self.session = session

    def scrape(self, url: str) -> ScrapeResult:
        """
        Scrape one post.

        Failures never propagate: a timeout, an HTTP error status, a transport
        error or a parse error each yield a degraded result whose record has
        the URL as title and no optional fields.

        Args:
            url: Absolute post URL

        Returns:
            ScrapeResult
        """
        try:
            html = fetch_text(self.session, url, self.settings.request_timeout)
        except requests.exceptions.Timeout as e:
            return self._degraded(url, ScrapeStatus.TIMEOUT, str(e))
        except requests.exceptions.HTTPError as e:
            return self._degraded(url, ScrapeStatus.HTTP_ERROR, str(e))
        except requests.exceptions.RequestException as e:
            return self._degraded(url, ScrapeStatus.NETWORK_ERROR, str(e))

        try:
            record = parse_article(
                url,
                html,
                max_images=self.settings.max_images_per_page,
                description_max_length=self.settings.description_max_length,
            )
        except Exception as e:
            return self._degraded(url, ScrapeStatus.PARSE_ERROR, f"{type(e).__name__}: {e}")

        logger.debug(f"Scraped {url}: title={record.title[:60]!r} published={record.published_at}")
        return ScrapeResult(record=record)

    @staticmethod
    def _degraded(url: str, status: ScrapeStatus, reason: str) -> ScrapeResult:
        logger.warning(f"Scrape of {url} degraded ({status.value}): {reason[:200]}")
        return ScrapeResult.degraded(url, status, reason)
