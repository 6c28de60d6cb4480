"""Records produced by the sitemap reader and the article scraper."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class SitemapEntry:
    """One <url> entry of a sitemap urlset."""
    loc: str
    lastmod: Optional[str] = None


@dataclass(frozen=True)
class ArticleRecord:
    """Metadata scraped from a single post page."""
    url: str
    title: str
    description: Optional[str] = None
    published_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    primary_image: Optional[str] = None
    images: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.title:
            object.__setattr__(self, 'title', self.url)

    @property
    def lastmod(self) -> Optional[datetime]:
        return self.modified_at or self.published_at

    @classmethod
    def minimal(cls, url: str) -> "ArticleRecord":
        """Record carrying only the URL, used when a page could not be scraped."""
        return cls(url=url, title=url)


class ScrapeStatus(Enum):
    """Outcome of scraping a single page."""
    OK = "ok"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"


@dataclass(frozen=True)
class ScrapeResult:
    """A usable record plus how it was obtained."""
    record: ArticleRecord
    status: ScrapeStatus = ScrapeStatus.OK
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ScrapeStatus.OK

    @property
    def url(self) -> str:
        return self.record.url

    @classmethod
    def degraded(cls, url: str, status: ScrapeStatus, reason: str) -> "ScrapeResult":
        return cls(record=ArticleRecord.minimal(url), status=status, reason=reason)
