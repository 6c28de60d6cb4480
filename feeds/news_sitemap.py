"""Google News sitemap rendering."""

from datetime import datetime, timedelta
from typing import List, Optional, Sequence
from config.settings import FeedSettings
from feeds.renderer import render
from scraper.models import ArticleRecord
from utils.dates import utc_now
from utils.logger import get_logger

logger = get_logger(__name__)

# Google News accepts at most 1000 <url> entries per sitemap
NEWS_SITEMAP_LIMIT = 1000


def select_fresh(
    records: Sequence[ArticleRecord],
    window: timedelta,
    now: datetime,
    limit: int = NEWS_SITEMAP_LIMIT
) -> List[ArticleRecord]:
    """
    Records published within the trailing window, newest first, capped at `limit`.

    Records without a publish date are never considered.
    """
    cutoff = now - window
    fresh = [r for r in records if r.published_at is not None and r.published_at >= cutoff]
    fresh.sort(key=lambda r: r.published_at, reverse=True)
    return fresh[:min(limit, NEWS_SITEMAP_LIMIT)]


def build_news_sitemap(
    records: Sequence[ArticleRecord],
    settings: FeedSettings,
    now: Optional[datetime] = None
) -> str:
    """
    Render the news sitemap for articles published in the last `news_window_hours`.

    Args:
        records: Scraped article records (any order)
        settings: Run configuration (publication name, language, window)
        now: Reference time for the window (default: current UTC time)

    Returns:
        News sitemap XML as a string
    """
    window = timedelta(hours=settings.news_window_hours)
    articles = select_fresh(records, window, now or utc_now(), settings.news_max_entries)

    logger.info(f"Rendering news sitemap with {len(articles)} articles (<= {settings.news_window_hours:g}h)")
    return render(
        'sitemap-news.xml.j2',
        articles=articles,
        publication_name=settings.publication_name,
        language=settings.news_language,
    )
