"""RSS 2.0 feed rendering."""

from datetime import datetime
from typing import List, Optional, Sequence
from config.settings import FeedSettings
from feeds.ordering import sort_by_published
from feeds.renderer import render
from scraper.models import ArticleRecord
from utils.dates import utc_now
from utils.logger import get_logger

logger = get_logger(__name__)


def select_rss_items(records: Sequence[ArticleRecord], max_items: int) -> List[ArticleRecord]:
    """The `max_items` most recent records; undated records fill the tail."""
    return sort_by_published(records)[:max_items]


def build_rss(
    records: Sequence[ArticleRecord],
    settings: FeedSettings,
    now: Optional[datetime] = None
) -> str:
    """
    Render the RSS 2.0 document.

    Items without a publish date are kept and simply have no <pubDate>.

    Args:
        records: Scraped article records (any order)
        settings: Run configuration (channel metadata, item cap)
        now: Build time for <lastBuildDate> (default: current UTC time)

    Returns:
        RSS XML as a string
    """
    items = select_rss_items(records, settings.max_rss_items)

    channel = {
        'title': settings.publication_name,
        'link': settings.site_link,
        'description': settings.channel_description or settings.publication_name,
        'language': settings.rss_language,
        'ttl': settings.rss_ttl,
        'self_url': settings.feed_self_url,
        'image_url': settings.channel_image_url,
        'image_width': settings.channel_image_width,
        'image_height': settings.channel_image_height,
    }

    logger.info(f"Rendering RSS feed with {len(items)} items")
    return render('rss.xml.j2', channel=channel, items=items, build_date=now or utc_now())
