"""Feeds package initialization."""

from .ordering import sort_by_published
from .rss_builder import build_rss, select_rss_items
from .news_sitemap import build_news_sitemap, select_fresh, NEWS_SITEMAP_LIMIT
from .image_sitemap import build_image_sitemap, pages_with_images

__all__ = [
    'sort_by_published',
    'build_rss',
    'select_rss_items',
    'build_news_sitemap',
    'select_fresh',
    'NEWS_SITEMAP_LIMIT',
    'build_image_sitemap',
    'pages_with_images'
]
