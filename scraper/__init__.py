"""Scraper package initialization."""

from .models import ArticleRecord, ScrapeResult, ScrapeStatus, SitemapEntry
from .http_client import create_session, fetch_text
from .sitemap_reader import SitemapError, fetch_post_urls, parse_sitemap, filter_post_urls
from .article_scraper import ArticleScraper, parse_article
from .batch_runner import run_batches

__all__ = [
    'ArticleRecord',
    'ScrapeResult',
    'ScrapeStatus',
    'SitemapEntry',
    'create_session',
    'fetch_text',
    'SitemapError',
    'fetch_post_urls',
    'parse_sitemap',
    'filter_post_urls',
    'ArticleScraper',
    'parse_article',
    'run_batches'
]
