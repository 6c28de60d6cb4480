"""Main CLI entry point for feedsmith."""

import sys
import argparse
import dataclasses
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional
import requests
from config import FeedSettings, load_settings
from utils import setup_logger, get_logger, write_text_file, utc_now
from scraper import ArticleScraper, create_session, fetch_post_urls, run_batches
from feeds import build_rss, build_news_sitemap, build_image_sitemap, select_fresh, select_rss_items, pages_with_images

logger = get_logger(__name__)

RSS_FILE = "rss.xml"
NEWS_SITEMAP_FILE = "sitemap-news.xml"
IMAGE_SITEMAP_FILE = "image-sitemap.xml"


@dataclass(frozen=True)
class PipelineSummary:
    """Counts reported at the end of a run."""
    posts: int
    degraded: int
    rss_items: int
    news_articles: int
    image_pages: Optional[int]
    window_hours: float

    def line(self) -> str:
        text = (
            f"{RSS_FILE}: {self.rss_items} items | "
            f"{NEWS_SITEMAP_FILE}: {self.news_articles} articles (<= {self.window_hours:g}h)"
        )
        if self.image_pages is not None:
            text += f" | {IMAGE_SITEMAP_FILE}: {self.image_pages} pages"
        return text


def run_pipeline(
    settings: FeedSettings,
    session: Optional[requests.Session] = None,
    now: Optional[datetime] = None
) -> PipelineSummary:
    """
    Sitemap -> scrape -> render -> write, in that order.

    Args:
        settings: Run configuration
        session: Optional requests session (one is created and closed if None)
        now: Reference time for lastBuildDate and the news window

    Returns:
        PipelineSummary of what was written

    Raises:
        SitemapError: If the sitemap cannot be fetched or parsed
        OSError: If an output file cannot be written
    """
    now = now or utc_now()
    own_session = session is None
    if own_session:
        session = create_session(settings.user_agent, pool_size=settings.concurrency)

    try:
        urls = fetch_post_urls(
            settings.sitemap_url,
            settings.post_url_pattern,
            session=session,
            timeout=settings.request_timeout,
        )

        scraper = ArticleScraper(settings, session)
        results = run_batches(
            urls,
            scraper.scrape,
            concurrency=settings.concurrency,
            delay=settings.batch_delay,
        )
    finally:
        if own_session:
            session.close()

    records = [r.record for r in results]
    output_dir = Path(settings.output_dir)

    write_text_file(build_rss(records, settings, now=now), output_dir / RSS_FILE)
    write_text_file(build_news_sitemap(records, settings, now=now), output_dir / NEWS_SITEMAP_FILE)

    image_pages = None
    if settings.enable_image_sitemap:
        write_text_file(build_image_sitemap(records), output_dir / IMAGE_SITEMAP_FILE)
        image_pages = len(pages_with_images(records))

    window = timedelta(hours=settings.news_window_hours)
    return PipelineSummary(
        posts=len(results),
        degraded=sum(1 for r in results if not r.ok),
        rss_items=len(select_rss_items(records, settings.max_rss_items)),
        news_articles=len(select_fresh(records, window, now, settings.news_max_entries)),
        image_pages=image_pages,
        window_hours=settings.news_window_hours,
    )


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="feedsmith - build RSS, news sitemap and image sitemap from a site's sitemap.xml",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build feeds with config/config.yaml plus environment overrides
  python main.py

  # Write into a different directory, without the image sitemap
  python main.py -o public --no-image-sitemap

  # Point at another site
  SOURCE_SITEMAP=https://example.com/sitemap.xml POST_URL_PATTERN='/blog/' python main.py
        """
    )
    parser.add_argument(
        '-c', '--config',
        help='Path to config YAML (default: config/config.yaml)'
    )
    parser.add_argument(
        '-o', '--output-dir',
        help='Directory for rss.xml, sitemap-news.xml and image-sitemap.xml'
    )
    parser.add_argument(
        '--no-image-sitemap',
        action='store_true',
        help='Skip image-sitemap.xml'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging (DEBUG level)'
    )

    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    overrides = {}
    if args.output_dir:
        overrides['output_dir'] = Path(args.output_dir)
    if args.no_image_sitemap:
        overrides['enable_image_sitemap'] = False
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    log_level = 'DEBUG' if args.verbose else settings.log_level
    setup_logger(level=log_level, log_file=settings.log_file)

    logger.info("=== Building feeds ===")

    try:
        summary = run_pipeline(settings)
    except Exception as e:
        logger.error(f"Feed build failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if summary.degraded:
        logger.info(f"{summary.degraded}/{summary.posts} posts used fallback metadata")
    logger.info(summary.line())
    return 0


if __name__ == '__main__':
    sys.exit(main())
