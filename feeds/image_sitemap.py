"""Image sitemap rendering."""

from typing import List, Sequence
from feeds.renderer import render
from scraper.models import ArticleRecord
from utils.logger import get_logger

logger = get_logger(__name__)


def pages_with_images(records: Sequence[ArticleRecord]) -> List[ArticleRecord]:
    return [r for r in records if r.images]


def build_image_sitemap(records: Sequence[ArticleRecord]) -> str:
    """
    Render an image sitemap: one <url> per page that has images, with
    <lastmod> when the page has a modified or published date.
    """
    pages = pages_with_images(records)
    logger.info(f"Rendering image sitemap with {len(pages)} pages")
    return render('image-sitemap.xml.j2', pages=pages)
