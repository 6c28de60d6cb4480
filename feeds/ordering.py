"""Ordering of article records by publish date."""

from typing import Iterable, List
from scraper.models import ArticleRecord


def sort_by_published(records: Iterable[ArticleRecord]) -> List[ArticleRecord]:
    """
    Newest first; records without a publish date go last.

    The sort is stable, so undated records (and records sharing a timestamp)
    keep their input order.
    """
    records = list(records)
    dated = [r for r in records if r.published_at is not None]
    undated = [r for r in records if r.published_at is None]
    dated.sort(key=lambda r: r.published_at, reverse=True)
    return dated + undated
