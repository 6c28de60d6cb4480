"""Bounded-concurrency scraping of the post list."""

import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence
from scraper.models import ScrapeResult, ScrapeStatus
from utils.logger import get_logger, log_milestone

logger = get_logger(__name__)


def _chunks(items: Sequence[str], size: int) -> List[Sequence[str]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


def _safe_call(scrape: Callable[[str], ScrapeResult], url: str) -> ScrapeResult:
    try:
        return scrape(url)
    except Exception as e:
        # scrape() is not supposed to raise; keep the run alive if it does
        logger.error(f"Unexpected scrape failure for {url}: {type(e).__name__}: {e}")
        return ScrapeResult.degraded(url, ScrapeStatus.NETWORK_ERROR, f"{type(e).__name__}: {e}")


def run_batches(
    urls: Sequence[str],
    scrape: Callable[[str], ScrapeResult],
    concurrency: int = 8,
    delay: float = 0.0,
    sleep: Callable[[float], None] = time.sleep
) -> List[ScrapeResult]:
    """
    Scrape URLs in sequential groups of `concurrency`, each group in parallel.

    A group is fully settled before the next one is dispatched, so at most
    `concurrency` requests are outstanding at any time. `delay` seconds are
    slept between groups. Results are returned in input order.

    Args:
        urls: URLs to scrape
        scrape: Callable turning a URL into a ScrapeResult
        concurrency: Group size and worker count
        delay: Pause between groups in seconds
        sleep: Sleep function (injectable for tests)

    Returns:
        One ScrapeResult per input URL, in input order
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")

    if not urls:
        logger.warning("No URLs to scrape")
        return []

    groups = _chunks(list(urls), concurrency)
    logger.info(f"Scraping {len(urls)} posts in {len(groups)} groups of up to {concurrency}")

    results: List[ScrapeResult] = []
    start_time = time.time()

    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        for index, group in enumerate(groups, start=1):
            # map() yields in submission order, regardless of completion order
            settled = list(executor.map(lambda url: _safe_call(scrape, url), group))
            results.extend(settled)

            logger.debug(f"Group {index}/{len(groups)} done ({len(results)}/{len(urls)} posts)")

            if delay > 0 and index < len(groups):
                sleep(delay)

    degraded = Counter(r.status.value for r in results if not r.ok)
    if degraded:
        summary = ", ".join(f"{status}={count}" for status, count in sorted(degraded.items()))
        logger.warning(f"{sum(degraded.values())}/{len(results)} posts degraded: {summary}")

    log_milestone(f"Scraped {len(results)} posts", time.time() - start_time)
    return results
