from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple

from .. import config
from ..models import AggregateResult, NormalizedEvent, SiteFailure
from .http import fetch_document
from .profiles import DEFAULT_SITE_URLS
from .registry import dispatch
from .types import EventIdFactory, SiteDocument

logger = logging.getLogger(__name__)


def _describe(e: BaseException) -> str:
    return f"{type(e).__name__}: {e}"


def aggregate(sites: Iterable[SiteDocument]) -> AggregateResult:
    """
    Run extraction over already-fetched pages and merge the results.

    Events keep site order and per-site candidate order. Nothing is
    deduplicated: two sites listing the same show yield two events.
    A site whose extraction raises is recorded in `failures`; the others
    are unaffected and this function itself never raises.
    """
    ids = EventIdFactory()
    events: List[NormalizedEvent] = []
    failures: List[SiteFailure] = []

    for site in sites:
        url = str(getattr(site, "url", None) or "<unknown>")
        logger.info("[source] start url=%s", url)
        try:
            site_events = dispatch(site.document, url, ids=ids)
        except Exception as e:
            logger.warning("[source] ERROR dispatch failed url=%s: %s", url, _describe(e))
            failures.append(SiteFailure(url=url, error=_describe(e)))
            continue

        events.extend(site_events)
        logger.info("[source] done url=%s events=%d", url, len(site_events))

    logger.info("[sources] total_events=%d failures=%d", len(events), len(failures))
    return AggregateResult(events=events, failures=failures)


def fetch_documents(
    urls: Sequence[str],
    *,
    workers: int = config.WORKERS,
    force_js: bool = False,
) -> Tuple[List[SiteDocument], List[SiteFailure]]:
    """
    Fetch all listing pages concurrently.

    Returned documents keep the order of `urls`; sites that could not be
    retrieved are reported as failures instead.
    """
    if not urls:
        return [], []

    with ThreadPoolExecutor(max_workers=max(1, min(workers, len(urls)))) as pool:
        futures = [pool.submit(fetch_document, url, force_js=force_js) for url in urls]

    docs: List[SiteDocument] = []
    failures: List[SiteFailure] = []
    for url, fut in zip(urls, futures):
        try:
            docs.append(fut.result())
        except Exception as e:
            logger.warning("[source] ERROR fetch failed url=%s: %s", url, _describe(e))
            failures.append(SiteFailure(url=url, error=_describe(e)))
    return docs, failures


def run(urls: Optional[Sequence[str]] = None, *, force_js: bool = False) -> AggregateResult:
    """Fetch + extract the configured sites; the batch entry point."""
    urls = list(urls or config.SITE_URLS or DEFAULT_SITE_URLS)
    logger.info("[sources] count=%d", len(urls))
    for u in urls:
        logger.info("[sources] - %s", u)

    docs, fetch_failures = fetch_documents(urls, force_js=force_js)
    result = aggregate(docs)
    if fetch_failures:
        result = AggregateResult(
            events=result.events,
            failures=fetch_failures + result.failures,
            timestamp=result.timestamp,
        )
    return result
