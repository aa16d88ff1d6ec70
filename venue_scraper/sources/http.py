from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from bs4 import BeautifulSoup

from .. import config
from .profiles import profile_for, requires_js
from .types import SiteDocument

logger = logging.getLogger(__name__)


@dataclass
class HttpResult:
    url: str
    status_code: int
    text: str


def http_get(
    url: str,
    *,
    render_js: bool = False,
    wait_for: Optional[str] = None,
    timeout_s: int = config.TIMEOUT_S,
) -> HttpResult:
    logger.info("http_get(): render_js=%s url=%s", render_js, url)

    if not render_js:
        r = requests.get(url, timeout=timeout_s, headers={"User-Agent": config.USER_AGENT})
        r.raise_for_status()
        return HttpResult(url=r.url, status_code=r.status_code, text=r.text)

    # --- Playwright branch ---
    from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
    from playwright.sync_api import sync_playwright

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        try:
            page = browser.new_page(user_agent=config.USER_AGENT)
            page.goto(url, wait_until="domcontentloaded", timeout=timeout_s * 1000)

            if wait_for:
                try:
                    page.wait_for_selector(wait_for, timeout=5000)
                except PlaywrightTimeoutError:
                    logger.info("http_get(): no %r after 5s, proceeding anyway url=%s", wait_for, url)

            # lazy-loaded listings only fill in after scrolling
            for _ in range(5):
                page.mouse.wheel(0, 2000)
                page.wait_for_timeout(300)

            try:
                page.wait_for_load_state("networkidle", timeout=timeout_s * 1000)
            except PlaywrightTimeoutError:
                # some pages never go fully idle
                pass

            html = page.content()
            final_url = page.url
        finally:
            browser.close()

    logger.info("http_get(): Playwright used. final_url=%s html_len=%d", final_url, len(html))
    return HttpResult(url=final_url, status_code=200, text=html)


def fetch_document(url: str, *, force_js: bool = False) -> SiteDocument:
    """
    Fetch and parse one listing page.

    Sites that build their listing client-side are always rendered;
    everything else gets a plain GET unless `force_js` is set.
    """
    profile = profile_for(url)
    render_js = force_js or requires_js(url)
    res = http_get(url, render_js=render_js, wait_for=profile.wait_for or profile.event_container)
    return SiteDocument(
        # extraction resolves links against the page we asked for
        url=url,
        document=BeautifulSoup(res.text or "", "html.parser"),
        extra={"final_url": res.url, "status_code": res.status_code, "render_js": render_js},
    )
