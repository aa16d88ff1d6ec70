# tests/test_multi_source.py
"""
Dispatch + aggregation (venue_scraper/sources/registry.py, multi_source.py).

The fetch layer is patched out; documents are built from HTML fixtures.
"""
from __future__ import annotations

from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup

from venue_scraper.sources import multi_source
from venue_scraper.sources.adapters.catalog_shop import CatalogShopExtractor
from venue_scraper.sources.adapters.dual_section import DualSectionExtractor
from venue_scraper.sources.generic import GenericExtractor
from venue_scraper.sources.multi_source import aggregate, fetch_documents, run
from venue_scraper.sources.profiles import profile_for
from venue_scraper.sources.registry import as_document, dispatch, get_extractor
from venue_scraper.sources.types import SiteDocument


# ---------------------------------------------------------------------------
# HTML fixtures
# ---------------------------------------------------------------------------

GENERIC_HTML = """
<article>
  <h2>Open Air</h2>
  <time>16. Mai 2025</time>
  <p>Draussen</p>
  <a href="/e/1">Details</a>
</article>
"""

SHOP_HTML = """
<div class="product">
  <a href="/product/gig-night"><div class="product_name">GIG NIGHT - 12.09.2025</div><h5>€ 15.00</h5></a>
</div>
"""


def _doc(url: str, html: str) -> SiteDocument:
    return SiteDocument(url=url, document=BeautifulSoup(html, "html.parser"))


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class TestDispatch:
    @pytest.mark.parametrize("url, cls", [
        ("https://artilleryproductions.bigcartel.com/", CatalogShopExtractor),
        ("https://diebaeckerei.at/programm/", DualSectionExtractor),
        ("https://www.treibhaus.at/programm", GenericExtractor),
        ("https://venue.example/", GenericExtractor),
    ])
    def test_extractor_selection(self, url, cls):
        assert isinstance(get_extractor(profile_for(url)), cls)

    def test_accepts_raw_html(self):
        events = dispatch(GENERIC_HTML, "https://venue.example/programm")
        assert len(events) == 1
        assert events[0].url == "https://venue.example/e/1"

    def test_specialized_path(self):
        events = dispatch(SHOP_HTML, "https://artilleryproductions.bigcartel.com/")
        assert events[0].date == "2025-09-12"
        assert events[0].description == "Price: € 15.00"

    def test_zero_events_is_empty_list(self):
        assert dispatch("<html><body></body></html>", "https://venue.example/") == []

    def test_invalid_document_handle_raises(self):
        with pytest.raises(TypeError):
            as_document(None)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

class TestAggregate:
    def test_failing_site_is_isolated(self):
        sites = [
            _doc("https://venue.example/programm", GENERIC_HTML),
            SiteDocument(url="https://broken.example/", document=None),
            _doc("https://artilleryproductions.bigcartel.com/", SHOP_HTML),
        ]
        result = aggregate(sites)

        assert [e.title for e in result.events] == ["Open Air", "GIG NIGHT - 12.09.2025"]
        assert len(result.failures) == 1
        assert result.failures[0].url == "https://broken.example/"
        assert "TypeError" in result.failures[0].error

    def test_no_deduplication(self):
        sites = [
            _doc("https://a.example/events", GENERIC_HTML),
            _doc("https://b.example/events", GENERIC_HTML),
        ]
        result = aggregate(sites)

        assert result.count == 2
        a, b = result.events
        assert (a.title, a.date, a.venue) == (b.title, b.date, b.venue)
        assert a.id != b.id

    def test_non_string_url_still_recorded(self):
        result = aggregate([SiteDocument(url=123, document="<p/>")])
        assert result.events == []
        assert result.failures[0].url == "123"

    def test_empty_input(self):
        result = aggregate([])
        assert result.events == []
        assert result.failures == []

    def test_extractor_crash_becomes_failure(self):
        sites = [_doc("https://venue.example/", GENERIC_HTML)]
        with patch.object(multi_source, "dispatch", side_effect=RuntimeError("boom")):
            result = aggregate(sites)
        assert result.events == []
        assert result.failures[0].error == "RuntimeError: boom"


# ---------------------------------------------------------------------------
# Fetching (collaborator patched)
# ---------------------------------------------------------------------------

def _fake_fetch(url, force_js=False):
    if "down" in url:
        raise ConnectionError("connection refused")
    return _doc(url, GENERIC_HTML)


class TestFetchDocuments:
    def test_order_kept_and_failures_reported(self):
        urls = ["https://a.example/", "https://down.example/", "https://c.example/"]
        with patch.object(multi_source, "fetch_document", side_effect=_fake_fetch):
            docs, failures = fetch_documents(urls, workers=3)

        assert [d.url for d in docs] == ["https://a.example/", "https://c.example/"]
        assert [f.url for f in failures] == ["https://down.example/"]
        assert "ConnectionError" in failures[0].error

    def test_no_urls(self):
        assert fetch_documents([]) == ([], [])

    def test_run_merges_fetch_and_extract(self):
        urls = ["https://a.example/", "https://down.example/"]
        with patch.object(multi_source, "fetch_document", side_effect=_fake_fetch):
            result = run(urls)

        assert result.count == 1
        assert result.events[0].url == "https://a.example/e/1"
        assert [f.url for f in result.failures] == ["https://down.example/"]
