from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class SiteProfile:
    """
    Declarative selector set for one venue's listing page.

    Selectors are CSS selector lists (soupsieve syntax). `match` is the URL
    substring that identifies the site.
    """
    site_id: str
    match: str
    venue: str

    event_container: str
    title: str
    date: str = ""
    description: str = ""
    url: str = "a"
    image: str = "img"

    # optional, used by specialized extractors
    time: str = ""
    weekday: str = ""
    tags: str = ""
    price: str = ""
    cancelled_class: str = ""
    recurring_container: str = ""
    recurring_title: str = ""
    recurring_date: str = ""
    recurring_image: str = ""

    # fetch policy (consumed by the fetch collaborator, not by extraction)
    render_js: bool = False
    wait_for: str = ""

    def matches(self, url: Optional[str]) -> bool:
        return bool(self.match) and self.match in (url or "")


@dataclass
class ExtractedFields:
    """Pre-normalization fields of one candidate; consumed immediately."""
    title: str
    date_text: str
    description: str
    relative_url: str
    image_url: Optional[str] = None


@dataclass
class SiteDocument:
    """A fetched listing page: originating absolute URL + parsed document (or raw HTML)."""
    url: str
    document: Any
    extra: dict = field(default_factory=dict)


class EventIdFactory:
    """
    Per-run id source: monotonically increasing index + nanosecond timestamp.

    Unique within one run; nothing is promised across runs.
    """

    def __init__(self, prefix: str = "event") -> None:
        self.prefix = prefix
        self._counter = itertools.count()

    def next_id(self, prefix: Optional[str] = None) -> str:
        return f"{prefix or self.prefix}-{next(self._counter)}-{time.time_ns()}"
