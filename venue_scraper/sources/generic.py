from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import Tag

from ..models import NormalizedEvent
from ..normalize import normalize_date
from .base import (
    HREF_ATTRS,
    SRC_ATTRS,
    BaseExtractor,
    absolute_url,
    all_text,
    first_attr,
    first_text,
)
from .types import EventIdFactory, ExtractedFields, SiteProfile

logger = logging.getLogger(__name__)

# probed when a profile's container selector finds nothing
_DOM_PROBES = (
    '[class*="event"]',
    "article",
    "li",
    ".item",
    ".entry",
    ".col-md-4, .col-sm-6, .col-lg-3",
)


class GenericExtractor(BaseExtractor):
    """
    Selector-driven extraction for sites that fit the container/title/date model.

    A candidate is kept when it has a title and either a recognizable date
    or at least some raw date text. Sites without a date element can carry
    the date in the title ("Konzert - 16.05.2025").
    """

    def extract(
        self,
        document: Tag,
        profile: SiteProfile,
        base_url: str,
        ids: EventIdFactory,
    ) -> List[NormalizedEvent]:
        containers = document.select(profile.event_container)
        logger.info("[%s] containers=%d url=%s", profile.site_id, len(containers), base_url)
        if not containers:
            self._log_dom_analysis(document, profile)

        events: List[NormalizedEvent] = []
        stats = {"kept": 0, "skip_no_title": 0, "skip_no_date": 0, "failed": 0}

        for index, node in enumerate(containers):
            try:
                fields = extract_fields(node, profile)
                ev = build_event(fields, profile, base_url, ids)
            except Exception as e:
                stats["failed"] += 1
                logger.warning(
                    "[%s] candidate %d failed: %s: %s", profile.site_id, index, type(e).__name__, e
                )
                continue

            if ev is None:
                stats["skip_no_title" if not fields.title else "skip_no_date"] += 1
                logger.debug(
                    "[%s] skip candidate %d title=%r date_text=%r",
                    profile.site_id, index, fields.title, fields.date_text,
                )
                continue

            events.append(ev)
            stats["kept"] += 1

        logger.info("[%s] stats=%s", profile.site_id, stats)
        return events

    def _log_dom_analysis(self, document: Tag, profile: SiteProfile) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        for probe in _DOM_PROBES:
            found = document.select(probe)
            if found:
                sample = found[0].get_text(" ", strip=True)[:100]
                logger.debug("[%s] probe %r count=%d first=%r", profile.site_id, probe, len(found), sample)


def extract_fields(node: Tag, profile: SiteProfile) -> ExtractedFields:
    return ExtractedFields(
        title=first_text(node, profile.title),
        date_text=first_text(node, profile.date),
        description=all_text(node, profile.description),
        relative_url=first_attr(node, profile.url, HREF_ATTRS) or "",
        image_url=first_attr(node, profile.image, SRC_ATTRS),
    )


def build_event(
    fields: ExtractedFields,
    profile: SiteProfile,
    base_url: str,
    ids: EventIdFactory,
) -> Optional[NormalizedEvent]:
    """Apply the inclusion rule; None means the candidate is dropped."""
    if not fields.title:
        return None

    date = normalize_date(fields.date_text or fields.title)
    has_date = bool(date) and date != fields.date_text and date != fields.title
    if not (has_date or fields.date_text):
        return None

    return NormalizedEvent(
        id=ids.next_id(),
        title=fields.title,
        date=date if has_date else fields.date_text,
        description=fields.description,
        url=absolute_url(base_url, fields.relative_url) or base_url,
        venue=profile.venue,
        image_url=absolute_url(base_url, fields.image_url),
    )
