from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import Tag

from ...models import NormalizedEvent
from ...normalize import clean_text, normalize_date, parse_machine_date
from ..base import (
    HREF_ATTRS,
    SRC_ATTRS,
    BaseExtractor,
    absolute_url,
    all_text,
    attr_value,
    first_attr,
    first_text,
    has_class,
)
from ..types import EventIdFactory, SiteProfile

logger = logging.getLogger(__name__)

CANCELLED_MARKER = "[CANCELLED]"
RECURRING_MARKER = "[Recurring]"


def _date_from_element(el: Optional[Tag], visible_text: str) -> str:
    """Prefer the machine-readable datetime attribute, else the visible text."""
    machine = attr_value(el, ("datetime",)) if el is not None else None
    if machine:
        return parse_machine_date(machine) or normalize_date(machine)
    return normalize_date(visible_text)


def _link(node: Tag) -> Optional[str]:
    # the teaser itself is usually the <a>
    return attr_value(node, HREF_ATTRS) or first_attr(node, "a", HREF_ATTRS)


def _tag_texts(node: Tag, selector: str) -> List[str]:
    if not selector:
        return []
    texts = [clean_text(el.get_text()) for el in node.select(selector)]
    return [t for t in texts if t]


def _image(node: Tag, selector: str) -> Optional[str]:
    if not selector:
        return None
    return first_attr(node, selector, SRC_ATTRS) or first_attr(node, f"{selector} img", SRC_ATTRS)


class DualSectionExtractor(BaseExtractor):
    """
    Venue page with two unrelated structures (Die Bäckerei):

    - one-off events (`event_container`): day element may carry a
      `datetime` attribute; a CSS state class marks cancelled events;
      category tags are appended to the description
    - recurring events (`recurring_container`): title + recurrence text only;
      the description states the recurrence instead of a blurb

    Both passes feed one list, one-off events first.
    """

    def extract(
        self,
        document: Tag,
        profile: SiteProfile,
        base_url: str,
        ids: EventIdFactory,
    ) -> List[NormalizedEvent]:
        events: List[NormalizedEvent] = []
        events.extend(self._one_off_events(document, profile, base_url, ids))
        events.extend(self._recurring_events(document, profile, base_url, ids))
        return events

    # ------------------------------------------------------------------
    # One-off events
    # ------------------------------------------------------------------

    def _one_off_events(
        self, document: Tag, profile: SiteProfile, base_url: str, ids: EventIdFactory
    ) -> List[NormalizedEvent]:
        nodes = document.select(profile.event_container)
        logger.info("[%s] one-off containers=%d", profile.site_id, len(nodes))

        out: List[NormalizedEvent] = []
        for index, node in enumerate(nodes):
            try:
                title = first_text(node, profile.title)
                if not title:
                    logger.debug("[%s] skip event %d: no title", profile.site_id, index)
                    continue

                day_el = node.select_one(profile.date) if profile.date else None
                date_text = first_text(node, profile.date)
                logger.debug(
                    "[%s] event %d date parts: %s %s %s",
                    profile.site_id, index,
                    first_text(node, profile.weekday), date_text, first_text(node, profile.time),
                )

                description = all_text(node, profile.description)
                tags = _tag_texts(node, profile.tags)
                if tags:
                    description += f"\n\nCategories: {', '.join(tags)}"

                if has_class(node, profile.cancelled_class):
                    title = f"{CANCELLED_MARKER} {title}"
                    description = f"{CANCELLED_MARKER} {description}".rstrip()

                out.append(
                    NormalizedEvent(
                        id=ids.next_id(),
                        title=title,
                        date=_date_from_element(day_el, date_text),
                        description=description,
                        url=absolute_url(base_url, _link(node)) or base_url,
                        venue=profile.venue,
                        image_url=absolute_url(base_url, _image(node, profile.image)),
                    )
                )
            except Exception as e:
                logger.warning(
                    "[%s] event %d failed: %s: %s", profile.site_id, index, type(e).__name__, e
                )
        return out

    # ------------------------------------------------------------------
    # Recurring events
    # ------------------------------------------------------------------

    def _recurring_events(
        self, document: Tag, profile: SiteProfile, base_url: str, ids: EventIdFactory
    ) -> List[NormalizedEvent]:
        if not profile.recurring_container:
            return []

        nodes = document.select(profile.recurring_container)
        logger.info("[%s] recurring containers=%d", profile.site_id, len(nodes))

        out: List[NormalizedEvent] = []
        for index, node in enumerate(nodes):
            try:
                title = first_text(node, profile.recurring_title)
                if not title:
                    logger.debug("[%s] skip recurring event %d: no title", profile.site_id, index)
                    continue

                date_el = node.select_one(profile.recurring_date) if profile.recurring_date else None
                date_text = first_text(node, profile.recurring_date)

                out.append(
                    NormalizedEvent(
                        id=ids.next_id("recurring-event"),
                        title=f"{RECURRING_MARKER} {title}",
                        date=_date_from_element(date_el, date_text),
                        description=f"This is a recurring event at {profile.venue}. Time: {date_text}",
                        url=absolute_url(base_url, _link(node)) or base_url,
                        venue=profile.venue,
                        image_url=absolute_url(base_url, _image(node, profile.recurring_image)),
                    )
                )
            except Exception as e:
                logger.warning(
                    "[%s] recurring event %d failed: %s: %s", profile.site_id, index, type(e).__name__, e
                )
        return out
