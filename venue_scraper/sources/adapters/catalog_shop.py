from __future__ import annotations

import logging
from datetime import date
from typing import List

from bs4 import Tag

from ...models import NormalizedEvent
from ...normalize import find_embedded_date_text, match_embedded_date
from ..base import HREF_ATTRS, SRC_ATTRS, BaseExtractor, absolute_url, first_attr, first_text
from ..types import EventIdFactory, SiteProfile

logger = logging.getLogger(__name__)


class CatalogShopExtractor(BaseExtractor):
    """
    Shop-style listing where every product is an event ticket
    (Artillery Productions on BigCartel).

    Strategy:
    - product name carries the date: "GIG NIGHT - 12.09.2025"
    - there is no date element; the price heading (h5) must never be read as
      a date, it only ends up in the description
    - a date fragment that is not a real day is kept as written; products
      without any date in the name are kept with an empty date
    """

    def extract(
        self,
        document: Tag,
        profile: SiteProfile,
        base_url: str,
        ids: EventIdFactory,
    ) -> List[NormalizedEvent]:
        products = document.select(profile.event_container)
        logger.info("[%s] products=%d", profile.site_id, len(products))

        year = date.today().year
        events: List[NormalizedEvent] = []

        for index, product in enumerate(products):
            try:
                title = first_text(product, profile.title)
                if not title:
                    logger.debug("[%s] skip product %d: no title", profile.site_id, index)
                    continue

                price = first_text(product, profile.price)
                href = first_attr(product, profile.url, HREF_ATTRS)
                src = first_attr(product, profile.image, SRC_ATTRS)

                events.append(
                    NormalizedEvent(
                        id=ids.next_id(),
                        title=title,
                        date=match_embedded_date(title, year) or find_embedded_date_text(title) or "",
                        description=f"Price: {price}" if price else "",
                        url=absolute_url(base_url, href) or base_url,
                        venue=profile.venue,
                        image_url=absolute_url(base_url, src),
                    )
                )
            except Exception as e:
                logger.warning(
                    "[%s] product %d failed: %s: %s", profile.site_id, index, type(e).__name__, e
                )

        return events
