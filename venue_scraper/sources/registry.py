from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type

from bs4 import BeautifulSoup, Tag

from ..models import NormalizedEvent
from .adapters.catalog_shop import CatalogShopExtractor
from .adapters.dual_section import DualSectionExtractor
from .base import BaseExtractor
from .generic import GenericExtractor
from .profiles import profile_for
from .types import EventIdFactory, SiteProfile

logger = logging.getLogger(__name__)


# Sites whose markup does not fit the generic container/title/date model.
EXTRACTORS: Dict[str, Type[BaseExtractor]] = {
    "artillery_productions": CatalogShopExtractor,
    "die_baeckerei": DualSectionExtractor,
}


def get_extractor(profile: SiteProfile) -> BaseExtractor:
    cls = EXTRACTORS.get(profile.site_id, GenericExtractor)
    return cls()


def as_document(document: Any) -> Tag:
    """Accept a parsed tree or raw HTML; anything else is a caller error."""
    if isinstance(document, Tag):
        return document
    if isinstance(document, (str, bytes)):
        return BeautifulSoup(document, "html.parser")
    raise TypeError(f"unsupported document handle: {type(document).__name__}")


def dispatch(
    document: Any,
    source_url: str,
    ids: Optional[EventIdFactory] = None,
) -> List[NormalizedEvent]:
    """
    Extract events from one site's listing page.

    An empty list is a valid result ("page had no events"); retrieval failures
    are the fetch layer's business and never reach this function.
    """
    profile = profile_for(source_url)
    extractor = get_extractor(profile)
    logger.info(
        "[dispatch] site_id=%s extractor=%s url=%s",
        profile.site_id, type(extractor).__name__, source_url,
    )
    return extractor.extract(as_document(document), profile, source_url, ids or EventIdFactory())
