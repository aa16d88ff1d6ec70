from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from urllib.parse import urljoin

from bs4 import Tag

from ..models import NormalizedEvent
from ..normalize import clean_text
from .types import EventIdFactory, SiteProfile


HREF_ATTRS = ("href",)
# lazy-loading themes keep the real URL in data-src and a placeholder in src
SRC_ATTRS = ("src", "data-src", "data-lazy-src")


class BaseExtractor(ABC):
    @abstractmethod
    def extract(
        self,
        document: Tag,
        profile: SiteProfile,
        base_url: str,
        ids: EventIdFactory,
    ) -> List[NormalizedEvent]:
        """Return the events found in one parsed listing page."""


# ------------------------------------------------------------------
# DOM helpers shared by all extractors
# ------------------------------------------------------------------

def first_text(node: Tag, selector: str) -> str:
    if not selector:
        return ""
    el = node.select_one(selector)
    return clean_text(el.get_text()) if el else ""


def all_text(node: Tag, selector: str) -> str:
    if not selector:
        return ""
    parts = [clean_text(el.get_text()) for el in node.select(selector)]
    return clean_text(" ".join(p for p in parts if p))


def attr_value(el: Tag, attrs: Iterable[str]) -> Optional[str]:
    for name in attrs:
        v = el.get(name)
        if isinstance(v, str):
            v = v.strip()
            if v and not v.startswith("data:"):
                return v
    return None


def first_attr(node: Tag, selector: str, attrs: Iterable[str]) -> Optional[str]:
    """First value of any of `attrs` on the elements matched by `selector`."""
    if not selector:
        return None
    attrs = tuple(attrs)
    for el in node.select(selector):
        v = attr_value(el, attrs)
        if v:
            return v
    return None


def absolute_url(base_url: str, ref: Optional[str]) -> Optional[str]:
    ref = (ref or "").strip()
    if not ref:
        return None
    return urljoin(base_url, ref)


def has_class(el: Tag, class_name: str) -> bool:
    return bool(class_name) and class_name in (el.get("class") or [])
