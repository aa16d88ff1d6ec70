from __future__ import annotations

from typing import Optional, Tuple

from .types import SiteProfile


TREIBHAUS = SiteProfile(
    site_id="treibhaus",
    match="treibhaus.at",
    venue="Treibhaus Innsbruck",
    event_container=".program-entry, .program-event, .event-item, div.item, article, .event, .col-md-4",
    title="h1, h2, h3, h4, .title, .header, span.title, strong",
    date=".date, .event-date, time, .datum, .date-display-single",
    description=".description, .text, .content, p",
)

PMK = SiteProfile(
    site_id="pmk",
    match="pmk.or.at",
    venue="PMK Innsbruck",
    event_container=".event, .veranstaltung, article",
    title="h1, h2, h3, .title, .event-title",
    date=".date, .event-date, time, .datum",
    description=".description, .text, .content, p",
)

# BigCartel shop: each "product" is a ticket, the date lives in the product name
ARTILLERY_PRODUCTIONS = SiteProfile(
    site_id="artillery_productions",
    match="artilleryproductions.bigcartel.com",
    venue="Artillery Productions",
    event_container=".product",
    title=".product_name, h4",
    price="h5",
)

MUSIC_HALL = SiteProfile(
    site_id="music_hall",
    match="music-hall.at",
    venue="Music Hall Innsbruck",
    event_container=".event-list, .event-item, .dhvc-event, li.event, .event, article, .entry, .item",
    title=".event-title, h3, .title",
    date=".event-date, .date, time, .event-start-date",
    description=".event-content, .description, .excerpt, p",
    image=".event-image img, img",
    render_js=True,
    wait_for=".event-list, .event-item, .dhvc-event, li.event, .event, article, .entry, .item",
)

# One-off events and recurring events use different markup
DIE_BAECKEREI = SiteProfile(
    site_id="die_baeckerei",
    match="diebaeckerei.at",
    venue="Die Bäckerei",
    event_container=".event-thumb",
    title=".event-thumb__title",
    date=".event-thumb__day",
    time=".event-thumb__time",
    weekday=".event-thumb__weekday",
    description=".event-thumb__excerpt",
    url=".event-thumb",
    image=".event-thumb__img",
    tags=".b-tag",
    cancelled_class="is-cancelled",
    recurring_container=".recurring-event__thumb",
    recurring_title=".recurring-event-thumb__title",
    recurring_date=".recurring-event-thumb__day",
    recurring_image=".recurring-event-thumb__img",
    render_js=True,
    wait_for=".event-thumb, .recurring-event__thumb",
)

GENERIC_PROFILE = SiteProfile(
    site_id="generic",
    match="",
    venue="Unknown Venue",
    event_container='article, .event, .veranstaltung, div[class*="event"], li',
    title="h1, h2, h3, h4, .title, .event-title",
    date=".date, time, .event-date, .datetime",
    description="p, .description, .content, .text",
)

# Order matters: first substring match wins.
PROFILES: Tuple[SiteProfile, ...] = (
    TREIBHAUS,
    PMK,
    ARTILLERY_PRODUCTIONS,
    MUSIC_HALL,
    DIE_BAECKEREI,
)

DEFAULT_SITE_URLS: Tuple[str, ...] = (
    "https://www.treibhaus.at/programm",
    "https://pmk.or.at/termine",
    "https://artilleryproductions.bigcartel.com/",
    "https://www.music-hall.at/veranstaltungen/",
    "https://diebaeckerei.at/programm/",
)


def profile_for(url: Optional[str]) -> SiteProfile:
    for profile in PROFILES:
        if profile.matches(url):
            return profile
    return GENERIC_PROFILE


def requires_js(url: Optional[str]) -> bool:
    return profile_for(url).render_js
