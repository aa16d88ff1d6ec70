from __future__ import annotations

import re
from datetime import date, datetime
from typing import Callable, Optional, Tuple

import dateparser


# ============================================================
# Text cleaning
# ============================================================

_WS_RE = re.compile(r"\s+")


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace runs (incl. newlines, tabs, nbsp) to one space and trim."""
    if not text:
        return ""
    return _WS_RE.sub(" ", text).strip()


# ============================================================
# Free-text date normalization
# ============================================================
#
# Each matcher takes (cleaned_text, default_year) and returns "YYYY-MM-DD" or
# None. normalize_date() runs them in DATE_MATCHERS order, first hit wins.
#
# Missing years default to the year of the extraction run. That is a
# best-effort convention: "5.1." scraped in December is reported for the
# current year, not the next one.

_MONTHS = {
    "januar": 1, "jänner": 1, "jaenner": 1, "january": 1, "jan": 1, "jän": 1,
    "februar": 2, "feber": 2, "february": 2, "feb": 2,
    "märz": 3, "maerz": 3, "march": 3, "mär": 3, "mar": 3,
    "april": 4, "apr": 4,
    "mai": 5, "may": 5,
    "juni": 6, "june": 6, "jun": 6,
    "juli": 7, "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sept": 9, "sep": 9,
    "oktober": 10, "october": 10, "okt": 10, "oct": 10,
    "november": 11, "nov": 11,
    "dezember": 12, "december": 12, "dez": 12, "dec": 12,
}

_WEEKDAYS = (
    "mo", "di", "mi", "do", "fr", "sa", "so",
    "mon", "tue", "wed", "thu", "fri", "sat", "sun",
)

# "Event Name - 16.05.2025"
_DATE_AT_END_RE = re.compile(r"(?<!\d)(\d{1,2})\.(\d{1,2})\.(\d{4})$")

# "GIG NIGHT - 12.09.2025 (Einlass 19:00)"
_EMBEDDED_DATE_RE = re.compile(r"(?<!\d)(\d{1,2})\.(\d{1,2})\.(\d{4})(?!\d)")

# "16.05.2025" or "5.6." (year optional)
_NUMERIC_DATE_RE = re.compile(r"(?<!\d)(\d{1,2})\.(\d{1,2})\.(\d{4})?")

# "Do. 5.6." / "Sat 05.06.2025"
_WEEKDAY_DATE_RE = re.compile(
    r"\b(?:" + "|".join(_WEEKDAYS) + r")\.?,?\s*(\d{1,2})\.(\d{1,2})\.(\d{4})?",
    re.IGNORECASE,
)

# "16. Mai 2025" / "16 May 2025" / "3. Okt. 2025"
_MONTH_NAME_RE = re.compile(r"(?<!\d)(\d{1,2})\.?\s+([a-zäöü]+)\.?\s+(\d{4})")


def _iso(year: int, month: int, day: int) -> Optional[str]:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def _from_groups(m: Optional[re.Match[str]], default_year: int) -> Optional[str]:
    if not m:
        return None
    day, month, year = m.group(1), m.group(2), m.group(3)
    return _iso(int(year) if year else default_year, int(month), int(day))


def month_to_int(name: str) -> Optional[int]:
    # exact table hit only: "Mainz" or "Junior" are not months
    return _MONTHS.get((name or "").strip().lower().rstrip("."))


def find_embedded_date_text(text: str) -> Optional[str]:
    """The raw D.M.YYYY fragment in `text`, whether or not it is a real day."""
    m = _EMBEDDED_DATE_RE.search(text or "")
    return m.group(0) if m else None


def match_date_at_end(text: str, default_year: int) -> Optional[str]:
    return _from_groups(_DATE_AT_END_RE.search(text), default_year)


def match_embedded_date(text: str, default_year: int) -> Optional[str]:
    return _from_groups(_EMBEDDED_DATE_RE.search(text), default_year)


def match_numeric_date(text: str, default_year: int) -> Optional[str]:
    return _from_groups(_NUMERIC_DATE_RE.search(text), default_year)


def match_weekday_date(text: str, default_year: int) -> Optional[str]:
    return _from_groups(_WEEKDAY_DATE_RE.search(text), default_year)


def match_month_name_date(text: str, default_year: int) -> Optional[str]:
    m = _MONTH_NAME_RE.search(text.lower())
    if not m:
        return None
    month = month_to_int(m.group(2))
    if not month:
        return None
    return _iso(int(m.group(3)), month, int(m.group(1)))


DateMatcher = Callable[[str, int], Optional[str]]

DATE_MATCHERS: Tuple[DateMatcher, ...] = (
    match_date_at_end,
    match_embedded_date,
    match_numeric_date,
    match_weekday_date,
    match_month_name_date,
)


def normalize_date(text: Optional[str], today: Optional[date] = None) -> str:
    """
    Convert a free-text date fragment into "YYYY-MM-DD".

    Returns the cleaned input unchanged when no matcher recognizes it
    ("" stays "", "Jeden Dienstag" stays "Jeden Dienstag"). A pattern whose
    numbers are not a real calendar date counts as no match for that rule.

    `today` pins the year used for inputs without one (defaults to now).
    """
    s = clean_text(text)
    if not s:
        return ""

    default_year = (today or date.today()).year
    for matcher in DATE_MATCHERS:
        iso = matcher(s, default_year)
        if iso:
            return iso
    return s


# ============================================================
# Machine-readable dates (<time datetime="...">)
# ============================================================

def _parse_iso_strict(s: str) -> Optional[datetime]:
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def parse_machine_date(value: Optional[str]) -> Optional[str]:
    """
    Parse a `datetime` attribute value into "YYYY-MM-DD".

    ISO 8601 first, dateparser (de/en, day-first) as fallback.
    Returns None when the value carries no recognizable date.
    """
    s = clean_text(value)
    if not s or not re.search(r"\d", s):
        return None

    dt = _parse_iso_strict(s)
    if dt:
        return dt.date().isoformat()

    parsed = dateparser.parse(
        s,
        languages=["de", "en"],
        settings={
            "DATE_ORDER": "DMY",
            "PREFER_DATES_FROM": "future",
        },
    )
    return parsed.date().isoformat() if parsed else None
