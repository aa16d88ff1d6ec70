# tests/test_normalize.py
"""
Unit tests for text cleaning and free-text date normalization (venue_scraper/normalize.py).

Rules are tried in order, first hit wins:
  1. D.M.YYYY at the end of the text
  2. D.M.YYYY anywhere
  3. D.M. with optional year (missing year -> current year)
  4. weekday abbreviation + D.M.[YYYY]
  5. D. MonthName YYYY (German / English)
  6. otherwise the cleaned text comes back unchanged
"""
from __future__ import annotations

from datetime import date

import pytest

from venue_scraper.normalize import (
    DATE_MATCHERS,
    clean_text,
    find_embedded_date_text,
    match_date_at_end,
    match_embedded_date,
    match_month_name_date,
    match_numeric_date,
    match_weekday_date,
    month_to_int,
    normalize_date,
    parse_machine_date,
)

PINNED = date(2030, 3, 1)


# ---------------------------------------------------------------------------
# clean_text
# ---------------------------------------------------------------------------

class TestCleanText:
    def test_collapses_whitespace_and_trims(self):
        assert clean_text("  a\n\tb  ") == "a b"

    def test_non_breaking_space(self):
        assert clean_text("Fr\u00a0 13.06.") == "Fr 13.06."

    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t"])
    def test_empty_inputs(self, value):
        assert clean_text(value) == ""


# ---------------------------------------------------------------------------
# normalize_date: documented examples
# ---------------------------------------------------------------------------

class TestNormalizeDate:
    @pytest.mark.parametrize("text, expected", [
        ("16.05.2025", "2025-05-16"),
        ("01.01.2026", "2026-01-01"),
        ("5.6.2025", "2025-06-05"),
        ("31.12.2024", "2024-12-31"),
    ])
    def test_german_numeric_dates(self, text, expected):
        assert normalize_date(text) == expected

    def test_weekday_and_no_year_uses_current_year(self):
        assert normalize_date("Do. 5.6.", today=PINNED) == "2030-06-05"

    def test_missing_year_defaults_to_today(self):
        assert normalize_date("24.12.") == f"{date.today().year}-12-24"

    @pytest.mark.parametrize("text", ["16. Mai 2025", "16. May 2025", "16 May 2025", "16. MAI 2025"])
    def test_month_names_both_languages(self, text):
        assert normalize_date(text) == "2025-05-16"

    @pytest.mark.parametrize("text, expected", [
        ("3. Okt. 2025", "2025-10-03"),
        ("1. Jänner 2026", "2026-01-01"),
        ("7. März 2025", "2025-03-07"),
        ("9 Sept 2025", "2025-09-09"),
        ("24. Dez. 2025", "2025-12-24"),
    ])
    def test_month_abbreviations(self, text, expected):
        assert normalize_date(text) == expected

    def test_title_with_date_suffix(self):
        assert normalize_date("GIG NIGHT - 12.09.2025") == "2025-09-12"

    def test_date_embedded_mid_string(self):
        assert normalize_date("Konzert am 12.09.2025 im Saal") == "2025-09-12"

    def test_empty(self):
        assert normalize_date("") == ""
        assert normalize_date(None) == ""

    def test_unrecognized_text_is_returned_cleaned(self):
        assert normalize_date("free text") == "free text"
        assert normalize_date("  Jeden   Dienstag ") == "Jeden Dienstag"

    def test_price_is_not_a_date(self):
        assert normalize_date("€ 15.00") == "€ 15.00"

    def test_impossible_calendar_date_falls_through(self):
        assert normalize_date("31.02.2025") == "31.02.2025"


# ---------------------------------------------------------------------------
# Individual matchers
# ---------------------------------------------------------------------------

class TestMatchers:
    def test_order(self):
        assert DATE_MATCHERS == (
            match_date_at_end,
            match_embedded_date,
            match_numeric_date,
            match_weekday_date,
            match_month_name_date,
        )

    def test_date_at_end_requires_end_anchor(self):
        assert match_date_at_end("Show - 16.05.2025", 2030) == "2025-05-16"
        assert match_date_at_end("16.05.2025 Einlass", 2030) is None

    def test_embedded_date_needs_year(self):
        assert match_embedded_date("16.05.2025 Einlass", 2030) == "2025-05-16"
        assert match_embedded_date("16.05. Einlass", 2030) is None

    def test_numeric_date_default_year(self):
        assert match_numeric_date("5.6.", 2030) == "2030-06-05"
        assert match_numeric_date("20.00 Uhr", 2030) is None

    def test_weekday_date(self):
        assert match_weekday_date("Sa 7.6.2025", 2030) == "2025-06-07"
        assert match_weekday_date("Thu. 5.6.", 2030) == "2030-06-05"
        assert match_weekday_date("5.6.2025", 2030) is None

    def test_month_name_unknown_word(self):
        assert match_month_name_date("16. Bühne 2025", 2030) is None

    def test_month_to_int(self):
        assert month_to_int("Mai") == 5
        assert month_to_int("Okt.") == 10
        assert month_to_int("december") == 12
        assert month_to_int("xyz") is None

    @pytest.mark.parametrize("word", ["Mainz", "Junior", "Decke", "marktplatz"])
    def test_month_prefix_words_are_not_months(self, word):
        assert month_to_int(word) is None

    def test_city_name_is_not_a_month(self):
        assert normalize_date("16. Mainz 2025") == "16. Mainz 2025"

    def test_find_embedded_date_text(self):
        assert find_embedded_date_text("GIG - 31.02.2025") == "31.02.2025"
        assert find_embedded_date_text("Tour Shirt") is None


# ---------------------------------------------------------------------------
# parse_machine_date
# ---------------------------------------------------------------------------

class TestParseMachineDate:
    @pytest.mark.parametrize("value", [
        "2025-06-13",
        "2025-06-13T20:00:00",
        "2025-06-13T20:00:00+02:00",
        "2025-06-13T18:00:00Z",
    ])
    def test_iso_values(self, value):
        assert parse_machine_date(value) == "2025-06-13"

    def test_dateparser_fallback(self):
        assert parse_machine_date("13.06.2025 20:00") == "2025-06-13"

    @pytest.mark.parametrize("value", [None, "", "  ", "Jeden Dienstag"])
    def test_no_date(self, value):
        assert parse_machine_date(value) is None
