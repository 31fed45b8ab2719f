"""Semantic classification of captured text.

Each flag is computed independently from the trimmed input, so one string may
be, for example, both a currency amount and a time ("$5 at 4pm"). Word
boundaries on the unit and currency tokens keep ordinary words such as
"background" or "musd" from matching.

A single word is whitespace-free and digit-free, so a quantity like "5kg"
or a token like "v2" is not treated as a word to look up.
"""

from __future__ import annotations

import re

from models import TextContext

_CURRENCY_CODES = "USD|EUR|GBP|JPY|AUD|CAD|CHF|CNY"

_UNITS = (
    "kg|g|lbs|oz|m|km|ft|mi|cm|mm|in|yards|miles|grams|kilograms|pounds|ounces"
    "|meters|kilometers|feet|inches"
)

_TIMEZONES = "UTC|GMT|EST|PST|CST|MST|EDT|PDT|CDT|MDT|IST|CET|EET"

CURRENCY_PATTERN = re.compile(
    rf"([$£€¥]\s*[0-9]+)|([0-9]+\s*[$£€¥])|(\b[0-9]+\s*({_CURRENCY_CODES})\b)",
    re.IGNORECASE,
)

UNIT_PATTERN = re.compile(rf"\b[0-9]+\s*({_UNITS})\b", re.IGNORECASE)

TIME_PATTERN = re.compile(
    r"(\b[0-9]{1,2}:[0-9]{2}\b)"
    r"|(\b[0-9]{1,2}(:[0-9]{2})?\s*(am|pm)\b)"
    rf"|(\b({_TIMEZONES})\b)"
    r"|(\bnow\b)",
    re.IGNORECASE,
)

_DIGIT = re.compile(r"[0-9]")
_WHITESPACE = re.compile(r"\s")


def classify(text: str) -> TextContext:
    """Derive the semantic flags for one captured string."""
    trimmed = (text or "").strip()
    if not trimmed:
        return TextContext()

    has_numbers = _DIGIT.search(trimmed) is not None
    return TextContext(
        is_currency=CURRENCY_PATTERN.search(trimmed) is not None,
        is_unit=UNIT_PATTERN.search(trimmed) is not None,
        is_time=TIME_PATTERN.search(trimmed) is not None,
        # quantities such as "5kg" are measurements, not words to look up
        is_single_word=_WHITESPACE.search(trimmed) is None and not has_numbers,
        has_numbers=has_numbers,
        is_valid=True,
    )
