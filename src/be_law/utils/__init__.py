"""Utility modules for be_law."""

from be_law.utils.text import (
    compact,
    normalize_word,
    strip_accents,
)

from be_law.utils.dates import (
    ISO_DATE_RE,
    normalize_as_of_date,
)

__all__ = [
    # Text
    "compact",
    "normalize_word",
    "strip_accents",
    # Dates
    "ISO_DATE_RE",
    "normalize_as_of_date",
]
