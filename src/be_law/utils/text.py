"""Text normalization helpers shared by the parser and the resolvers."""
from __future__ import annotations
import re
import unicodedata

_WS_RE = re.compile(r"\s+")
_NON_LETTER_RE = re.compile(r"[^A-Za-z]")


def strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize('NFD', value)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_word(value: str) -> str:
    """Uppercase ASCII letters only: 'Février' -> 'FEVRIER', 'août.' -> 'AOUT'."""
    return _NON_LETTER_RE.sub('', strip_accents(value)).upper()


def compact(value: str) -> str:
    return _WS_RE.sub('', value)
