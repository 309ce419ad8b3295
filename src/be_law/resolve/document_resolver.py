"""Resolve a loose statute reference to a corpus document.

Precedence (first hit wins):
  1. canonical id            loi-1994-02-02-1994009284-fr
  2. date expression         'Loi du 2 février 1994', 'wet van 2 februari 1994', '1994-02-02'
  3. title fragment          'protection de la jeunesse'
"""
from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Mapping, Optional

from be_law.corpus.store import CorpusStore
from be_law.schemas import LegalDocument
from be_law.utils.text import normalize_word

logger = logging.getLogger(__name__)

STATUTE_ID_RE = re.compile(r"^(?:loi|wet)-\d{4}-\d{2}-\d{2}-\d{10}-(?:fr|nl)$", re.IGNORECASE)
ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
# Day, month word, year. The day may carry the French ordinal ('1er').
TEXTUAL_DATE_RE = re.compile(r"(\d{1,2})(?:er)?\s+((?:[^\W\d_]|[.-])+)\s+(\d{4})")

FRENCH_MONTHS: Mapping[str, str] = MappingProxyType({
    'JANVIER': '01',
    'FEVRIER': '02',
    'MARS': '03',
    'AVRIL': '04',
    'MAI': '05',
    'JUIN': '06',
    'JUILLET': '07',
    'AOUT': '08',
    'SEPTEMBRE': '09',
    'OCTOBRE': '10',
    'NOVEMBRE': '11',
    'DECEMBRE': '12',
})

DUTCH_MONTHS: Mapping[str, str] = MappingProxyType({
    'JANUARI': '01',
    'FEBRUARI': '02',
    'MAART': '03',
    'APRIL': '04',
    'MEI': '05',
    'JUNI': '06',
    'JULI': '07',
    'AUGUSTUS': '08',
    'SEPTEMBER': '09',
    'OKTOBER': '10',
    'NOVEMBER': '11',
    'DECEMBER': '12',
})

MONTHS: Mapping[str, str] = MappingProxyType({**FRENCH_MONTHS, **DUTCH_MONTHS})

LANGUAGE_MARKERS: Mapping[str, str] = MappingProxyType({'LOI': 'loi', 'WET': 'wet'})
ID_PREFIXES = ('loi', 'wet')


def is_statute_id(value: str) -> bool:
    return bool(STATUTE_ID_RE.match(value))


def detect_language_prefix(value: str) -> Optional[str]:
    """'loi' / 'wet' when the normalized reference starts with a marker
    ('Wetboek van ...' counts as 'wet')."""
    normalized = normalize_word(value)
    for marker, prefix in LANGUAGE_MARKERS.items():
        if normalized.startswith(marker):
            return prefix
    return None


def extract_belgian_date(value: str) -> Optional[str]:
    """ISO date embedded in ``value`` or spelled out in French/Dutch."""
    iso = ISO_DATE_RE.search(value)
    if iso:
        return f"{iso.group(1)}-{iso.group(2)}-{iso.group(3)}"

    textual = TEXTUAL_DATE_RE.search(value)
    if not textual:
        return None
    month = MONTHS.get(normalize_word(textual.group(2)))
    if not month:
        return None
    day = textual.group(1).zfill(2)
    return f"{textual.group(3)}-{month}-{day}"


class DocumentResolver:
    def __init__(self, store: CorpusStore):
        self.store = store

    def resolve(self, reference: Optional[str]) -> Optional[LegalDocument]:
        trimmed = (reference or '').strip()
        if not trimmed:
            return None

        if is_statute_id(trimmed):
            # Stored ids are lowercase; the grammar itself is case-insensitive.
            doc = self.store.get_document(trimmed) or self.store.get_document(trimmed.lower())
            logger.debug("resolve %r by id -> %s", trimmed, doc.id if doc else None)
            return doc

        doc = self._resolve_by_date(trimmed)
        if doc is not None:
            return doc

        # NOTE: shortest containing title wins. With several titles sharing a
        # common fragment this can pick an overly generic document.
        doc = self.store.best_title_match(trimmed)
        logger.debug("resolve %r by title -> %s", trimmed, doc.id if doc else None)
        return doc

    def _resolve_by_date(self, reference: str) -> Optional[LegalDocument]:
        date = extract_belgian_date(reference)
        if not date:
            return None

        prefix = detect_language_prefix(reference)
        if prefix:
            doc = self.store.first_document_with_prefix([f"{prefix}-{date}-"])
            if doc is not None:
                logger.debug("resolve %r by %s date %s -> %s", reference, prefix, date, doc.id)
                return doc

        doc = self.store.first_document_with_prefix([f"{p}-{date}-" for p in ID_PREFIXES])
        logger.debug("resolve %r by date %s -> %s", reference, date, doc.id if doc else None)
        return doc

    def resolve_id(self, reference: Optional[str]) -> Optional[str]:
        doc = self.resolve(reference)
        return doc.id if doc else None
