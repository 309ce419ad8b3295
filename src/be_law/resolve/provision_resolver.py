"""Point-in-time provision lookup.

Version rows carry a half-open validity interval ``[valid_from, valid_to)``:
the ``valid_to`` day already belongs to the successor version. A missing
``valid_from`` counts as "since forever", a missing ``valid_to`` as "still
in force".

When no version covers the requested date, or the corpus has no version
rows for the provision, the current text is returned instead. Callers must
therefore not assume a dated answer is historically exact: a row with
``valid_from`` and ``valid_to`` both None came from the current table.
"""
from __future__ import annotations

import logging
from itertools import groupby
from typing import Iterable, List, Optional, Union

from be_law.corpus.store import CorpusStore, ProvisionKey
from be_law.errors import require
from be_law.schemas import LegalDocument, LegalProvision, LegalProvisionVersion, ProvisionRecord
from be_law.resolve.document_resolver import DocumentResolver
from be_law.utils.dates import normalize_as_of_date

logger = logging.getLogger(__name__)

EARLIEST = '0000-01-01'

ProvisionResult = Union[ProvisionRecord, List[ProvisionRecord], None]


def covers(version: LegalProvisionVersion, as_of: str) -> bool:
    starts = version.valid_from is None or version.valid_from <= as_of
    not_ended = version.valid_to is None or version.valid_to > as_of
    return starts and not_ended


def latest_valid(versions: Iterable[LegalProvisionVersion], as_of: str) -> Optional[LegalProvisionVersion]:
    """Version in force at ``as_of``; on overlapping intervals the latest
    start wins, then the highest row id."""
    candidates = [v for v in versions if covers(v, as_of)]
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.warning(
            "Overlapping versions for %s/%s at %s: %s",
            candidates[0].document_id, candidates[0].provision_ref, as_of,
            [(v.valid_from, v.valid_to) for v in candidates],
        )
    return max(candidates, key=lambda v: (v.valid_from or EARLIEST, v.id or 0))


class ProvisionTemporalResolver:
    def __init__(self, store: CorpusStore, documents: Optional[DocumentResolver] = None):
        self.store = store
        self.documents = documents or DocumentResolver(store)

    def get_provision(
        self,
        document_id: Optional[str],
        provision_ref: Optional[str] = None,
        as_of_date: Optional[str] = None,
        section: Optional[str] = None,
    ) -> ProvisionResult:
        """Single record when a provision is named, the whole document
        otherwise, or None when nothing matches.

        ``provision_ref`` takes precedence over ``section``; either is
        matched against both columns.
        """
        reference = require(document_id, 'document_id')
        as_of = normalize_as_of_date(as_of_date)

        document = self._document(reference)
        if document is None:
            return None

        ref = (provision_ref or section or '').strip()
        if not ref:
            return self._whole_document(document, as_of)
        return self._single(document, ProvisionKey(ref), as_of)

    def _document(self, reference: str) -> Optional[LegalDocument]:
        return self.store.get_document(reference) or self.documents.resolve(reference)

    def _single(self, document: LegalDocument, key: ProvisionKey, as_of: Optional[str]) -> Optional[ProvisionRecord]:
        if as_of:
            version = latest_valid(self.store.list_versions(document.id, key), as_of)
            if version is not None:
                return _record(document, version)
            logger.debug("No version of %s %r in force at %s; using current text", document.id, key, as_of)

        current = self.store.find_provision(document.id, key)
        return _record(document, current) if current else None

    def _whole_document(self, document: LegalDocument, as_of: Optional[str]) -> List[ProvisionRecord]:
        if as_of:
            selected: List[ProvisionRecord] = []
            versions = self.store.list_versions(document.id)
            for _, group in groupby(versions, key=lambda v: v.provision_ref):
                version = latest_valid(group, as_of)
                if version is not None:
                    selected.append(_record(document, version))
            if selected:
                return selected
            logger.debug("No versions of %s in force at %s; returning current provisions", document.id, as_of)

        return [_record(document, p) for p in self.store.list_provisions(document.id)]


def _record(document: LegalDocument, row: LegalProvision) -> ProvisionRecord:
    return ProvisionRecord(
        document_id=row.document_id,
        document_title=document.title,
        document_status=document.status,
        provision_ref=row.provision_ref,
        chapter=row.chapter,
        section=row.section,
        title=row.title,
        content=row.content,
        valid_from=getattr(row, 'valid_from', None),
        valid_to=getattr(row, 'valid_to', None),
    )
