"""Keyword search over provision text.

Without an as-of date the current provisions are searched. With one, the
historical version rows are searched instead and a hit is kept only when
its version was in force on that date (same half-open rule as
``provision_resolver``); hits then carry their validity bounds.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from be_law.corpus.store import CorpusStore, search_terms
from be_law.resolve.document_resolver import DocumentResolver
from be_law.resolve.provision_resolver import covers, latest_valid
from be_law.schemas import LegalProvisionVersion, SearchHit
from be_law.utils.dates import normalize_as_of_date

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 50

VERSION_FIELDS = tuple(LegalProvisionVersion.model_fields)


def _hit(row: Dict[str, Any], version: Optional[LegalProvisionVersion] = None) -> SearchHit:
    return SearchHit(
        document_id=row['document_id'],
        document_title=row['document_title'],
        document_status=row['document_status'],
        provision_ref=row['provision_ref'],
        section=row['section'],
        title=row.get('title'),
        content=row['content'],
        valid_from=version.valid_from if version else None,
        valid_to=version.valid_to if version else None,
    )


class LegislationSearch:
    def __init__(self, store: CorpusStore, documents: Optional[DocumentResolver] = None):
        self.store = store
        self.documents = documents or DocumentResolver(store)

    def search(
        self,
        query: Optional[str],
        document_id: Optional[str] = None,
        status: Optional[str] = None,
        as_of_date: Optional[str] = None,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> List[SearchHit]:
        """Hits in rank order; an empty query or an unknown document gives []."""
        as_of = normalize_as_of_date(as_of_date)
        terms = search_terms(query)
        if not terms:
            return []
        limit = max(1, min(int(limit or DEFAULT_LIMIT), MAX_LIMIT))

        doc_id = None
        if document_id and document_id.strip():
            ref = document_id.strip()
            document = self.store.get_document(ref) or self.documents.resolve(ref)
            if document is None:
                logger.debug("search scoped to unknown document %r", ref)
                return []
            doc_id = document.id

        if not as_of:
            rows = self.store.search_provisions(terms, doc_id, status, limit=limit)
            return [_hit(r) for r in rows]
        return self._search_as_of(terms, doc_id, status, as_of)[:limit]

    def _search_as_of(self, terms: List[str], doc_id: Optional[str], status: Optional[str], as_of: str) -> List[SearchHit]:
        rows = self.store.search_provisions(terms, doc_id, status, historical=True)
        # (document_id, provision_ref) -> matching versions, in rank order of first hit
        grouped: Dict[Tuple[str, str], List[Tuple[LegalProvisionVersion, Dict[str, Any]]]] = {}
        for row in rows:
            version = LegalProvisionVersion(**{k: row[k] for k in VERSION_FIELDS})
            if covers(version, as_of):
                grouped.setdefault((version.document_id, version.provision_ref), []).append((version, row))

        hits: List[SearchHit] = []
        for matches in grouped.values():
            version = latest_valid([v for v, _ in matches], as_of)
            row = next(r for v, r in matches if v is version)
            hits.append(_hit(row, version))
        return hits
