"""Is a statute (and optionally one of its provisions) currently in force?

Only the current repeal status is stored, so ``status_as_of`` for a
repealed statute reflects today's status rather than the repeal date.
"""
from __future__ import annotations

from typing import List, Optional

from be_law.corpus.store import CorpusStore, ProvisionKey
from be_law.errors import require
from be_law.schemas import CurrencyResult, LegalDocument
from be_law.resolve.document_resolver import DocumentResolver
from be_law.resolve.provision_resolver import latest_valid
from be_law.utils.dates import normalize_as_of_date
from be_law.validation.citation_validator import REPEALED_WARNING

UNTRACKED_REPEAL_WARNING = (
    'Historical repeal date is not tracked in this dataset; status_as_of uses current repeal status.'
)


def status_as_of(document: LegalDocument, as_of: str) -> str:
    started = not document.in_force_date or document.in_force_date <= as_of
    if not started:
        return 'not_yet_in_force'
    return 'repealed' if document.status == 'repealed' else 'in_force'


class CurrencyChecker:
    def __init__(self, store: CorpusStore, documents: Optional[DocumentResolver] = None):
        self.store = store
        self.documents = documents or DocumentResolver(store)

    def check(
        self,
        document_id: Optional[str],
        provision_ref: Optional[str] = None,
        as_of_date: Optional[str] = None,
    ) -> Optional[CurrencyResult]:
        reference = require(document_id, 'document_id')
        as_of = normalize_as_of_date(as_of_date)

        document = self.documents.resolve(reference)
        if document is None:
            return None

        warnings: List[str] = []
        if document.status == 'repealed':
            warnings.append(REPEALED_WARNING)

        result = CurrencyResult(
            document_id=document.id,
            title=document.title,
            status=document.status,
            type=document.type,
            issued_date=document.issued_date,
            in_force_date=document.in_force_date,
            is_current=document.status == 'in_force',
            as_of_date=as_of,
            warnings=warnings,
        )

        if as_of:
            result.status_as_of = status_as_of(document, as_of)
            result.is_in_force_as_of = result.status_as_of == 'in_force'
            if document.status == 'repealed':
                result.warnings.append(UNTRACKED_REPEAL_WARNING)

        if provision_ref:
            result.provision_exists = self._provision_exists(document.id, provision_ref, as_of)
            if not result.provision_exists:
                result.warnings.append(f'Provision "{provision_ref}" not found in this document')

        return result

    def _provision_exists(self, document_id: str, provision_ref: str, as_of: Optional[str]) -> bool:
        key = ProvisionKey(provision_ref)
        if as_of and latest_valid(self.store.list_versions(document_id, key), as_of) is not None:
            return True
        return self.store.provision_exists(document_id, key)
