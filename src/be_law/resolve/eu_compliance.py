"""EU cross-reference health of a Belgian statute.

Flags references to EU instruments that are no longer in force (with the
replacing instrument when the corpus records one) and references whose
implementation status is missing or unsettled.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from be_law.corpus.store import CorpusStore
from be_law.errors import InputError, require
from be_law.schemas import EUComplianceResult, OutdatedReference
from be_law.resolve.document_resolver import DocumentResolver

logger = logging.getLogger(__name__)

UNSETTLED_STATUSES = ('unknown', 'pending')


def first_replacement(amended_by: Optional[str]) -> Optional[str]:
    """First id of the JSON list in ``amended_by``; None when absent or
    malformed."""
    if not amended_by:
        return None
    try:
        replacements = json.loads(amended_by)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed amended_by metadata: %r", amended_by)
        return None
    if isinstance(replacements, list) and replacements:
        return str(replacements[0])
    return None


def _outdated(row: Dict[str, Any]) -> OutdatedReference:
    return OutdatedReference(
        eu_document_id=row['id'],
        title=row.get('title') or None,
        issue=f"References repealed EU {row['type']} {row['id']}",
        replaced_by=first_replacement(row.get('amended_by')),
    )


class EUComplianceChecker:
    def __init__(self, store: CorpusStore, documents: Optional[DocumentResolver] = None):
        self.store = store
        self.documents = documents or DocumentResolver(store)

    def check(
        self,
        document_id: Optional[str],
        provision_ref: Optional[str] = None,
        eu_document_id: Optional[str] = None,
    ) -> EUComplianceResult:
        reference = require(document_id, 'document_id')
        document = self.store.get_document(reference) or self.documents.resolve(reference)
        if document is None:
            raise InputError(f'Document "{reference}" not found in database')

        rows = self.store.eu_references(document.id, eu_document_id)
        warnings: List[str] = []
        outdated: List[OutdatedReference] = []
        recommendations: List[str] = []

        for row in rows:
            if row.get('in_force') == 0:
                entry = _outdated(row)
                warnings.append(entry.issue)
                outdated.append(entry)

            status = row.get('implementation_status')
            if row.get('is_primary_implementation') and not status:
                warnings.append(f"Primary implementation of {row['id']} lacks implementation_status")
                recommendations.append(f"Add implementation_status metadata for {row['id']}")
            if status in UNSETTLED_STATUSES:
                warnings.append(f'Implementation status for {row["id"]} is "{status}"')

        if not rows:
            recommendations.append(
                'No EU references found. If this statute implements EU law, consider adding EU references.'
            )
            compliance = 'not_applicable'
        elif outdated:
            compliance = 'partial'
        elif warnings:
            compliance = 'unclear'
        else:
            compliance = 'compliant'

        return EUComplianceResult(
            document_id=document.id,
            provision_ref=provision_ref,
            compliance_status=compliance,
            eu_references_found=len(rows),
            warnings=warnings,
            outdated_references=outdated or None,
            recommendations=recommendations or None,
        )
