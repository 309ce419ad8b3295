"""End-to-end citation validation against the corpus.

Parse, resolve the statute, then check the article exists in the current
provision table. Every miss is reported as a warning on the result; the
validator never raises for an unknown document or article.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from be_law.corpus.store import CorpusStore, ProvisionKey
from be_law.schemas import CitationCheck, ValidationResult
from be_law.parsing.citation_formatter import format_citation
from be_law.parsing.citation_parser import EMPTY_CITATION, parse_citation
from be_law.resolve.document_resolver import DocumentResolver
from be_law.utils.text import compact

logger = logging.getLogger(__name__)

REPEALED_WARNING = 'This statute has been repealed'


def article_key(section: str) -> ProvisionKey:
    """'1', 'art1' and their whitespace-free forms."""
    tight = compact(section)
    return ProvisionKey(section, tight, f"art{section}", f"art{tight}")


class CitationValidator:
    def __init__(self, store: CorpusStore, documents: Optional[DocumentResolver] = None):
        self.store = store
        self.documents = documents or DocumentResolver(store)

    def validate(self, citation: Optional[str]) -> ValidationResult:
        parsed = parse_citation(citation)
        if not parsed.valid:
            return ValidationResult(
                citation=parsed,
                document_exists=False,
                provision_exists=False,
                warnings=[parsed.error or 'Invalid citation format'],
            )

        document = self.documents.resolve(parsed.title)
        if document is None:
            return ValidationResult(
                citation=parsed,
                document_exists=False,
                provision_exists=False,
                warnings=[f'Document "{parsed.title or "unknown"}" not found in database'],
            )

        warnings: List[str] = []
        if document.status == 'repealed':
            warnings.append(REPEALED_WARNING)

        if parsed.section:
            provision_exists = self.store.provision_exists(document.id, article_key(parsed.section))
            if not provision_exists:
                warnings.append(f"Article {parsed.section} not found in {document.title}")
        else:
            # No article: the citation names the whole statute.
            provision_exists = True

        return ValidationResult(
            citation=parsed,
            document_exists=True,
            provision_exists=provision_exists,
            document_title=document.title,
            document_url=document.url,
            status=document.status,
            warnings=warnings,
        )

    def check(self, citation: Optional[str]) -> CitationCheck:
        """Caller-facing summary: overall validity, rendered citation and
        source links."""
        if not citation or not citation.strip():
            return CitationCheck(
                citation=citation or '',
                formatted_citation='',
                valid=False,
                document_exists=False,
                provision_exists=False,
                warnings=[EMPTY_CITATION],
            )

        result = self.validate(citation)
        valid = result.citation.valid and result.document_exists and result.provision_exists
        logger.debug("validated %r -> valid=%s warnings=%s", citation, valid, result.warnings)
        return CitationCheck(
            citation=citation,
            formatted_citation=format_citation(result.citation),
            citation_urls=[result.document_url] if result.document_url else [],
            valid=valid,
            document_exists=result.document_exists,
            provision_exists=result.provision_exists,
            document_title=result.document_title,
            status=result.status,
            warnings=result.warnings,
        )


def outcome_label(check: CitationCheck) -> str:
    """Metric label for a checked citation."""
    if check.valid:
        return 'valid'
    # A parsed citation always has an article, so it always renders.
    if not check.formatted_citation:
        return 'invalid_format'
    if not check.document_exists:
        return 'document_missing'
    return 'provision_missing'
