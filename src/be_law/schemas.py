"""Canonical schemas for the statute corpus and citation results.

These pydantic models describe the rows the ingestion pipeline writes
(legal_documents, legal_provisions, legal_provision_versions) and the
structured results handed back by the parser, resolvers and validator.
The serving core only ever reads corpus rows; nothing here is persisted.
"""
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

DocumentStatus = Literal['in_force', 'amended', 'repealed', 'not_yet_in_force']
CitationFormat = Literal['full', 'short', 'pinpoint']


class ParsedCitation(BaseModel):
    valid: bool
    type: Literal['statute', 'unknown'] = 'unknown'
    title: Optional[str] = None  # canonical statute id or free-text title
    year: Optional[int] = None
    section: Optional[str] = None
    subsection: Optional[str] = None
    paragraph: Optional[str] = None
    error: Optional[str] = None


class LegalDocument(BaseModel):
    id: str
    type: str
    title: str
    status: str
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    url: Optional[str] = None
    language: Optional[str] = None
    numac: Optional[str] = None


class LegalProvision(BaseModel):
    id: Optional[int] = None
    document_id: str
    provision_ref: str
    chapter: Optional[str] = None
    section: str
    title: Optional[str] = None
    content: str


class LegalProvisionVersion(LegalProvision):
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None


class ProvisionRecord(BaseModel):
    document_id: str
    document_title: str
    document_status: str
    provision_ref: str
    chapter: Optional[str] = None
    section: str
    title: Optional[str] = None
    content: str
    # Both None when the row comes from the current (non-temporal) table.
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None


class SearchHit(BaseModel):
    document_id: str
    document_title: str
    document_status: str
    provision_ref: str
    section: str
    title: Optional[str] = None
    content: str
    # Set only for hits taken from historical versions.
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None


class ValidationResult(BaseModel):
    citation: ParsedCitation
    document_exists: bool
    provision_exists: bool
    document_title: Optional[str] = None
    document_url: Optional[str] = None
    status: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class CitationCheck(BaseModel):
    citation: str
    formatted_citation: str
    citation_urls: List[str] = Field(default_factory=list)
    valid: bool
    document_exists: bool
    provision_exists: bool
    document_title: Optional[str] = None
    status: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class FormattedCitation(BaseModel):
    input: str
    formatted: str
    valid: bool
    error: Optional[str] = None


class CurrencyResult(BaseModel):
    document_id: str
    title: str
    status: str
    type: str
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    is_current: bool
    as_of_date: Optional[str] = None
    status_as_of: Optional[Literal['in_force', 'repealed', 'not_yet_in_force']] = None
    is_in_force_as_of: Optional[bool] = None
    provision_exists: Optional[bool] = None
    warnings: List[str] = Field(default_factory=list)


class OutdatedReference(BaseModel):
    eu_document_id: str
    title: Optional[str] = None
    issue: str
    replaced_by: Optional[str] = None


class EUComplianceResult(BaseModel):
    document_id: str
    provision_ref: Optional[str] = None
    compliance_status: Literal['compliant', 'partial', 'unclear', 'not_applicable']
    eu_references_found: int
    warnings: List[str] = Field(default_factory=list)
    outdated_references: Optional[List[OutdatedReference]] = None
    recommendations: Optional[List[str]] = None


__all__ = [
    'DocumentStatus', 'CitationFormat', 'ParsedCitation', 'LegalDocument', 'LegalProvision',
    'LegalProvisionVersion', 'ProvisionRecord', 'SearchHit', 'ValidationResult', 'CitationCheck',
    'FormattedCitation', 'CurrencyResult', 'OutdatedReference', 'EUComplianceResult',
]
