from typing import Optional
from pydantic import BaseModel, Field, field_validator

from be_law.api import config


class CitationRequest(BaseModel):
    citation: str = Field(min_length=1, max_length=config.MAX_CITATION_LENGTH)

    @field_validator("citation")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("citation must not be blank")
        return v


class ParseRequest(BaseModel):
    # Blank input is a parse outcome ('Empty citation'), not a request error.
    citation: str = Field(default="", max_length=config.MAX_CITATION_LENGTH)


class FormatRequest(ParseRequest):
    format: Optional[str] = Field(default=None, max_length=20)

    def style(self) -> str:
        return self.format or config.DEFAULT_CITATION_FORMAT


class ProvisionRequest(BaseModel):
    document_id: str = Field(min_length=1, max_length=500)
    provision_ref: Optional[str] = Field(default=None, max_length=100)
    section: Optional[str] = Field(default=None, max_length=100)
    as_of_date: Optional[str] = Field(default=None, max_length=20)


class CurrencyRequest(BaseModel):
    document_id: str = Field(min_length=1, max_length=500)
    provision_ref: Optional[str] = Field(default=None, max_length=100)
    as_of_date: Optional[str] = Field(default=None, max_length=20)


class EUComplianceRequest(BaseModel):
    document_id: str = Field(min_length=1, max_length=500)
    provision_ref: Optional[str] = Field(default=None, max_length=100)
    eu_document_id: Optional[str] = Field(default=None, max_length=100)


class SearchRequest(BaseModel):
    query: str = Field(default="", max_length=500)
    document_id: Optional[str] = Field(default=None, max_length=500)
    status: Optional[str] = Field(default=None, max_length=20)
    as_of_date: Optional[str] = Field(default=None, max_length=20)
    limit: int = Field(default=10, ge=1, le=50)
