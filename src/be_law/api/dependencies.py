import os
import logging
from typing import Optional
from flask import request, jsonify
from werkzeug.exceptions import BadRequest

from be_law.api import config, state
from be_law.corpus.store import CorpusStore
from be_law.errors import CorpusUnavailableError
from be_law.resolve.currency import CurrencyChecker
from be_law.resolve.document_resolver import DocumentResolver
from be_law.resolve.eu_compliance import EUComplianceChecker
from be_law.resolve.provision_resolver import ProvisionTemporalResolver
from be_law.resolve.search import LegislationSearch
from be_law.validation.citation_validator import CitationValidator

logger = logging.getLogger("api")


def load_store(path: Optional[str] = None) -> Optional[CorpusStore]:
    db_path = path or config.DB_PATH
    if not os.path.exists(db_path):
        logger.warning(f"[api] Corpus database not found at {db_path}; set {config.DB_ENV_VAR}")
        return None
    with state.store_lock:
        if state.store is not None:
            state.store.close()
        state.store = CorpusStore(db_path)
    logger.info(f"[api] Using corpus database {db_path}")
    return state.store


def get_store() -> CorpusStore:
    if state.store is None:
        load_store()
    if state.store is None:
        raise CorpusUnavailableError(f"Corpus database not found at {config.DB_PATH}")
    return state.store


def document_resolver() -> DocumentResolver:
    return DocumentResolver(get_store())


def citation_validator() -> CitationValidator:
    store = get_store()
    return CitationValidator(store, DocumentResolver(store))


def provision_resolver() -> ProvisionTemporalResolver:
    store = get_store()
    return ProvisionTemporalResolver(store, DocumentResolver(store))


def legislation_search() -> LegislationSearch:
    store = get_store()
    return LegislationSearch(store, DocumentResolver(store))


def currency_checker() -> CurrencyChecker:
    store = get_store()
    return CurrencyChecker(store, DocumentResolver(store))


def eu_compliance_checker() -> EUComplianceChecker:
    store = get_store()
    return EUComplianceChecker(store, DocumentResolver(store))


def require_api_key():
    if config.API_KEY:
        key = request.headers.get("X-API-Key", "")
        if key != config.API_KEY:
            return jsonify({"error": "Unauthorized"}), 401
    return None


def json_body() -> dict:
    raw = request.get_json(silent=True)
    if raw is None:
        raise BadRequest("Expected application/json body")
    if not isinstance(raw, dict):
        raise BadRequest("Body must be a JSON object")
    return raw


def validation_failed(ve):
    # ctx may hold the raised exception object, which is not JSON serializable
    return jsonify({"error": "validation_failed", "details": ve.errors(include_context=False, include_url=False)}), 400
