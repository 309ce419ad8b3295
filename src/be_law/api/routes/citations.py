import logging
from flask import Blueprint, request, jsonify
from flasgger import swag_from
from pydantic import ValidationError

from be_law.api import state, dependencies, models
from be_law.api.extensions import limiter
from be_law.parsing.citation_formatter import format_citation_text
from be_law.parsing.citation_parser import parse_citation
from be_law.validation.citation_validator import outcome_label

logger = logging.getLogger(__name__)
citations_bp = Blueprint('citations', __name__)


@citations_bp.route("/api/citations/parse", methods=["POST"])
@swag_from({
    'tags': ['citations'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {'citation': {'type': 'string', 'example': 'Loi du 2 fevrier 1994, art. 1er'}}}
    }],
    'responses': {200: {'description': 'Parsed citation (valid=false with an error when unparseable)'}}
})
def parse():
    try:
        parsed = models.ParseRequest(**dependencies.json_body())
    except ValidationError as ve:
        return dependencies.validation_failed(ve)
    return jsonify(parse_citation(parsed.citation).model_dump())


@citations_bp.route("/api/citations/format", methods=["POST"])
@swag_from({
    'tags': ['citations'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'citation': {'type': 'string'},
            'format': {'type': 'string', 'enum': ['full', 'short', 'pinpoint']},
        }}
    }],
    'responses': {200: {'description': 'OK'}}
})
def format_():
    try:
        parsed = models.FormatRequest(**dependencies.json_body())
    except ValidationError as ve:
        return dependencies.validation_failed(ve)
    return jsonify(format_citation_text(parsed.citation, parsed.style()).model_dump(exclude_none=True))


@citations_bp.route("/api/citations/validate", methods=["POST"])
@limiter.limit("60/minute")
@swag_from({
    'tags': ['citations'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {'citation': {'type': 'string', 'example': 'Wet van 2 februari 1994, art. 1'}}}
    }],
    'responses': {200: {'description': 'Validation report'}, 400: {'description': 'Missing or blank citation'}}
})
def validate():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    try:
        payload = models.CitationRequest(**dependencies.json_body())
    except ValidationError as ve:
        return dependencies.validation_failed(ve)

    check = dependencies.citation_validator().check(payload.citation)
    state.update_validation_stats(check.valid)
    if state.CITATIONS_VALIDATED:
        state.CITATIONS_VALIDATED.labels(outcome_label(check)).inc()
    return jsonify(check.model_dump(exclude_none=True))


@citations_bp.route("/api/documents/resolve", methods=["GET"])
@swag_from({
    'tags': ['citations'],
    'parameters': [{
        'name': 'ref', 'in': 'query', 'type': 'string', 'required': True,
        'description': 'Statute id, date expression or title fragment',
        'example': 'Wet van 2 februari 1994',
    }],
    'responses': {
        200: {'description': 'Resolved document'},
        400: {'description': 'Missing ref'},
        404: {'description': 'No matching document'},
    }
})
def resolve_document():
    ref = (request.args.get('ref') or '').strip()
    if not ref:
        return jsonify({"error": "ref is required"}), 400
    document = dependencies.document_resolver().resolve(ref)
    if document is None:
        return jsonify({"error": "not_found", "ref": ref}), 404
    return jsonify(document.model_dump())
