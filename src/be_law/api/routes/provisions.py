from flask import Blueprint, jsonify
from flasgger import swag_from
from pydantic import ValidationError

from be_law.api import dependencies, models
from be_law.api.extensions import limiter

provisions_bp = Blueprint('provisions', __name__)


@provisions_bp.route("/api/provisions", methods=["POST"])
@limiter.limit("120/minute")
@swag_from({
    'tags': ['provisions'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'document_id': {'type': 'string', 'example': 'loi-1994-02-02-1994009284-fr'},
            'provision_ref': {'type': 'string', 'example': 'art1'},
            'section': {'type': 'string'},
            'as_of_date': {'type': 'string', 'example': '2000-01-01'},
        }}
    }],
    'responses': {
        200: {'description': 'Provision (or all provisions of the document). Without a matching '
                             'historical version the current text is returned with null validity bounds.'},
        404: {'description': 'Unknown document or provision'},
    }
})
def get_provision():
    try:
        payload = models.ProvisionRequest(**dependencies.json_body())
    except ValidationError as ve:
        return dependencies.validation_failed(ve)

    result = dependencies.provision_resolver().get_provision(
        payload.document_id,
        provision_ref=payload.provision_ref,
        as_of_date=payload.as_of_date,
        section=payload.section,
    )
    if result is None:
        return jsonify({"error": "not_found", "results": None}), 404
    if isinstance(result, list):
        return jsonify({"results": [r.model_dump() for r in result], "count": len(result)})
    return jsonify({"results": result.model_dump()})


@provisions_bp.route("/api/search", methods=["POST"])
@limiter.limit("60/minute")
@swag_from({
    'tags': ['provisions'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'query': {'type': 'string', 'example': 'protection de la jeunesse'},
            'document_id': {'type': 'string'},
            'status': {'type': 'string', 'enum': ['in_force', 'amended', 'repealed', 'not_yet_in_force']},
            'as_of_date': {'type': 'string', 'example': '2000-01-01'},
            'limit': {'type': 'integer', 'default': 10, 'maximum': 50},
        }}
    }],
    'responses': {
        200: {'description': 'Matching provisions; with as_of_date, historical versions in force on that date'},
        400: {'description': 'Invalid as_of_date or request body'},
    }
})
def search():
    try:
        payload = models.SearchRequest(**dependencies.json_body())
    except ValidationError as ve:
        return dependencies.validation_failed(ve)

    hits = dependencies.legislation_search().search(
        payload.query,
        document_id=payload.document_id,
        status=payload.status,
        as_of_date=payload.as_of_date,
        limit=payload.limit,
    )
    return jsonify({"results": [h.model_dump() for h in hits], "count": len(hits)})


@provisions_bp.route("/api/currency", methods=["POST"])
@swag_from({
    'tags': ['provisions'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'document_id': {'type': 'string'},
            'provision_ref': {'type': 'string'},
            'as_of_date': {'type': 'string'},
        }}
    }],
    'responses': {200: {'description': 'OK'}, 404: {'description': 'Unknown document'}}
})
def check_currency():
    try:
        payload = models.CurrencyRequest(**dependencies.json_body())
    except ValidationError as ve:
        return dependencies.validation_failed(ve)

    result = dependencies.currency_checker().check(
        payload.document_id, provision_ref=payload.provision_ref, as_of_date=payload.as_of_date,
    )
    if result is None:
        return jsonify({"error": "not_found", "results": None}), 404
    return jsonify({"results": result.model_dump(exclude_none=True)})


@provisions_bp.route("/api/eu/compliance", methods=["POST"])
@swag_from({
    'tags': ['provisions'],
    'consumes': ['application/json'],
    'parameters': [
        {'name': 'X-API-Key', 'in': 'header', 'type': 'string', 'required': False},
        {
            'name': 'body', 'in': 'body', 'required': True,
            'schema': {'type': 'object', 'properties': {
                'document_id': {'type': 'string', 'example': 'loi-1994-02-02-1994009284-fr'},
                'provision_ref': {'type': 'string'},
                'eu_document_id': {'type': 'string', 'example': 'regulation:2016/679'},
            }}
        },
    ],
    'responses': {
        200: {'description': 'compliant, partial, unclear or not_applicable, with warnings'},
        400: {'description': 'Unknown document'},
        401: {'description': 'Missing or wrong API key'},
    }
})
def eu_compliance():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    try:
        payload = models.EUComplianceRequest(**dependencies.json_body())
    except ValidationError as ve:
        return dependencies.validation_failed(ve)

    result = dependencies.eu_compliance_checker().check(
        payload.document_id, provision_ref=payload.provision_ref, eu_document_id=payload.eu_document_id,
    )
    return jsonify({"results": result.model_dump(exclude_none=True)})
