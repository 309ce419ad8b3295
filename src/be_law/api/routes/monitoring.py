import os
import platform
from typing import Any, Dict, Optional
from flask import Blueprint, jsonify, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from be_law.api import config, state, dependencies
from be_law.errors import CorpusUnavailableError

monitoring_bp = Blueprint('monitoring', __name__)


def _dataset_facts() -> Optional[Dict[str, Any]]:
    try:
        store = dependencies.get_store()
    except CorpusUnavailableError:
        return None
    return {
        "jurisdiction": "Belgium (BE)",
        "path": str(store.path),
        "metadata": store.metadata(),
        "counts": store.counts(),
        "capabilities": store.capabilities(),
    }


@monitoring_bp.route("/metrics", methods=["GET"])
def metrics():
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)


@monitoring_bp.route("/version", methods=["GET"])
@monitoring_bp.route("/api/version", methods=["GET"])
def version():
    """Build info plus the corpus snapshot being served."""
    return jsonify({
        "name": config.SERVER_LABEL,
        "server": config.SERVER_NAME,
        "version": config.APP_VERSION,
        "env": config.APP_ENV,
        "commit": os.getenv("GIT_COMMIT"),
        "python": platform.python_version(),
        "dataset": _dataset_facts(),
    })


@monitoring_bp.route("/api/health", methods=["GET"])
def health():
    try:
        documents = dependencies.get_store().count_rows('legal_documents')
    except CorpusUnavailableError as e:
        return jsonify({"status": "error", "detail": str(e)}), 503
    return jsonify({"status": "ok", "documents": documents}), 200


@monitoring_bp.route("/api/health/ready", methods=["GET"])
def health_ready():
    """Readiness check: corpus open and non-empty."""
    checks = {'corpus_loaded': state.store is not None, 'documents_present': False}
    if state.store is not None:
        try:
            checks['documents_present'] = state.store.count_rows('legal_documents') > 0
        except CorpusUnavailableError:
            checks['documents_present'] = False
    ready = all(checks.values())
    return jsonify({"ready": ready, "checks": checks}), 200 if ready else 503


@monitoring_bp.route("/api/health/live", methods=["GET"])
def health_live():
    return jsonify({"alive": True}), 200


@monitoring_bp.route("/api/stats/validations", methods=["GET"])
def validation_stats():
    """Citation validation counters since process start."""
    stats = dict(state.validation_stats)
    total = stats.get('total_validations') or 0
    stats['valid_rate'] = (stats.get('valid', 0) / total) if total else None
    return jsonify(stats)


@monitoring_bp.route('/api/reload_corpus', methods=['POST'])
def reload_corpus():
    """Reopen the corpus database after an out-of-process rebuild."""
    denied = dependencies.require_api_key()
    if denied:
        return denied
    if dependencies.load_store() is None:
        return jsonify({'status': 'error', 'detail': f'corpus database not found at {config.DB_PATH}'}), 404
    return jsonify({'status': 'ok', 'path': str(state.store.path)}), 200
