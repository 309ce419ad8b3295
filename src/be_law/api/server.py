import os
import time
import uuid
import json
import logging
from datetime import datetime, timezone
from flask import Flask, request, g, jsonify
from flask_cors import CORS
from flasgger import Swagger
from prometheus_client import Counter, Histogram
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration

from be_law.api import config, state, dependencies
from be_law.api.routes import citations_bp, provisions_bp, monitoring_bp
from be_law.api.extensions import limiter
from be_law.errors import BeLawError, CorpusUnavailableError

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger("api")


def _register_metrics():
    if state.REQUEST_COUNT is not None:
        return
    try:
        state.REQUEST_COUNT = Counter('be_law_requests_total', 'Total HTTP requests', ['method', 'endpoint', 'status'])
        state.REQUEST_LATENCY = Histogram('be_law_request_latency_seconds', 'Request latency in seconds', ['endpoint'])
        state.CITATIONS_VALIDATED = Counter('be_law_citations_validated_total', 'Citations validated', ['outcome'])
    except ValueError:
        # already in the default registry (module re-imported)
        logger.warning("Prometheus collectors already registered; request metrics disabled for this import")


def _init_sentry():
    if not config.SENTRY_DSN:
        return
    try:
        sentry_sdk.init(
            dsn=config.SENTRY_DSN,
            integrations=[FlaskIntegration()],
            traces_sample_rate=config.SENTRY_TRACES_SAMPLE_RATE,
            profiles_sample_rate=config.SENTRY_PROFILES_SAMPLE_RATE,
            environment=config.APP_ENV,
            release=f"{config.SERVER_NAME}@{config.APP_VERSION}",
        )
        logger.info("Sentry enabled for %s", config.APP_ENV)
    except Exception as e:
        logger.error(f"Sentry init failed: {e}")


def _access_log_line(response, duration: float) -> str:
    return json.dumps({
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "lvl": "info",
        "request_id": getattr(g, 'request_id', None),
        "method": request.method,
        "path": request.path,
        "query": request.query_string.decode('utf-8', 'replace') or None,
        "status": response.status_code,
        "duration_ms": int(duration * 1000),
        "remote_addr": request.headers.get('X-Forwarded-For', request.remote_addr),
    }, ensure_ascii=False)


_register_metrics()
_init_sentry()

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = config.MAX_CONTENT_LENGTH
app.config['SWAGGER'] = {'title': config.SERVER_LABEL, 'uiversion': 3}
CORS(app)
Swagger(app)
limiter.init_app(app)

for bp in (citations_bp, provisions_bp, monitoring_bp):
    app.register_blueprint(bp)


@app.errorhandler(BeLawError)
def _input_error(e):
    return jsonify({"error": str(e)}), 400


@app.errorhandler(CorpusUnavailableError)
def _corpus_unavailable(e):
    logger.error(f"Corpus unavailable: {e}")
    return jsonify({"error": "corpus_unavailable", "detail": str(e)}), 503


@app.before_request
def _start_timer():
    g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    g.started_at = time.perf_counter()


@app.after_request
def _log_and_measure(response):
    duration = time.perf_counter() - getattr(g, 'started_at', time.perf_counter())
    logger.info(_access_log_line(response, duration))
    endpoint = request.endpoint or request.path
    if state.REQUEST_COUNT:
        state.REQUEST_COUNT.labels(request.method, endpoint, response.status_code).inc()
    if state.REQUEST_LATENCY:
        state.REQUEST_LATENCY.labels(endpoint).observe(duration)
    response.headers["X-Request-ID"] = getattr(g, 'request_id', '') or uuid.uuid4().hex
    return response


# Corpus is opened eagerly when present; otherwise on first request.
dependencies.load_store()

if __name__ == "__main__":
    app.run(debug=True, port=int(os.getenv("PORT", "5002")), host="0.0.0.0")
