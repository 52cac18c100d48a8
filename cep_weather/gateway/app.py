"""
API Gateway - External entry point.
Exposes /health, /metrics, and POST /cep, which validates the CEP and proxies
it to the internal resolver service.
"""
import os

import requests
from flask import Flask, Response, jsonify, request

from cep_weather.common.config import load_settings
from cep_weather.common.errors import register_error_handlers
from cep_weather.common.log import configure_logging
from cep_weather.common.metrics import REQUEST_LATENCY, instrument
from cep_weather.common.tracing import init_tracing
from cep_weather.common.validation import read_cep_request
from cep_weather.gateway.forward import ResolverClient

SERVICE_NAME = "gateway"


def create_app(settings=None, tracing=None, session=None):
    settings = settings or load_settings()
    tracing = tracing or init_tracing(SERVICE_NAME, settings)
    resolver = ResolverClient(
        session or requests.Session(), settings.resolver_url, settings.gateway_timeout
    )

    app = Flask(__name__)
    app.json.ensure_ascii = False
    register_error_handlers(app)
    instrument(app, SERVICE_NAME)

    @app.route("/health")
    def health():
        """Liveness: always ok, independent of the resolver."""
        return jsonify({"status": "ok"}), 200

    @app.route("/", methods=["POST"])
    @app.route("/cep", methods=["POST"])
    @REQUEST_LATENCY.labels(service=SERVICE_NAME, endpoint="/cep").time()
    def cep():
        with tracing.server_span("handle-cep-request", request.headers) as span:
            cep_request = read_cep_request(request.get_json(force=True, silent=True))
            span.set_attribute("cep", cep_request.cep)
            relayed = resolver.forward(cep_request, tracing)
        return Response(relayed.body, status=relayed.status_code, content_type=relayed.content_type)

    return app


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, threaded=True)


if __name__ == "__main__":
    main()
