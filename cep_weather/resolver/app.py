"""
Resolver - Internal microservice.
Exposes /health, /metrics, and POST /weather which turns a CEP into the current
temperature of its city in Celsius, Fahrenheit and Kelvin.
"""
import os

import requests
from flask import Flask, jsonify, request

from cep_weather.common.config import load_settings
from cep_weather.common.errors import register_error_handlers
from cep_weather.common.log import configure_logging
from cep_weather.common.metrics import REQUEST_LATENCY, instrument
from cep_weather.common.tracing import init_tracing
from cep_weather.common.validation import read_cep_request
from cep_weather.resolver.location import ViaCepClient
from cep_weather.resolver.service import WeatherResolver
from cep_weather.resolver.weather import select_weather_provider

SERVICE_NAME = "resolver"


def create_app(settings=None, tracing=None, session=None):
    settings = settings or load_settings()
    tracing = tracing or init_tracing(SERVICE_NAME, settings)
    session = session or requests.Session()
    resolver = WeatherResolver(
        ViaCepClient(session, settings.viacep_url, settings.lookup_timeout),
        select_weather_provider(settings, session),
    )

    app = Flask(__name__)
    app.json.ensure_ascii = False
    register_error_handlers(app)
    instrument(app, SERVICE_NAME)

    @app.route("/health")
    def health():
        """Liveness: always ok, independent of the providers."""
        return jsonify({"status": "ok"}), 200

    @app.route("/weather", methods=["POST"])
    @REQUEST_LATENCY.labels(service=SERVICE_NAME, endpoint="/weather").time()
    def weather():
        with tracing.server_span("handle-weather-request", request.headers) as span:
            cep_request = read_cep_request(request.get_json(force=True, silent=True))
            span.set_attribute("cep", cep_request.cep)
            result = resolver.resolve(cep_request.cep, tracing)
            span.set_attribute("temp_celsius", result.temp_c)
            span.set_attribute("temp_fahrenheit", result.temp_f)
            span.set_attribute("temp_kelvin", result.temp_k)
        return jsonify(result.to_json()), 200

    return app


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    port = int(os.environ.get("PORT", 8081))
    app.run(host="0.0.0.0", port=port, threaded=True)


if __name__ == "__main__":
    main()
