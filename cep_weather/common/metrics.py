"""
Prometheus metrics shared by both services.
Metrics live in the default registry once per process and carry a service label.
"""
from flask import request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUEST_COUNT = Counter(
    "cep_http_requests_total", "Total HTTP requests", ["service", "method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "cep_http_request_duration_seconds", "Request latency", ["service", "endpoint"]
)
UPSTREAM_REQUESTS = Counter(
    "cep_upstream_requests_total", "Outbound calls to collaborators", ["service", "target", "outcome"]
)


def count_upstream(service, target, outcome):
    UPSTREAM_REQUESTS.labels(service=service, target=target, outcome=outcome).inc()


def instrument(app, service):
    """Adds /metrics and per-request counting to a Flask app."""

    @app.after_request
    def count_request(response):
        endpoint = request.url_rule.rule if request.url_rule else "unmatched"
        REQUEST_COUNT.labels(
            service=service, method=request.method, endpoint=endpoint, status=response.status_code
        ).inc()
        return response

    @app.route("/metrics")
    def metrics():
        """Prometheus-compatible metrics."""
        return generate_latest(), 200, {"Content-Type": CONTENT_TYPE_LATEST}
