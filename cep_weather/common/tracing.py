"""
OpenTelemetry wiring.
A Tracing handle is built once per process and handed to each app factory, which
passes it on explicitly to the code making outbound calls. No global tracer
provider or propagator is installed.
"""
import atexit
import logging

from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import SpanKind
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from cep_weather import __version__

logger = logging.getLogger(__name__)


class Tracing:
    """Tracer plus the W3C trace-context propagator used on every hop."""

    def __init__(self, tracer, propagator=None):
        self.tracer = tracer
        self.propagator = propagator or TraceContextTextMapPropagator()

    def server_span(self, name, headers):
        """Span for an incoming request, parented on the caller's trace context."""
        parent = self.propagator.extract(carrier=headers)
        return self.tracer.start_as_current_span(name, context=parent, kind=SpanKind.SERVER)

    def client_span(self, name):
        return self.tracer.start_as_current_span(name, kind=SpanKind.CLIENT)

    def inject(self, headers=None):
        """Adds traceparent/tracestate for the current span to headers."""
        headers = dict(headers or {})
        self.propagator.inject(headers)
        return headers


def init_tracing(service_name, settings) -> Tracing:
    """Builds the provider for one service and exports spans over OTLP/gRPC."""
    resource = Resource.create({SERVICE_NAME: service_name, SERVICE_VERSION: __version__})
    provider = TracerProvider(resource=resource)

    if settings.traces_exporter == "otlp":
        exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info("Exporting traces to %s", settings.otlp_endpoint)
    else:
        logger.info("Trace export disabled (OTEL_TRACES_EXPORTER=%s)", settings.traces_exporter)

    atexit.register(provider.shutdown)
    return Tracing(provider.get_tracer(service_name, __version__))
