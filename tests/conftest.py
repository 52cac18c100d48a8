"""Pytest configuration and fixtures for the CEP weather services."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from cep_weather.common.config import Settings
from cep_weather.common.tracing import Tracing


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracing(span_exporter: InMemorySpanExporter) -> Tracing:
    """Tracing handle whose spans land in span_exporter."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return Tracing(provider.get_tracer("tests"))


@pytest.fixture
def settings() -> Settings:
    """Settings without a weather key, so the mock provider is used."""
    return Settings(traces_exporter="none", resolver_url="http://resolver.test")


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock requests Session."""
    return MagicMock(spec=requests.Session)


def create_mock_response(
    status_code: int = 200,
    json_data: Any = None,
    content: bytes = b"",
    headers: dict[str, str] | None = None,
    json_error: Exception | None = None,
) -> MagicMock:
    """Create a configured mock requests Response.

    Args:
        status_code: HTTP status code
        json_data: Data to return from json() call
        content: Raw body bytes
        headers: Response headers
        json_error: Exception raised by json() instead of returning data

    Returns:
        Configured MagicMock response
    """
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = content.decode("utf-8", errors="replace")
    response.headers = headers or {"Content-Type": "application/json"}
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


def spans_by_name(exporter: InMemorySpanExporter) -> dict[str, Any]:
    return {span.name: span for span in exporter.get_finished_spans()}
