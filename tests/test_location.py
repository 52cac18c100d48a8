"""Tests for the ViaCEP client."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

from cep_weather.common.errors import UpstreamFailure, ZipcodeNotFound
from cep_weather.common.tracing import Tracing
from cep_weather.resolver.location import ViaCepClient

from .conftest import create_mock_response, spans_by_name

URL_TEMPLATE = "https://viacep.com.br/ws/{cep}/json/"


@pytest.fixture
def client(mock_session: MagicMock) -> ViaCepClient:
    return ViaCepClient(mock_session, URL_TEMPLATE, timeout=10)


class TestLookupCity:
    def test_returns_localidade(
        self, client: ViaCepClient, mock_session: MagicMock, tracing: Tracing, span_exporter
    ) -> None:
        mock_session.get.return_value = create_mock_response(
            json_data={"cep": "01001-000", "localidade": "São Paulo", "uf": "SP"}
        )

        assert client.lookup_city("01001000", tracing) == "São Paulo"

        call = mock_session.get.call_args
        assert call.args[0] == "https://viacep.com.br/ws/01001000/json/"
        assert call.kwargs["timeout"] == 10
        assert "traceparent" in call.kwargs["headers"]

        span = spans_by_name(span_exporter)["get-location-from-cep"]
        assert span.attributes["cep"] == "01001000"
        assert span.attributes["location"] == "São Paulo"

    @pytest.mark.parametrize("flag", [True, "true"])
    def test_erro_flag_is_not_found(
        self, client: ViaCepClient, mock_session: MagicMock, tracing: Tracing, flag: object
    ) -> None:
        mock_session.get.return_value = create_mock_response(json_data={"erro": flag})

        with pytest.raises(ZipcodeNotFound):
            client.lookup_city("99999999", tracing)

    @pytest.mark.parametrize("flag", [1, 1.0, "True", "1", False, "false"])
    def test_other_erro_values_are_not_a_not_found_signal(
        self, client: ViaCepClient, mock_session: MagicMock, tracing: Tracing, flag: object
    ) -> None:
        mock_session.get.return_value = create_mock_response(
            json_data={"erro": flag, "localidade": "Recife"}
        )

        assert client.lookup_city("50000000", tracing) == "Recife"

    def test_connection_error_is_upstream_failure(
        self, client: ViaCepClient, mock_session: MagicMock, tracing: Tracing, span_exporter
    ) -> None:
        mock_session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(UpstreamFailure) as exc:
            client.lookup_city("01001000", tracing)
        assert isinstance(exc.value.__cause__, requests.ConnectionError)

        span = spans_by_name(span_exporter)["get-location-from-cep"]
        assert not span.status.is_ok
        assert any(event.name == "exception" for event in span.events)

    def test_timeout_is_upstream_failure(
        self, client: ViaCepClient, mock_session: MagicMock, tracing: Tracing
    ) -> None:
        mock_session.get.side_effect = requests.Timeout("slow")

        with pytest.raises(UpstreamFailure):
            client.lookup_city("01001000", tracing)

    def test_non_200_is_upstream_failure(
        self, client: ViaCepClient, mock_session: MagicMock, tracing: Tracing
    ) -> None:
        mock_session.get.return_value = create_mock_response(status_code=400)

        with pytest.raises(UpstreamFailure):
            client.lookup_city("01001000", tracing)

    def test_undecodable_body_is_upstream_failure_not_not_found(
        self, client: ViaCepClient, mock_session: MagicMock, tracing: Tracing
    ) -> None:
        mock_session.get.return_value = create_mock_response(
            content=b"<html>", json_error=json.JSONDecodeError("bad", "<html>", 0)
        )

        with pytest.raises(UpstreamFailure) as exc:
            client.lookup_city("01001000", tracing)
        assert not isinstance(exc.value, ZipcodeNotFound)

    @pytest.mark.parametrize("payload", [[], {"cep": "01001-000"}, {"localidade": ""}])
    def test_missing_city_is_upstream_failure(
        self, client: ViaCepClient, mock_session: MagicMock, tracing: Tracing, payload: object
    ) -> None:
        mock_session.get.return_value = create_mock_response(json_data=payload)

        with pytest.raises(UpstreamFailure):
            client.lookup_city("01001000", tracing)
