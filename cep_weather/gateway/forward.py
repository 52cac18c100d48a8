"""HTTP client for the resolver's /weather endpoint."""
import logging
from dataclasses import dataclass

import requests

from cep_weather.common.errors import UpstreamFailure
from cep_weather.common.metrics import count_upstream

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelayedResponse:
    status_code: int
    content_type: str
    body: bytes


class ResolverClient:
    def __init__(self, session, base_url, timeout):
        self._session = session
        self._url = f"{base_url.rstrip('/')}/weather"
        self._timeout = timeout

    def forward(self, cep_request, tracing) -> RelayedResponse:
        """POSTs the CEP to the resolver and returns its answer untouched.

        Any status the resolver sends back is relayed; only transport failures
        (refused connection, timeout, broken body) raise UpstreamFailure.
        """
        with tracing.client_span("forward-to-resolver") as span:
            span.set_attribute("cep", cep_request.cep)
            headers = tracing.inject({"Content-Type": "application/json"})
            try:
                resp = self._session.post(
                    self._url, json=cep_request.to_json(), headers=headers, timeout=self._timeout
                )
                body = resp.content
            except requests.RequestException as err:
                span.record_exception(err)
                count_upstream("gateway", "resolver", "UpstreamFailure")
                logger.error("Error forwarding to resolver: %s", err)
                raise UpstreamFailure(f"resolver request failed: {type(err).__name__}") from err

            count_upstream("gateway", "resolver", "ok")
            span.set_attribute("http.status_code", resp.status_code)
            return RelayedResponse(
                status_code=resp.status_code,
                content_type=resp.headers.get("Content-Type", "application/json"),
                body=body,
            )
