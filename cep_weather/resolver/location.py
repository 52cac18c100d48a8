"""
ViaCEP client.
Maps a CEP to the city (localidade) it belongs to.
"""
import logging

import requests

from cep_weather.common.errors import ServiceError, UpstreamFailure, ZipcodeNotFound
from cep_weather.common.metrics import count_upstream

logger = logging.getLogger(__name__)


# ViaCEP answers 200 with {"erro": true} for well-formed codes it does not know;
# newer deployments send the flag as the string "true". Nothing else counts.
def is_not_found(data):
    flag = data.get("erro")
    return flag is True or flag == "true"


class ViaCepClient:
    def __init__(self, session, url_template, timeout):
        self._session = session
        self._url_template = url_template
        self._timeout = timeout

    def lookup_city(self, cep, tracing):
        """Returns the city name for cep.

        Raises:
            ZipcodeNotFound: ViaCEP flagged the code as unknown.
            UpstreamFailure: transport error, non-200 status or unusable body.
        """
        with tracing.client_span("get-location-from-cep") as span:
            span.set_attribute("cep", cep)
            try:
                city = self._fetch(cep, tracing)
            except ServiceError as err:
                count_upstream("resolver", "viacep", type(err).__name__)
                raise
            count_upstream("resolver", "viacep", "ok")
            span.set_attribute("location", city)
            return city

    def _fetch(self, cep, tracing):
        url = self._url_template.format(cep=cep)
        try:
            resp = self._session.get(url, headers=tracing.inject(), timeout=self._timeout)
        except requests.RequestException as err:
            raise UpstreamFailure(f"ViaCEP request failed: {err}") from err

        if resp.status_code != 200:
            raise UpstreamFailure(f"ViaCEP returned status {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as err:
            raise UpstreamFailure("ViaCEP returned a body that is not JSON") from err
        if not isinstance(data, dict):
            raise UpstreamFailure("ViaCEP returned an unexpected JSON shape")

        if is_not_found(data):
            raise ZipcodeNotFound(f"ViaCEP has no match for {cep}")

        city = data.get("localidade")
        if not isinstance(city, str) or not city.strip():
            raise UpstreamFailure(f"ViaCEP returned no city for {cep}")
        logger.debug("CEP %s resolved to %s", cep, city)
        return city
