"""
Weather providers.
Two interchangeable implementations of one capability: the WeatherAPI client and
a fixed reading used when no API key is configured. The choice is made once at
startup by select_weather_provider().
"""
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

import requests

from cep_weather.common.errors import ServiceError, UpstreamFailure
from cep_weather.common.metrics import count_upstream
from cep_weather.resolver.conversion import celsius_to_fahrenheit

logger = logging.getLogger(__name__)

MOCK_TEMP_C = 22.5


@dataclass(frozen=True)
class WeatherReading:
    temp_c: float
    temp_f: float
    city: str


class WeatherProvider(ABC):
    @abstractmethod
    def current(self, city, tracing) -> WeatherReading:
        """Current reading for city; raises UpstreamFailure on any failure."""


class MockWeatherProvider(WeatherProvider):
    """Fixed reading for the resolved city, no network."""

    def __init__(self, temp_c=MOCK_TEMP_C):
        self._temp_c = temp_c

    def current(self, city, tracing):
        with tracing.client_span("get-weather-from-api") as span:
            span.set_attribute("location", city)
            span.set_attribute("mock_data", True)
            span.set_attribute("temp_celsius", self._temp_c)
            return WeatherReading(
                temp_c=self._temp_c, temp_f=celsius_to_fahrenheit(self._temp_c), city=city
            )


class WeatherApiProvider(WeatherProvider):
    """Client for weatherapi.com current conditions."""

    def __init__(self, session, api_key, url, timeout):
        self._session = session
        self._api_key = api_key
        self._url = url
        self._timeout = timeout

    def current(self, city, tracing):
        with tracing.client_span("get-weather-from-api") as span:
            span.set_attribute("location", city)
            span.set_attribute("mock_data", False)
            try:
                reading = self._fetch(city, tracing)
            except ServiceError as err:
                count_upstream("resolver", "weatherapi", type(err).__name__)
                raise
            count_upstream("resolver", "weatherapi", "ok")
            span.set_attribute("temp_celsius", reading.temp_c)
            return reading

    def _fetch(self, city, tracing):
        params = {"key": self._api_key, "q": city, "aqi": "no"}
        redacted = requests.Request("GET", self._url, params={**params, "key": "REDACTED"}).prepare().url
        logger.info("Making request to WeatherAPI: %s", redacted)
        try:
            resp = self._session.get(
                self._url, params=params, headers=tracing.inject(), timeout=self._timeout
            )
            if resp.status_code != 200:
                logger.warning("WeatherAPI returned status %d, response body: %s", resp.status_code, resp.text)
                raise UpstreamFailure(f"WeatherAPI returned status {resp.status_code}")
            data = resp.json()
        except requests.RequestException as err:
            raise UpstreamFailure(f"WeatherAPI request failed: {type(err).__name__}") from err
        except ValueError as err:
            raise UpstreamFailure("WeatherAPI returned a body that is not JSON") from err

        try:
            current = data["current"]
            temp_c = float(current["temp_c"])
            temp_f = float(current["temp_f"])
            name = data["location"]["name"]
        except (KeyError, TypeError, ValueError) as err:
            raise UpstreamFailure(f"WeatherAPI response is missing fields: {err}") from err
        if not (math.isfinite(temp_c) and math.isfinite(temp_f)):
            raise UpstreamFailure(f"WeatherAPI returned a non-finite reading: {temp_c}")

        if not isinstance(name, str) or not name.strip():
            name = city
        return WeatherReading(temp_c=temp_c, temp_f=temp_f, city=name)


def select_weather_provider(settings, session) -> WeatherProvider:
    if not settings.has_weather_credential:
        logger.warning("WEATHER_API_KEY not configured; serving mock weather data (%.1f C)", MOCK_TEMP_C)
        return MockWeatherProvider()
    return WeatherApiProvider(
        session, settings.weather_api_key, settings.weather_api_url, settings.lookup_timeout
    )
