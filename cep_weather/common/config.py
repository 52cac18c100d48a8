"""
Environment-driven settings for both services.
Values come from the process environment, optionally seeded from a .env file.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

PLACEHOLDER_WEATHER_API_KEY = "your_weather_api_key_here"

DEFAULT_RESOLVER_URL = "http://localhost:8081"
DEFAULT_OTLP_ENDPOINT = "localhost:4317"
DEFAULT_VIACEP_URL = "https://viacep.com.br/ws/{cep}/json/"
DEFAULT_WEATHER_API_URL = "http://api.weatherapi.com/v1/current.json"
DEFAULT_GATEWAY_TIMEOUT = 30.0
DEFAULT_LOOKUP_TIMEOUT = 10.0


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class Settings:
    resolver_url: str = DEFAULT_RESOLVER_URL
    weather_api_key: Optional[str] = None
    otlp_endpoint: str = DEFAULT_OTLP_ENDPOINT
    traces_exporter: str = "otlp"
    viacep_url: str = DEFAULT_VIACEP_URL
    weather_api_url: str = DEFAULT_WEATHER_API_URL
    gateway_timeout: float = DEFAULT_GATEWAY_TIMEOUT
    lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT
    log_level: str = "INFO"

    @property
    def has_weather_credential(self) -> bool:
        """False when the key is unset, blank or still the placeholder."""
        key = (self.weather_api_key or "").strip()
        return bool(key) and key != PLACEHOLDER_WEATHER_API_KEY


def _timeout(name, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as err:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}") from err
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings() -> Settings:
    """Loads settings from the environment (and .env when present)."""
    load_dotenv(find_dotenv(usecwd=True))

    resolver_url = os.getenv("RESOLVER_URL") or os.getenv("SERVICE_B_URL") or DEFAULT_RESOLVER_URL

    return Settings(
        resolver_url=resolver_url.rstrip("/"),
        weather_api_key=os.getenv("WEATHER_API_KEY"),
        otlp_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or DEFAULT_OTLP_ENDPOINT,
        traces_exporter=(os.getenv("OTEL_TRACES_EXPORTER") or "otlp").lower(),
        viacep_url=os.getenv("VIACEP_URL") or DEFAULT_VIACEP_URL,
        weather_api_url=os.getenv("WEATHER_API_URL") or DEFAULT_WEATHER_API_URL,
        gateway_timeout=_timeout("GATEWAY_TIMEOUT", DEFAULT_GATEWAY_TIMEOUT),
        lookup_timeout=_timeout("LOOKUP_TIMEOUT", DEFAULT_LOOKUP_TIMEOUT),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
