"""Location then weather, one after the other."""
from cep_weather.resolver.conversion import WeatherResult


class WeatherResolver:
    def __init__(self, locations, weather):
        self._locations = locations
        self._weather = weather

    def resolve(self, cep, tracing) -> WeatherResult:
        """Errors from either lookup propagate unchanged; nothing is retried."""
        city = self._locations.lookup_city(cep, tracing)
        reading = self._weather.current(city, tracing)
        return WeatherResult.from_celsius(reading.city, reading.temp_c)
