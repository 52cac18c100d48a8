"""Temperature scales and the response the resolver sends back."""
from dataclasses import dataclass


def celsius_to_fahrenheit(celsius):
    return celsius * 1.8 + 32


def celsius_to_kelvin(celsius):
    return celsius + 273.15


@dataclass(frozen=True)
class WeatherResult:
    city: str
    temp_c: float
    temp_f: float
    temp_k: float

    @classmethod
    def from_celsius(cls, city, celsius):
        """All three scales derived from one Celsius reading."""
        return cls(
            city=city,
            temp_c=celsius,
            temp_f=celsius_to_fahrenheit(celsius),
            temp_k=celsius_to_kelvin(celsius),
        )

    def to_json(self):
        return {
            "city": self.city,
            "temp_C": self.temp_c,
            "temp_F": self.temp_f,
            "temp_K": self.temp_k,
        }
