#!/usr/bin/env python3
"""
Typed views of AccuWeather payloads.

Each model is built from the provider's JSON with ``from_api`` and is frozen
after construction. Nested fields that the provider omits come through as
``None`` rather than failing; only the fields the client checks explicitly
(location key, conditions list, forecast list) are treated as required.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


def section(data, *path):
    """Walk nested dicts, returning {} for any missing level."""
    for name in path:
        if not isinstance(data, dict):
            return {}
        data = data.get(name)
    return data if isinstance(data, dict) else {}


@dataclass(frozen=True)
class Measurement:
    value: Optional[float]
    unit: Optional[str]

    @classmethod
    def from_api(cls, data):
        data = data if isinstance(data, dict) else {}
        return cls(value=data.get("Value"), unit=data.get("Unit"))


@dataclass(frozen=True)
class NamedArea:
    id: Optional[str]
    name: Optional[str]

    @classmethod
    def from_api(cls, data):
        if not isinstance(data, dict):
            return None
        return cls(id=data.get("ID"), name=data.get("LocalizedName"))


@dataclass(frozen=True)
class LocationDetails:
    key: str
    localized_name: Optional[str]
    country: Optional[NamedArea]
    administrative_area: Optional[NamedArea]

    @classmethod
    def from_api(cls, data):
        return cls(
            key=data["Key"],
            localized_name=data.get("LocalizedName"),
            country=NamedArea.from_api(data.get("Country")),
            administrative_area=NamedArea.from_api(data.get("AdministrativeArea")),
        )


@dataclass(frozen=True)
class Wind:
    speed: Measurement
    direction_degrees: Optional[float]
    direction_label: Optional[str]


@dataclass(frozen=True)
class CurrentConditions:
    observed_at: Optional[str]
    temperature_metric: Measurement
    temperature_imperial: Measurement
    weather_text: Optional[str]
    weather_icon: Optional[int]
    relative_humidity: Optional[float]
    wind: Wind
    precipitation_type: Optional[str]
    has_precipitation: bool

    @classmethod
    def from_api(cls, data):
        temperature = section(data, "Temperature")
        direction = section(data, "Wind", "Direction")
        return cls(
            observed_at=data.get("LocalObservationDateTime"),
            temperature_metric=Measurement.from_api(temperature.get("Metric")),
            temperature_imperial=Measurement.from_api(temperature.get("Imperial")),
            weather_text=data.get("WeatherText"),
            weather_icon=data.get("WeatherIcon"),
            relative_humidity=data.get("RelativeHumidity"),
            wind=Wind(
                speed=Measurement.from_api(section(data, "Wind", "Speed").get("Metric")),
                direction_degrees=direction.get("Degrees"),
                direction_label=direction.get("Localized"),
            ),
            precipitation_type=data.get("PrecipitationType"),
            has_precipitation=bool(data.get("HasPrecipitation", False)),
        )


@dataclass(frozen=True)
class DayPart:
    icon: Optional[int]
    phrase: Optional[str]
    precipitation_probability: Optional[float]
    wind_speed: Optional[float] = None
    wind_unit: Optional[str] = None


@dataclass(frozen=True)
class DailyForecastEntry:
    date: str
    min_temp: Optional[float]
    max_temp: Optional[float]
    temp_unit: Optional[str]
    day: DayPart
    night: DayPart

    @classmethod
    def from_api(cls, data):
        minimum = Measurement.from_api(section(data, "Temperature").get("Minimum"))
        maximum = Measurement.from_api(section(data, "Temperature").get("Maximum"))
        day = section(data, "Day")
        night = section(data, "Night")
        day_wind = Measurement.from_api(section(day, "Wind").get("Speed"))
        return cls(
            date=data.get("Date") or "",
            min_temp=minimum.value,
            max_temp=maximum.value,
            temp_unit=maximum.unit or minimum.unit,
            day=DayPart(
                icon=day.get("Icon"),
                phrase=day.get("IconPhrase"),
                precipitation_probability=day.get("PrecipitationProbability"),
                wind_speed=day_wind.value,
                wind_unit=day_wind.unit,
            ),
            night=DayPart(
                icon=night.get("Icon"),
                phrase=night.get("IconPhrase"),
                precipitation_probability=night.get("PrecipitationProbability"),
            ),
        )


@dataclass(frozen=True)
class ForecastBundle:
    location: LocationDetails
    current: CurrentConditions
    forecast: Tuple[DailyForecastEntry, ...]
