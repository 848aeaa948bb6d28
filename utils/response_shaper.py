#!/usr/bin/env python3
"""
Response shaping for the weather tools.
Turns typed AccuWeather results into the simplified documents returned to
MCP clients. Pure functions, no I/O.
"""

from dateutil.parser import isoparse

from config import Config


def calendar_date(value):
    """Reduce an ISO 8601 timestamp to its YYYY-MM-DD calendar date."""
    if not value:
        return None
    try:
        return isoparse(value).date().isoformat()
    except ValueError:
        return value.split("T", 1)[0]


def _area_name(area):
    return area.name if area is not None else None


def _current_summary(conditions):
    return {
        "temperature": conditions.temperature_metric.value,
        "temp_unit": conditions.temperature_metric.unit,
        "conditions": conditions.weather_text,
        "humidity": conditions.relative_humidity,
        "wind_speed": conditions.wind.speed.value,
        "wind_unit": conditions.wind.speed.unit,
        "wind_direction": conditions.wind.direction_label,
    }


def shape_forecast_day(entry):
    """Flatten one daily forecast entry."""
    return {
        "date": calendar_date(entry.date),
        "max_temp": entry.max_temp,
        "min_temp": entry.min_temp,
        "temp_unit": entry.temp_unit,
        "day_conditions": entry.day.phrase,
        "day_precipitation_probability": entry.day.precipitation_probability,
        "night_conditions": entry.night.phrase,
        "night_precipitation_probability": entry.night.precipitation_probability,
        "wind_speed": entry.day.wind_speed,
        "wind_unit": entry.day.wind_unit,
    }


def shape_forecast_response(lat, lon, bundle, days):
    """Build the get_weather_forecast document from a forecast bundle."""
    forecast = [shape_forecast_day(entry) for entry in bundle.forecast]
    location = bundle.location
    return {
        "location": {
            "latitude": lat,
            "longitude": lon,
            "name": location.localized_name,
            "country": _area_name(location.country),
            "region": _area_name(location.administrative_area),
        },
        "current": _current_summary(bundle.current),
        "period": {
            "days": days,
            "start_date": forecast[0]["date"] if forecast else None,
            "end_date": forecast[-1]["date"] if forecast else None,
        },
        "forecast": forecast,
        "data_source": Config.DATA_SOURCE,
    }


def shape_current_conditions_response(lat, lon, conditions):
    """Build the get_current_conditions document."""
    current = _current_summary(conditions)
    current["has_precipitation"] = conditions.has_precipitation
    current["precipitation_type"] = conditions.precipitation_type or "none"
    return {
        "location": {"latitude": lat, "longitude": lon},
        "current": current,
        "data_source": Config.DATA_SOURCE,
    }


def shape_error_response(message):
    """Build the failure document returned instead of a result."""
    return {"error": message, "data_source": Config.DATA_SOURCE}
