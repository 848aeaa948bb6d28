"""Shared fixtures and AccuWeather payload builders for the test suite."""

import httpx
import pytest
import pytest_asyncio

from config import Config
from utils.accuweather_client import AccuWeatherClient

BASE_URL = "https://accuweather.test"
NAIROBI = (-1.2864, 36.8172)
LOCATION_KEY = "224758"


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Keep performance logs out of the working tree."""
    monkeypatch.setattr(Config, "LOG_DIR", str(tmp_path / "logs"))
    return tmp_path / "logs"


def location_payload(key=LOCATION_KEY):
    return {
        "Key": key,
        "LocalizedName": "Nairobi",
        "Country": {"ID": "KE", "LocalizedName": "Kenya"},
        "AdministrativeArea": {"ID": "110", "LocalizedName": "Nairobi"},
    }


def conditions_payload(precipitation_type=None):
    payload = {
        "LocalObservationDateTime": "2025-11-05T10:15:00+03:00",
        "Temperature": {
            "Metric": {"Value": 22.4, "Unit": "C"},
            "Imperial": {"Value": 72.0, "Unit": "F"},
        },
        "WeatherText": "Partly sunny",
        "WeatherIcon": 3,
        "RelativeHumidity": 64,
        "Wind": {
            "Speed": {"Metric": {"Value": 11.1, "Unit": "km/h"}},
            "Direction": {"Degrees": 68, "Localized": "ENE"},
        },
        "HasPrecipitation": precipitation_type is not None,
    }
    if precipitation_type is not None:
        payload["PrecipitationType"] = precipitation_type
    return [payload]


def forecast_day(date, low=14.0, high=25.0):
    return {
        "Date": date,
        "Temperature": {
            "Minimum": {"Value": low, "Unit": "C"},
            "Maximum": {"Value": high, "Unit": "C"},
        },
        "Day": {
            "Icon": 4,
            "IconPhrase": "Intermittent clouds",
            "PrecipitationProbability": 25,
            "Wind": {"Speed": {"Value": 14.8, "Unit": "km/h"}},
        },
        "Night": {
            "Icon": 38,
            "IconPhrase": "Mostly cloudy",
            "PrecipitationProbability": 10,
        },
    }


def forecast_payload(count=5):
    return {
        "DailyForecasts": [
            forecast_day(f"2025-11-{5 + i:02d}T07:00:00+03:00", low=14.0 + i)
            for i in range(count)
        ]
    }


class FakeAccuWeather:
    """Routes AccuWeather paths to canned responses and records requests."""

    def __init__(self, forecast_days=5):
        self.requests = []
        self.http_clients = []
        self.routes = {
            "/locations/v1/cities/geoposition/search": lambda r: httpx.Response(
                200, json=location_payload()
            ),
            f"/locations/v1/{LOCATION_KEY}": lambda r: httpx.Response(
                200, json=location_payload()
            ),
            f"/currentconditions/v1/{LOCATION_KEY}": lambda r: httpx.Response(
                200, json=conditions_payload()
            ),
        }
        self.set_forecast(forecast_days, forecast_payload(forecast_days))

    def set_forecast(self, days, payload):
        self.routes[f"/forecasts/v1/daily/{days}day/{LOCATION_KEY}"] = (
            lambda r: httpx.Response(200, json=payload)
        )

    def handler(self, request):
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, text="Not found")
        return route(request)

    @property
    def paths(self):
        return [request.url.path for request in self.requests]

    def client(self, timeout=None):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        self.http_clients.append(http_client)
        return AccuWeatherClient(
            "test-key", base_url=BASE_URL, timeout=timeout, http_client=http_client
        )

    async def aclose(self):
        for http_client in self.http_clients:
            await http_client.aclose()


@pytest_asyncio.fixture
async def fake_api():
    api = FakeAccuWeather()
    yield api
    await api.aclose()
