#!/usr/bin/env python3
"""
AccuWeather API client for the weather server.

Every weather query needs a provider location key, so the flow is always:
1. Resolve a location key from coordinates (geoposition search).
2. Use the key for current conditions, daily forecasts and location details.

The client holds only immutable configuration. Each outbound call runs under
its own deadline; nothing is retried and every failure is raised as a
WeatherClientError subclass.
"""

import asyncio
import logging
from typing import List, Optional

import httpx

from config import Config
from utils.errors import (
    InvalidArgument,
    UpstreamError,
    UpstreamProtocolError,
    UpstreamTimeout,
)
from utils.geo_utils import validate_coordinates
from utils.http_client import build_headers, get_http_client
from utils.weather_models import (
    CurrentConditions,
    DailyForecastEntry,
    ForecastBundle,
    LocationDetails,
    section,
)

logger = logging.getLogger(__name__)


def _validate_location_key(location_key):
    if not isinstance(location_key, str) or not location_key.strip():
        raise InvalidArgument("Invalid location key: must be a non-empty string")


def validate_days(days):
    if isinstance(days, bool) or not isinstance(days, int):
        raise InvalidArgument(f"Invalid number of days: {days!r}. Must be an integer.")
    if not Config.MIN_FORECAST_DAYS <= days <= Config.MAX_FORECAST_DAYS:
        raise InvalidArgument(
            f"Invalid number of days: {days}. Must be between "
            f"{Config.MIN_FORECAST_DAYS} and {Config.MAX_FORECAST_DAYS}."
        )


class AccuWeatherClient:
    """Client for the AccuWeather REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not api_key:
            raise InvalidArgument("AccuWeather API key is required")
        self._api_key = api_key
        self._base_url = (base_url or Config.ACCUWEATHER_BASE_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else Config.HTTP_TIMEOUT
        self._http_client = http_client

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    async def _get_json(self, path: str, params: Optional[dict] = None):
        """GET a provider endpoint under a deadline and decode the JSON body."""
        query = {"apikey": self._api_key, "language": Config.ACCUWEATHER_LANGUAGE}
        query.update(params or {})
        client = self._http_client or get_http_client()
        url = f"{self._base_url}{path}"

        try:
            async with asyncio.timeout(self._timeout):
                response = await client.get(url, params=query, headers=build_headers())
        except (TimeoutError, httpx.TimeoutException) as exc:
            logger.error(f"AccuWeather request to {path} timed out after {self._timeout}s")
            raise UpstreamTimeout(self._timeout) from exc
        except httpx.TransportError as exc:
            logger.error(f"AccuWeather request to {path} failed: {exc}")
            raise UpstreamError(None, str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            detail = response.text or response.reason_phrase
            logger.error(
                f"AccuWeather returned {response.status_code} for {path}: {detail}"
            )
            raise UpstreamError(response.status_code, detail)

        try:
            return response.json()
        except ValueError as exc:
            logger.error(f"AccuWeather returned invalid JSON for {path}")
            raise UpstreamProtocolError("malformed response: invalid JSON") from exc

    async def resolve_location_key(self, lat: float, lon: float) -> str:
        """Get the provider location key for a coordinate."""
        validate_coordinates(lat, lon)
        logger.info(f"Getting location key for ({lat}, {lon})")

        data = await self._get_json(
            "/locations/v1/cities/geoposition/search", {"q": f"{lat},{lon}"}
        )
        key = data.get("Key") if isinstance(data, dict) else None
        if not key:
            raise UpstreamProtocolError("malformed response: missing location key")

        country = section(data, "Country")
        logger.info(
            f"Location key: {key} ({data.get('LocalizedName')}, "
            f"{country.get('LocalizedName')})"
        )
        return str(key)

    async def fetch_location_details(self, location_key: str) -> LocationDetails:
        """Get descriptive metadata for a location key."""
        _validate_location_key(location_key)
        data = await self._get_json(f"/locations/v1/{location_key}")
        if not isinstance(data, dict) or not data.get("Key"):
            raise UpstreamProtocolError("malformed response: missing location details")
        return LocationDetails.from_api(data)

    async def fetch_current_conditions(self, location_key: str) -> CurrentConditions:
        """Get the current conditions snapshot for a location key."""
        _validate_location_key(location_key)
        data = await self._get_json(
            f"/currentconditions/v1/{location_key}", {"details": "true"}
        )
        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            raise UpstreamProtocolError("malformed response: missing current conditions")
        return CurrentConditions.from_api(data[0])

    async def fetch_forecast(self, location_key: str, days: int = 5) -> List[DailyForecastEntry]:
        """
        Get the daily forecast for a location key.
        Never returns more than ``days`` entries, whatever the provider sends.
        """
        _validate_location_key(location_key)
        validate_days(days)
        data = await self._get_json(
            f"/forecasts/v1/daily/{days}day/{location_key}",
            {"details": "true", "metric": "true"},
        )
        entries = data.get("DailyForecasts") if isinstance(data, dict) else None
        if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
            raise UpstreamProtocolError("malformed response: missing daily forecasts")
        if len(entries) > days:
            logger.debug(f"Truncating {len(entries)} forecast entries to {days}")
        return [DailyForecastEntry.from_api(entry) for entry in entries[:days]]

    async def fetch_current_for_coordinate(self, lat: float, lon: float) -> CurrentConditions:
        """Resolve a coordinate and fetch its current conditions."""
        location_key = await self.resolve_location_key(lat, lon)
        return await self.fetch_current_conditions(location_key)

    async def fetch_full_bundle(self, lat: float, lon: float, days: int = 5) -> ForecastBundle:
        """
        Resolve a coordinate and fetch conditions, forecast and location
        details for it.

        The three second-stage calls only need the key, so they run
        concurrently. The first failure is raised as-is and the remaining
        calls are cancelled before returning.
        """
        validate_days(days)
        location_key = await self.resolve_location_key(lat, lon)

        tasks = [
            asyncio.create_task(self.fetch_current_conditions(location_key)),
            asyncio.create_task(self.fetch_forecast(location_key, days)),
            asyncio.create_task(self.fetch_location_details(location_key)),
        ]
        try:
            current, forecast, location = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return ForecastBundle(location=location, current=current, forecast=tuple(forecast))


def get_accuweather_client():
    """Build a client from configuration, or None when no API key is set."""
    if not Config.has_api_key():
        return None
    return AccuWeatherClient(Config.ACCUWEATHER_API_KEY, Config.ACCUWEATHER_BASE_URL)
