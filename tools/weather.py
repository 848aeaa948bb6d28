#!/usr/bin/env python3
"""
Weather tools for the AccuWeather MCP server.
Provides forecast and current conditions functionality.
"""

import logging
from typing import Annotated, Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from config import Config
from utils.accuweather_client import get_accuweather_client, validate_days
from utils.errors import InvalidArgument, WeatherClientError
from utils.geo_utils import (
    header_default_coordinates,
    resolve_coordinates,
    validate_coordinates,
)
from utils.performance_tracker import track_performance
from utils.response_shaper import (
    shape_current_conditions_response,
    shape_error_response,
    shape_forecast_response,
)

tool_logger = logging.getLogger("mcp.tools")

NOT_CONFIGURED_MESSAGE = (
    "I'm having trouble connecting to the weather data service. "
    "Try again in a moment?"
)
FORECAST_FAILURE_PREFIX = "I'm having trouble getting weather data right now."
CURRENT_FAILURE_PREFIX = "I'm having trouble getting current weather conditions."


def request_headers(ctx):
    """Headers of the HTTP request behind a tool call, if there is one."""
    if ctx is None:
        return None
    try:
        request = ctx.request_context.request
    except ValueError:
        # Called outside of an MCP request (stdio or direct invocation)
        return None
    return getattr(request, "headers", None)


def _failure(prefix, exc):
    if isinstance(exc, InvalidArgument):
        return shape_error_response(str(exc))
    return shape_error_response(f"{prefix} {exc}")


def _reject(tracker, tool, message):
    tracker.add_error()
    tool_logger.error(f"{tool}: {message}")
    return shape_error_response(message)


def raise_on_failure(doc):
    """Surface a failure document as a tool error so the result is flagged isError."""
    if "error" in doc:
        raise ToolError(doc["error"])
    return doc


async def weather_forecast_report(
    client, latitude=None, longitude=None, days=Config.DEFAULT_FORECAST_DAYS, headers=None
):
    """Fetch a full forecast bundle and shape it, or return a failure document."""
    lat, lon = resolve_coordinates(latitude, longitude, *header_default_coordinates(headers))
    tool_logger.info(f"get_weather_forecast called: lat={lat}, lon={lon}, days={days}")

    async with track_performance("get_weather_forecast") as tracker:
        tracker.set_request(lat, lon, days)
        try:
            validate_coordinates(lat, lon)
            validate_days(days)
        except InvalidArgument as e:
            return _reject(tracker, "get_weather_forecast", str(e))
        if client is None:
            return _reject(tracker, "get_weather_forecast", NOT_CONFIGURED_MESSAGE)
        try:
            bundle = await client.fetch_full_bundle(lat, lon, days)
        except WeatherClientError as e:
            tracker.add_error()
            tool_logger.error(f"Error in get_weather_forecast: {e}")
            return _failure(FORECAST_FAILURE_PREFIX, e)
        return shape_forecast_response(lat, lon, bundle, days)


async def current_conditions_report(client, latitude=None, longitude=None, headers=None):
    """Fetch current conditions and shape them, or return a failure document."""
    lat, lon = resolve_coordinates(latitude, longitude, *header_default_coordinates(headers))
    tool_logger.info(f"get_current_conditions called: lat={lat}, lon={lon}")

    async with track_performance("get_current_conditions") as tracker:
        tracker.set_request(lat, lon)
        try:
            validate_coordinates(lat, lon)
        except InvalidArgument as e:
            return _reject(tracker, "get_current_conditions", str(e))
        if client is None:
            return _reject(tracker, "get_current_conditions", NOT_CONFIGURED_MESSAGE)
        try:
            conditions = await client.fetch_current_for_coordinate(lat, lon)
        except WeatherClientError as e:
            tracker.add_error()
            tool_logger.error(f"Error in get_current_conditions: {e}")
            return _failure(CURRENT_FAILURE_PREFIX, e)
        return shape_current_conditions_response(lat, lon, conditions)


def register_weather_tools(app: FastMCP, client_factory=get_accuweather_client):
    """Register the weather tools with the FastMCP app."""

    @app.tool()
    async def get_weather_forecast(
        ctx: Context,
        latitude: Annotated[
            Optional[float],
            Field(description="Latitude coordinate. Optional if provided in headers."),
        ] = None,
        longitude: Annotated[
            Optional[float],
            Field(description="Longitude coordinate. Optional if provided in headers."),
        ] = None,
        days: Annotated[
            int,
            Field(description="Number of days to forecast (1-15, default: 5)."),
        ] = Config.DEFAULT_FORECAST_DAYS,
    ) -> dict:
        """Get weather forecast from AccuWeather API. Returns daily forecasts with temperature, precipitation probability, wind, and conditions."""
        doc = await weather_forecast_report(
            client_factory(), latitude, longitude, days, request_headers(ctx)
        )
        return raise_on_failure(doc)

    @app.tool()
    async def get_current_conditions(
        ctx: Context,
        latitude: Annotated[
            Optional[float],
            Field(description="Latitude coordinate. Optional if provided in headers."),
        ] = None,
        longitude: Annotated[
            Optional[float],
            Field(description="Longitude coordinate. Optional if provided in headers."),
        ] = None,
    ) -> dict:
        """Get current weather conditions from AccuWeather API. Returns temperature, conditions, humidity, wind, and precipitation."""
        doc = await current_conditions_report(
            client_factory(), latitude, longitude, request_headers(ctx)
        )
        return raise_on_failure(doc)
