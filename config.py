#!/usr/bin/env python3
"""
Configuration module for the AccuWeather MCP server.
Centralizes API keys, settings, and environment variables.
"""

import os

from dotenv import find_dotenv, load_dotenv

# Variables already set in the environment take precedence over .env
load_dotenv(os.getenv("ENV_FILE") or find_dotenv(usecwd=True))


class Config:
    """Configuration class for weather server settings."""

    # Service identity
    SERVICE_NAME = "accuweather-mcp-server"
    SERVICE_VERSION = "1.0.0"

    # API Keys
    ACCUWEATHER_API_KEY = os.getenv("ACCUWEATHER_API_KEY", "")

    # AccuWeather Settings
    ACCUWEATHER_BASE_URL = os.getenv(
        "ACCUWEATHER_BASE_URL", "https://dataservice.accuweather.com"
    )
    ACCUWEATHER_LANGUAGE = "en-us"
    DATA_SOURCE = "AccuWeather API"

    # HTTP Settings
    HTTP_TIMEOUT = 30.0  # Per outbound call, not configurable
    USER_AGENT = "AccuWeather-MCP-Server/1.0.0"

    # Server Settings
    SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
    SERVER_PORT = int(os.getenv("PORT", "3001"))
    MCP_SERVER_URL = os.getenv("MCP_SERVER_URL", f"http://localhost:{SERVER_PORT}")
    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "")

    # Tool Settings
    DEFAULT_LATITUDE = float(os.getenv("DEFAULT_LATITUDE", "-1.2864"))  # Nairobi
    DEFAULT_LONGITUDE = float(os.getenv("DEFAULT_LONGITUDE", "36.8172"))
    DEFAULT_FORECAST_DAYS = 5
    MIN_FORECAST_DAYS = 1
    MAX_FORECAST_DAYS = 15
    LATITUDE_HEADER = "x-farm-latitude"
    LONGITUDE_HEADER = "x-farm-longitude"

    # File Paths
    LOG_DIR = os.getenv("LOG_DIR", "logs")
    PERFORMANCE_LOG_FILE = os.getenv("PERFORMANCE_LOG_FILE", "performance_logs.jsonl")

    @classmethod
    def has_api_key(cls):
        """Check if the AccuWeather client can be configured."""
        return bool(cls.ACCUWEATHER_API_KEY)

    @classmethod
    def get_allowed_origins(cls):
        """Get CORS origins, allowing any origin when none are configured."""
        origins = [o.strip() for o in cls.ALLOWED_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    @classmethod
    def validate_tool_params(cls, tool_name, params):
        """Basic parameter validation for tools."""
        validation_errors = []

        if not isinstance(params, dict):
            validation_errors.append("Parameters must be a dictionary")
            return validation_errors

        if tool_name not in ["get_weather_forecast", "get_current_conditions"]:
            validation_errors.append(f"Unknown tool: {tool_name}")
            return validation_errors

        for field, bound in (("latitude", 90), ("longitude", 180)):
            value = params.get(field)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                validation_errors.append(f"{field} must be a number")
            elif not -bound <= value <= bound:
                validation_errors.append(
                    f"{field} must be between {-bound} and {bound}"
                )

        if tool_name == "get_weather_forecast" and "days" in params:
            days = params["days"]
            if isinstance(days, bool) or not isinstance(days, int):
                validation_errors.append("days must be an integer")
            elif not cls.MIN_FORECAST_DAYS <= days <= cls.MAX_FORECAST_DAYS:
                validation_errors.append(
                    f"days must be between {cls.MIN_FORECAST_DAYS} "
                    f"and {cls.MAX_FORECAST_DAYS}"
                )

        return validation_errors
