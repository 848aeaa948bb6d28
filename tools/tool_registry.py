#!/usr/bin/env python3
"""
Tool registry for the AccuWeather MCP server.
Centralizes tool registration and management.
"""

from mcp.server.fastmcp import FastMCP

from tools.weather import register_weather_tools
from utils.accuweather_client import get_accuweather_client

TOOL_NAMES = ["get_weather_forecast", "get_current_conditions"]


def register_all_tools(app: FastMCP, client_factory=get_accuweather_client):
    """Register all weather tools with the FastMCP app."""
    register_weather_tools(app, client_factory)  # Forecast + current conditions
