#!/usr/bin/env python3
"""
CLI client for the AccuWeather MCP server.
Provides forecast, current, health, and stats commands.
"""

import argparse
import asyncio
import json
import sys

import httpx
from fastmcp.client import Client
from fastmcp.client.transports import StreamableHttpTransport
from rich.console import Console
from rich.syntax import Syntax

from config import Config
from utils.geo_utils import parse_latlon
from utils.performance_tracker import get_performance_stats, print_summary

console = Console()


class WeatherServerCLI:
    def __init__(self, server_url=None, default_at=None):
        self.server_url = (server_url or Config.MCP_SERVER_URL).rstrip("/")
        self.headers = {}
        if default_at:
            lat, lon = default_at
            self.headers = {
                Config.LATITUDE_HEADER: str(lat),
                Config.LONGITUDE_HEADER: str(lon),
            }

    async def call_tool(self, name, arguments):
        """Call a tool on the running server and return its text payload."""
        transport = StreamableHttpTransport(
            url=f"{self.server_url}/mcp", headers=self.headers
        )
        async with Client(transport) as client:
            result = await client.call_tool_mcp(name, arguments)
        text = "\n".join(
            block.text for block in result.content if getattr(block, "text", None)
        )
        return text, bool(result.isError)

    def show_tool_result(self, name, arguments):
        try:
            text, is_error = asyncio.run(self.call_tool(name, arguments))
        except (httpx.HTTPError, RuntimeError) as e:
            # fastmcp reports failed connections as RuntimeError
            console.print(f"[red]Could not reach MCP server at {self.server_url}: {e}[/red]")
            return 1
        return self.render_tool_result(text, is_error)

    def render_tool_result(self, text, is_error):
        if is_error:
            console.print(f"[red]{text}[/red]")
            return 1
        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            console.print(text)
            return 0
        console.print(Syntax(json.dumps(payload, indent=2), "json"))
        return 0

    def show_health(self):
        try:
            response = httpx.get(f"{self.server_url}/health", timeout=10.0)
            response.raise_for_status()
        except httpx.HTTPError as e:
            console.print(f"[red]MCP server is not healthy: {e}[/red]")
            return 1
        console.print(Syntax(json.dumps(response.json(), indent=2), "json"))
        return 0

    def show_stats(self, days):
        stats = get_performance_stats(days=days)
        print_summary(stats)
        return 1 if "error" in stats else 0


def coordinate_arguments(args):
    arguments = {}
    if args.at:
        arguments["latitude"], arguments["longitude"] = args.at
    return arguments


def latlon_type(value):
    parsed = parse_latlon(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"expected 'lat,lon', got {value!r}")
    return parsed


def build_parser():
    parser = argparse.ArgumentParser(description="AccuWeather MCP Server CLI")
    parser.add_argument("--url", help=f"Server URL (default: {Config.MCP_SERVER_URL})")
    parser.add_argument(
        "--default-at",
        type=latlon_type,
        help="Default 'lat,lon' sent in the coordinate headers",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    forecast = subparsers.add_parser("forecast", help="Get a daily forecast")
    forecast.add_argument("--at", type=latlon_type, help="'lat,lon' to forecast")
    forecast.add_argument(
        "--days", type=int, default=Config.DEFAULT_FORECAST_DAYS, help="Days (1-15)"
    )

    current = subparsers.add_parser("current", help="Get current conditions")
    current.add_argument("--at", type=latlon_type, help="'lat,lon' to look up")

    subparsers.add_parser("health", help="Check server health")

    stats = subparsers.add_parser("stats", help="Show tool call statistics")
    stats.add_argument("--days", type=int, default=7, help="Look back this many days")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    cli = WeatherServerCLI(args.url, args.default_at)

    if args.command == "forecast":
        arguments = coordinate_arguments(args)
        arguments["days"] = args.days
        errors = Config.validate_tool_params("get_weather_forecast", arguments)
        if errors:
            console.print(f"[red]{'; '.join(errors)}[/red]")
            return 2
        return cli.show_tool_result("get_weather_forecast", arguments)
    elif args.command == "current":
        arguments = coordinate_arguments(args)
        errors = Config.validate_tool_params("get_current_conditions", arguments)
        if errors:
            console.print(f"[red]{'; '.join(errors)}[/red]")
            return 2
        return cli.show_tool_result("get_current_conditions", arguments)
    elif args.command == "health":
        return cli.show_health()
    elif args.command == "stats":
        return cli.show_stats(args.days)


if __name__ == "__main__":
    sys.exit(main())
