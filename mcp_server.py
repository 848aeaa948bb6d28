#!/usr/bin/env python3
"""
AccuWeather MCP Server (streamable HTTP transport).

Exposes weather forecast and current conditions tools backed by the
AccuWeather API:
- Configuration centralized in config.py
- AccuWeather client and response shaping in utils/ package
- Tools in tools/ package
- Health and service info routes next to the MCP endpoint

ENV:
  ACCUWEATHER_API_KEY -> AccuWeather API
  PORT, ALLOWED_ORIGINS, DEFAULT_LATITUDE, DEFAULT_LONGITUDE
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import uvicorn
from mcp.server.fastmcp import FastMCP
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from config import Config
from tools.tool_registry import TOOL_NAMES, register_all_tools
from utils.http_client import close_http_client

logs_dir = Path(__file__).parent / Config.LOG_DIR
log_file = logs_dir / "mcp_server.log"
daemon_mode = False

app = FastMCP(
    "accuweather-weather",
    instructions=(
        "Weather forecasts and current conditions from AccuWeather API "
        "for global locations"
    ),
    stateless_http=True,
)
register_all_tools(app)


def setup_logging(daemon=False):
    """Log to logs/mcp_server.log, and to stderr unless running as a daemon."""
    logs_dir.mkdir(exist_ok=True)
    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(detailed_formatter)
    handlers = [file_handler]
    if not daemon:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(detailed_formatter)
        handlers.append(console_handler)

    logging.basicConfig(level=logging.INFO, handlers=handlers)
    logging.getLogger("mcp.tools").setLevel(logging.INFO)


@app.custom_route("/health", methods=["GET"])
async def health(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "status": "healthy",
            "service": Config.SERVICE_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": Config.SERVICE_VERSION,
            "accuweather_api_configured": Config.has_api_key(),
        }
    )


@app.custom_route("/", methods=["GET"])
async def root(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "service": "AccuWeather MCP Server",
            "version": Config.SERVICE_VERSION,
            "description": "Weather forecasts and current conditions from AccuWeather API",
            "endpoints": {"health": "/health", "mcp": "/mcp (POST)"},
            "tools": TOOL_NAMES,
        }
    )


def build_http_app():
    """Streamable HTTP app with CORS for browser-based MCP clients."""
    http_app = app.streamable_http_app()
    http_app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.get_allowed_origins(),
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "mcp-session-id",
            "Authorization",
            Config.LATITUDE_HEADER,
            Config.LONGITUDE_HEADER,
        ],
        expose_headers=["Mcp-Session-Id"],
    )
    return http_app


async def run_server():
    """Serve the MCP app until interrupted, then release the HTTP client."""
    if not daemon_mode:
        print(
            f"AccuWeather MCP Server starting on http://{Config.SERVER_HOST}:{Config.SERVER_PORT}"
        )
        print(f"Health check: http://localhost:{Config.SERVER_PORT}/health")
        print(f"MCP endpoint: http://localhost:{Config.SERVER_PORT}/mcp")
        print(f"Logs: {log_file}")
        print(f"Tools: {len(TOOL_NAMES)} ({', '.join(TOOL_NAMES)})")
        print(
            "AccuWeather API Key: "
            + ("configured" if Config.has_api_key() else "NOT CONFIGURED")
        )
    logging.info(
        f"AccuWeather MCP Server starting on {Config.SERVER_HOST}:{Config.SERVER_PORT}"
    )
    logging.info(f"Daemon mode: {daemon_mode}")
    if not Config.has_api_key():
        logging.warning(
            "ACCUWEATHER_API_KEY is not set; tools will fail until it is configured"
        )

    server = uvicorn.Server(
        uvicorn.Config(
            build_http_app(),
            host=Config.SERVER_HOST,
            port=Config.SERVER_PORT,
            log_level="info",
        )
    )
    try:
        await server.serve()
    except Exception as e:
        logging.error(f"Server error: {e}")
        raise
    finally:
        await close_http_client()
        logging.info("Server shut down")
        if not daemon_mode:
            print("\nServer shut down")


def main():
    parser = argparse.ArgumentParser(description="AccuWeather MCP Server")
    parser.add_argument(
        "--daemon", action="store_true", help="Run in daemon mode (no console output)"
    )
    args = parser.parse_args()
    global daemon_mode
    daemon_mode = args.daemon
    setup_logging(daemon_mode)
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
