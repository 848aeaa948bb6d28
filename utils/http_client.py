#!/usr/bin/env python3
"""
HTTP client utilities for the weather server.
Provides a shared HTTP client with proper timeouts and headers.
"""

import httpx

from config import Config

_http_client: httpx.AsyncClient = None


def build_headers():
    """Headers sent with every AccuWeather request."""
    return {"Accept": "application/json", "User-Agent": Config.USER_AGENT}


def get_http_client() -> httpx.AsyncClient:
    """Get the shared HTTP client instance."""
    global _http_client
    if _http_client is None or _http_client.is_closed:
        # Every phase shares the per-call bound reported by UpstreamTimeout
        timeout = httpx.Timeout(Config.HTTP_TIMEOUT)
        _http_client = httpx.AsyncClient(timeout=timeout, headers=build_headers())
    return _http_client


async def close_http_client():
    """Close the shared HTTP client."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
