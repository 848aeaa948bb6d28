"""Tests for the shared HTTP client."""

import pytest

from config import Config
from utils.http_client import close_http_client, get_http_client


@pytest.mark.asyncio
async def test_every_timeout_phase_uses_call_bound():
    client = get_http_client()
    try:
        assert client.timeout.connect == Config.HTTP_TIMEOUT
        assert client.timeout.read == Config.HTTP_TIMEOUT
        assert client.timeout.write == Config.HTTP_TIMEOUT
        assert client.timeout.pool == Config.HTTP_TIMEOUT
    finally:
        await close_http_client()


@pytest.mark.asyncio
async def test_closed_client_is_replaced():
    client = get_http_client()
    assert get_http_client() is client
    await close_http_client()

    assert client.is_closed
    replacement = get_http_client()
    try:
        assert replacement is not client
        assert replacement.headers["user-agent"] == Config.USER_AGENT
    finally:
        await close_http_client()
