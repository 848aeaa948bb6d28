#!/usr/bin/env python3
"""
Error types raised by the AccuWeather client.
Every failure the client can produce is a WeatherClientError subclass.
"""


class WeatherClientError(RuntimeError):
    """Base error for all AccuWeather client failures."""


class InvalidArgument(WeatherClientError, ValueError):
    """Caller input out of range; raised before any network call."""


class UpstreamTimeout(WeatherClientError):
    """An outbound call exceeded its deadline."""

    def __init__(self, timeout):
        self.timeout = timeout
        super().__init__(
            "Request timeout: AccuWeather API took too long to respond "
            f"({timeout:g}s limit)"
        )


class UpstreamError(WeatherClientError):
    """The provider answered with a non-success status, or could not be reached."""

    def __init__(self, status_code, detail):
        self.status_code = status_code
        self.detail = detail
        if status_code is None:
            message = f"AccuWeather API unreachable: {detail}"
        else:
            message = f"AccuWeather API error ({status_code}): {detail}"
        super().__init__(message)


class UpstreamProtocolError(WeatherClientError):
    """The provider answered successfully but the body is malformed."""
