"""Tests for coordinate validation and default coordinate resolution."""

import math

import pytest

from config import Config
from utils.errors import InvalidArgument
from utils.geo_utils import (
    header_default_coordinates,
    parse_latlon,
    resolve_coordinates,
    validate_coordinates,
)


@pytest.mark.parametrize("lat, lon", [(0, 0), (90, 180), (-90, -180), (-1.2864, 36.8172)])
def test_valid_coordinates(lat, lon):
    validate_coordinates(lat, lon)


@pytest.mark.parametrize(
    "lat, lon, axis",
    [
        (90.0001, 0, "latitude"),
        (-math.inf, 0, "latitude"),
        (False, 0, "latitude"),
        (0, 181, "longitude"),
        (0, math.nan, "longitude"),
        (0, "36.8", "longitude"),
    ],
)
def test_invalid_coordinates(lat, lon, axis):
    with pytest.raises(InvalidArgument, match=f"Invalid {axis}"):
        validate_coordinates(lat, lon)


def test_parse_latlon():
    assert parse_latlon("-1.2864, 36.8172") == (-1.2864, 36.8172)
    assert parse_latlon("north,south") is None
    assert parse_latlon("12.5") is None
    assert parse_latlon("") is None


def test_resolve_prefers_arguments_then_headers_then_fallback():
    assert resolve_coordinates(1.0, 2.0, 3.0, 4.0) == (1.0, 2.0)
    assert resolve_coordinates(None, None, 3.0, 4.0) == (3.0, 4.0)
    assert resolve_coordinates(None, 2.0, None, None) == (Config.DEFAULT_LATITUDE, 2.0)
    assert resolve_coordinates() == (Config.DEFAULT_LATITUDE, Config.DEFAULT_LONGITUDE)


def test_zero_is_a_real_coordinate():
    assert resolve_coordinates(0.0, 0.0, 3.0, 4.0) == (0.0, 0.0)
    assert resolve_coordinates(None, None, 0.0, 0.0) == (0.0, 0.0)


def test_header_defaults():
    headers = {Config.LATITUDE_HEADER: " 12.5 ", Config.LONGITUDE_HEADER: "nan"}
    assert header_default_coordinates(headers) == (12.5, None)
    assert header_default_coordinates({}) == (None, None)
    assert header_default_coordinates(None) == (None, None)
