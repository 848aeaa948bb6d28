#!/usr/bin/env python3
"""
Geographic utilities for the weather server.
Handles coordinate validation, parsing, and default resolution.
"""

import logging
import math

from config import Config
from utils.errors import InvalidArgument

logger = logging.getLogger(__name__)


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_coordinates(lat, lon):
    """Raise InvalidArgument unless lat/lon are finite and within range."""
    if not _is_number(lat) or not math.isfinite(lat) or not -90 <= lat <= 90:
        raise InvalidArgument(
            f"Invalid latitude: {lat}. Must be a number between -90 and 90."
        )
    if not _is_number(lon) or not math.isfinite(lon) or not -180 <= lon <= 180:
        raise InvalidArgument(
            f"Invalid longitude: {lon}. Must be a number between -180 and 180."
        )


def parse_latlon(s):
    """Parse a lat,lon string into a tuple of floats."""
    if not s or "," not in s:
        return None
    a, b = s.split(",", 1)
    try:
        return float(a.strip()), float(b.strip())
    except ValueError:
        return None


def parse_coordinate_header(value, name):
    """Parse a single coordinate header value, ignoring anything unusable."""
    if value is None or not value.strip():
        return None
    try:
        parsed = float(value)
    except ValueError:
        logger.warning(f"Ignoring unparseable {name} header: {value!r}")
        return None
    if not math.isfinite(parsed):
        logger.warning(f"Ignoring non-finite {name} header: {value!r}")
        return None
    return parsed


def header_default_coordinates(headers):
    """Extract caller-supplied default coordinates from request headers."""
    if not headers:
        return None, None
    lat = parse_coordinate_header(headers.get(Config.LATITUDE_HEADER), "latitude")
    lon = parse_coordinate_header(headers.get(Config.LONGITUDE_HEADER), "longitude")
    if lat is not None and lon is not None:
        logger.info(f"Using default coordinates from headers: lat={lat}, lon={lon}")
    return lat, lon


def resolve_coordinates(latitude=None, longitude=None, default_lat=None, default_lon=None):
    """
    Pick the coordinates for a tool call.
    Explicit arguments win, then header defaults, then the configured fallback.
    Each axis is resolved independently.
    """
    lat = latitude
    if lat is None:
        lat = default_lat if default_lat is not None else Config.DEFAULT_LATITUDE
    lon = longitude
    if lon is None:
        lon = default_lon if default_lon is not None else Config.DEFAULT_LONGITUDE
    return lat, lon
