"""WGS-84 to GCJ-02 coordinate conversion and map deep links.

China-region map providers (Amap, Apple Maps inside China) render GCJ-02
coordinates. Positions reported by browsers are WGS-84, so they must be
shifted with the published empirical offset model before being embedded in
a map link, otherwise the marker lands a few hundred meters off.

The conversion is only defined inside a rough bounding box around China;
points outside it are returned unchanged.
"""

from __future__ import annotations

import math
from urllib.parse import quote, urlencode

from movecar._constants import AMAP_MARKER_URL, APPLE_MAPS_URL, MAP_LABEL
from movecar.models.location import GeoPoint, MapLinks

# Krasovsky 1940 ellipsoid.
_A = 6378245.0
_EE = 0.00669342162296594323

_MIN_LNG = 72.004
_MAX_LNG = 137.8347
_MIN_LAT = 0.8293
_MAX_LAT = 55.8271


def out_of_china(lat: float, lng: float) -> bool:
    """Return ``True`` when the point lies outside the GCJ-02 region."""
    return lng < _MIN_LNG or lng > _MAX_LNG or lat < _MIN_LAT or lat > _MAX_LAT


def _transform_lat(x: float, y: float) -> float:
    ret = -100.0 + 2.0 * x + 3.0 * y + 0.2 * y * y + 0.1 * x * y + 0.2 * math.sqrt(abs(x))
    ret += (20.0 * math.sin(6.0 * x * math.pi) + 20.0 * math.sin(2.0 * x * math.pi)) * 2.0 / 3.0
    ret += (20.0 * math.sin(y * math.pi) + 40.0 * math.sin(y / 3.0 * math.pi)) * 2.0 / 3.0
    ret += (160.0 * math.sin(y / 12.0 * math.pi) + 320.0 * math.sin(y * math.pi / 30.0)) * 2.0 / 3.0
    return ret


def _transform_lng(x: float, y: float) -> float:
    ret = 300.0 + x + 2.0 * y + 0.1 * x * x + 0.1 * x * y + 0.1 * math.sqrt(abs(x))
    ret += (20.0 * math.sin(6.0 * x * math.pi) + 20.0 * math.sin(2.0 * x * math.pi)) * 2.0 / 3.0
    ret += (20.0 * math.sin(x * math.pi) + 40.0 * math.sin(x / 3.0 * math.pi)) * 2.0 / 3.0
    ret += (150.0 * math.sin(x / 12.0 * math.pi) + 300.0 * math.sin(x / 30.0 * math.pi)) * 2.0 / 3.0
    return ret


def wgs84_to_gcj02(point: GeoPoint) -> GeoPoint:
    """Convert a WGS-84 point to GCJ-02.

    Pure and deterministic. Points outside the China bounding box are
    returned unchanged.
    """
    lat, lng = point.lat, point.lng
    if out_of_china(lat, lng):
        return point

    d_lat = _transform_lat(lng - 105.0, lat - 35.0)
    d_lng = _transform_lng(lng - 105.0, lat - 35.0)
    rad_lat = lat / 180.0 * math.pi
    magic = math.sin(rad_lat)
    magic = 1 - _EE * magic * magic
    sqrt_magic = math.sqrt(magic)
    d_lat = (d_lat * 180.0) / ((_A * (1 - _EE)) / (magic * sqrt_magic) * math.pi)
    d_lng = (d_lng * 180.0) / (_A / sqrt_magic * math.cos(rad_lat) * math.pi)
    return GeoPoint(lat=lat + d_lat, lng=lng + d_lng)


def _fmt(value: float) -> str:
    # positional notation only; map providers reject exponents like 5e-05
    text = repr(float(value))
    if "e" not in text:
        return text
    text = f"{value:.17f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def build_map_links(point: GeoPoint, *, label: str = MAP_LABEL) -> MapLinks:
    """Build Amap and Apple Maps links for a WGS-84 *point*.

    Both links embed the GCJ-02 transformed coordinates.
    """
    gcj = wgs84_to_gcj02(point)
    amap_query = urlencode(
        {"position": f"{_fmt(gcj.lng)},{_fmt(gcj.lat)}", "name": label},
        quote_via=quote,
        safe=",",
    )
    apple_query = urlencode(
        {"ll": f"{_fmt(gcj.lat)},{_fmt(gcj.lng)}", "q": label},
        quote_via=quote,
        safe=",",
    )
    return MapLinks(
        amap_url=f"{AMAP_MARKER_URL}?{amap_query}",
        apple_url=f"{APPLE_MAPS_URL}?{apple_query}",
    )
