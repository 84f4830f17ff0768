"""Location models: geodetic points, map links and stored location records."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from movecar.normalize import safe_float


def parse_geo_point(value: Any) -> GeoPoint | None:
    """Build a :class:`GeoPoint` from a loose JSON value.

    Returns ``None`` unless both coordinates are present and finite;
    a half-specified point is treated as no point at all.
    """
    if isinstance(value, GeoPoint):
        return value
    if not isinstance(value, dict):
        return None
    lat = safe_float(_first_present(value, "lat", "latitude"))
    lng = safe_float(_first_present(value, "lng", "lon", "longitude"))
    if lat is None or lng is None:
        return None
    return GeoPoint(lat=lat, lng=lng)


def _first_present(values: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if values.get(key) is not None:
            return values[key]
    return None


class GeoPoint(BaseModel):
    """A WGS-84 (or GCJ-02, once transformed) coordinate in degrees.

    Parameters
    ----------
    lat : float
        Latitude in degrees.
    lng : float
        Longitude in degrees.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    lat: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    lng: float = Field(validation_alias=AliasChoices("lng", "lon", "longitude"))

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _require_finite(cls, value: Any) -> float:
        parsed = safe_float(value)
        if parsed is None:
            raise ValueError(f"coordinate must be a finite number, got {value!r}")
        return parsed


class MapLinks(BaseModel):
    """Provider deep links derived from a single :class:`GeoPoint`."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    amap_url: str = Field(validation_alias=AliasChoices("amapUrl", "amap_url"), serialization_alias="amapUrl")
    """Amap (Gaode) marker URL."""

    apple_url: str = Field(validation_alias=AliasChoices("appleUrl", "apple_url"), serialization_alias="appleUrl")
    """Apple Maps URL."""


class LocationRecord(BaseModel):
    """A stored requester or owner position.

    The stored JSON is flat, matching what clients of the read endpoints
    consume: ``{"lat", "lng", "amapUrl", "appleUrl", "timestamp"?}`` with
    ``timestamp`` in epoch milliseconds.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    point: GeoPoint
    links: MapLinks
    recorded_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _unflatten(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "point" in values:
            return values
        merged: dict[str, Any] = {
            "point": {"lat": values.get("lat"), "lng": values.get("lng")},
            "links": {"amapUrl": values.get("amapUrl"), "appleUrl": values.get("appleUrl")},
        }
        timestamp = safe_float(values.get("timestamp"))
        if timestamp is not None:
            merged["recorded_at"] = datetime.fromtimestamp(timestamp / 1000.0, tz=UTC)
        return merged

    def to_payload(self) -> dict[str, Any]:
        """Flat JSON-ready representation used for storage and responses."""
        payload: dict[str, Any] = {
            "lat": self.point.lat,
            "lng": self.point.lng,
            **self.links.model_dump(by_alias=True),
        }
        if self.recorded_at is not None:
            payload["timestamp"] = int(self.recorded_at.timestamp() * 1000)
        return payload
