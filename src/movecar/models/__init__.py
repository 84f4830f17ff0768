"""Data models for movecar."""

from movecar.models.location import GeoPoint, LocationRecord, MapLinks, parse_geo_point
from movecar.models.notify import (
    NotifyRequest,
    NotifyResult,
    NotifyStatus,
    OwnerConfirmation,
    StatusSnapshot,
)

__all__ = [
    "GeoPoint",
    "LocationRecord",
    "MapLinks",
    "NotifyRequest",
    "NotifyResult",
    "NotifyStatus",
    "OwnerConfirmation",
    "StatusSnapshot",
    "parse_geo_point",
]
