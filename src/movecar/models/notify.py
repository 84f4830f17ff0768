"""Notify/confirm workflow models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from movecar.models.location import GeoPoint, LocationRecord, parse_geo_point
from movecar.normalize import safe_bool, safe_str


class NotifyStatus(StrEnum):
    """Shared status of the single active notify cycle."""

    WAITING = "waiting"
    CONFIRMED = "confirmed"

    @classmethod
    def _missing_(cls, value: object) -> NotifyStatus:
        return cls.WAITING


class NotifyRequest(BaseModel):
    """A requester's notify action. Transient, never stored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: str = ""
    location: GeoPoint | None = None
    delayed: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> NotifyRequest:
        """Build a request from a loose JSON body.

        Malformed fields fall back to their defaults instead of failing:
        a non-dict body is an empty request and a half-specified location
        is no location.
        """
        if not isinstance(payload, dict):
            return cls()
        return cls(
            message=safe_str(payload.get("message")) or "",
            location=parse_geo_point(payload.get("location")),
            delayed=safe_bool(payload.get("delayed", False)),
        )


class OwnerConfirmation(BaseModel):
    """The owner's confirm action. Transient, never stored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    location: GeoPoint | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> OwnerConfirmation:
        if not isinstance(payload, dict):
            return cls()
        return cls(location=parse_geo_point(payload.get("location")))


class NotifyResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    delivered: bool = False


class StatusSnapshot(BaseModel):
    """Poll result for the requester's status page."""

    model_config = ConfigDict(frozen=True)

    status: NotifyStatus = NotifyStatus.WAITING
    owner_location: LocationRecord | None = Field(default=None)

    def to_payload(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "ownerLocation": self.owner_location.to_payload() if self.owner_location is not None else None,
        }
