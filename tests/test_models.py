"""Tests for location and workflow model parsing."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from movecar.models.location import GeoPoint, LocationRecord, MapLinks, parse_geo_point
from movecar.models.notify import NotifyRequest, NotifyStatus, OwnerConfirmation, StatusSnapshot

# ------------------------------------------------------------------
# GeoPoint
# ------------------------------------------------------------------


class TestParseGeoPoint:
    def test_lat_lng(self) -> None:
        assert parse_geo_point({"lat": 31.2, "lng": 121.5}) == GeoPoint(lat=31.2, lng=121.5)

    def test_long_aliases_and_numeric_strings(self) -> None:
        point = parse_geo_point({"latitude": "31.2", "longitude": "121.5"})
        assert point == GeoPoint(lat=31.2, lng=121.5)

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "31.2,121.5",
            [31.2, 121.5],
            {},
            {"lat": 31.2},
            {"lng": 121.5},
            {"lat": "north", "lng": 121.5},
            {"lat": float("nan"), "lng": 121.5},
            {"lat": 31.2, "lng": float("inf")},
            {"lat": True, "lng": 121.5},
        ],
    )
    def test_incomplete_or_invalid_is_absent(self, value: object) -> None:
        assert parse_geo_point(value) is None

    def test_zero_coordinates_are_present(self) -> None:
        assert parse_geo_point({"lat": 0, "lng": 0}) == GeoPoint(lat=0.0, lng=0.0)

    def test_direct_construction_rejects_non_finite(self) -> None:
        with pytest.raises(ValidationError):
            GeoPoint(lat=float("nan"), lng=1.0)


# ------------------------------------------------------------------
# LocationRecord
# ------------------------------------------------------------------


class TestLocationRecord:
    LINKS = MapLinks(amap_url="https://uri.amap.com/marker?x", apple_url="https://maps.apple.com/?y")

    def test_payload_is_flat(self) -> None:
        record = LocationRecord(point=GeoPoint(lat=31.2, lng=121.5), links=self.LINKS)
        assert record.to_payload() == {
            "lat": 31.2,
            "lng": 121.5,
            "amapUrl": "https://uri.amap.com/marker?x",
            "appleUrl": "https://maps.apple.com/?y",
        }

    def test_timestamp_in_milliseconds(self) -> None:
        recorded = datetime(2026, 1, 1, 8, 30, tzinfo=UTC)
        record = LocationRecord(point=GeoPoint(lat=31.2, lng=121.5), links=self.LINKS, recorded_at=recorded)
        payload = record.to_payload()
        assert payload["timestamp"] == int(recorded.timestamp()) * 1000

    def test_parses_flat_payload(self) -> None:
        record = LocationRecord.model_validate(
            {
                "lat": 31.2,
                "lng": 121.5,
                "amapUrl": "https://uri.amap.com/marker?x",
                "appleUrl": "https://maps.apple.com/?y",
                "timestamp": 1767256200000,
            }
        )
        assert record.point == GeoPoint(lat=31.2, lng=121.5)
        assert record.links == self.LINKS
        assert record.recorded_at == datetime(2026, 1, 1, 8, 30, tzinfo=UTC)

    def test_rejects_payload_without_links(self) -> None:
        with pytest.raises(ValidationError):
            LocationRecord.model_validate({"lat": 31.2, "lng": 121.5})


# ------------------------------------------------------------------
# Requests and status
# ------------------------------------------------------------------


class TestNotifyRequest:
    def test_full_payload(self) -> None:
        request = NotifyRequest.from_payload(
            {"message": " blocking the gate ", "location": {"lat": 31.2, "lng": 121.5}, "delayed": True}
        )
        assert request.message == "blocking the gate"
        assert request.location == GeoPoint(lat=31.2, lng=121.5)
        assert request.delayed is True

    @pytest.mark.parametrize("payload", [None, [], "text", 42])
    def test_non_object_body_gives_defaults(self, payload: object) -> None:
        assert NotifyRequest.from_payload(payload) == NotifyRequest()

    def test_malformed_fields_fall_back(self) -> None:
        request = NotifyRequest.from_payload({"message": None, "location": {"lat": 31.2}, "delayed": "no"})
        assert request.message == ""
        assert request.location is None
        assert request.delayed is False


class TestOwnerConfirmation:
    def test_location(self) -> None:
        confirmation = OwnerConfirmation.from_payload({"location": {"lat": 31.2, "lng": 121.5}})
        assert confirmation.location == GeoPoint(lat=31.2, lng=121.5)

    def test_null_location(self) -> None:
        assert OwnerConfirmation.from_payload({"location": None}).location is None


class TestNotifyStatus:
    def test_known_values(self) -> None:
        assert NotifyStatus("waiting") is NotifyStatus.WAITING
        assert NotifyStatus("confirmed") is NotifyStatus.CONFIRMED

    def test_unknown_value_falls_back_to_waiting(self) -> None:
        assert NotifyStatus("garbage") is NotifyStatus.WAITING

    def test_snapshot_payload_without_owner(self) -> None:
        assert StatusSnapshot().to_payload() == {"status": "waiting", "ownerLocation": None}
