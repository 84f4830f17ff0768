"""Tests for WGS-84 -> GCJ-02 conversion and map links."""

from __future__ import annotations

import pytest

from movecar.coords import build_map_links, out_of_china, wgs84_to_gcj02
from movecar.models.location import GeoPoint

BEIJING = GeoPoint(lat=39.9087, lng=116.3975)

# ------------------------------------------------------------------
# Bounding box
# ------------------------------------------------------------------


class TestOutOfChina:
    @pytest.mark.parametrize(
        ("lat", "lng"),
        [
            (51.5074, -0.1278),  # London
            (35.6762, 139.6503),  # Tokyo, east of the box
            (-33.8688, 151.2093),  # Sydney
            (60.0, 100.0),  # north of the box
            (0.5, 100.0),  # south of the box
            (30.0, 70.0),  # west of the box
        ],
    )
    def test_outside_points_are_identity(self, lat: float, lng: float) -> None:
        point = GeoPoint(lat=lat, lng=lng)
        assert out_of_china(lat, lng)
        assert wgs84_to_gcj02(point) == point

    def test_box_edges_are_inside(self) -> None:
        assert not out_of_china(0.8293, 72.004)
        assert not out_of_china(55.8271, 137.8347)

    def test_inside_point(self) -> None:
        assert not out_of_china(BEIJING.lat, BEIJING.lng)


# ------------------------------------------------------------------
# Offset model
# ------------------------------------------------------------------


class TestWgs84ToGcj02:
    def test_beijing_offset(self) -> None:
        gcj = wgs84_to_gcj02(BEIJING)
        assert gcj.lat == pytest.approx(39.9101, abs=1e-3)
        assert gcj.lng == pytest.approx(116.4037, abs=1e-3)

    def test_deterministic(self) -> None:
        first = wgs84_to_gcj02(BEIJING)
        second = wgs84_to_gcj02(GeoPoint(lat=39.9087, lng=116.3975))
        assert first.lat == second.lat
        assert first.lng == second.lng

    @pytest.mark.parametrize(
        ("lat", "lng"),
        [
            (39.9087, 116.3975),  # Beijing
            (31.2, 121.5),  # Shanghai
            (23.1291, 113.2644),  # Guangzhou
            (43.8256, 87.6168),  # Urumqi
            (45.8038, 126.5350),  # Harbin
            (29.6520, 91.1721),  # Lhasa
        ],
    )
    def test_offset_is_nonzero_and_bounded(self, lat: float, lng: float) -> None:
        gcj = wgs84_to_gcj02(GeoPoint(lat=lat, lng=lng))
        d_lat = abs(gcj.lat - lat)
        d_lng = abs(gcj.lng - lng)
        assert 0 < d_lat < 0.01
        assert 0 < d_lng < 0.01


# ------------------------------------------------------------------
# Map links
# ------------------------------------------------------------------


class TestBuildMapLinks:
    def test_links_embed_transformed_coordinates(self) -> None:
        gcj = wgs84_to_gcj02(BEIJING)
        links = build_map_links(BEIJING)

        assert links.amap_url.startswith("https://uri.amap.com/marker?position=")
        assert f"position={gcj.lng!r},{gcj.lat!r}" in links.amap_url
        assert links.apple_url.startswith("https://maps.apple.com/?ll=")
        assert f"ll={gcj.lat!r},{gcj.lng!r}" in links.apple_url

    def test_links_never_embed_raw_input_inside_box(self) -> None:
        links = build_map_links(BEIJING)
        assert "116.3975," not in links.amap_url
        assert "39.9087," not in links.apple_url

    def test_outside_box_links_use_input(self) -> None:
        london = GeoPoint(lat=51.5074, lng=-0.1278)
        links = build_map_links(london)
        assert "position=-0.1278,51.5074" in links.amap_url
        assert "ll=51.5074,-0.1278" in links.apple_url

    def test_label_is_escaped(self) -> None:
        links = build_map_links(BEIJING)
        assert links.amap_url.endswith("&name=%E4%BD%8D%E7%BD%AE")
        assert links.apple_url.endswith("&q=%E4%BD%8D%E7%BD%AE")

    def test_custom_label_is_escaped(self) -> None:
        links = build_map_links(BEIJING, label="car park & gate")
        assert "name=car%20park%20%26%20gate" in links.amap_url

    def test_tiny_coordinates_use_positional_notation(self) -> None:
        links = build_map_links(GeoPoint(lat=0.00005, lng=-0.00002))
        assert "position=-0.00002,0.00005&" in links.amap_url
        assert "ll=0.00005,-0.00002&" in links.apple_url
        assert "e-" not in links.amap_url
        assert "e-" not in links.apple_url

    def test_zero_coordinates(self) -> None:
        links = build_map_links(GeoPoint(lat=0.0, lng=0.0))
        assert "position=0.0,0.0&" in links.amap_url
