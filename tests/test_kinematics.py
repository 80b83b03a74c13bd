"""Tests for the deterministic wind + current drift step."""

import math

import pytest

from drift_sar.core.kinematics import EARTH_RADIUS_KM, compute_drift
from drift_sar.core.models import Position


def _deg_for_km(km):
    return km / EARTH_RADIUS_KM * 180.0 / math.pi


class TestComputeDrift:

    def test_same_inputs_same_output(self, chennai):
        a = compute_drift(chennai, 25.0, 70.0, 0.4, 130.0, 2.0)
        b = compute_drift(chennai, 25.0, 70.0, 0.4, 130.0, 2.0)
        assert a == b

    def test_zero_duration_is_identity(self, chennai):
        assert compute_drift(chennai, 40.0, 10.0, 1.2, 250.0, 0) == chennai

    @pytest.mark.parametrize("hours", [1, 5, 12])
    def test_zero_velocity_is_identity(self, chennai, hours):
        assert compute_drift(chennai, 0.0, 123.0, 0.0, 321.0, hours) == chennai

    def test_northward_current_one_hour(self):
        start = Position(lat=0.0, lng=0.0)
        end = compute_drift(start, 0.0, 0.0, 1.0, 0.0, 1.0)
        # 1 m/s for an hour = 3.6 km due north
        assert end.lat == pytest.approx(_deg_for_km(3.6))
        assert end.lng == pytest.approx(0.0, abs=1e-12)

    def test_wind_leeway_is_3_5_percent(self):
        start = Position(lat=0.0, lng=0.0)
        # 36 km/h = 10 m/s -> 0.35 m/s drift due east
        end = compute_drift(start, 36.0, 90.0, 0.0, 0.0, 1.0)
        assert end.lng == pytest.approx(_deg_for_km(0.35 * 3.6))
        assert end.lat == pytest.approx(0.0, abs=1e-12)

    def test_direction_is_where_drift_goes(self):
        start = Position(lat=10.0, lng=10.0)
        south = compute_drift(start, 0.0, 0.0, 0.5, 180.0, 1.0)
        west = compute_drift(start, 0.0, 0.0, 0.5, 270.0, 1.0)
        assert south.lat < start.lat
        assert west.lng < start.lng

    def test_longitude_step_grows_with_latitude(self):
        eq = compute_drift(Position(lat=0.0, lng=0.0), 0.0, 0.0, 1.0, 90.0, 1.0)
        hi = compute_drift(Position(lat=60.0, lng=0.0), 0.0, 0.0, 1.0, 90.0, 1.0)
        # 1 / cos(60°) = 2
        assert hi.lng == pytest.approx(2.0 * eq.lng)

    def test_wind_and_current_add(self):
        start = Position(lat=5.0, lng=5.0)
        wind_only = compute_drift(start, 36.0, 0.0, 0.0, 0.0, 1.0)
        current_only = compute_drift(start, 0.0, 0.0, 0.65, 0.0, 1.0)
        both = compute_drift(start, 36.0, 0.0, 0.65, 0.0, 1.0)
        assert both.lat - start.lat == pytest.approx(
            (wind_only.lat - start.lat) + (current_only.lat - start.lat)
        )

    def test_displacement_scales_with_duration(self, chennai):
        one = compute_drift(chennai, 20.0, 200.0, 0.3, 220.0, 1.0)
        three = compute_drift(chennai, 20.0, 200.0, 0.3, 220.0, 3.0)
        assert three.lat - chennai.lat == pytest.approx(3 * (one.lat - chennai.lat))
