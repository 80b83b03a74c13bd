import pytest

from drift_sar.core.models import HeatmapCell
from drift_sar.core.search_area import estimate_radius_km


def _cell(lat, lng, intensity=1.0):
    return HeatmapCell(lat=lat, lng=lng, intensity=intensity)


def test_no_cells_defaults_to_5km():
    assert estimate_radius_km([]) == 5.0


def test_single_cell_defaults_to_5km():
    assert estimate_radius_km([_cell(13.0, 80.0)]) == 5.0


def test_half_of_larger_span():
    cells = [_cell(13.0, 80.0), _cell(13.1, 80.04)]
    # lat span 0.1° wins: 0.1 * 111 / 2
    assert estimate_radius_km(cells) == pytest.approx(5.55)


def test_longitude_span_can_win():
    cells = [_cell(13.0, 80.0), _cell(13.01, 80.2)]
    assert estimate_radius_km(cells) == pytest.approx(11.1)


def test_clamped_low():
    cells = [_cell(13.0, 80.0), _cell(13.001, 80.001)]
    assert estimate_radius_km(cells) == 2.0


def test_clamped_high():
    cells = [_cell(10.0, 80.0), _cell(12.0, 80.5)]
    assert estimate_radius_km(cells) == 50.0


def test_always_in_bounds():
    for span in (0.0, 0.02, 0.3, 0.8, 5.0):
        r = estimate_radius_km([_cell(0.0, 0.0), _cell(span, span)])
        assert 2.0 <= r <= 50.0
