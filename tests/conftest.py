import pytest

from drift_sar.core.models import Position, WeatherSample


@pytest.fixture
def chennai():
    return Position(lat=13.0827, lng=80.2707)


@pytest.fixture
def southerly_weather():
    # wind and current both setting roughly south / south-southwest
    return WeatherSample(
        wind_speed=20.0,
        wind_direction=180.0,
        wave_height=1.5,
        current_speed=0.5,
        current_direction=200.0,
    )


@pytest.fixture
def calm_weather():
    return WeatherSample(
        wind_speed=0.0,
        wind_direction=45.0,
        wave_height=0.2,
        current_speed=0.0,
        current_direction=300.0,
    )
