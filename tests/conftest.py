"""Shared fixtures: synthetic forecasts and fake collaborators."""

from datetime import datetime, timedelta, timezone

import pytest

from sunset_engine.collectors.base import ForecastUnavailable
from sunset_engine.models.weather import HourlySeries, SunsetWindow
from sunset_engine.params.store import ParameterStore, default_bundle

BASE = datetime(2025, 6, 1, tzinfo=timezone.utc)
SUNSET_HOUR = 19


def make_series(hours: int = 48, **overrides) -> HourlySeries:
    """Hourly series starting at BASE with ideal sunset conditions everywhere."""
    fields = {
        "cloud_cover": [60.0] * hours,
        "cloud_cover_low": [0.0] * hours,
        "cloud_cover_mid": [40.0] * hours,
        "cloud_cover_high": [50.0] * hours,
        "precipitation_probability": [0.0] * hours,
        "visibility": [15000.0] * hours,
        "wind_speed": [4.0] * hours,
    }
    fields.update(overrides)
    return HourlySeries(
        time=[BASE + timedelta(hours=h) for h in range(hours)],
        latitude=46.5197,
        longitude=6.6323,
        timezone="UTC",
        **fields,
    )


def fixed_schedule(latitude, longitude, days, tz_name=None, **kwargs):
    return [
        SunsetWindow(date=(BASE + timedelta(days=d)).date(),
                     sunset=BASE + timedelta(days=d, hours=SUNSET_HOUR))
        for d in range(days)
    ]


class FakeCollector:
    def __init__(self, series: HourlySeries | None = None, error: str | None = None):
        self.series = series or make_series()
        self.error = error
        self.calls = []

    def fetch(self, location, days):
        self.calls.append((location, days))
        if self.error:
            raise ForecastUnavailable(self.error)
        return self.series


@pytest.fixture
def series():
    return make_series()


@pytest.fixture
def bundle():
    return default_bundle()


@pytest.fixture
def store():
    return ParameterStore()


@pytest.fixture
def collector():
    return FakeCollector()
