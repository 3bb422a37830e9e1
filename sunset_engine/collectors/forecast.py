import logging
import time

import pandas as pd
from pydantic import ValidationError

from sunset_engine.collectors.base import ForecastUnavailable, get_client
from sunset_engine.config import settings
from sunset_engine.models.location import Location
from sunset_engine.models.weather import HourlySeries

logger = logging.getLogger(__name__)

# Open-Meteo hourly variable -> HourlySeries field
HOURLY_VARIABLES = {
    "cloud_cover": "cloud_cover",
    "cloud_cover_low": "cloud_cover_low",
    "cloud_cover_mid": "cloud_cover_mid",
    "cloud_cover_high": "cloud_cover_high",
    "precipitation_probability": "precipitation_probability",
    "visibility": "visibility",
    "wind_speed_10m": "wind_speed",
}


class ForecastCollector:
    name = "forecast"

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        return self._client or get_client()

    def fetch(self, location: Location, days: int) -> HourlySeries:
        """Fetch the hourly forecast for ``days`` days at ``location``.

        Raises:
            ForecastUnavailable: on any transport, HTTP or decoding failure.
        """
        t0 = time.monotonic()
        try:
            response = self.client.weather_api(
                settings.forecast_url,
                params={
                    "latitude": location.latitude,
                    "longitude": location.longitude,
                    "hourly": ",".join(HOURLY_VARIABLES),
                    "timezone": "auto",
                    "forecast_days": days,
                    "wind_speed_unit": "ms",
                },
            )[0]
        except Exception as e:
            logger.warning("Forecast request failed for %s: %s", location.label(), e)
            raise ForecastUnavailable(f"Failed to load forecast: {e}") from e

        series = self._to_series(response, location)
        elapsed = (time.monotonic() - t0) * 1000
        logger.info("Forecast %s: %d hourly samples, %d days (%.0fms)",
                    location.label(), len(series), days, elapsed)
        return series

    def _to_series(self, response, location: Location) -> HourlySeries:
        hourly = response.Hourly()
        if hourly is None:
            raise ForecastUnavailable("Forecast response has no hourly data")

        times = pd.date_range(
            start=pd.to_datetime(hourly.Time(), unit="s", utc=True),
            end=pd.to_datetime(hourly.TimeEnd(), unit="s", utc=True),
            freq=pd.Timedelta(seconds=hourly.Interval()),
            inclusive="left",
        )

        fields = {}
        n_vars = hourly.VariablesLength()
        for vi, field in enumerate(HOURLY_VARIABLES.values()):
            if vi >= n_vars:
                fields[field] = None
                continue
            vals = hourly.Variables(vi).ValuesAsNumpy()
            fields[field] = tuple(float(v) if pd.notna(v) else None for v in vals)

        tz = response.Timezone()
        if isinstance(tz, bytes):
            tz = tz.decode("utf-8")

        try:
            return HourlySeries(
                time=tuple(t.to_pydatetime() for t in times),
                latitude=location.latitude,
                longitude=location.longitude,
                timezone=tz or None,
                **fields,
            )
        except ValidationError as e:
            raise ForecastUnavailable(f"Malformed forecast response: {e}") from e
