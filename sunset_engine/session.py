"""Session state: current query, parameters, last forecast and predictions.

Location or day-count changes trigger a new forecast fetch; window and
parameter changes only rescore the stored forecast. A failed fetch leaves the
previous predictions in place and reports the failure in ``status``; the
snapshot's ``predictions_for`` names the location those predictions belong to.
"""

import logging
import threading

from sunset_engine.analysis.pipeline import predict_sunsets
from sunset_engine.collectors.base import ForecastUnavailable
from sunset_engine.collectors.forecast import ForecastCollector
from sunset_engine.collectors.geocode import reverse_geocode
from sunset_engine.collectors.sun import sunset_schedule
from sunset_engine.config import settings
from sunset_engine.models.location import Location
from sunset_engine.models.scoring import ParameterBundle, SunsetPrediction
from sunset_engine.models.weather import HourlySeries
from sunset_engine.params.store import ParameterStore

logger = logging.getLogger(__name__)


def _check_range(name: str, value: int, lo: int, hi: int) -> int:
    if not lo <= value <= hi:
        raise ValueError(f"{name} must be between {lo} and {hi}, got {value}")
    return value


class SunsetSession:
    def __init__(self, collector=None, geocoder=reverse_geocode, schedule=sunset_schedule,
                 store: ParameterStore | None = None):
        self.collector = collector or ForecastCollector()
        self.geocoder = geocoder
        self.schedule = schedule
        self.params = store or ParameterStore()

        self.location: Location | None = None
        self.place: str | None = None
        self.days: int = settings.forecast_days
        self.window_minutes: int = settings.window_minutes

        self.series: HourlySeries | None = None
        # (location, days) the stored series was fetched for
        self._fetched_for: tuple[Location, int] | None = None
        self.predictions: list[SunsetPrediction] = []
        self.status: str = "Ready"

        self._lock = threading.Lock()

    def update(self, latitude: float | None = None, longitude: float | None = None,
               days: int | None = None, window_minutes: int | None = None) -> dict:
        """Apply a query and return the resulting snapshot.

        Inputs are validated before anything is fetched; invalid coordinates
        or out-of-range values raise ValueError.
        """
        current = self.location
        location = Location(
            latitude=latitude if latitude is not None else (
                current.latitude if current else settings.default_latitude),
            longitude=longitude if longitude is not None else (
                current.longitude if current else settings.default_longitude),
        )
        days = _check_range("days", days if days is not None else self.days,
                            settings.min_forecast_days, settings.max_forecast_days)
        window_minutes = _check_range(
            "window_minutes", window_minutes if window_minutes is not None else self.window_minutes,
            settings.min_window_minutes, settings.max_window_minutes)

        with self._lock:
            moved = location != self.location
            refetch = self._fetched_for != (location, days)

        # Network calls run without the lock so parameter edits are not blocked
        place = self.geocoder(location.latitude, location.longitude) if moved else None
        fetched = self._fetch(location, days) if refetch else None

        with self._lock:
            self.location = location
            self.days = days
            self.window_minutes = window_minutes
            if moved:
                self.place = place
            if refetch:
                self._apply_fetch(location, days, *fetched)
            else:
                self._recompute()
            return self._snapshot()

    def refresh(self) -> dict:
        """Re-fetch the forecast for the current query."""
        with self._lock:
            if self.location is None:
                raise ValueError("No location set")
            location, days = self.location, self.days
        fetched = self._fetch(location, days)
        with self._lock:
            self._apply_fetch(location, days, *fetched)
            return self._snapshot()

    def snapshot(self) -> dict:
        with self._lock:
            return self._snapshot()

    # --- Parameters ---

    def import_params(self, data: dict | str | bytes) -> ParameterBundle:
        with self._lock:
            bundle = self.params.import_bundle(data)
            self._recompute()
            return bundle

    def reset_params(self) -> ParameterBundle:
        with self._lock:
            bundle = self.params.reset()
            self._recompute()
            return bundle

    def normalize_params(self) -> ParameterBundle:
        with self._lock:
            bundle = self.params.normalize_weights()
            self._recompute()
            return bundle

    def set_weight(self, factor: str, value: float) -> ParameterBundle:
        with self._lock:
            bundle = self.params.set_weight(factor, value)
            self._recompute()
            return bundle

    def _fetch(self, location: Location, days: int) -> tuple[HourlySeries | None, ForecastUnavailable | None]:
        try:
            return self.collector.fetch(location, days), None
        except ForecastUnavailable as e:
            return None, e

    # --- Internals (lock held) ---

    def _apply_fetch(self, location: Location, days: int,
                     series: HourlySeries | None, error: ForecastUnavailable | None) -> None:
        if error is not None:
            self.status = str(error)
            logger.warning("Keeping %d previous predictions: %s", len(self.predictions), error)
            return
        self.series = series
        self._fetched_for = (location, days)
        self.status = "Forecast loaded"
        self._recompute()

    def _recompute(self) -> None:
        if self.series is None or self._fetched_for is None:
            return
        location, days = self._fetched_for
        windows = self.schedule(
            location.latitude,
            location.longitude,
            days,
            tz_name=self.series.timezone,
        )
        self.predictions = predict_sunsets(self.series, self.params.bundle, windows, self.window_minutes)

    def _snapshot(self) -> dict:
        return {
            "location": self.location.model_dump() if self.location else None,
            "place": self.place,
            "timezone": self.series.timezone if self.series is not None else None,
            "status": self.status,
            "days": self.days,
            "window_minutes": self.window_minutes,
            # Lags behind ``location`` after a failed fetch for a new location
            "predictions_for": self._fetched_for[0].model_dump() if self._fetched_for else None,
            "predictions": [p.model_dump(mode="json") for p in self.predictions],
        }


_session: SunsetSession | None = None


def get_session() -> SunsetSession:
    global _session
    if _session is None:
        _session = SunsetSession()
    return _session
