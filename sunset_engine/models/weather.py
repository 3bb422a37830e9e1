from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# Parallel hourly sequences, in the order they are requested from the provider
SERIES_FIELDS = (
    "cloud_cover",
    "cloud_cover_low",
    "cloud_cover_mid",
    "cloud_cover_high",
    "precipitation_probability",
    "visibility",
    "wind_speed",
)


class HourlySeries(BaseModel):
    """Hourly forecast for one location, aligned index-for-index with `time`.

    A sequence is ``None`` when the provider did not return that variable at
    all; single missing samples inside a sequence are ``None`` entries.
    """

    model_config = ConfigDict(frozen=True)

    time: tuple[datetime, ...]
    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None

    cloud_cover: tuple[float | None, ...] | None = None
    cloud_cover_low: tuple[float | None, ...] | None = None
    cloud_cover_mid: tuple[float | None, ...] | None = None
    cloud_cover_high: tuple[float | None, ...] | None = None
    precipitation_probability: tuple[float | None, ...] | None = None
    visibility: tuple[float | None, ...] | None = None  # metres
    wind_speed: tuple[float | None, ...] | None = None  # m/s

    @field_validator("time")
    @classmethod
    def _utc_aware(cls, v: tuple[datetime, ...]) -> tuple[datetime, ...]:
        return tuple(t if t.tzinfo is not None else t.replace(tzinfo=timezone.utc) for t in v)

    @model_validator(mode="after")
    def _check_alignment(self):
        n = len(self.time)
        for name in SERIES_FIELDS:
            values = getattr(self, name)
            if values is not None and len(values) != n:
                raise ValueError(f"{name} has {len(values)} samples, expected {n}")
        for prev, cur in zip(self.time, self.time[1:]):
            if cur <= prev:
                raise ValueError(f"timestamps not ascending at {cur.isoformat()}")
        return self

    def __len__(self) -> int:
        return len(self.time)

    def get(self, name: str) -> tuple[float | None, ...] | None:
        if name not in SERIES_FIELDS:
            raise KeyError(name)
        return getattr(self, name)


class DailyAggregate(BaseModel):
    model_config = ConfigDict(frozen=True)

    average: float | None = None
    minimum: float | None = None
    maximum: float | None = None

    @model_validator(mode="after")
    def _all_or_nothing(self):
        present = [v is not None for v in (self.average, self.minimum, self.maximum)]
        if any(present) and not all(present):
            raise ValueError("average, minimum and maximum must be all present or all absent")
        return self

    @property
    def is_empty(self) -> bool:
        return self.average is None


class SunsetWindow(BaseModel):
    """Sunset instant for one civil day."""

    model_config = ConfigDict(frozen=True)

    date: date
    sunset: datetime
