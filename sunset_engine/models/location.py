import math

from pydantic import BaseModel, ConfigDict, field_validator


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    name: str | None = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _finite(cls, v, info):
        try:
            value = float(v)
        except (TypeError, ValueError):
            raise ValueError(f"{info.field_name} must be a number, got {v!r}")
        if not math.isfinite(value):
            raise ValueError(f"{info.field_name} must be finite, got {v!r}")
        return value

    @field_validator("latitude")
    @classmethod
    def _latitude_range(cls, v: float) -> float:
        if not -90.0 <= v <= 90.0:
            raise ValueError(f"latitude out of range: {v}")
        return v

    @field_validator("longitude")
    @classmethod
    def _longitude_range(cls, v: float) -> float:
        if not -180.0 <= v <= 180.0:
            raise ValueError(f"longitude out of range: {v}")
        return v

    def label(self) -> str:
        """Display name, falling back to the coordinates."""
        return self.name or f"{self.latitude:.4f}, {self.longitude:.4f}"
