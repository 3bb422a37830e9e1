from datetime import date, datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sunset_engine.models.weather import DailyAggregate

BUNDLE_VERSION = 1

FactorKey = Literal["high_cloud", "mid_cloud", "low_cloud", "precipitation", "visibility", "wind"]

FACTORS: tuple[str, ...] = ("high_cloud", "mid_cloud", "low_cloud", "precipitation", "visibility", "wind")

FACTOR_LABELS = {
    "high_cloud": "High cloud",
    "mid_cloud": "Mid cloud",
    "low_cloud": "Low cloud",
    "precipitation": "Precip probability",
    "visibility": "Visibility",
    "wind": "Wind",
}

Finite = Annotated[float, Field(allow_inf_nan=False)]
Weight = Annotated[float, Field(ge=0, allow_inf_nan=False, strict=True)]

_FROZEN = ConfigDict(frozen=True, extra="forbid")


# --- Score models ---

class TriangularModel(BaseModel):
    """Score 1 at ``ideal``, decaying linearly to 0 at ``ideal ± tolerance``."""

    model_config = _FROZEN

    type: Literal["triangular"] = "triangular"
    ideal: Finite
    tolerance: Annotated[float, Field(gt=0, allow_inf_nan=False)]


class InverseTriangularModel(BaseModel):
    """Score 0 at ``ideal``, rising to 1 at ``ideal ± tolerance``."""

    model_config = _FROZEN

    type: Literal["inverse_triangular"] = "inverse_triangular"
    ideal: Finite
    tolerance: Annotated[float, Field(gt=0, allow_inf_nan=False)]


class ThresholdUpModel(BaseModel):
    """Score 0 at or below ``threshold``, 1 at or above ``full``."""

    model_config = _FROZEN

    type: Literal["threshold_up"] = "threshold_up"
    threshold: Finite
    full: Finite

    @model_validator(mode="after")
    def _ordered(self):
        if self.full <= self.threshold:
            raise ValueError(f"full ({self.full}) must be greater than threshold ({self.threshold})")
        return self


class ThresholdDownModel(BaseModel):
    """Score 1 at or below ``min``, 0 at or above ``max``."""

    model_config = _FROZEN

    type: Literal["threshold_down"] = "threshold_down"
    min: Finite
    max: Finite

    @model_validator(mode="after")
    def _ordered(self):
        if self.max <= self.min:
            raise ValueError(f"max ({self.max}) must be greater than min ({self.min})")
        return self


ScoreModel = Annotated[
    Union[TriangularModel, InverseTriangularModel, ThresholdUpModel, ThresholdDownModel],
    Field(discriminator="type"),
]


# --- Parameters ---

class WeightVector(BaseModel):
    model_config = _FROZEN

    high_cloud: Weight
    mid_cloud: Weight
    low_cloud: Weight
    precipitation: Weight
    visibility: Weight
    wind: Weight

    def total(self) -> float:
        return sum(getattr(self, k) for k in FACTORS)

    def normalized(self) -> "WeightVector":
        """Weights divided by their sum; unchanged when the sum is zero."""
        total = self.total()
        if total == 0:
            return self
        return WeightVector(**{k: getattr(self, k) / total for k in FACTORS})


class ModelMap(BaseModel):
    model_config = _FROZEN

    high_cloud: ScoreModel
    mid_cloud: ScoreModel
    low_cloud: ScoreModel
    precipitation: ScoreModel
    visibility: ScoreModel
    wind: ScoreModel


class ParameterBundle(BaseModel):
    model_config = _FROZEN

    version: int = BUNDLE_VERSION
    weights: WeightVector
    models: ModelMap

    @field_validator("version", mode="before")
    @classmethod
    def _supported_version(cls, v):
        if type(v) is not int or v != BUNDLE_VERSION:
            raise ValueError(f"unsupported bundle version {v!r}, expected {BUNDLE_VERSION}")
        return v


# --- Results ---

class ExplanationRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    factor: FactorKey
    label: str
    score: float
    weight: float
    contribution: float
    note: str | None = None


class ExplanationTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    rows: tuple[ExplanationRow, ...]
    total: int
    formula: str


class SunsetPrediction(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    sunset: datetime
    score: int
    label: str
    aggregates: dict[str, DailyAggregate]
    explanation: ExplanationTable
