"""Parametric response curves mapping a raw value to a [0, 1] score."""

import math

from sunset_engine.models.scoring import (
    InverseTriangularModel,
    ThresholdDownModel,
    ThresholdUpModel,
    TriangularModel,
)


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def triangular(value: float, ideal: float, tolerance: float) -> float:
    return clamp(1 - abs(value - ideal) / tolerance, 0.0, 1.0)


def score_by_model(value: float | None, model) -> float | None:
    """Score ``value`` with ``model``.

    Returns None only when ``value`` is None or NaN; choosing a fallback for
    missing data is the caller's job.
    """
    if value is None or math.isnan(value):
        return None

    if isinstance(model, TriangularModel):
        return triangular(value, model.ideal, model.tolerance)
    if isinstance(model, InverseTriangularModel):
        return 1.0 - triangular(value, model.ideal, model.tolerance)
    if isinstance(model, ThresholdUpModel):
        return clamp((value - model.threshold) / (model.full - model.threshold), 0.0, 1.0)
    if isinstance(model, ThresholdDownModel):
        return 1.0 - clamp((value - model.min) / (model.max - model.min), 0.0, 1.0)
    raise TypeError(f"Unknown score model: {type(model).__name__}")
