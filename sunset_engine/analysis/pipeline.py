"""Sunset scoring pipeline.

raw hourly series -> unit-normalized factors -> sunset window -> aggregates
-> per-factor scores -> weighted composite + explanation, once per day.

Everything here is pure: the series, the parameter bundle and the sunset
instants are passed in, nothing is fetched or cached.
"""

import logging
from collections.abc import Sequence

from sunset_engine.analysis.aggregate import aggregate
from sunset_engine.analysis.composite import composite_score, label_for_score
from sunset_engine.analysis.normalize import meters_to_km, normalize_percentages
from sunset_engine.analysis.window import select_window
from sunset_engine.models.scoring import FACTORS, ParameterBundle, SunsetPrediction
from sunset_engine.models.weather import HourlySeries, SunsetWindow

logger = logging.getLogger(__name__)

# Factor -> (series field, unit conversion)
FACTOR_SOURCES = {
    "high_cloud": ("cloud_cover_high", normalize_percentages),
    "mid_cloud": ("cloud_cover_mid", normalize_percentages),
    "low_cloud": ("cloud_cover_low", normalize_percentages),
    "precipitation": ("precipitation_probability", normalize_percentages),
    "visibility": ("visibility", meters_to_km),
    "wind": ("wind_speed", None),
}


def normalize_series(series: HourlySeries) -> dict[str, list[float | None] | None]:
    """Per-factor sequences in canonical units (%, km, m/s)."""
    out = {}
    for key in FACTORS:
        field, convert = FACTOR_SOURCES[key]
        values = series.get(field)
        if values is not None:
            values = convert(values) if convert else list(values)
        out[key] = values
    return out


def predict_sunsets(
    series: HourlySeries,
    bundle: ParameterBundle,
    windows: Sequence[SunsetWindow],
    window_minutes: float,
    neutral_defaults: dict[str, float] | None = None,
) -> list[SunsetPrediction]:
    """Score each sunset in ``windows`` against ``series``.

    Days whose window contains no forecast sample are left out of the result.
    """
    factors = normalize_series(series)
    predictions = []

    for w in windows:
        indices = select_window(series.time, w.sunset, window_minutes)
        if not indices:
            logger.debug("No samples within ±%s min of sunset on %s, skipping", window_minutes, w.date)
            continue

        aggregates = {key: aggregate(factors[key], indices) for key in FACTORS}
        table = composite_score(
            {key: agg.average for key, agg in aggregates.items()},
            bundle,
            neutral_defaults,
        )
        predictions.append(SunsetPrediction(
            date=w.date,
            sunset=w.sunset,
            score=table.total,
            label=label_for_score(table.total),
            aggregates=aggregates,
            explanation=table,
        ))

    logger.debug("Scored %d of %d sunsets", len(predictions), len(windows))
    return predictions
