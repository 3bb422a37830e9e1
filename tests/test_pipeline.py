from datetime import timedelta

import pytest

from sunset_engine.analysis.pipeline import normalize_series, predict_sunsets
from sunset_engine.models.scoring import FACTORS
from tests.conftest import BASE, SUNSET_HOUR, fixed_schedule, make_series


def test_one_prediction_per_covered_day(series, bundle):
    windows = fixed_schedule(0, 0, 3)
    predictions = predict_sunsets(series, bundle, windows, 90)

    # 48h of forecast covers two of the three sunsets
    assert len(predictions) == len(windows) - 1
    assert [p.date for p in predictions] == [w.date for w in windows[:2]]
    for p in predictions:
        assert p.score == 100
        assert p.label == "exceptional"
        assert set(p.aggregates) == set(FACTORS)


def test_units_are_normalized_before_scoring(bundle):
    hours = 48
    series = make_series(
        cloud_cover_high=[0.5] * hours,     # fraction -> 50%
        visibility=[24140.0] * hours,        # metres -> km
    )
    p = predict_sunsets(series, bundle, fixed_schedule(0, 0, 1), 90)[0]
    assert p.aggregates["high_cloud"].average == pytest.approx(50)
    assert p.aggregates["visibility"].average == pytest.approx(24.14)
    assert p.explanation.rows[0].score == pytest.approx(1.0)


def test_window_width_changes_the_aggregate(bundle):
    hours = 48
    low = [0.0] * hours
    low[SUNSET_HOUR - 2] = 90.0
    series = make_series(cloud_cover_low=low)

    narrow = predict_sunsets(series, bundle, fixed_schedule(0, 0, 1), 60)[0]
    wide = predict_sunsets(series, bundle, fixed_schedule(0, 0, 1), 150)[0]

    assert narrow.aggregates["low_cloud"].maximum == 0
    assert wide.aggregates["low_cloud"].maximum == 90
    assert wide.score < narrow.score


def test_absent_variable_falls_back_to_neutral(bundle):
    series = make_series(wind_speed=None)
    p = predict_sunsets(series, bundle, fixed_schedule(0, 0, 1), 90)[0]
    wind = p.explanation.rows[-1]
    assert p.aggregates["wind"].is_empty
    assert wind.score == 0.6
    assert wind.note == "No data"


def test_gaps_inside_the_window_are_skipped(bundle):
    hours = 48
    high = [50.0] * hours
    for h in range(SUNSET_HOUR - 1, SUNSET_HOUR + 1):
        high[h] = None
    series = make_series(cloud_cover_high=high)
    p = predict_sunsets(series, bundle, fixed_schedule(0, 0, 1), 90)[0]
    # two of the three window samples are missing; the third still counts
    assert p.aggregates["high_cloud"].average == 50


def test_day_beyond_horizon_is_dropped(bundle):
    series = make_series(hours=12)
    assert predict_sunsets(series, bundle, fixed_schedule(0, 0, 2), 90) == []


def test_normalize_series_keeps_absent_variables(series):
    factors = normalize_series(series.model_copy(update={"cloud_cover_mid": None}))
    assert factors["mid_cloud"] is None
    assert factors["visibility"][0] == 15.0


def test_recomputation_is_deterministic(series, bundle):
    windows = fixed_schedule(0, 0, 2)
    a = predict_sunsets(series, bundle, windows, 90)
    b = predict_sunsets(series, bundle, windows, 90)
    assert [p.model_dump_json() for p in a] == [p.model_dump_json() for p in b]
    assert a[0].sunset == BASE + timedelta(hours=SUNSET_HOUR)
