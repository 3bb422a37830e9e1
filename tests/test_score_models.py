import math

import pytest
from pydantic import ValidationError

from sunset_engine.analysis.score_models import score_by_model
from sunset_engine.models.scoring import (
    InverseTriangularModel,
    ThresholdDownModel,
    ThresholdUpModel,
    TriangularModel,
)

TRI = TriangularModel(ideal=50, tolerance=20)
INV = InverseTriangularModel(ideal=50, tolerance=20)
UP = ThresholdUpModel(threshold=5, full=15)
DOWN = ThresholdDownModel(min=0, max=100)

ALL_MODELS = [TRI, INV, UP, DOWN]


def test_triangular_shape():
    assert score_by_model(50, TRI) == 1
    assert score_by_model(70, TRI) == 0
    assert score_by_model(30, TRI) == 0
    assert score_by_model(60, TRI) == 0.5
    assert score_by_model(40, TRI) == 0.5
    assert score_by_model(500, TRI) == 0


def test_inverse_triangular_is_complement():
    for v in [0, 35, 50, 55, 90]:
        assert score_by_model(v, INV) == pytest.approx(1 - score_by_model(v, TRI))
    assert score_by_model(50, INV) == 0


def test_threshold_up():
    assert score_by_model(5, UP) == 0
    assert score_by_model(0, UP) == 0
    assert score_by_model(15, UP) == 1
    assert score_by_model(40, UP) == 1
    assert score_by_model(10, UP) == 0.5
    scores = [score_by_model(5 + i * 0.5, UP) for i in range(21)]
    assert scores == sorted(scores)


def test_threshold_down():
    assert score_by_model(0, DOWN) == 1
    assert score_by_model(100, DOWN) == 0
    assert score_by_model(25, DOWN) == 0.75
    assert score_by_model(-10, DOWN) == 1


@pytest.mark.parametrize("model", ALL_MODELS)
def test_output_always_in_unit_interval(model):
    for v in [-1e9, -50, -0.1, 0, 0.5, 4, 12.3, 49.9, 99, 1e9]:
        s = score_by_model(v, model)
        assert 0.0 <= s <= 1.0


@pytest.mark.parametrize("model", ALL_MODELS)
def test_missing_input_gives_none(model):
    assert score_by_model(None, model) is None
    assert score_by_model(math.nan, model) is None


def test_invalid_parameters_are_rejected():
    with pytest.raises(ValidationError):
        TriangularModel(ideal=50, tolerance=0)
    with pytest.raises(ValidationError):
        ThresholdUpModel(threshold=15, full=5)
    with pytest.raises(ValidationError):
        ThresholdDownModel(min=10, max=10)
    with pytest.raises(ValidationError):
        TriangularModel(ideal=float("inf"), tolerance=5)
