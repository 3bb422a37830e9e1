"""Weighted composite score with an itemized explanation.

    contribution_i = round(s_i * w_i * 100, 1)
    total          = round(clamp(sum(contribution_i), 0, 100))

Both roundings are half-up. The result is a pure function of its inputs.
"""

import math

from sunset_engine.analysis.score_models import clamp, score_by_model
from sunset_engine.models.scoring import (
    FACTOR_LABELS,
    FACTORS,
    ExplanationRow,
    ExplanationTable,
    ParameterBundle,
)

CLOUD_NEUTRAL_SCORE = 0.5
OTHER_NEUTRAL_SCORE = 0.6

# Score substituted when a factor has no data in the window
NEUTRAL_DEFAULTS = {
    "high_cloud": CLOUD_NEUTRAL_SCORE,
    "mid_cloud": CLOUD_NEUTRAL_SCORE,
    "low_cloud": CLOUD_NEUTRAL_SCORE,
    "precipitation": OTHER_NEUTRAL_SCORE,
    "visibility": OTHER_NEUTRAL_SCORE,
    "wind": OTHER_NEUTRAL_SCORE,
}

NO_DATA_NOTE = "No data"

# (lower bound inclusive, label), highest first
LABEL_THRESHOLDS = [
    (85, "exceptional"),
    (70, "great"),
    (55, "good"),
    (40, "fair"),
]
LOWEST_LABEL = "poor"


def label_for_score(score: int) -> str:
    for bound, label in LABEL_THRESHOLDS:
        if score >= bound:
            return label
    return LOWEST_LABEL


def contribution(score: float, weight: float) -> float:
    return math.floor(score * weight * 1000 + 0.5) / 10


def format_formula(rows) -> str:
    terms = [f"{r.weight:.2f}×{r.score:.2f}" for r in rows if r.weight > 0]
    return f"100 × ({' + '.join(terms) if terms else '0'})"


def composite_score(
    averages: dict[str, float | None],
    bundle: ParameterBundle,
    neutral_defaults: dict[str, float] | None = None,
) -> ExplanationTable:
    """Combine per-factor window averages into a 0-100 score.

    Args:
        averages: Factor key -> aggregated average (already unit-normalized),
            None when the factor had no data.
        bundle: Weights and score models to apply.
        neutral_defaults: Per-factor fallback scores, merged over
            ``NEUTRAL_DEFAULTS``.

    Returns:
        ExplanationTable with one row per factor, the integer total and the
        formula string.
    """
    defaults = {**NEUTRAL_DEFAULTS, **(neutral_defaults or {})}

    rows = []
    for key in FACTORS:
        model = getattr(bundle.models, key)
        weight = getattr(bundle.weights, key)
        s = score_by_model(averages.get(key), model)
        note = None
        if s is None:
            s = defaults[key]
            note = NO_DATA_NOTE
        rows.append(ExplanationRow(
            factor=key,
            label=FACTOR_LABELS[key],
            score=s,
            weight=weight,
            contribution=contribution(s, weight),
            note=note,
        ))

    # Contributions are exact tenths; summing them as floats can land just
    # under a .5 boundary.
    tenths = sum(round(r.contribution * 10) for r in rows)
    total = (int(clamp(tenths, 0, 1000)) + 5) // 10

    return ExplanationTable(rows=tuple(rows), total=total, formula=format_formula(rows))
