"""Unit/scale normalization for raw provider samples.

Percent-like variables may arrive either as fractions (0-1) or as
percentages (0-100). The scale is decided once per batch: if every defined
sample is within 1.01 in absolute value the whole batch is fractional.
A batch mixing both scales is not detected and will be rescaled wrongly.
"""

import math
from collections.abc import Sequence

FRACTION_MAX = 1.01


def _defined(v) -> bool:
    return v is not None and not math.isnan(v)


def normalize_percentages(values: Sequence[float | None] | None) -> list[float | None] | None:
    """Rescale a batch of percentage samples to 0-100.

    Absent samples stay ``None`` and keep their position. An absent or
    all-empty batch is returned as-is.
    """
    if values is None:
        return None
    defined = [abs(v) for v in values if _defined(v)]
    if not defined:
        return [None] * len(values)
    factor = 100.0 if max(defined) <= FRACTION_MAX else 1.0
    return [float(v) * factor if _defined(v) else None for v in values]


def meters_to_km(values: Sequence[float | None] | None) -> list[float | None] | None:
    if values is None:
        return None
    return [float(v) / 1000.0 if _defined(v) else None for v in values]
