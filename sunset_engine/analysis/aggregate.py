import numpy as np

from sunset_engine.models.weather import DailyAggregate


def aggregate(values, indices: list[int]) -> DailyAggregate:
    """Average, minimum and maximum of ``values`` at ``indices``.

    Missing samples (None/NaN) are dropped rather than counted as zero, since
    0 is a legitimate value (e.g. a clear sky). If nothing is left the
    aggregate is empty.
    """
    if values is None or not indices:
        return DailyAggregate()

    picked = np.array(
        [values[i] if values[i] is not None else np.nan for i in indices],
        dtype=float,
    )
    clean = picked[~np.isnan(picked)]
    if len(clean) == 0:
        return DailyAggregate()

    return DailyAggregate(
        average=float(np.mean(clean)),
        minimum=float(np.min(clean)),
        maximum=float(np.max(clean)),
    )
