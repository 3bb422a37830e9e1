from collections.abc import Sequence
from datetime import datetime, timedelta


def select_window(times: Sequence[datetime], sunset: datetime, half_width_minutes: float) -> list[int]:
    """Indices of samples within ``sunset ± half_width_minutes``, both ends inclusive.

    An empty result means the forecast does not cover that sunset.
    """
    half = timedelta(minutes=half_width_minutes)
    start, end = sunset - half, sunset + half
    return [i for i, t in enumerate(times) if start <= t <= end]
