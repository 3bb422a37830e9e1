import logging
import time

import httpx

from sunset_engine.config import settings

logger = logging.getLogger(__name__)

# Response fields tried in order for a display name
NAME_FIELDS = ("city", "locality", "principalSubdivision", "countryName")


def coordinates_label(latitude: float, longitude: float) -> str:
    return f"{latitude:.4f}, {longitude:.4f}"


def reverse_geocode(latitude: float, longitude: float, timeout: float | None = None) -> str:
    """Best-effort place name for a coordinate pair.

    Never raises: any failure falls back to the formatted coordinates.
    """
    t0 = time.monotonic()
    try:
        r = httpx.get(
            settings.geocode_url,
            params={"latitude": latitude, "longitude": longitude, "localityLanguage": "en"},
            timeout=timeout or settings.geocode_timeout,
        )
        r.raise_for_status()
        data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        elapsed = (time.monotonic() - t0) * 1000
        logger.warning("Reverse geocode failed (%.0fms): %s", elapsed, e)
        return coordinates_label(latitude, longitude)

    if not isinstance(data, dict):
        return coordinates_label(latitude, longitude)
    for key in NAME_FIELDS:
        if data.get(key):
            return str(data[key])
    return coordinates_label(latitude, longitude)
