"""Sunset instants via astral."""

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from astral import Observer
from astral.sun import sunset

from sunset_engine.models.weather import SunsetWindow

logger = logging.getLogger(__name__)


def resolve_timezone(name: str | None) -> tzinfo:
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using UTC", name)
        return timezone.utc


def sunset_time(day: date, latitude: float, longitude: float, tz: tzinfo = timezone.utc) -> datetime | None:
    """Sunset on the civil ``day`` in ``tz``, or None if the sun does not set."""
    observer = Observer(latitude=latitude, longitude=longitude)
    try:
        return sunset(observer, date=day, tzinfo=tz)
    except ValueError as e:
        # Polar day or night
        logger.debug("No sunset on %s at %.4f, %.4f: %s", day, latitude, longitude, e)
        return None


def sunset_schedule(
    latitude: float,
    longitude: float,
    days: int,
    tz_name: str | None = None,
    start: date | None = None,
    sunset_fn=sunset_time,
) -> list[SunsetWindow]:
    """Sunsets for ``days`` consecutive local days starting at ``start`` (today by default)."""
    tz = resolve_timezone(tz_name)
    start = start or datetime.now(tz).date()

    windows = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        instant = sunset_fn(day, latitude, longitude, tz)
        if instant is None:
            continue
        windows.append(SunsetWindow(date=day, sunset=instant))
    return windows
