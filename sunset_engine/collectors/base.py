import openmeteo_requests
import requests_cache
from retry_requests import retry

from sunset_engine.config import settings


class ForecastUnavailable(RuntimeError):
    """The forecast provider could not deliver a usable response."""


def build_client(cache_path: str | None = None, expire_after: int | None = None) -> openmeteo_requests.Client:
    """Open-Meteo client over a cached, retrying session."""
    session = requests_cache.CachedSession(
        cache_path or settings.cache_path,
        expire_after=expire_after if expire_after is not None else settings.cache_expire_after,
    )
    retry_session = retry(session, retries=3, backoff_factor=0.5)
    return openmeteo_requests.Client(session=retry_session)


_client: openmeteo_requests.Client | None = None


def get_client() -> openmeteo_requests.Client:
    global _client
    if _client is None:
        _client = build_client()
    return _client
