from fastapi import APIRouter, Query

from sunset_engine.session import get_session

router = APIRouter(prefix="/sunset", tags=["sunset"])


@router.get("")
def get_sunsets(
    latitude: float | None = Query(None, description="Latitude (default: last used or configured location)"),
    longitude: float | None = Query(None, description="Longitude"),
    days: int | None = Query(None, description="Number of days to score"),
    window_minutes: int | None = Query(None, description="Half-width of the window around sunset"),
):
    """Score the coming sunsets for a location."""
    return get_session().update(latitude, longitude, days, window_minutes)


@router.get("/current")
def get_current():
    """Last computed predictions without triggering a fetch."""
    return get_session().snapshot()


@router.post("/refresh")
def refresh():
    return get_session().refresh()
