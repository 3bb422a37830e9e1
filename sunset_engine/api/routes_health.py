from datetime import datetime, timezone

from fastapi import APIRouter

from sunset_engine.session import get_session

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    session = get_session()
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "forecast_loaded": session.series is not None,
        "last_status": session.status,
    }
