import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from sunset_engine.api.error_handlers import register_error_handlers
from sunset_engine.api.routes_health import router as health_router
from sunset_engine.api.routes_params import router as params_router
from sunset_engine.api.routes_sunset import router as sunset_router
from sunset_engine.config import settings
from sunset_engine.logging_config import setup_logging
from sunset_engine.params.store import BundleValidationError
from sunset_engine.session import get_session

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Starting Sunset Engine on port %d", settings.engine_port)

    session = get_session()
    if settings.params_file:
        try:
            session.params.load(settings.params_file)
        except BundleValidationError as e:
            logger.error("Ignoring parameter file %s: %s", settings.params_file, e)

    yield

    logger.info("Sunset Engine stopped")


app = FastAPI(
    title="Sunset Engine",
    description="Burning-cloud sunset suitability scoring",
    version="0.1.0",
    lifespan=lifespan,
)

register_error_handlers(app)

app.include_router(health_router)
app.include_router(sunset_router)
app.include_router(params_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.engine_host, port=settings.engine_port)
