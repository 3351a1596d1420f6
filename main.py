"""
WarStats - Territorial Control Analytics API

Serves processed conflict time series to the dashboard frontend:
- Step-function interpolation of batch-published control-map snapshots
- Rolling-median smoothing
- Monthly net changes and rolling 30-day rates
- Linear trend lines and summary statistics

The datasets themselves are exported upstream as JSON into the data
directory (see config.data_dir); this app only reads them.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import config
from datasets import dataset_loader
from api import territory_router, health_router
from api.health import VERSION

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration and which datasets are present."""
    logger.info("WarStats starting up")
    logger.info(f"Data directory: {dataset_loader.data_dir}")
    for name, present in dataset_loader.available().items():
        if present:
            logger.info(f"  {name}: found")
        else:
            logger.warning(f"  {name}: MISSING")
    logger.info(
        f"Processing: threshold={config.interpolation_threshold}, "
        f"smoothing_window={config.smoothing_window}, "
        f"rate_window_days={config.rate_window_days}"
    )
    logger.info(f"Default range: {config.default_start} to {config.default_end}")
    yield
    logger.info("WarStats shutting down")


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    title="WarStats",
    description="Territorial control and conflict time-series analytics",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(territory_router)
app.include_router(health_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__},
    )


# =============================================================================
# RUN
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
