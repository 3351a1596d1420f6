"""
Health Check and Utility Endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from cache import cache_manager
from config import config
from datasets import DatasetLoader
from .territory import get_loader

VERSION = "1.0.0"

health_router = APIRouter()


@health_router.get("/health")
def health_check():
    """Simple health check endpoint."""
    return JSONResponse({
        "status": "healthy",
        "version": VERSION,
    })


@health_router.get("/api/status")
def api_status(loader: DatasetLoader = Depends(get_loader)):
    """Detailed status: processing defaults, dataset files, cache."""
    return JSONResponse({
        "status": "healthy",
        "version": VERSION,
        "config": {
            "data_dir": str(loader.data_dir),
            "interpolation_threshold": config.interpolation_threshold,
            "smoothing_window": config.smoothing_window,
            "rate_window_days": config.rate_window_days,
            "default_range": [config.default_start, config.default_end],
        },
        "datasets": loader.available(),
        "cache": cache_manager.stats(),
    })


@health_router.get("/api/cache/clear")
def clear_cache():
    """Clear the dataset cache (admin endpoint)."""
    cache_manager.clear()
    return JSONResponse({
        "status": "success",
        "message": "Dataset cache cleared",
    })
