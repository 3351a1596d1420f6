"""API module - FastAPI routers and endpoints."""

from .territory import territory_router, get_loader
from .health import health_router

__all__ = ['territory_router', 'health_router', 'get_loader']
