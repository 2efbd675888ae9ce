from __future__ import annotations
"""server/app/api/v1/router.py
~~~~~~~~~~~~~~~~~~~~~~~~
Router principal API v1.
"""
from fastapi import APIRouter
from app.api.v1.endpoints import health, incidents, dashboard, hotspots, predictions, notifications



api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(incidents.router, tags=["incidents"])
api_router.include_router(dashboard.router, tags=["dashboard"])
api_router.include_router(hotspots.router, tags=["hotspots"])
api_router.include_router(predictions.router, tags=["predictions"])
api_router.include_router(notifications.router, tags=["notifications"])
