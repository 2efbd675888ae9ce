from __future__ import annotations
"""server/app/api/v1/endpoints/health.py
~~~~~~~~~~~~~~~~~~~~~~~~
Health checks (service + joignabilité du backend hébergé).
"""
from fastapi import APIRouter

from app.infrastructure.persistence.backend.supabase_client import BackendError
from app.presentation.api import deps

router = APIRouter()

@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}

@router.get("/health/backend")
def health_backend() -> dict[str, str]:
    try:
        deps._shared_backend().ping()
    except BackendError as exc:
        return {"status": "degraded", "detail": str(exc.status_code)}
    return {"status": "ok"}
