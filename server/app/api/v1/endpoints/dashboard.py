from __future__ import annotations
"""server/app/api/v1/endpoints/dashboard.py
~~~~~~~~~~~~~~~~~~~~~~~~
Dashboard : compteurs, métriques de performance, répartition par catégorie.
"""
from datetime import datetime

from fastapi import APIRouter, Depends

from app.api.v1.serializers.analytics import serialize_category_share, serialize_summary
from app.application.services.aggregation_service import (
    category_breakdown,
    compute_stats,
    performance_metrics,
)
from app.core.config import settings
from app.core.utils.datetime import window_start
from app.domain.incident import Profile
from app.infrastructure.persistence.backend.supabase_client import SupabaseClient
from app.infrastructure.persistence.repositories.incident_repository import IncidentRepository
from app.presentation.api.deps import get_backend, get_current_profile, get_now

router = APIRouter(prefix="/dashboard")


@router.get("/summary")
def summary(
    profile: Profile = Depends(get_current_profile),
    backend: SupabaseClient = Depends(get_backend),
    now: datetime = Depends(get_now),
) -> dict:
    """
    Compteurs sur l'ensemble des incidents visibles par l'appelant.
    `avg_resolution_hours` est brut ; `performance.avg_resolution_hours` est arrondi.
    """
    stats = compute_stats(IncidentRepository(backend).list(), now)
    return serialize_summary(stats, performance_metrics(stats))


@router.get("/categories")
def categories(
    profile: Profile = Depends(get_current_profile),
    backend: SupabaseClient = Depends(get_backend),
    now: datetime = Depends(get_now),
) -> dict:
    since = window_start(now, settings.ANALYTICS_WINDOW_DAYS)
    rows = IncidentRepository(backend).list(since=since)
    items = [serialize_category_share(c) for c in category_breakdown(rows, since)]
    return {"window_days": settings.ANALYTICS_WINDOW_DAYS, "items": items, "total": sum(i["count"] for i in items)}
