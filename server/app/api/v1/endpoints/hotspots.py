from __future__ import annotations
"""server/app/api/v1/endpoints/hotspots.py
~~~~~~~~~~~~~~~~~~~~~~~~
Hotspots (derniers N jours), filtrables par catégorie.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.v1.serializers.analytics import serialize_hotspot
from app.application.services.hotspot_service import rank_hotspots
from app.core.config import settings
from app.core.utils.datetime import window_start
from app.domain.enums import IncidentCategory
from app.domain.incident import Profile
from app.infrastructure.persistence.backend.supabase_client import SupabaseClient
from app.infrastructure.persistence.repositories.incident_repository import IncidentRepository
from app.presentation.api.deps import get_backend, get_current_profile, get_now

router = APIRouter(prefix="/hotspots")


@router.get("")
def list_hotspots(
    category: Optional[IncidentCategory] = Query(None),
    profile: Profile = Depends(get_current_profile),
    backend: SupabaseClient = Depends(get_backend),
    now: datetime = Depends(get_now),
) -> dict:
    since = window_start(now, settings.ANALYTICS_WINDOW_DAYS)
    rows = IncidentRepository(backend).list(since=since, category=category.value if category else None)
    ranked = rank_hotspots(rows, since, category)
    return {
        "items": [serialize_hotspot(h) for h in ranked[: settings.HOTSPOT_TOP_N]],
        "total": len(ranked),
    }
