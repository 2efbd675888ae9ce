from __future__ import annotations
"""server/app/api/v1/endpoints/predictions.py
~~~~~~~~~~~~~~~~~~~~~~~~
Prédictions heuristiques de récurrence (voir prediction_service).
"""
import random
from datetime import datetime

from fastapi import APIRouter, Depends

from app.api.v1.serializers.analytics import serialize_prediction
from app.application.services.prediction_service import predict_hotspots
from app.core.config import settings
from app.core.utils.datetime import window_start
from app.domain.incident import Profile
from app.infrastructure.persistence.backend.supabase_client import SupabaseClient
from app.infrastructure.persistence.repositories.incident_repository import IncidentRepository
from app.presentation.api.deps import get_backend, get_current_profile, get_now, get_rng

router = APIRouter(prefix="/predictions")


@router.get("")
def list_predictions(
    profile: Profile = Depends(get_current_profile),
    backend: SupabaseClient = Depends(get_backend),
    now: datetime = Depends(get_now),
    rng: random.Random = Depends(get_rng),
) -> dict:
    since = window_start(now, settings.ANALYTICS_WINDOW_DAYS)
    rows = IncidentRepository(backend).list(since=since)
    preds = predict_hotspots(rows, since, now, rng, min_recurrence=settings.PREDICTION_MIN_RECURRENCE)
    return {
        "items": [serialize_prediction(p) for p in preds[: settings.PREDICTION_TOP_N]],
        "total": len(preds),
    }
