from __future__ import annotations
"""server/app/api/v1/endpoints/incidents.py
~~~~~~~~~~~~~~~~~~~~~~~~
Incidents : déclaration, liste, détail, changement de statut.
"""
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.schemas.incident import IncidentCreateIn, StatusUpdateIn
from app.api.v1.serializers.incident import serialize_incident
from app.application.services.incident_service import (
    ListScope,
    change_status,
    filter_incidents,
    report_incident,
)
from app.core.config import settings
from app.domain.enums import ACTIVE_STATUSES, IncidentStatus
from app.domain.errors import InvalidTransitionError, NoOpError, UnauthorizedError
from app.domain.incident import Profile
from app.domain.sla import evaluate_sla
from app.domain.transitions import Transitioned
from app.infrastructure.persistence.backend.supabase_client import SupabaseClient
from app.infrastructure.persistence.repositories.incident_repository import IncidentRepository
from app.infrastructure.persistence.repositories.notification_repository import NotificationRepository
from app.presentation.api.deps import get_backend, get_current_profile, get_now

router = APIRouter(prefix="/incidents")


@router.get("")
def list_incidents(
    scope: ListScope = Query(ListScope.ALL),
    profile: Profile = Depends(get_current_profile),
    backend: SupabaseClient = Depends(get_backend),
    now: datetime = Depends(get_now),
) -> list[dict]:
    repo = IncidentRepository(backend)
    # on pousse le filtre au backend quand c'est possible, puis on réapplique côté cœur
    if scope is ListScope.MY:
        rows = repo.list(reported_by=profile.id)
    elif scope is ListScope.ACTIVE:
        rows = repo.list(statuses=[s.value for s in IncidentStatus if s in ACTIVE_STATUSES])
    else:
        rows = repo.list()
    return [
        serialize_incident(i, evaluate_sla(i, now, critical_minutes=settings.SLA_CRITICAL_MINUTES))
        for i in filter_incidents(rows, scope, profile.id)
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_incident(
    payload: IncidentCreateIn,
    profile: Profile = Depends(get_current_profile),
    backend: SupabaseClient = Depends(get_backend),
    now: datetime = Depends(get_now),
) -> dict:
    inc = report_incident(IncidentRepository(backend), profile, **payload.model_dump(mode="json"))
    return serialize_incident(inc, evaluate_sla(inc, now, critical_minutes=settings.SLA_CRITICAL_MINUTES))


@router.get("/{incident_id}")
def get_incident(
    incident_id: str,
    profile: Profile = Depends(get_current_profile),
    backend: SupabaseClient = Depends(get_backend),
    now: datetime = Depends(get_now),
) -> dict:
    inc = IncidentRepository(backend).get(incident_id)
    return serialize_incident(inc, evaluate_sla(inc, now, critical_minutes=settings.SLA_CRITICAL_MINUTES))


@router.patch("/{incident_id}/status")
def update_status(
    incident_id: str,
    payload: StatusUpdateIn,
    profile: Profile = Depends(get_current_profile),
    backend: SupabaseClient = Depends(get_backend),
    now: datetime = Depends(get_now),
) -> dict:
    """
    - 200 {"changed": true, ...}  : transition appliquée et persistée
    - 200 {"changed": false, ...} : statut identique, rien n'est écrit
    - 403 : rôle non autorisé ; 409 : transition interdite par la politique
    """
    outcome = change_status(
        IncidentRepository(backend),
        NotificationRepository(backend),
        incident_id=incident_id,
        target_status=payload.status,
        actor=profile,
        now=now,
    )

    if isinstance(outcome, Transitioned):
        return {"changed": True, "incident": serialize_incident(outcome.incident)}
    if isinstance(outcome, NoOpError):
        return {"changed": False, "status": payload.status.value}
    if isinstance(outcome, UnauthorizedError):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=outcome.code)
    if isinstance(outcome, InvalidTransitionError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=outcome.message)
    raise outcome
