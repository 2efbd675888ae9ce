from __future__ import annotations
"""server/app/application/services/incident_service.py
~~~~~~~~~~~~~~~~~~~~~~~~
Orchestration autour des incidents : déclaration, filtres de liste, changement de statut.

change_status enchaîne : lecture -> moteur de transitions -> persistance ->
notification. Les refus du moteur (NoOpError inclus) sont retournés tels quels,
sans rien écrire.
"""
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Optional

from app.core.config import settings
from app.domain.enums import ACTIVE_STATUSES
from app.domain.errors import NoOpError
from app.domain.incident import Incident, Profile
from app.domain.policies import transition_table
from app.domain.transitions import TransitionOutcome, Transitioned, apply_transition
from app.application.services.notification_service import notify_status_change
from app.infrastructure.persistence.repositories.incident_repository import IncidentRepository
from app.infrastructure.persistence.repositories.notification_repository import NotificationRepository

log = logging.getLogger(__name__)


class ListScope(str, Enum):
    ALL = "all"
    MY = "my"
    ACTIVE = "active"


def filter_incidents(
    incidents: Iterable[Incident],
    scope: ListScope | str = ListScope.ALL,
    user_id: Optional[str] = None,
) -> list[Incident]:
    """
    - all    : tout
    - my     : incidents déclarés par `user_id`
    - active : reported / assigned / in_progress
    Résultat trié par created_at décroissant.
    """
    scope = ListScope(scope)
    if scope is ListScope.MY:
        rows = [i for i in incidents if i.reported_by == user_id]
    elif scope is ListScope.ACTIVE:
        rows = [i for i in incidents if i.status in ACTIVE_STATUSES]
    else:
        rows = list(incidents)
    return sorted(rows, key=lambda i: i.created_at, reverse=True)


def report_incident(incidents: IncidentRepository, reporter: Profile, **fields: Any) -> Incident:
    """Déclare un incident au nom de `reporter` (tout rôle peut déclarer)."""
    incident = incidents.create(reported_by=reporter.id, **fields)
    log.info(
        "Incident %s reported by %s (%s, %s / %s)",
        incident.id, reporter.id, incident.category.value, incident.building, incident.location,
    )
    return incident


def change_status(
    incidents: IncidentRepository,
    notifications: NotificationRepository,
    *,
    incident_id: str,
    target_status: Any,
    actor: Profile,
    now: datetime,
    policy: Optional[str] = None,
) -> TransitionOutcome:
    current = incidents.get(incident_id)
    outcome = apply_transition(
        current,
        target_status,
        actor.role,
        now,
        table=transition_table(policy or settings.TRANSITION_POLICY),
    )

    if isinstance(outcome, NoOpError):
        log.debug("Status unchanged for incident %s", incident_id)
        return outcome
    if not isinstance(outcome, Transitioned):
        log.info("Transition refused for incident %s by %s: %s", incident_id, actor.id, outcome.message)
        return outcome

    saved = incidents.save_status(outcome.incident)
    result = Transitioned(incident=saved, previous_status=outcome.previous_status, notify_required=outcome.notify_required)
    log.info(
        "Incident %s: %s -> %s by %s",
        incident_id, result.previous_status.value, saved.status.value, actor.id,
    )
    notify_status_change(notifications, result, actor)
    return result
