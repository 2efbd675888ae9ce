from __future__ import annotations
"""server/app/domain/transitions.py
~~~~~~~~~~~~~~~~~~~~~~~~
Moteur de transitions de statut.

apply_transition(incident, target, actor_role, now) -> Transitioned | TransitionError

Ordre des contrôles :
1) rôle de l'acteur (admin / technician)  -> UnauthorizedError
2) cible == statut courant                -> NoOpError
3) cible atteignable selon la table       -> InvalidTransitionError

En cas de succès :
- status = cible ; updated_at = now
- resolved_at = now si cible == resolved et pas déjà renseigné
- closed_at   = now si cible == closed   et pas déjà renseigné
- notify_required = True (le statut a effectivement changé)

Aucun effet de bord : l'incident d'entrée n'est jamais modifié.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Union

from app.core.utils.datetime import ensure_utc
from app.domain.enums import STAFF_ROLES, IncidentStatus, UserRole
from app.domain.errors import (
    InvalidTransitionError,
    NoOpError,
    TransitionError,
    UnauthorizedError,
    ValidationError,
)
from app.domain.incident import Incident, coerce_enum
from app.domain.policies import FORWARD_TRANSITIONS, allowed_targets


@dataclass(frozen=True)
class Transitioned:
    incident: Incident
    previous_status: IncidentStatus
    notify_required: bool = True


TransitionOutcome = Union[Transitioned, TransitionError]


def apply_transition(
    incident: Incident,
    target_status: Any,
    actor_role: Any,
    now: datetime,
    *,
    table: Mapping[IncidentStatus, frozenset[IncidentStatus]] = FORWARD_TRANSITIONS,
) -> TransitionOutcome:
    try:
        role = coerce_enum(UserRole, actor_role, "role")
    except ValidationError:
        return UnauthorizedError(f"role {actor_role!r} cannot change incident status")
    if role not in STAFF_ROLES:
        return UnauthorizedError(f"role {role.value!r} cannot change incident status")

    try:
        target = coerce_enum(IncidentStatus, target_status, "status")
    except ValidationError as exc:
        return InvalidTransitionError(exc.message)

    current = incident.status
    if target is current:
        return NoOpError(f"incident {incident.id} is already {current.value}")

    if target not in allowed_targets(current, table):
        return InvalidTransitionError(f"{current.value} -> {target.value} is not allowed")

    now = ensure_utc(now)
    changes: dict[str, Any] = {"status": target, "updated_at": now}
    if target is IncidentStatus.RESOLVED and incident.resolved_at is None:
        changes["resolved_at"] = now
    if target is IncidentStatus.CLOSED and incident.closed_at is None:
        changes["closed_at"] = now

    return Transitioned(incident=replace(incident, **changes), previous_status=current)
