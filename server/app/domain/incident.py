from __future__ import annotations
"""server/app/domain/incident.py
~~~~~~~~~~~~~~~~~~~~~~~~
Modèle d'enregistrement métier : Incident, Profile, Notification.

Les enregistrements sont immuables (`frozen=True`) : toute "mutation" produit
une copie via `dataclasses.replace`. Le cœur ne détient aucun état persistant.

La construction validée passe par `build_incident(...)`, qui lève
`ValidationError` si :
- category / priority / status sont hors des ensembles énumérés,
- created_at est postérieur à sla_deadline,
- l'identifiant est vide.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from app.core.utils.datetime import ensure_utc
from app.domain.enums import (
    IncidentCategory,
    IncidentPriority,
    IncidentStatus,
    NotificationType,
    UserRole,
)
from app.domain.errors import ValidationError

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class Incident:
    id: str
    title: str
    description: str
    category: IncidentCategory
    priority: IncidentPriority
    status: IncidentStatus
    location: str
    building: str
    reported_by: str
    created_at: datetime
    sla_deadline: datetime
    updated_at: datetime
    floor: Optional[str] = None
    room: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    assigned_to: Optional[str] = None
    resolved_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None


@dataclass(frozen=True)
class Profile:
    id: str
    email: str
    full_name: str
    role: UserRole
    phone: Optional[str] = None
    room_number: Optional[str] = None


@dataclass(frozen=True)
class Notification:
    user_id: str
    title: str
    message: str
    type: NotificationType
    created_at: datetime
    incident_id: Optional[str] = None
    is_read: bool = False
    id: Optional[str] = None


def coerce_enum(enum_cls: Type[E], value: Any, field: str) -> E:
    """Convertit une valeur brute en membre d'Enum, sinon ValidationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field}={value!r} not in {{{allowed}}}") from None


def _require_datetime(value: Any, field: str) -> datetime:
    if not isinstance(value, datetime):
        raise ValidationError(f"{field} must be a datetime, got {type(value).__name__}")
    return ensure_utc(value)


def _optional_datetime(value: Any, field: str) -> Optional[datetime]:
    return None if value is None else _require_datetime(value, field)


def build_incident(
    *,
    id: str,
    title: str,
    description: str,
    category: Any,
    priority: Any,
    status: Any,
    location: str,
    building: str,
    reported_by: str,
    created_at: datetime,
    sla_deadline: datetime,
    updated_at: Optional[datetime] = None,
    floor: Optional[str] = None,
    room: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    assigned_to: Optional[str] = None,
    resolved_at: Optional[datetime] = None,
    closed_at: Optional[datetime] = None,
) -> Incident:
    """
    Construit un Incident validé. Les énumérations acceptent la valeur
    textuelle exacte ("in_progress") ou le membre d'Enum.
    `updated_at` vaut `created_at` s'il n'est pas fourni.
    """
    if not id or not str(id).strip():
        raise ValidationError("id must not be empty")

    created = _require_datetime(created_at, "created_at")
    deadline = _require_datetime(sla_deadline, "sla_deadline")
    if created > deadline:
        raise ValidationError("created_at must not be after sla_deadline")

    return Incident(
        id=str(id),
        title=title,
        description=description,
        category=coerce_enum(IncidentCategory, category, "category"),
        priority=coerce_enum(IncidentPriority, priority, "priority"),
        status=coerce_enum(IncidentStatus, status, "status"),
        location=location,
        building=building,
        reported_by=reported_by,
        created_at=created,
        sla_deadline=deadline,
        updated_at=_optional_datetime(updated_at, "updated_at") or created,
        floor=floor,
        room=room,
        latitude=latitude,
        longitude=longitude,
        assigned_to=assigned_to,
        resolved_at=_optional_datetime(resolved_at, "resolved_at"),
        closed_at=_optional_datetime(closed_at, "closed_at"),
    )
