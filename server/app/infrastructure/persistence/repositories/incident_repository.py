from __future__ import annotations

"""server/app/infrastructure/persistence/repositories/incident_repository.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Repository pour la table `incidents` du backend hébergé.

Principes :
- Le repo **reçoit** un SupabaseClient géré par l'appelant (endpoint via
  `Depends(get_backend)`), il ne le crée ni ne le ferme.
- Les lignes brutes sont converties en `Incident` validés via `incident_from_row`.
- Méthodes fournies :
  - `list(...)` : incidents triés par created_at décroissant, filtrables par
    fenêtre (`since`), catégorie, déclarant, statuts.
  - `get(incident_id)` : un incident (NotFoundError sinon).
  - `create(...)` : insère un incident déclaré ; created_at / sla_deadline sont
    fixés par le backend (valeurs par défaut / politique SLA).
  - `save_status(incident)` : persiste status / resolved_at / closed_at / updated_at
    (résultat d'une transition).
"""

from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from app.core.utils.datetime import format_timestamp, parse_timestamp
from app.domain.enums import IncidentStatus
from app.domain.incident import Incident, build_incident
from app.infrastructure.persistence.backend.supabase_client import BackendError, SupabaseClient

TABLE = "incidents"


def incident_from_row(row: Mapping[str, Any]) -> Incident:
    """Mappe une ligne PostgREST vers un Incident (lève ValidationError si invalide)."""
    return build_incident(
        id=row.get("id"),
        title=row.get("title") or "",
        description=row.get("description") or "",
        category=row.get("category"),
        priority=row.get("priority"),
        status=row.get("status"),
        location=row.get("location") or "",
        building=row.get("building") or "",
        reported_by=row.get("reported_by") or "",
        created_at=parse_timestamp(row.get("created_at")),
        sla_deadline=parse_timestamp(row.get("sla_deadline")),
        updated_at=parse_timestamp(row.get("updated_at")),
        floor=row.get("floor"),
        room=row.get("room"),
        latitude=row.get("latitude"),
        longitude=row.get("longitude"),
        assigned_to=row.get("assigned_to"),
        resolved_at=parse_timestamp(row.get("resolved_at")),
        closed_at=parse_timestamp(row.get("closed_at")),
    )


class IncidentRepository:
    def __init__(self, backend: SupabaseClient) -> None:
        self.backend = backend

    def list(
        self,
        *,
        since: Optional[datetime] = None,
        category: Optional[str] = None,
        reported_by: Optional[str] = None,
        statuses: Optional[Iterable[str]] = None,
    ) -> list[Incident]:
        params: dict[str, str] = {"order": "created_at.desc"}
        if since is not None:
            params["created_at"] = f"gte.{format_timestamp(since)}"
        if category:
            params["category"] = f"eq.{category}"
        if reported_by:
            params["reported_by"] = f"eq.{reported_by}"
        if statuses:
            params["status"] = "in.(" + ",".join(statuses) + ")"
        return [incident_from_row(r) for r in self.backend.select(TABLE, params)]

    def get(self, incident_id: str) -> Incident:
        return incident_from_row(self.backend.select_one(TABLE, {"id": f"eq.{incident_id}"}))

    def save_status(self, incident: Incident) -> Incident:
        """
        Écrit uniquement les champs touchés par une transition.
        Retourne l'incident tel que relu par le backend (ou l'entrée si pas de représentation).
        """
        rows = self.backend.update(
            TABLE,
            {"id": incident.id},
            {
                "status": incident.status.value,
                "resolved_at": format_timestamp(incident.resolved_at),
                "closed_at": format_timestamp(incident.closed_at),
                "updated_at": format_timestamp(incident.updated_at),
            },
        )
        return incident_from_row(rows[0]) if rows else incident

    def create(
        self,
        *,
        reported_by: str,
        title: str,
        description: str,
        category: str,
        priority: str,
        location: str,
        building: str,
        floor: Optional[str] = None,
        room: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> Incident:
        """
        Insère un incident au statut `reported`.
        L'échéance SLA n'est pas envoyée : le backend la calcule et la renvoie.
        """
        rows = self.backend.insert(
            TABLE,
            {
                "title": title,
                "description": description,
                "category": category,
                "priority": priority,
                "status": IncidentStatus.REPORTED.value,
                "location": location,
                "building": building,
                "floor": floor,
                "room": room,
                "latitude": latitude,
                "longitude": longitude,
                "reported_by": reported_by,
            },
        )
        if not rows:
            raise BackendError(502, f"{TABLE}: insert returned no representation")
        return incident_from_row(rows[0])
