from __future__ import annotations
"""server/app/api/schemas/incident.py
~~~~~~~~~~~~~~~~~~~~~~~~
Schemas incidents.
"""
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.enums import IncidentCategory, IncidentPriority, IncidentStatus


class IncidentCreateIn(BaseModel):
    """
    Payload de POST /incidents.
    Ni statut ni échéance : l'incident naît `reported`, le backend fixe sla_deadline.
    """
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category: IncidentCategory
    priority: IncidentPriority = IncidentPriority.MEDIUM
    location: str = Field(..., min_length=1)
    building: str = Field(..., min_length=1)
    floor: Optional[str] = None
    room: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class StatusUpdateIn(BaseModel):
    """Payload de PATCH /incidents/{id}/status (valeur exacte, ex: "in_progress")."""
    status: IncidentStatus
